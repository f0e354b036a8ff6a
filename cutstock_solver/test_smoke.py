# cutstock_solver/test_smoke.py
# Very small smoke tests you can also run with:
#   python -m cutstock_solver.test_smoke
#
# These are not full unit tests, but they quickly tell you if
# enumeration, the model, the solver and validation are wired correctly.

from __future__ import annotations

from cutstock_solver.metrics import compute_metrics
from cutstock_solver.run import how_to_cut_boards_1d, how_to_cut_boards_2d
from cutstock_solver.types import RequiredCut1D, RequiredCut2D, StockSize1D, StockSize2D
from cutstock_solver.validate import raise_on_errors, validate_results


def test_basic_fit_1d() -> None:
    stocks = [StockSize1D(96, 1), StockSize1D(48, 0.6)]
    required = [RequiredCut1D(30, 3), RequiredCut1D(18, 4), RequiredCut1D(12, 2)]

    results = how_to_cut_boards_1d(stocks, 0.125, required)
    raise_on_errors(validate_results(results, required))

    m = compute_metrics(results)
    assert m.units >= 2
    assert m.total_cost > 0
    assert m.waste_material >= 0


def test_basic_fit_2d() -> None:
    stocks = [StockSize2D((48, 96), 40)]
    required = [RequiredCut2D((24, 30), 2), RequiredCut2D((12, 24), 3)]

    results = how_to_cut_boards_2d(stocks, 0.125, required)
    raise_on_errors(validate_results(results, required))

    assert sum(r.count for r in results) >= 1
    for r in results:
        assert r.tree is not None
        assert r.tree.size == (48, 96)


def main() -> None:
    print("Running smoke tests...")
    test_basic_fit_1d()
    test_basic_fit_2d()
    print("OK")


if __name__ == "__main__":
    main()
