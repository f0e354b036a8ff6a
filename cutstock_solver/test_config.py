# cutstock_solver/test_config.py
# Config parsing, params validation and the logger switch.

from __future__ import annotations

import pytest

from cutstock_solver import logger
from cutstock_solver.config import (
    DEFAULTS,
    EngineParams,
    make_params,
    parse_kerf_text,
    parse_size_text,
    round_dim,
)
from cutstock_solver.errors import InvalidInputError
from cutstock_solver.run import how_to_cut_boards_1d


def test_parse_size_text() -> None:
    assert parse_size_text("24x48") == (24, 48)
    assert parse_size_text(" 24 X 48 ") == (24, 48)
    assert parse_size_text("47/2x48") == (23.5, 48)
    with pytest.raises(InvalidInputError):
        parse_size_text("24")
    with pytest.raises(InvalidInputError):
        parse_size_text("ax48")


def test_parse_kerf_text() -> None:
    assert parse_kerf_text("1/8") == 0.125
    assert parse_kerf_text("0.125") == 0.125
    assert parse_kerf_text("3") == 3.0
    for bad in ("", "-1/8", "abc", "1/0"):
        with pytest.raises(InvalidInputError):
            parse_kerf_text(bad)


def test_round_dim() -> None:
    assert round_dim(7) == 7
    assert round_dim(0.1 + 0.2) == 0.3
    assert round_dim(5.0) == 5
    assert isinstance(round_dim(5.0), int)


def test_params() -> None:
    p = make_params(backend="mip", time_limit_s=5)
    assert p.backend == "mip"
    assert p.time_limit_s == 5
    assert p.cost_scale == DEFAULTS.default_cost_scale
    assert make_params(p, validate=False).backend == "mip"
    with pytest.raises(InvalidInputError):
        EngineParams(backend="gurobi")
    with pytest.raises(InvalidInputError):
        EngineParams(time_limit_s=0)
    with pytest.raises(InvalidInputError):
        EngineParams(cache_max_items=0)


def test_logger_switch(capsys) -> None:
    log = logger.get_logger()
    try:
        logger.set_enabled(False)
        how_to_cut_boards_1d([(24, 1)], 0, [(7, 1)])
        assert capsys.readouterr().out == ""

        logger.set_enabled(True)
        logger.set_verbose(True)
        how_to_cut_boards_1d([(24, 1)], 0, [(7, 1)])
        out = capsys.readouterr().out
        assert "[CUT] Stock 24" in out
        assert "cache:" in out
    finally:
        logger.set_enabled(False)
        logger.set_verbose(False)
    assert log.enabled is False
