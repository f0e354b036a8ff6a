# cutstock_solver/logger.py
# Lightweight logging utilities for the engine.
# Allows a host to turn on/off enumeration and solver diagnostics without polluting stdout.
# Off by default: this package is embedded as a library.

from __future__ import annotations

import sys
from dataclasses import dataclass


@dataclass
class Logger:
    enabled: bool = False
    verbose: bool = False
    prefix: str = "[CUT]"

    def debug(self, msg: str) -> None:
        if self.enabled and self.verbose:
            print(f"{self.prefix} {msg}", file=sys.stdout)

    def info(self, msg: str) -> None:
        if self.enabled:
            print(f"{self.prefix} {msg}", file=sys.stdout)

    def warn(self, msg: str) -> None:
        if self.enabled:
            print(f"{self.prefix} WARNING: {msg}", file=sys.stderr)

    def error(self, msg: str) -> None:
        print(f"{self.prefix} ERROR: {msg}", file=sys.stderr)


# Global default logger
LOGGER = Logger()


def set_enabled(flag: bool) -> None:
    LOGGER.enabled = bool(flag)


def set_verbose(flag: bool) -> None:
    LOGGER.verbose = bool(flag)


def get_logger() -> Logger:
    return LOGGER
