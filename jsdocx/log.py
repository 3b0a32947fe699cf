# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Logging setup for the `jsdocx` logger hierarchy.

Modules log through `logging.getLogger(__name__)`; `configure` installs the
one stderr handler. Worker processes call `configure` again with their
worker name as prefix, so interleaved output stays attributable.
"""

from __future__ import annotations

import logging
import sys

LEVELS: dict[str, int] = {
	"quiet": logging.WARNING,
	"info": logging.INFO,
	"verbose": logging.DEBUG,
}

_ROOT = "jsdocx"
_handler: logging.Handler | None = None
_level_name = "quiet"


def current() -> str:
	"""Name of the configured level (passed on to worker processes)."""
	return _level_name


def configure(level: str = "quiet", prefix: str | None = None) -> logging.Logger:
	global _handler, _level_name
	if level not in LEVELS:
		raise ValueError(f"unknown log level '{level}' (expected one of: {', '.join(LEVELS)})")
	logger = logging.getLogger(_ROOT)
	if _handler is not None:
		logger.removeHandler(_handler)
	pref = f" [{prefix}]" if prefix else ""
	_handler = logging.StreamHandler(sys.stderr)
	_handler.setFormatter(logging.Formatter(f"[jsdocx] [%(levelname)s]{pref} %(message)s"))
	logger.addHandler(_handler)
	logger.setLevel(LEVELS[level])
	logger.propagate = False
	_level_name = level
	return logger


__all__ = ["LEVELS", "configure", "current"]
