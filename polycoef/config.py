"""
Engine configuration and the process-wide active settings.
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator

from .errors import InvalidInput


CANONICALIZERS = ("fold", "insert")


@dataclass(frozen=True)
class EngineConfig:
	"""
	Knobs read by the engine.

	canonicalizer          : "fold" (back-to-front placement) or "insert" (front-to-back insertion)
	render_integral_floats : print 3.0 as "3"
	trace                  : emit DEBUG records for every canonicalization
	"""
	canonicalizer: str = "fold"
	render_integral_floats: bool = True
	trace: bool = False

	def validate(self) -> "EngineConfig":
		if self.canonicalizer not in CANONICALIZERS:
			raise InvalidInput(f"Unknown canonicalizer: {self.canonicalizer!r}")
		return self


_active = EngineConfig()


def get_config() -> EngineConfig:
	"""Return the active configuration."""
	return _active


def set_config(cfg: EngineConfig) -> EngineConfig:
	"""Install `cfg` as the active configuration and return the previous one."""
	global _active
	if not isinstance(cfg, EngineConfig):
		raise InvalidInput("set_config expects an EngineConfig")
	cfg.validate()
	prev = _active
	_active = cfg
	return prev


@contextmanager
def override_config(**changes) -> Iterator[EngineConfig]:
	"""Temporarily replace fields of the active configuration."""
	cfg = replace(_active, **changes)
	prev = set_config(cfg)
	try:
		yield cfg
	finally:
		set_config(prev)
