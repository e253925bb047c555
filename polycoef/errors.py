"""
Error taxonomy for the coefficient engine.

  • PolycoefError : package base class
  • InvalidInput  : bad constructor arguments, non-polynomial input, missing bindings
"""

from __future__ import annotations


class PolycoefError(Exception):
	"""Base class for every error raised by polycoef."""


class InvalidInput(PolycoefError, ValueError):
	"""Raised at construction time when an argument cannot form a valid value."""
