"""
Atom: a single symbolic factor such as x, b^2 or a_1^3.

An atom is identified by its base (letter, subscript); the power is the
exponent applied to that base. Atoms are immutable.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
import re

from ..errors import InvalidInput


_NAME_RE = re.compile(r"^([A-Za-z])(?:_(\d+))?$")


@dataclass(frozen=True)
class Atom:
	"""Symbolic factor letter_subscript^power."""
	letter: str
	subscript: Optional[int] = None
	power: int = 1

	def __post_init__(self) -> None:
		if not isinstance(self.letter, str) or len(self.letter) != 1 or not self.letter.isascii() or not self.letter.isalpha():
			raise InvalidInput(f"Atom letter must be a single ASCII letter, got {self.letter!r}")
		if self.subscript is not None:
			if isinstance(self.subscript, bool) or not isinstance(self.subscript, int) or self.subscript < 0:
				raise InvalidInput(f"Atom subscript must be a non-negative int, got {self.subscript!r}")
		if isinstance(self.power, bool) or not isinstance(self.power, int):
			raise InvalidInput(f"Atom power must be an int, got {self.power!r}")

	@classmethod
	def from_name(cls, name: str, power: int = 1) -> "Atom":
		"""Build an atom from a symbol name like "x" or "a_12"."""
		m = _NAME_RE.match(name or "")
		if m is None:
			raise InvalidInput(f"Not an atom name: {name!r}")
		if m.group(2) is None:
			sub = None
		else:
			sub = int(m.group(2))
		return cls(m.group(1), sub, power)

	@property
	def name(self) -> str:
		"""Symbol name without the power: "x" or "a_1"."""
		if self.subscript is None:
			return self.letter
		return f"{self.letter}_{self.subscript}"

	def base_key(self) -> Tuple[str, int]:
		"""Ordering key of the base; an unsubscripted letter precedes its subscripted forms."""
		if self.subscript is None:
			return (self.letter, -1)
		return (self.letter, self.subscript)

	def with_power(self, power: int) -> "Atom":
		return Atom(self.letter, self.subscript, power)

	def __str__(self) -> str:
		if self.power == 1:
			return self.name
		return f"{self.name}^{self.power}"
