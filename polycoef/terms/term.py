"""
Term: a floating-point numerical factor times a product of atoms.

Provides:
  • like-term equality (`equals`): same canonical atom tuple
  • the term order (`sort_key` / `is_less_than`): graded lexicographic, constants last
  • products with terms and scalars, per-term normalization, rendering
"""

from __future__ import annotations
from dataclasses import dataclass, field
from numbers import Real
from typing import Iterable, Tuple
import math

from ..config import get_config
from ..errors import InvalidInput
from .atom import Atom


SortKey = Tuple[int, Tuple[Tuple[str, int, int], ...]]


def format_factor(x: float) -> str:
	"""Render a float, dropping ".0" on integral values when configured to."""
	if get_config().render_integral_floats and math.isfinite(x) and float(x).is_integer():
		return str(int(x))
	return repr(float(x))


def canonical_atoms(atoms: Iterable[Atom]) -> Tuple[Atom, ...]:
	"""Sort atoms by base, merge equal bases by adding powers, drop zero powers."""
	merged: dict[Tuple[str, int], Atom] = {}
	for a in atoms:
		k = a.base_key()
		if k in merged:
			merged[k] = a.with_power(merged[k].power + a.power)
		else:
			merged[k] = a
	out: list[Atom] = []
	for k in sorted(merged):
		a = merged[k]
		if a.power != 0:
			out.append(a)
	return tuple(out)


@dataclass(frozen=True)
class Term:
	"""numerical_coefficient × atoms[0] × atoms[1] × ..."""
	numerical_coefficient: float = 1.0
	atoms: Tuple[Atom, ...] = field(default_factory=tuple)

	def __post_init__(self) -> None:
		c = self.numerical_coefficient
		if isinstance(c, bool) or not isinstance(c, Real):
			raise InvalidInput(f"Numerical coefficient must be a real number, got {c!r}")
		if not math.isfinite(float(c)):
			raise InvalidInput(f"Numerical coefficient must be finite, got {c!r}")
		object.__setattr__(self, "numerical_coefficient", float(c))
		if isinstance(self.atoms, Atom):
			atoms = (self.atoms,)
		else:
			try:
				atoms = tuple(self.atoms)
			except TypeError:
				raise InvalidInput(f"Term atoms must be a sequence of Atom, got {self.atoms!r}") from None
		for a in atoms:
			if not isinstance(a, Atom):
				raise InvalidInput(f"Term atoms must be Atom instances, got {a!r}")
		object.__setattr__(self, "atoms", atoms)

	@classmethod
	def of(cls, value) -> "Term":
		"""Coerce a Term, Atom, atom name (e.g. "x", "a_1") or real number into a Term."""
		if value is None:
			raise InvalidInput("Cannot build a Term from None")
		if isinstance(value, Term):
			return value
		if isinstance(value, Atom):
			return cls(1.0, (value,))
		if isinstance(value, str):
			return cls(1.0, (Atom.from_name(value),))
		if isinstance(value, Real) and not isinstance(value, bool):
			return cls(float(value))
		raise InvalidInput(f"Cannot build a Term from {type(value).__name__}")

	def with_numerical_coefficient(self, x: float) -> "Term":
		return Term(x, self.atoms)

	def get_atoms(self) -> Tuple[Atom, ...]:
		return self.atoms

	def simplify(self) -> "Term":
		"""Return the normalized form of this term; a zero term carries no atoms."""
		if self.is_zero():
			return Term(0.0)
		return Term(self.numerical_coefficient, canonical_atoms(self.atoms))

	def is_zero(self) -> bool:
		return self.numerical_coefficient == 0.0

	def is_constant_term(self) -> bool:
		"""True when the term is a pure number (no atom survives normalization)."""
		return len(canonical_atoms(self.atoms)) == 0

	def degree(self) -> int:
		total = 0
		for a in canonical_atoms(self.atoms):
			total += a.power
		return total

	def sort_key(self) -> SortKey:
		"""
		Key of the term order. Higher total degree first; equal degrees compare
		atom by atom (earlier base first, then higher power). Like terms share a key.
		"""
		atoms = canonical_atoms(self.atoms)
		degree = 0
		sig_list = []
		for a in atoms:
			degree += a.power
			letter, sub = a.base_key()
			sig_list.append((letter, sub, -a.power))
		return (-degree, tuple(sig_list))

	def equals(self, other: "Term") -> bool:
		"""Like-term test: same atoms regardless of the numerical factor."""
		return canonical_atoms(self.atoms) == canonical_atoms(other.atoms)

	def is_less_than(self, other: "Term") -> bool:
		return self.sort_key() < other.sort_key()

	def times(self, other) -> "Term":
		"""Product with another Term or with a real scalar."""
		if isinstance(other, Term):
			return Term(
				self.numerical_coefficient * other.numerical_coefficient,
				self.atoms + other.atoms,
			).simplify()
		if isinstance(other, Real) and not isinstance(other, bool):
			return Term(self.numerical_coefficient * float(other), self.atoms).simplify()
		raise InvalidInput(f"Cannot multiply a Term by {type(other).__name__}")

	def __str__(self) -> str:
		t = self.simplify()
		c = t.numerical_coefficient
		if t.is_zero():
			return "0"
		if not t.atoms:
			return format_factor(c)
		body = "".join(str(a) for a in t.atoms)
		if c == 1.0:
			return body
		if c == -1.0:
			return "-" + body
		return format_factor(c) + body
