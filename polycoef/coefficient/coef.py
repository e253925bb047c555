"""
Coefficient: an immutable, canonically ordered sum of terms.

Invariants (hold for every instance):
  • no two terms are like terms
  • terms are strictly ascending under the term order
  • no zero terms, except the canonical zero which is the single term 0
  • never empty

All normalization happens while building; every operation returns a new value.
"""

from __future__ import annotations
from numbers import Real
from typing import Iterable, Optional, Tuple
import logging
import math

from ..errors import InvalidInput
from ..terms.atom import Atom
from ..terms.term import Term
from . import ordering


_logger = logging.getLogger(__name__)

_ZERO_TERM = Term(0.0)


def _is_scalar(x) -> bool:
	return isinstance(x, Real) and not isinstance(x, bool)


class Coefficient(object):
	__slots__ = ("_terms",)

	def __init__(self, value) -> None:
		"""
		Build from a sequence of terms, or from a single Term, Atom, number or
		atom name. Raises InvalidInput on an empty sequence or a None element.
		"""
		if value is None:
			raise InvalidInput("Cannot build a Coefficient from None")
		if isinstance(value, (Term, Atom, str)) or _is_scalar(value):
			raw = [Term.of(value)]
		else:
			try:
				items = list(value)
			except TypeError:
				raise InvalidInput(f"Cannot build a Coefficient from {type(value).__name__}") from None
			if not items:
				raise InvalidInput("A Coefficient needs at least one term")
			raw = []
			for t in items:
				if t is None:
					raise InvalidInput("Term sequence contains None")
				if not isinstance(t, Term):
					raise InvalidInput(f"Term sequence contains {type(t).__name__}")
				raw.append(t)
		self._terms = Coefficient._canonical(raw)

	@staticmethod
	def _canonical(raw: Iterable[Term]) -> Tuple[Term, ...]:
		out = ordering.canonicalize(raw)
		if not out:
			return (_ZERO_TERM,)
		return out

	@classmethod
	def _from_canonical(cls, terms: Tuple[Term, ...]) -> "Coefficient":
		obj = object.__new__(cls)
		if terms:
			obj._terms = tuple(terms)
		else:
			obj._terms = (_ZERO_TERM,)
		return obj

	@classmethod
	def _build(cls, raw: Iterable[Term]) -> "Coefficient":
		"""Private builder: canonicalize any (possibly empty) raw term list."""
		return cls._from_canonical(cls._canonical(raw))

	# -- named constructors --------------------------------------------------

	@classmethod
	def of(cls, value) -> "Coefficient":
		if isinstance(value, Coefficient):
			return value
		return cls(value)

	@classmethod
	def from_terms(cls, terms: Iterable[Term]) -> "Coefficient":
		if isinstance(terms, Term):
			raise InvalidInput("from_terms expects a sequence; use from_term")
		return cls(terms)

	@classmethod
	def from_term(cls, term: Term) -> "Coefficient":
		if not isinstance(term, Term):
			raise InvalidInput("from_term expects a Term")
		return cls(term)

	@classmethod
	def from_atom(cls, atom: Atom) -> "Coefficient":
		if not isinstance(atom, Atom):
			raise InvalidInput("from_atom expects an Atom")
		return cls(atom)

	@classmethod
	def from_constant(cls, constant: float) -> "Coefficient":
		if not _is_scalar(constant):
			raise InvalidInput("from_constant expects a real number")
		return cls(constant)

	@classmethod
	def from_letter(cls, letter: str) -> "Coefficient":
		return cls(Atom(letter))

	@classmethod
	def zero(cls) -> "Coefficient":
		return cls._from_canonical(())

	@classmethod
	def one(cls) -> "Coefficient":
		return cls._from_canonical((Term(1.0),))

	# -- accessors -----------------------------------------------------------

	@property
	def terms(self) -> Tuple[Term, ...]:
		return self._terms

	def get_terms(self) -> Tuple[Term, ...]:
		return self._terms

	def __len__(self) -> int:
		return len(self._terms)

	def __iter__(self):
		return iter(self._terms)

	def snip(self) -> Tuple[Term, ...]:
		"""Terms without the head."""
		return ordering.snip(self._terms)

	def paste(self, term: Term) -> Tuple[Term, ...]:
		"""Raw tuple with `term` prepended; not canonicalized."""
		return ordering.paste(self._terms, term)

	# -- canonicalization ----------------------------------------------------

	def _nonzero_terms(self) -> Tuple[Term, ...]:
		if self.is_zero():
			return ()
		return self._terms

	def place(self, term: Term) -> "Coefficient":
		"""Return a new Coefficient with `term` inserted in order or merged with its like term."""
		if not isinstance(term, Term):
			raise InvalidInput("place expects a Term")
		return Coefficient._from_canonical(ordering.place(self._nonzero_terms(), term.simplify()))

	def simplify(self) -> "Coefficient":
		"""Canonical form through back-to-front placement."""
		return Coefficient._from_canonical(ordering.fold_canonical(self._terms))

	def reduce(self) -> "Coefficient":
		"""Canonical form through front-to-back insertion."""
		return Coefficient._from_canonical(ordering.insertion_canonical(self._terms))

	# -- arithmetic ----------------------------------------------------------

	def plus(self, other: "Coefficient") -> "Coefficient":
		other = _require(other)
		return Coefficient._build(self._nonzero_terms() + other._nonzero_terms())

	def minus(self, other: "Coefficient") -> "Coefficient":
		return self.plus(_require(other).negate())

	def negate(self) -> "Coefficient":
		return self.times(-1.0)

	def times(self, other) -> "Coefficient":
		"""Product with another Coefficient (every term by every term) or with a scalar."""
		if _is_scalar(other):
			return self._times_scalar(float(other))
		other = _require(other)
		products = []
		for a in self._terms:
			for b in other._terms:
				products.append(a.times(b))
		return Coefficient._build(products)

	def _times_scalar(self, scalar: float) -> "Coefficient":
		if not math.isfinite(scalar):
			raise InvalidInput(f"Scalar must be finite, got {scalar!r}")
		if scalar == 0.0 or self.is_zero():
			return Coefficient.zero()
		out = []
		for t in self._terms:
			p = t.times(scalar)
			if p.is_zero():
				_logger.warning("scalar product underflowed to zero: %s * %r", t, scalar)
				continue
			out.append(p)
		return Coefficient._from_canonical(tuple(out))

	# -- predicates ----------------------------------------------------------

	def is_zero(self) -> bool:
		return len(self._terms) == 1 and self._terms[0].is_zero()

	def is_zero_term(self) -> bool:
		"""Zero test answered through the insertion canonicalizer."""
		for t in self.reduce()._terms:
			if not t.is_zero():
				return False
		return True

	def is_constant(self) -> bool:
		return len(self._terms) == 1 and self._terms[0].is_constant_term()

	def constant_value(self) -> float:
		if not self.is_constant():
			raise InvalidInput(f"Coefficient {self} is not a constant")
		return self._terms[0].numerical_coefficient

	# -- rendering -----------------------------------------------------------

	def to_string(self) -> str:
		s = ""
		for t in self._terms:
			text = str(t)
			if len(text) > 0:
				s += text + "+"
		if s.endswith("+"):
			s = s[:-1]
		return s.replace("+-", "-")

	def __str__(self) -> str:
		return self.to_string()

	def __repr__(self) -> str:
		return "Coefficient({!r})".format(self.to_string())

	# -- protocol ------------------------------------------------------------

	def __eq__(self, other) -> bool:
		if not isinstance(other, Coefficient):
			return NotImplemented
		return self._terms == other._terms

	def __hash__(self) -> int:
		return hash(self._terms)

	def __add__(self, other):
		o = _coerce(other)
		if o is None:
			return NotImplemented
		return self.plus(o)

	__radd__ = __add__

	def __sub__(self, other):
		o = _coerce(other)
		if o is None:
			return NotImplemented
		return self.minus(o)

	def __rsub__(self, other):
		o = _coerce(other)
		if o is None:
			return NotImplemented
		return o.minus(self)

	def __neg__(self) -> "Coefficient":
		return self.negate()

	def __mul__(self, other):
		if _is_scalar(other):
			return self._times_scalar(float(other))
		o = _coerce(other)
		if o is None:
			return NotImplemented
		return self.times(o)

	__rmul__ = __mul__


def _coerce(value) -> Optional[Coefficient]:
	"""Coefficient for operator operands, or None when the operand is not supported."""
	if isinstance(value, Coefficient):
		return value
	if isinstance(value, (Term, Atom)) or _is_scalar(value):
		return Coefficient(value)
	return None


def _require(value) -> Coefficient:
	o = _coerce(value)
	if o is None:
		raise InvalidInput(f"Expected a Coefficient, got {type(value).__name__}")
	return o
