"""SymPy bridge: conversion of atoms, terms and coefficients to and from SymPy expressions.

Provides:
  • SympyBridge.to_sympy(value): Atom / Term / Coefficient -> sp.Expr.
  • SympyBridge.from_sympy(expr): expanded polynomial expression -> Coefficient, rejecting non-polynomial content.
  • SympyBridge.parse(text): strict, deterministic string parser returning a Coefficient.
  • SympyBridge.symbolic_equal(a, b): certificate expand(a - b) == 0.

Module-level functions proxy to SympyBridge methods.
"""

from __future__ import annotations
from typing import Dict, List, Union
import math
import re
import sympy as sp
from sympy.core.relational import Relational

from ..coefficient.coef import Coefficient
from ..errors import InvalidInput
from ..terms.atom import Atom
from ..terms.term import Term

Convertible = Union[Atom, Term, Coefficient, sp.Basic]


class SympyBridge:
	"""Utility namespace for SymPy conversion."""

	@staticmethod
	def _number(x: float) -> sp.Expr:
		"""Integral floats become Integer so printed forms stay clean."""
		if math.isfinite(x) and float(x).is_integer():
			return sp.Integer(int(x))
		return sp.Float(x)

	@staticmethod
	def to_sympy(value: Convertible) -> sp.Expr:
		"""Return the SymPy expression for an Atom, Term or Coefficient; SymPy objects pass through."""
		if isinstance(value, sp.Basic):
			return value
		if isinstance(value, Atom):
			return sp.Symbol(value.name) ** value.power
		if isinstance(value, Term):
			t = value.simplify()
			factors: List[sp.Expr] = [SympyBridge._number(t.numerical_coefficient)]
			for a in t.atoms:
				factors.append(SympyBridge.to_sympy(a))
			return sp.Mul(*factors)
		if isinstance(value, Coefficient):
			parts = []
			for t in value.terms:
				parts.append(SympyBridge.to_sympy(t))
			return sp.Add(*parts)
		raise InvalidInput(f"Cannot convert {type(value).__name__} to SymPy")

	@staticmethod
	def _term_from_product(arg: sp.Expr) -> Term:
		coeff, rest = arg.as_coeff_Mul()
		if not coeff.is_Number or coeff.is_real is not True:
			raise InvalidInput(f"Non-real numerical factor: {coeff}")
		c = float(coeff)
		if not math.isfinite(c):
			raise InvalidInput(f"Non-finite numerical factor: {coeff}")
		atoms: List[Atom] = []
		for f in sp.Mul.make_args(rest):
			if f == 1:
				continue
			base, exp = f.as_base_exp()
			if not isinstance(base, sp.Symbol):
				raise InvalidInput(f"Not a polynomial factor: {f}")
			if not exp.is_Integer:
				raise InvalidInput(f"Non-integer power: {f}")
			atoms.append(Atom.from_name(base.name, int(exp)))
		return Term(c, tuple(atoms))

	@staticmethod
	def from_sympy(expr) -> Coefficient:
		"""
		Expand `expr` and read it back as a Coefficient. Functions, relationals,
		non-integer powers and symbol names that are not atom names are rejected.
		"""
		try:
			e = sp.sympify(expr)
		except (sp.SympifyError, TypeError) as exc:
			raise InvalidInput(f"Not a SymPy expression: {expr!r}") from exc
		if not isinstance(e, sp.Expr):
			raise InvalidInput(f"Not an algebraic expression: {type(e).__name__}")
		if isinstance(e, Relational) or e.atoms(Relational):
			raise InvalidInput("Relational constructs are not allowed")
		if e.atoms(sp.Function):
			raise InvalidInput("Function applications are not allowed")
		e = sp.expand(e)
		terms = []
		for arg in sp.Add.make_args(e):
			terms.append(SympyBridge._term_from_product(arg))
		return Coefficient(terms)

	@staticmethod
	def parse(text: str) -> Coefficient:
		"""
		Parse a polynomial string such as "3*x*y + 2*a_1^2 - 5" into a Coefficient.
		Every identifier must be an atom name; function calls are rejected before
		sympify so no name is ever called.
		"""
		s = (text or "").strip().replace("^", "**")
		if not s:
			raise InvalidInput("Empty polynomial text")

		call_heads = set(re.findall(r"([A-Za-z_][A-Za-z_0-9]*)\s*\(", s))
		if call_heads:
			raise InvalidInput(f"Function not allowed: {sorted(call_heads)[0]}")

		allowed: Dict[str, object] = {}
		names = set(re.findall(r"[A-Za-z_][A-Za-z_0-9]*", s))
		for nm in names:
			Atom.from_name(nm)
			allowed[nm] = sp.Symbol(nm)

		try:
			expr = sp.sympify(s, locals=allowed, convert_xor=True, evaluate=True)
		except (sp.SympifyError, SyntaxError, TypeError) as exc:
			raise InvalidInput(f"Cannot parse polynomial text: {text!r}") from exc
		if not isinstance(expr, sp.Basic):
			raise InvalidInput("Non-expression construct is not allowed")
		return SympyBridge.from_sympy(expr)

	@staticmethod
	def symbolic_equal(a: Convertible, b: Convertible) -> bool:
		"""Return True iff expand(a - b) is exactly zero."""
		d = sp.expand(SympyBridge.to_sympy(a) - SympyBridge.to_sympy(b))
		if d == 0:
			return True
		else:
			return False



def to_sympy(value: Convertible) -> sp.Expr:
	"""Proxy to SympyBridge.to_sympy."""
	return SympyBridge.to_sympy(value)

def from_sympy(expr) -> Coefficient:
	"""Proxy to SympyBridge.from_sympy."""
	return SympyBridge.from_sympy(expr)

def parse(text: str) -> Coefficient:
	"""Proxy to SympyBridge.parse."""
	return SympyBridge.parse(text)

def symbolic_equal(a: Convertible, b: Convertible) -> bool:
	"""Proxy to SympyBridge.symbolic_equal."""
	return SympyBridge.symbolic_equal(a, b)
