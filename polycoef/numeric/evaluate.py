"""
Numeric evaluation of atoms, terms and coefficients with NumPy broadcasting.

  • evaluate(value, bindings)  → float64 scalar or array
  • probe_equal(a, b, n, tol)  → (ok, max_abs_diff) on a deterministic random grid

Bindings map atom names ("x", "a_1") to floats or arrays. Negative powers of a
zero binding produce inf, as NumPy does.
"""

from __future__ import annotations
from typing import Dict, Mapping, Tuple, Union
import numpy as np

from ..coefficient.coef import Coefficient
from ..errors import InvalidInput
from ..terms.atom import Atom
from ..terms.term import Term


Numeric = Union[float, np.ndarray]
Evaluable = Union[Atom, Term, Coefficient]


def _lookup(name: str, bindings: Mapping[str, Numeric]) -> np.ndarray:
	if name not in bindings:
		raise InvalidInput(f"No binding for atom {name!r}")
	return np.asarray(bindings[name], dtype=np.float64)


def _eval_atom(a: Atom, bindings: Mapping[str, Numeric]) -> np.ndarray:
	x = _lookup(a.name, bindings)
	with np.errstate(divide="ignore"):
		return np.power(x, float(a.power))


def _eval_term(t: Term, bindings: Mapping[str, Numeric]) -> np.ndarray:
	out = np.asarray(t.numerical_coefficient, dtype=np.float64)
	for a in t.simplify().atoms:
		out = out * _eval_atom(a, bindings)
	return out


def _as_output(y: np.ndarray) -> Numeric:
	if y.ndim == 0:
		return float(y)
	return y


def evaluate(value: Evaluable, bindings: Mapping[str, Numeric]) -> Numeric:
	"""Evaluate an Atom, Term or Coefficient at the bound atom values."""
	if isinstance(value, Atom):
		return _as_output(_eval_atom(value, bindings))
	if isinstance(value, Term):
		return _as_output(_eval_term(value, bindings))
	if isinstance(value, Coefficient):
		total = np.asarray(0.0, dtype=np.float64)
		for t in value.terms:
			total = total + _eval_term(t, bindings)
		return _as_output(total)
	raise InvalidInput(f"Cannot evaluate {type(value).__name__}")


def atom_names(value: Evaluable) -> Tuple[str, ...]:
	"""Sorted names of every atom appearing in `value`."""
	if isinstance(value, Atom):
		return (value.name,)
	if isinstance(value, Term):
		terms = (value,)
	elif isinstance(value, Coefficient):
		terms = value.terms
	else:
		raise InvalidInput(f"Cannot collect atoms of {type(value).__name__}")
	names = set()
	for t in terms:
		for a in t.simplify().atoms:
			names.add(a.name)
	return tuple(sorted(names))


def probe_equal(
	a: Evaluable,
	b: Evaluable,
	n: int = 32,
	tol: float = 1e-9,
	seed: int = 1729,
	low: float = -2.0,
	high: float = 2.0,
) -> Tuple[bool, float]:
	"""
	Evaluate both values on a deterministic uniform grid over the union of
	their atoms. Returns (ok, max_abs_diff) where ok means max_abs_diff <= tol.
	"""
	n = int(n)
	if n <= 0:
		return True, 0.0
	names = sorted(set(atom_names(a)) | set(atom_names(b)))
	rng = np.random.default_rng(seed)
	grid: Dict[str, np.ndarray] = {}
	for nm in names:
		grid[nm] = rng.uniform(low, high, size=n).astype(np.float64)
	ya = np.broadcast_to(np.asarray(evaluate(a, grid), dtype=np.float64), (n,))
	yb = np.broadcast_to(np.asarray(evaluate(b, grid), dtype=np.float64), (n,))
	d = np.abs(ya - yb)
	if d.size > 0:
		max_abs = float(np.max(d))
	else:
		max_abs = 0.0
	return bool(max_abs <= float(tol)), max_abs
