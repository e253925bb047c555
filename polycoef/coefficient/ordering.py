"""
Ordering and insertion primitives over term sequences (finite, terminating).

Provides:
  • snip(terms) / paste(terms, term): head removal and head prepend
  • locate(terms, term): binary search under the term order
  • place(terms, term): pure ordered insert-or-merge returning a new tuple
  • insert(terms, term): in-place ordered insert-or-merge on a list
  • fold_canonical(raw): back-to-front placement into a growing sorted suffix
  • insertion_canonical(raw): front-to-back insertion
  • canonicalize(raw, method): dispatch on the configured method

Every function expects terms already normalized by Term.simplify() except the
two canonicalizers, which normalize their raw input themselves. Results never
contain zero terms and are strictly ascending under Term.sort_key.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple
import logging

from ..config import get_config
from ..errors import InvalidInput
from ..terms.term import Term


_logger = logging.getLogger(__name__)

TermSeq = Tuple[Term, ...]


def snip(terms: Sequence[Term]) -> TermSeq:
	"""Return every term except the head."""
	return tuple(terms[1:])


def paste(terms: Sequence[Term], term: Term) -> TermSeq:
	"""Return `term` followed by `terms`."""
	return (term,) + tuple(terms)


def locate(terms: Sequence[Term], term: Term) -> Tuple[int, bool]:
	"""
	Return (index, found). When found, terms[index] is the like term; otherwise
	index is the position that keeps the sequence ascending.
	"""
	key = term.sort_key()
	lo = 0
	hi = len(terms)
	while lo < hi:
		mid = (lo + hi) // 2
		k = terms[mid].sort_key()
		if k == key:
			return mid, True
		if k < key:
			lo = mid + 1
		else:
			hi = mid
	return lo, False


def _merged(existing: Term, term: Term) -> Optional[Term]:
	"""Sum the factors of two like terms; None when they cancel."""
	total = existing.numerical_coefficient + term.numerical_coefficient
	if total == 0.0:
		return None
	return existing.with_numerical_coefficient(total)


def place(terms: Sequence[Term], term: Term) -> TermSeq:
	"""Insert `term` in order or merge it with its like term, without touching `terms`."""
	if term.is_zero():
		return tuple(terms)
	idx, found = locate(terms, term)
	if not found:
		return tuple(terms[:idx]) + (term,) + tuple(terms[idx:])
	m = _merged(terms[idx], term)
	if m is None:
		return tuple(terms[:idx]) + tuple(terms[idx + 1:])
	return tuple(terms[:idx]) + (m,) + tuple(terms[idx + 1:])


def insert(terms: List[Term], term: Term) -> bool:
	"""
	Insert `term` into the list in place. Greater-than-everything terms are
	appended. Returns True when the term merged with an existing like term.
	"""
	if term.is_zero():
		return False
	idx, found = locate(terms, term)
	if not found:
		terms.insert(idx, term)
		return False
	m = _merged(terms[idx], term)
	if m is None:
		del terms[idx]
	else:
		terms[idx] = m
	return True


def _check(raw: Iterable[Term]) -> List[Term]:
	out: List[Term] = []
	for t in raw:
		if not isinstance(t, Term):
			raise InvalidInput(f"Expected a Term, got {type(t).__name__}")
		out.append(t)
	return out


def fold_canonical(raw: Iterable[Term]) -> TermSeq:
	"""Walk the sequence from the back, placing each normalized term into the sorted suffix."""
	items = _check(raw)
	acc: TermSeq = ()
	merges = 0
	for t in reversed(items):
		s = t.simplify()
		before = len(acc)
		acc = place(acc, s)
		if not s.is_zero() and len(acc) != before + 1:
			merges += 1
	if get_config().trace:
		_logger.debug("fold_canonical: %d in, %d out, %d merges", len(items), len(acc), merges)
	return acc


def insertion_canonical(raw: Iterable[Term]) -> TermSeq:
	"""Feed the terms front to back through `insert`."""
	items = _check(raw)
	acc: List[Term] = []
	merges = 0
	for t in items:
		if insert(acc, t.simplify()):
			merges += 1
	if get_config().trace:
		_logger.debug("insertion_canonical: %d in, %d out, %d merges", len(items), len(acc), merges)
	return tuple(acc)


def canonicalize(raw: Iterable[Term], method: Optional[str] = None) -> TermSeq:
	"""Canonical term tuple of `raw` using `method` or the configured canonicalizer."""
	cfg = get_config()
	if method is None:
		method = cfg.canonicalizer
	if method == "fold":
		out = fold_canonical(raw)
	elif method == "insert":
		out = insertion_canonical(raw)
	else:
		raise InvalidInput(f"Unknown canonicalizer: {method!r}")
	if cfg.trace:
		_logger.debug("canonicalize[%s] -> %d terms", method, len(out))
	return out


def is_canonical(terms: Sequence[Term]) -> bool:
	"""True iff no term is zero and keys are strictly ascending."""
	prev = None
	for t in terms:
		if t.is_zero():
			return False
		k = t.sort_key()
		if prev is not None and not (prev < k):
			return False
		prev = k
	return True
