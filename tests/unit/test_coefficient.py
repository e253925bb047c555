"""
Tests for Coefficient

Covers:
1. Construction and input validation
2. Canonical-form invariants and idempotence
3. place / plus / minus / times (coefficient and scalar)
4. Predicates and rendering
5. Reference scenarios
"""


import logging

import pytest

from polycoef import Atom, Coefficient, InvalidInput, Term

x = Atom("x")
y = Atom("y")
a = Atom("a")
b = Atom("b")


def C(*terms) -> Coefficient:
	return Coefficient(list(terms))


# =============================================================================
# SCENARIOS
# =============================================================================


class TestScenarios:
	"""Reference scenarios"""

	def test_constants_merge_on_plus(self) -> None:
		"""[3xy, 2] + [5] -> [3xy, 7]"""
		result = C(Term(3, (x, y)), Term(2)).plus(C(Term(5)))
		assert result.terms == (Term(3.0, (x, y)), Term(7.0))

	def test_monomial_product(self) -> None:
		"""[2a] * [3b] -> [6ab]"""
		result = C(Term(2, (a,))).times(C(Term(3, (b,))))
		assert result.terms == (Term(6.0, (a, b)),)
		assert str(result) == "6ab"

	def test_cancellation_gives_canonical_zero(self) -> None:
		"""[2x, -2x] -> single zero term"""
		c = C(Term(2, (x,)), Term(-2, (x,)))
		assert c.terms == (Term(0.0),)
		assert c.simplify().terms == (Term(0.0),)
		assert c.is_zero()

	def test_render_merges_before_printing(self) -> None:
		"""[3x, -2, 5] renders as 3x+3"""
		assert str(C(Term(3, (x,)), Term(-2), Term(5))) == "3x+3"

	def test_scalar_zero(self) -> None:
		c = C(Term(3, (x, y)), Term(-4, (a,)), Term(1))
		assert c.times(0).is_zero()


# =============================================================================
# CONSTRUCTION
# =============================================================================


class TestConstruction:
	"""Constructors and validation"""

	def test_single_value_forms(self) -> None:
		"""Term, Atom, number and letter all give one-term coefficients"""
		assert Coefficient(Term(2, (x,))).terms == (Term(2.0, (x,)),)
		assert Coefficient.from_atom(x).terms == (Term(1.0, (x,)),)
		assert Coefficient.from_constant(4).terms == (Term(4.0),)
		assert Coefficient.from_letter("y").terms == (Term(1.0, (y,)),)
		assert Coefficient.from_term(Term(5)) == Coefficient(5)
		assert Coefficient("a_1") == Coefficient(Atom("a", 1))

	def test_zero_constant_is_canonical_zero(self) -> None:
		assert Coefficient(0).terms == (Term(0.0),)
		assert Coefficient(0) == Coefficient.zero()

	def test_one(self) -> None:
		assert Coefficient.one() == Coefficient(1)

	def test_normalizes_at_construction(self) -> None:
		c = C(Term(1), Term(1, (y,)), Term(2, (x, x)), Term(3, (x,)), Term(1, (x, y)), Term(1, (x, x)))
		assert str(c) == "3x^2+xy+3x+y+1"

	def test_input_list_copied(self) -> None:
		"""Mutating the caller's list afterwards has no effect"""
		raw = [Term(1, (x,)), Term(2)]
		c = Coefficient(raw)
		raw.append(Term(9, (y,)))
		raw[0] = Term(100)
		assert c.terms == (Term(1.0, (x,)), Term(2.0))

	def test_accepts_any_iterable(self) -> None:
		assert Coefficient(t for t in (Term(1), Term(2))) == Coefficient(3)

	def test_empty_rejected(self) -> None:
		with pytest.raises(InvalidInput):
			Coefficient([])

	def test_none_rejected(self) -> None:
		with pytest.raises(InvalidInput):
			Coefficient(None)
		with pytest.raises(InvalidInput):
			Coefficient([Term(1), None])

	def test_non_terms_rejected(self) -> None:
		with pytest.raises(InvalidInput):
			Coefficient([1, 2])
		with pytest.raises(InvalidInput):
			Coefficient(object())

	def test_named_constructor_type_checks(self) -> None:
		with pytest.raises(InvalidInput):
			Coefficient.from_term(x)
		with pytest.raises(InvalidInput):
			Coefficient.from_atom(Term(1))
		with pytest.raises(InvalidInput):
			Coefficient.from_constant("3")
		with pytest.raises(InvalidInput):
			Coefficient.from_terms(Term(1))
		with pytest.raises(InvalidInput):
			Coefficient.from_letter("xy")

	def test_invalid_input_is_value_error(self) -> None:
		with pytest.raises(ValueError):
			Coefficient([])

	def test_of_passthrough(self) -> None:
		c = Coefficient(x)
		assert Coefficient.of(c) is c
		assert Coefficient.of(2) == Coefficient(2)


# =============================================================================
# CANONICAL FORM
# =============================================================================


class TestCanonicalForm:
	"""Invariants after every operation"""

	def _assert_canonical(self, c: Coefficient) -> None:
		terms = c.terms
		assert len(terms) >= 1
		if c.is_zero():
			assert terms == (Term(0.0),)
			return
		for t in terms:
			assert not t.is_zero()
		for i in range(len(terms) - 1):
			assert terms[i].is_less_than(terms[i + 1])
			assert not terms[i].equals(terms[i + 1])

	def test_results_are_canonical(self) -> None:
		p = C(Term(1, (x,)), Term(-1, (y,)), Term(3))
		q = C(Term(2, (y,)), Term(1, (x, x)), Term(-3))
		self._assert_canonical(p)
		self._assert_canonical(q)
		self._assert_canonical(p.plus(q))
		self._assert_canonical(p.times(q))
		self._assert_canonical(p.times(-2.5))
		self._assert_canonical(p.minus(p))
		self._assert_canonical(p.place(Term(4, (y, x))))

	def test_simplify_idempotent(self) -> None:
		c = C(Term(3, (x,)), Term(1, (y, x)), Term(-2), Term(4, (x,)))
		assert c.simplify().simplify().terms == c.simplify().terms
		assert c.simplify() == c

	def test_reduce_matches_simplify(self) -> None:
		c = C(Term(5), Term(3, (x,)), Term(1, (y, x)), Term(-2), Term(4, (x,)))
		assert c.reduce() == c.simplify()

	def test_zero_is_stable(self) -> None:
		z = Coefficient.zero()
		assert z.simplify() == z
		assert z.reduce() == z


# =============================================================================
# PLACE
# =============================================================================


class TestPlace:
	"""Coefficient.place"""

	def test_zero_term_is_noop(self) -> None:
		c = C(Term(1, (x,)), Term(2))
		assert c.place(Term(0, (y,))) == c

	def test_merge(self) -> None:
		c = C(Term(2, (x,)), Term(1))
		assert c.place(Term(3, (x,))).terms == (Term(5.0, (x,)), Term(1.0))

	def test_insert_in_order(self) -> None:
		c = C(Term(1, (x, x)), Term(1))
		assert str(c.place(Term(4, (x,)))) == "x^2+4x+1"

	def test_does_not_mutate(self) -> None:
		c = C(Term(2, (x,)), Term(1))
		before = c.terms
		c.place(Term(3, (x,)))
		c.place(Term(3, (y,)))
		assert c.terms == before

	def test_place_into_zero(self) -> None:
		assert Coefficient.zero().place(Term(2, (x,))) == Coefficient(Term(2, (x,)))

	def test_place_cancels_to_zero(self) -> None:
		assert Coefficient(Term(2, (x,))).place(Term(-2, (x,))).is_zero()

	def test_place_requires_term(self) -> None:
		with pytest.raises(InvalidInput):
			Coefficient(x).place(x)


# =============================================================================
# ARITHMETIC
# =============================================================================


class TestPlus:
	"""plus / minus"""

	def test_additive_identity(self) -> None:
		c = C(Term(3, (x, y)), Term(-1, (y,)), Term(2))
		assert c.plus(Coefficient.zero()) == c
		assert Coefficient.zero().plus(c) == c

	def test_commutative(self) -> None:
		p = C(Term(1, (x,)), Term(2))
		q = C(Term(3, (y,)), Term(-2))
		assert p.plus(q) == q.plus(p)
		assert str(p.plus(q)) == "x+3y"

	def test_operands_unchanged(self) -> None:
		p = C(Term(1, (x,)), Term(2))
		q = C(Term(-1, (x,)))
		p.plus(q)
		assert p.terms == (Term(1.0, (x,)), Term(2.0))
		assert q.terms == (Term(-1.0, (x,)),)

	def test_minus_self_is_zero(self) -> None:
		p = C(Term(1, (x,)), Term(2))
		assert p.minus(p).is_zero()

	def test_zero_plus_zero(self) -> None:
		assert Coefficient.zero().plus(Coefficient.zero()).is_zero()

	def test_plus_rejects_garbage(self) -> None:
		with pytest.raises(InvalidInput):
			Coefficient(x).plus("y")


class TestTimes:
	"""times by coefficient and by scalar"""

	def test_distribution(self) -> None:
		"""(p + q)(r + s) == pr + ps + qr + qs"""
		p, q = Term(1, (x,)), Term(2, (y,))
		r, s = Term(3), Term(-1, (x,))
		left = C(p, q).times(C(r, s))
		right = C(p.times(r), p.times(s), q.times(r), q.times(s))
		assert left == right
		assert str(left) == "-x^2-2xy+3x+6y"

	def test_commutative_and_associative(self) -> None:
		p = C(Term(1, (x,)), Term(1))
		q = C(Term(1, (y,)), Term(-1))
		r = C(Term(2, (a,)), Term(1, (x,)))
		assert p.times(q) == q.times(p)
		assert p.times(q).times(r) == p.times(q.times(r))

	def test_square(self) -> None:
		"""(x + 1)^2 = x^2 + 2x + 1"""
		p = C(Term(1, (x,)), Term(1))
		assert str(p.times(p)) == "x^2+2x+1"

	def test_difference_of_squares(self) -> None:
		p = C(Term(1, (x,)), Term(1))
		q = C(Term(1, (x,)), Term(-1))
		assert str(p.times(q)) == "x^2-1"

	def test_times_zero_coefficient(self) -> None:
		p = C(Term(1, (x,)), Term(1))
		assert p.times(Coefficient.zero()).is_zero()

	def test_scalar(self) -> None:
		p = C(Term(1, (x,)), Term(-2))
		assert p.times(3).terms == (Term(3.0, (x,)), Term(-6.0))
		assert p.times(-1) == p.negate()

	def test_scalar_keeps_order(self) -> None:
		p = C(Term(1, (x, x)), Term(1, (x,)), Term(1))
		assert [t.sort_key() for t in p.times(-0.5).terms] == [t.sort_key() for t in p.terms]

	def test_non_finite_scalar_rejected(self) -> None:
		with pytest.raises(InvalidInput):
			Coefficient(x).times(float("inf"))
		with pytest.raises(InvalidInput):
			Coefficient(x).times(float("nan"))

	def test_non_finite_term_rejected(self) -> None:
		with pytest.raises(InvalidInput):
			Coefficient([Term(float("nan"), (x,))])

	def test_overflow_rejected(self) -> None:
		"""A scalar product overflowing to inf raises instead of rendering infx"""
		c = C(Term(1e308, (x,)))
		with pytest.raises(InvalidInput):
			c.times(10.0)
		with pytest.raises(InvalidInput):
			c.times(c)

	def test_underflow_logs_warning(self, caplog) -> None:
		"""A product that underflows to zero is dropped with a warning"""
		c = C(Term(1e-300, (x,)), Term(1))
		with caplog.at_level(logging.WARNING, logger="polycoef.coefficient.coef"):
			out = c.times(1e-300)
		assert out.terms == (Term(1e-300),)
		assert "underflowed" in caplog.text


class TestOperators:
	"""Python operator protocol"""

	def test_add_and_radd(self) -> None:
		assert str(Coefficient(x) + 1) == "x+1"
		assert str(1 + Coefficient(x)) == "x+1"
		assert str(Coefficient(x) + y) == "x+y"

	def test_sub_and_neg(self) -> None:
		assert (Coefficient(x) - Coefficient(x)).is_zero()
		assert str(2 - Coefficient(x)) == "-x+2"
		assert str(-Coefficient(x)) == "-x"

	def test_mul(self) -> None:
		assert str(2 * Coefficient(x)) == "2x"
		assert str(Coefficient(x) * y) == "xy"
		assert str(Coefficient(x) * Term(3, (x,))) == "3x^2"

	def test_sum_builtin(self) -> None:
		parts = [Coefficient(x), Coefficient(y), Coefficient(-1), Coefficient(x)]
		assert str(sum(parts)) == "2x+y-1"

	def test_unsupported_operand(self) -> None:
		with pytest.raises(TypeError):
			Coefficient(x) + "y"
		with pytest.raises(TypeError):
			Coefficient(x) * [1]

	def test_equality_and_hash(self) -> None:
		p = C(Term(1, (x,)), Term(1))
		q = C(Term(1), Term(1, (x,)))
		assert p == q
		assert len({p, q}) == 1
		assert p != Coefficient(x)
		assert (p == "x+1") is False


# =============================================================================
# PREDICATES AND RENDERING
# =============================================================================


class TestPredicates:
	"""is_zero / is_zero_term / is_constant"""

	def test_is_zero_does_not_mutate(self) -> None:
		c = C(Term(1, (x,)), Term(2))
		before = c.terms
		assert not c.is_zero()
		assert c.terms == before

	def test_is_zero_term(self) -> None:
		assert Coefficient.zero().is_zero_term()
		assert not Coefficient(x).is_zero_term()

	def test_is_constant(self) -> None:
		assert Coefficient(5).is_constant()
		assert C(Term(2), Term(3)).is_constant()
		assert C(Term(2), Term(3)).constant_value() == 5.0
		assert Coefficient.zero().is_constant()
		assert not Coefficient(x).is_constant()
		assert not C(Term(1, (x,)), Term(1)).is_constant()

	def test_constant_cancels_symbols(self) -> None:
		c = C(Term(1, (x,)), Term(-1, (x,)), Term(4))
		assert c.is_constant()

	def test_constant_value_rejects_symbolic(self) -> None:
		with pytest.raises(InvalidInput):
			Coefficient(x).constant_value()


class TestRendering:
	"""to_string / repr"""

	def test_negative_terms_fold_sign(self) -> None:
		assert str(C(Term(1, (x,)), Term(-1, (y,)), Term(-3))) == "x-y-3"

	def test_zero(self) -> None:
		assert str(Coefficient.zero()) == "0"

	def test_fractional(self) -> None:
		assert str(C(Term(0.5, (x,)), Term(-1.25))) == "0.5x-1.25"

	def test_repr(self) -> None:
		assert repr(C(Term(3, (x, y)), Term(7))) == "Coefficient('3xy+7')"

	def test_snip_and_paste(self) -> None:
		c = C(Term(1, (x,)), Term(2))
		assert c.snip() == (Term(2.0),)
		assert c.paste(Term(1, (y,))) == (Term(1, (y,)), Term(1.0, (x,)), Term(2.0))
		assert len(c) == 2
		assert list(c) == list(c.get_terms())
