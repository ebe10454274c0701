"""Property-based tests for beta-reduction.

Terms are generated well-typed by construction, all of type A, under

    A : *,  a : A,  f : A -> A

and checked for:
  1. Idempotence:        reduce(reduce(e)) = reduce(e)
  2. Subject reduction:  e : A  and  reduce(e) : A
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from fluxo.kernel import Ctx, Exp, Var

V = Exp.new_var
STAR = Exp.get_type_meta()
A = V("A")


def lam(x, t, b):
    return Exp.new_abs(x, t, b)


def app(f, *args):
    for a in args:
        f = Exp.new_app(f, a)
    return f


def make_ctx() -> Ctx:
    ctx = Ctx()
    ctx.put(Var("A"), STAR)
    ctx.put(Var("a"), A)
    ctx.put(Var("f"), Exp.new_arrow(A, A))
    return ctx


# ---------------------------------------------------------------------------
# Hypothesis strategies
# ---------------------------------------------------------------------------

def _extend(terms):
    identity = lam("x", A, V("x"))
    constant = lam("x", A, V("a"))
    through_f = lam("x", A, app(V("f"), V("x")))
    first = lam("x", A, lam("y", A, V("x")))
    return st.one_of(
        terms.map(lambda t: app(V("f"), t)),
        terms.map(lambda t: app(identity, t)),
        terms.map(lambda t: app(constant, t)),
        terms.map(lambda t: app(through_f, t)),
        st.tuples(terms, terms).map(lambda p: app(first, p[0], p[1])),
        terms.map(lambda t: app(lam("g", Exp.new_arrow(A, A), app(V("g"), t)), V("f"))),
    )


terms_of_a = st.recursive(st.just(V("a")), _extend, max_leaves=8)


# ===========================================================================
# Reduction laws
# ===========================================================================

class TestReductionLaws:

    @given(terms_of_a)
    @settings(max_examples=100, deadline=None)
    def test_reduce_idempotent(self, e: Exp):
        """reduce(reduce(e)) = reduce(e)."""
        nf = e.reduce()
        assert nf.reduce() == nf, f"not idempotent: {e} ~> {nf} ~> {nf.reduce()}"

    @given(terms_of_a)
    @settings(max_examples=100, deadline=None)
    def test_subject_reduction(self, e: Exp):
        """e : A  implies  reduce(e) : A."""
        ctx = make_ctx()
        assert e.calculate_type(ctx) == A
        assert e.reduce().calculate_type(ctx) == A

    @given(terms_of_a)
    @settings(max_examples=100, deadline=None)
    def test_normal_form_is_a_fixpoint(self, e: Exp):
        nf = e.reduce()
        assert nf.reduce_once() == nf
