"""Type derivation for the fluxo kernel.

The kernel is a Pure Type System with two sorts, ``*`` and ``□``, and the
single axiom ``* : □``. A judgment ``Gamma |- e : A`` is derived in one
inference pass; there is no separate checking mode. Types are compared by
equality of their beta-normal forms, which is how the conversion rule is
realised.
"""

from __future__ import annotations

import logging
from typing import Sequence

from fluxo.errors import TypeCompatibilityError, TypingError, UndefinedTypeError
from fluxo.kernel.ctx import Ctx
from fluxo.kernel.exp import KIND_META, TYPE_META, Exp, ExpKind
from fluxo.kernel.var import Bound, Idx

logger = logging.getLogger(__name__)

SORTS: tuple[Exp, ...] = (TYPE_META, KIND_META)


class TypeJudge:
    """Derives types following the Calculus of Constructions rules.

      (Sort)    ------------
                Gamma |- * : □

      (Var)     x : A in Gamma,  Gamma \\ x |- A : s
                ---------------------------------
                Gamma |- x : A

      (Form)    Gamma |- A : s1,  Gamma, x:A |- B : s2
                -------------------------------------
                Gamma |- Πx:A.B : s2

      (Abst)    Gamma, x:A |- e : B,  Gamma |- Πx:A.B : s
                -----------------------------------------
                Gamma |- λx:A.e : Πx:A.B

      (Appl)    Gamma |- f : Πx:A.B,  Gamma |- e : A
                -----------------------------------
                Gamma |- f e : B[x := e]

      (Conv)    types are compared in beta-normal form

    The weakening rule is folded into Var: a declaration is checked for
    well-formedness against the rest of the context.
    """

    def calculate_type(self, exp: Exp, ctx: Ctx) -> Exp:
        """Derive the type of ``exp`` under ``ctx``.

        Gamma |- exp : ?
        """
        if exp.kind == ExpKind.TYPE_META:
            return KIND_META
        if exp.kind == ExpKind.KIND_META:
            raise UndefinedTypeError(exp)
        if exp.kind == ExpKind.VAR:
            return self._var(exp, ctx)
        if exp.kind == ExpKind.ABS:
            return self._abst(exp, ctx)
        if exp.kind == ExpKind.FOR:
            return self._form(exp, ctx)
        if exp.kind == ExpKind.APP:
            return self._appl(exp, ctx)
        raise TypingError(f"Cannot derive a type for {exp!r}")

    def validate_type(self, exp: Exp, accepted: Sequence[Exp], ctx: Ctx) -> Exp:
        """Check that the type of ``exp`` is one of ``accepted``.

        Returns the derived type in normal form.
        """
        actual = self.calculate_type(exp, ctx).reduce()
        for typ in accepted:
            if actual == typ.reduce():
                return actual
        raise TypeCompatibilityError(exp, actual, accepted)

    @staticmethod
    def _scope(ctx: Ctx, binder: Exp) -> Ctx:
        """Context for the body of ``binder``."""
        if binder.is_anonymous():
            return ctx
        return ctx.extend(binder.binder, binder.param_type)

    def _var(self, exp: Exp, ctx: Ctx) -> Exp:
        var = exp.ref.get_var()
        typ = ctx.get(var)
        self.validate_type(typ, SORTS, ctx.remove(var))
        if isinstance(exp.ref, Bound):
            # The declaration lives outside its binder; move it to the
            # occurrence site.
            typ = typ.shift(exp.ref.idx.depth + 1)
        logger.debug("var %s : %s", var, typ)
        return typ.reduce()

    def _abst(self, exp: Exp, ctx: Ctx) -> Exp:
        typ, body = exp.param_type, exp.body
        body_type = self.calculate_type(body, self._scope(ctx, exp))
        result = Exp(kind=ExpKind.FOR, binder=exp.binder, children=(typ, body_type))
        self.validate_type(result, SORTS, ctx)
        logger.debug("abst %s : %s", exp, result)
        return result.reduce()

    def _form(self, exp: Exp, ctx: Ctx) -> Exp:
        typ, body = exp.param_type, exp.body
        self.validate_type(typ, SORTS, ctx)
        sort = self.validate_type(body, SORTS, self._scope(ctx, exp))
        logger.debug("form %s : %s", exp, sort)
        return sort

    def _appl(self, exp: Exp, ctx: Ctx) -> Exp:
        func, arg = exp.func, exp.arg
        func_type = self.calculate_type(func, ctx).reduce()
        if func_type.kind != ExpKind.FOR:
            raise TypeCompatibilityError(
                func, func_type,
                message=f"{func} has type {func_type}, which is not a Π type and cannot be applied",
            )
        self.validate_type(arg, [func_type.param_type], ctx)
        result = func_type.body.subst(Idx.new(func_type.binder), arg).reduce()
        logger.debug("appl %s : %s", exp, result)
        return result
