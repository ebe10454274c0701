"""Expressions of the core fluxo language.

A single tree type covers terms, types and kinds (Calculus of
Constructions style):

    e ::= x            variable (free name or de Bruijn index)
        | λx : A . e   abstraction, an anonymous function
        | Πx : A . B   dependent function type
        | e e          application
        | *            the type of all types
        | □            the type of all kinds

Binder constructors resolve the occurrences of their variable in the body
to de Bruijn indices right away, so every tree handed to substitution and
reduction is already indexed. Nodes are immutable; every operation returns
a new tree.

Equality is alpha-equivalence: binder names and the names carried by bound
indices are for display only, so ``Πx:*.x == Πy:*.y``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional, Tuple, Union

from fluxo.config import get_config
from fluxo.errors import ReductionLimitError
from fluxo.kernel.var import Bound, Free, Idx, Var, VarIdx

if TYPE_CHECKING:
    from fluxo.kernel.ctx import Ctx

logger = logging.getLogger(__name__)


class ExpKind(Enum):
    """Kinds of expression nodes."""
    VAR = auto()        # x
    ABS = auto()        # λx : A . e
    FOR = auto()        # Πx : A . B
    APP = auto()        # e e
    TYPE_META = auto()  # *
    KIND_META = auto()  # □


_BINDER_SYMBOLS = {ExpKind.ABS: "λ", ExpKind.FOR: "Π"}

# Binder of non-dependent function types, recognised by identity so a
# user binder that happens to be named "_" is an ordinary binder
ANONYMOUS = Var("_")


def _as_var(var: Union[Var, str]) -> Var:
    return Var(var) if isinstance(var, str) else var


@dataclass(frozen=True)
class Exp:
    """An expression node.

    Binders keep ``(parameter type, body)`` in ``children``, applications
    keep ``(function, argument)``; variables keep their occurrence in
    ``ref``.
    """
    kind: ExpKind
    # Variable occurrence
    ref: Optional[VarIdx] = None
    # For Abs/For: binding variable name, display only
    binder: Optional[Var] = field(default=None, compare=False)
    # Sub-expressions
    children: Tuple[Exp, ...] = ()

    # -- construction ------------------------------------------------------

    @staticmethod
    def new_var(var: Union[Var, str]) -> Exp:
        return Exp(kind=ExpKind.VAR, ref=Free(_as_var(var)))

    @staticmethod
    def new_abs(var: Union[Var, str], typ: Exp, exp: Exp) -> Exp:
        var = _as_var(var)
        return Exp(kind=ExpKind.ABS, binder=var, children=(typ, exp.index(Idx.new(var))))

    @staticmethod
    def new_for(var: Union[Var, str], typ: Exp, exp: Exp) -> Exp:
        var = _as_var(var)
        return Exp(kind=ExpKind.FOR, binder=var, children=(typ, exp.index(Idx.new(var))))

    @staticmethod
    def new_arrow(typ: Exp, exp: Exp) -> Exp:
        """Non-dependent function type: A -> B = Π_ : A . B"""
        return Exp(kind=ExpKind.FOR, binder=ANONYMOUS, children=(typ, exp.shift(1)))

    @staticmethod
    def new_app(fst: Exp, snd: Exp) -> Exp:
        return Exp(kind=ExpKind.APP, children=(fst, snd))

    @staticmethod
    def get_type_meta() -> Exp:
        return TYPE_META

    @staticmethod
    def get_kind_meta() -> Exp:
        return KIND_META

    # -- accessors ---------------------------------------------------------

    @property
    def param_type(self) -> Exp:
        return self.children[0]

    @property
    def body(self) -> Exp:
        return self.children[1]

    @property
    def func(self) -> Exp:
        return self.children[0]

    @property
    def arg(self) -> Exp:
        return self.children[1]

    def is_binder(self) -> bool:
        return self.kind in (ExpKind.ABS, ExpKind.FOR)

    def is_anonymous(self) -> bool:
        """True for the binder of a type built by new_arrow."""
        return self.binder is ANONYMOUS

    def is_sort(self) -> bool:
        return self.kind in (ExpKind.TYPE_META, ExpKind.KIND_META)

    def _rebuild(self, typ: Exp, body: Exp) -> Exp:
        return Exp(kind=self.kind, binder=self.binder, children=(typ, body))

    # -- de Bruijn indices -------------------------------------------------

    def index(self, idx: Idx) -> Exp:
        """Resolve free occurrences of ``idx.var`` to de Bruijn indices.

        Depth grows by one under each binder body. A nested binder that
        reuses the name shadows it, so its body is left alone; its parameter
        type still sits in the outer scope and is indexed.
        """
        if self.kind == ExpKind.VAR:
            if isinstance(self.ref, Free) and self.ref.var == idx.var:
                return Exp(kind=ExpKind.VAR, ref=Bound(idx))
            return self

        if self.is_binder():
            typ = self.param_type.index(idx)
            if self.binder == idx.var and not self.is_anonymous():
                return self._rebuild(typ, self.body)
            return self._rebuild(typ, self.body.index(idx.inc()))

        if self.kind == ExpKind.APP:
            return Exp.new_app(self.func.index(idx), self.arg.index(idx))

        return self

    def shift(self, by: int, cutoff: int = 0) -> Exp:
        """Add ``by`` to every bound index at depth ``cutoff`` or deeper.

        Indices below the cutoff point at binders inside this expression and
        are left unchanged.
        """
        if by == 0:
            return self

        if self.kind == ExpKind.VAR:
            if isinstance(self.ref, Bound) and self.ref.idx.depth >= cutoff:
                return Exp(kind=ExpKind.VAR, ref=Bound(self.ref.idx.shifted(by)))
            return self

        if self.is_binder():
            return self._rebuild(self.param_type.shift(by, cutoff),
                                 self.body.shift(by, cutoff + 1))

        if self.kind == ExpKind.APP:
            return Exp.new_app(self.func.shift(by, cutoff), self.arg.shift(by, cutoff))

        return self

    # -- substitution and reduction ----------------------------------------

    def subst(self, loc: Idx, can: Exp) -> Exp:
        """Replace the occurrences of index ``loc`` with ``can``.

        The binder at ``loc`` is being eliminated, so deeper indices move up
        by one. Free occurrences are never substituted.
        """
        return self._subst(loc, can, 0)

    def _subst(self, loc: Idx, can: Exp, crossed: int) -> Exp:
        if self.kind == ExpKind.VAR:
            if not isinstance(self.ref, Bound):
                return self
            idx = self.ref.idx
            if idx == loc:
                return can.shift(crossed)
            if idx > loc:
                return Exp(kind=ExpKind.VAR, ref=Bound(idx.dec()))
            return self

        if self.is_binder():
            return self._rebuild(self.param_type._subst(loc, can, crossed),
                                 self.body._subst(loc.inc(), can, crossed + 1))

        if self.kind == ExpKind.APP:
            return Exp.new_app(self.func._subst(loc, can, crossed),
                               self.arg._subst(loc, can, crossed))

        return self

    def reduce_once(self) -> Exp:
        """Perform one full beta-reduction pass over this expression."""
        if self.is_binder():
            return self._rebuild(self.param_type.reduce_once(), self.body.reduce_once())

        if self.kind == ExpKind.APP:
            func = self.func
            if func.kind == ExpKind.ABS:
                return func.body.subst(Idx.new(func.binder), self.arg)
            return Exp.new_app(func.reduce_once(), self.arg.reduce_once())

        return self

    def reduce(self, max_steps: Optional[int] = None) -> Exp:
        """Reduce to beta-normal form.

        Passes repeat until one leaves the expression unchanged. Well-typed
        expressions always get there; for anything else the number of
        changing passes is capped at ``max_steps`` (taken from the active
        configuration when omitted, no cap when <= 0) and ReductionLimitError
        is raised once it is exceeded.
        """
        if max_steps is None:
            max_steps = get_config().max_reduction_steps

        current = self
        steps = 0
        while True:
            reduced = current.reduce_once()
            if reduced == current:
                if steps:
                    logger.debug("reduced %s in %d step(s)", self, steps)
                return reduced
            if 0 < max_steps <= steps:
                logger.warning("giving up on %s after %d reduction steps", self, steps)
                raise ReductionLimitError(self, max_steps)
            steps += 1
            current = reduced

    # -- typing ------------------------------------------------------------

    def calculate_type(self, ctx: Ctx) -> Exp:
        """Derive the type of this expression under ``ctx``."""
        from fluxo.kernel.judge import TypeJudge
        return TypeJudge().calculate_type(self, ctx)

    # -- rendering ---------------------------------------------------------

    def __str__(self) -> str:
        return self._fmt(ltree=False, rtree=False)

    def _fmt(self, ltree: bool, rtree: bool) -> str:
        """Render with minimal parentheses.

        ``ltree``: this node sits in the function position of an enclosing
        application, or to its left. ``rtree``: this node is the argument of
        an enclosing application.
        """
        if self.kind == ExpKind.VAR:
            return str(self.ref)
        if self.kind == ExpKind.TYPE_META:
            return "*"
        if self.kind == ExpKind.KIND_META:
            return "□"

        if self.is_binder():
            text = "{}{} : {} . {}".format(
                _BINDER_SYMBOLS[self.kind],
                self.binder,
                self.param_type._fmt(False, False),
                self.body._fmt(False, False),
            )
            return f"({text})" if ltree else text

        # Application: left-associative, parenthesised as an argument
        if rtree:
            ltree = False
        text = "{} {}".format(
            self.func._fmt(True, False),
            self.arg._fmt(ltree, True),
        )
        return f"({text})" if rtree else text


TYPE_META = Exp(kind=ExpKind.TYPE_META)
KIND_META = Exp(kind=ExpKind.KIND_META)
