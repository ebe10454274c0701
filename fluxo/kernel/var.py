"""Variables of the expression language.

A variable occurrence is either still symbolic (``Free``) or resolved
against an enclosing binder (``Bound``), in which case it carries a
de Bruijn index: the number of binders between the occurrence and its own
binder, excluding that binder (0 = innermost).
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Var:
    """A symbolic variable name."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, order=True)
class Idx:
    """A variable indexed against a parent binder.

    Only the depth takes part in equality and ordering; the name is kept so
    the occurrence can still be rendered as written.
    """
    depth: int
    var: Var = field(compare=False)

    @classmethod
    def new(cls, var: Var) -> Idx:
        return cls(0, var)

    def inc(self) -> Idx:
        return Idx(self.depth + 1, self.var)

    def dec(self) -> Idx:
        """Decrement the depth.

        Callers only decrement indices known to sit below at least one
        binder; doing so at depth 0 raises ValueError.
        """
        return self.shifted(-1)

    def shifted(self, by: int) -> Idx:
        if self.depth + by < 0:
            raise ValueError(f"index of '{self.var}' cannot go below depth 0")
        return Idx(self.depth + by, self.var)

    def __str__(self) -> str:
        return str(self.var)


class VarIdx:
    """Base of the two variable occurrence forms."""

    __slots__ = ()

    def get_var(self) -> Var:
        raise NotImplementedError


@dataclass(frozen=True)
class Free(VarIdx):
    """An occurrence not (yet) resolved against any binder."""
    var: Var

    def get_var(self) -> Var:
        return self.var

    def __str__(self) -> str:
        return str(self.var)


@dataclass(frozen=True)
class Bound(VarIdx):
    """An occurrence resolved to a de Bruijn index."""
    idx: Idx

    def get_var(self) -> Var:
        return self.idx.var

    def __str__(self) -> str:
        return str(self.idx)
