"""Typing context Γ: the declared or inferred type of each variable."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterator

from fluxo.errors import RedeclarationError, UnknownVariableError
from fluxo.kernel.var import Var

if TYPE_CHECKING:
    from fluxo.kernel.exp import Exp


@dataclass
class Ctx:
    """Typing context Gamma: a mapping of names to types.

    Gamma = x1 : A1, x2 : A2, ..., xn : An

    ``extend`` and ``remove`` build a new context and leave the receiver
    untouched, so a context can be threaded through recursive judgments
    by value. Entries are keyed by name, not by binder position: two
    nested binders reusing a name share one entry.
    """
    bindings: Dict[Var, Exp] = field(default_factory=dict)

    def put(self, var: Var, typ: Exp) -> None:
        """Register the type of a variable in this context.

        Re-registering an equal type is a no-op; a different one raises
        RedeclarationError.
        """
        old = self.bindings.get(var)
        if old is not None and old != typ:
            raise RedeclarationError(var, old, typ)
        self.bindings[var] = typ

    def get(self, var: Var) -> Exp:
        try:
            return self.bindings[var]
        except KeyError:
            raise UnknownVariableError(var) from None

    def extend(self, var: Var, typ: Exp) -> Ctx:
        """Create a new context extended with a binding."""
        new_ctx = Ctx(bindings=dict(self.bindings))
        new_ctx.put(var, typ)
        return new_ctx

    def remove(self, var: Var) -> Ctx:
        """Create a new context without the given variable."""
        if var not in self.bindings:
            raise UnknownVariableError(var)
        new_bindings = dict(self.bindings)
        del new_bindings[var]
        return Ctx(bindings=new_bindings)

    def __contains__(self, var: object) -> bool:
        return var in self.bindings

    def __len__(self) -> int:
        return len(self.bindings)

    def __iter__(self) -> Iterator[Var]:
        return iter(self.bindings)

    def __str__(self) -> str:
        entries = ", ".join(f"{var} : {typ}" for var, typ in self.bindings.items())
        return f"{{{entries}}}"
