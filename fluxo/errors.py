"""Structured typing errors for the fluxo kernel.

Every error carries a machine-readable payload next to its message, so a
front end can either print it or serialise it with ``to_json()``.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Sequence

if TYPE_CHECKING:
    from fluxo.kernel.exp import Exp
    from fluxo.kernel.var import Var


class ErrorKind(Enum):
    GENERIC = "generic"
    TYPE_REDECLARATION = "type_redeclaration"
    UNKNOWN_VARIABLE = "unknown_variable"
    TYPE_INCOMPATIBILITY = "type_incompatibility"
    UNDEFINED_TYPE = "undefined_type"
    REDUCTION_LIMIT = "reduction_limit"


class TypingError(Exception):
    """Failure of a typing judgment.

    Also the generic fallback of the taxonomy; the specific errors below
    subclass it so callers can catch the whole family at once.
    """

    kind = ErrorKind.GENERIC

    def __init__(self, message: str = "generic typing error",
                 details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details: dict[str, Any] = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.details:
            d["details"] = self.details
        return d

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def __str__(self) -> str:
        return f"[{self.kind.value}]: {self.message}"


class RedeclarationError(TypingError):
    """A variable is re-bound to a type different from the one it has."""

    kind = ErrorKind.TYPE_REDECLARATION

    def __init__(self, var: Var, typ: Exp, upd: Exp):
        self.var = var
        self.typ = typ
        self.upd = upd
        super().__init__(
            f"Variable '{var}' has type {typ}, cannot redeclare it as {upd}",
            details={
                "variable": str(var),
                "declared_type": str(typ),
                "new_type": str(upd),
            },
        )


class UnknownVariableError(TypingError):
    """A variable has no declared or inferred type in the context."""

    kind = ErrorKind.UNKNOWN_VARIABLE

    def __init__(self, var: Var):
        self.var = var
        super().__init__(
            f"Variable '{var}' has no type in the current context",
            details={"variable": str(var)},
        )


class TypeCompatibilityError(TypingError):
    """An expression's derived type is not among the accepted ones.

    ``accepted`` is empty when the failure is about the shape of the type
    rather than membership in a fixed set, e.g. applying something that is
    not a function; ``message`` then explains what was wrong.
    """

    kind = ErrorKind.TYPE_INCOMPATIBILITY

    def __init__(self, exp: Exp, typ: Exp, accepted: Sequence[Exp] = (),
                 message: Optional[str] = None):
        self.exp = exp
        self.typ = typ
        self.accepted: tuple[Exp, ...] = tuple(accepted)
        if message is None:
            if self.accepted:
                choices = ", ".join(str(a) for a in self.accepted)
                message = f"{exp} has type {typ}, expected one of {{{choices}}}"
            else:
                message = f"{exp} has type {typ}, which does not have the requisite form"
        super().__init__(
            message,
            details={
                "expression": str(exp),
                "actual_type": str(typ),
                "accepted_types": [str(a) for a in self.accepted],
            },
        )


class UndefinedTypeError(TypingError):
    """The expression has no type within the system (the sort □)."""

    kind = ErrorKind.UNDEFINED_TYPE

    def __init__(self, exp: Exp):
        self.exp = exp
        super().__init__(
            f"{exp} does not have a type",
            details={"expression": str(exp)},
        )


class ReductionLimitError(TypingError):
    """Beta-reduction did not reach a normal form within the step bound."""

    kind = ErrorKind.REDUCTION_LIMIT

    def __init__(self, exp: Exp, steps: int):
        self.exp = exp
        self.steps = steps
        super().__init__(
            f"{exp} did not reach normal form within {steps} reduction steps",
            details={"expression": str(exp), "steps": steps},
        )
