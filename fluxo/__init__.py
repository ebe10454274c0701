"""fluxo — a minimal dependently-typed lambda calculus kernel."""

__version__ = "0.1.0"

from fluxo.config import FluxoConfig, load_config, get_config, set_config, configure_logging
from fluxo.errors import (
    ErrorKind, TypingError, RedeclarationError, UnknownVariableError,
    TypeCompatibilityError, UndefinedTypeError, ReductionLimitError,
)
from fluxo.kernel import (
    Var, Idx, VarIdx, Free, Bound, Ctx, Exp, ExpKind, TypeJudge,
    TYPE_META, KIND_META, SORTS,
)
