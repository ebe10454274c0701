"""fluxo kernel — expressions, typing context and type derivation."""

from .var import Var, Idx, VarIdx, Free, Bound
from .ctx import Ctx
from .exp import Exp, ExpKind, TYPE_META, KIND_META, ANONYMOUS
from .judge import TypeJudge, SORTS
