"""Error taxonomy tests: messages and structured JSON output."""

import json

import pytest

from fluxo.errors import (
    ErrorKind, RedeclarationError, ReductionLimitError, TypeCompatibilityError,
    TypingError, UndefinedTypeError, UnknownVariableError,
)
from fluxo.kernel import SORTS, Exp, Var

V = Exp.new_var
STAR = Exp.get_type_meta()


class TestTypingError:

    def test_generic_default(self):
        err = TypingError()
        assert err.kind == ErrorKind.GENERIC
        assert err.message == "generic typing error"
        assert str(err) == "[generic]: generic typing error"

    @pytest.mark.parametrize("err", [
        RedeclarationError(Var("x"), STAR, V("A")),
        UnknownVariableError(Var("x")),
        TypeCompatibilityError(V("a"), V("A"), SORTS),
        UndefinedTypeError(Exp.get_kind_meta()),
        ReductionLimitError(V("x"), 3),
    ])
    def test_whole_family_is_catchable(self, err):
        assert isinstance(err, TypingError)
        with pytest.raises(TypingError):
            raise err


class TestStructuredOutput:

    def test_redeclaration(self):
        err = RedeclarationError(Var("x"), STAR, V("A"))
        data = err.to_dict()
        assert data["kind"] == "type_redeclaration"
        assert data["details"] == {
            "variable": "x",
            "declared_type": "*",
            "new_type": "A",
        }

    def test_unknown_variable(self):
        err = UnknownVariableError(Var("q"))
        assert err.to_dict()["details"] == {"variable": "q"}
        assert "'q'" in str(err)

    def test_type_compatibility_lists_accepted_types(self):
        err = TypeCompatibilityError(V("a"), V("A"), SORTS)
        assert err.message == "a has type A, expected one of {*, □}"
        assert err.to_dict()["details"]["accepted_types"] == ["*", "□"]

    def test_type_compatibility_without_candidates(self):
        err = TypeCompatibilityError(V("a"), V("A"), message="a cannot be applied")
        assert err.accepted == ()
        assert err.message == "a cannot be applied"
        assert err.to_dict()["details"]["accepted_types"] == []

    def test_undefined_type(self):
        err = UndefinedTypeError(Exp.get_kind_meta())
        assert err.to_dict()["details"] == {"expression": "□"}

    def test_json_roundtrip_keeps_glyphs(self):
        err = UndefinedTypeError(Exp.get_kind_meta())
        text = err.to_json()
        assert "□" in text
        assert json.loads(text)["kind"] == "undefined_type"

    def test_reduction_limit(self):
        err = ReductionLimitError(V("x"), 7)
        assert err.to_dict()["details"] == {"expression": "x", "steps": 7}
