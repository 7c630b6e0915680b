"""Tests for applicative combination of argument validations."""
import enum
from itertools import combinations

import pytest

from intellimcp_core import validator
from intellimcp_core.validator import (
    MAX_ARITY,
    Arg,
    Invalid,
    SchemaType,
    Valid,
    ValidatedN,
    collect_errors,
    format_errors,
    validate,
)


class Color(enum.Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"


def _strings(count: int) -> list[Arg]:
    return [validator.string(f"a{i}", f"arg {i}").required() for i in range(count)]


class TestMapN:
    """Test combining validations with map_n."""

    def test_all_valid_applies_function(self):
        a = validator.string("a", "desc").required()
        b = validator.string("b", "desc").required()
        result = validate({"a": "x", "b": "y"}, a, b).map_n(
            lambda x, y: x + y
        ).or_else_errors(lambda errors: "ERR:" + str(len(errors)))
        assert result == "xy"

    def test_one_missing_reports_one_error(self):
        """Two required strings, only 'a' present: the error handler sees one error."""
        a = validator.string("a", "desc").required()
        b = validator.string("b", "desc").required()
        result = validate({"a": "x"}, a, b).map_n(
            lambda x, y: x + y
        ).or_else_errors(lambda errors: "ERR:" + str(len(errors)))
        assert result == "ERR:1"

    def test_function_not_called_on_failure(self):
        calls = []
        a = validator.integer("a", "desc").required()
        validate({}, a).map_n(calls.append).or_else_errors(lambda errors: None)
        assert calls == []

    def test_mixed_types_are_unwrapped(self):
        args = (
            validator.string("name", "desc").required(),
            validator.integer("count", "desc").min(1).optional(5),
            validator.boolean("flag", "desc").optional(False),
            validator.enum_arg("color", "desc", Color).required(),
            validator.string_array("tags", "desc").optional(),
        )
        raw = {"name": "n", "count": 2.5, "color": "BLUE", "tags": ["t"]}
        result = validate(raw, *args).map_n(lambda *values: values).or_else_errors(dict)
        assert result == ("n", 2, False, Color.BLUE, ["t"])

    def test_all_failures_reported_together(self):
        """Every invalid argument is reported, not only the first."""
        args = (
            validator.string("name", "desc").required(),
            validator.integer("count", "desc").min(1).required(),
            validator.boolean("flag", "desc").required(),
            validator.enum_arg("color", "desc", Color).required(),
        )
        raw = {"count": 0, "flag": "yes", "color": "PURPLE"}
        errors = validate(raw, *args).map_n(lambda *values: None).or_else_errors(lambda e: e)
        assert errors == {
            "name": "name is required",
            "count": "count must be at least 1",
            "flag": "flag must be a boolean",
            "color": "color must be one of: RED, GREEN, BLUE",
        }

    @pytest.mark.parametrize("arity", range(1, MAX_ARITY + 1))
    def test_error_count_matches_failures_at_any_positions(self, arity):
        """With m of K arguments invalid, exactly m errors are reported, in declaration order."""
        args = _strings(arity)
        for failing_count in range(1, arity + 1):
            for failing in combinations(range(arity), failing_count):
                raw = {f"a{i}": "ok" for i in range(arity) if i not in failing}
                errors = validate(raw, *args).map_n(
                    lambda *values: None
                ).or_else_errors(lambda e: e)
                assert len(errors) == failing_count
                assert list(errors) == [f"a{i}" for i in failing]

    @pytest.mark.parametrize("arity", range(1, MAX_ARITY + 1))
    def test_every_arity_succeeds(self, arity):
        raw = {f"a{i}": str(i) for i in range(arity)}
        result = validate(raw, *_strings(arity)).map_n(
            lambda *values: "".join(values)
        ).or_else_errors(lambda e: None)
        assert result == "".join(str(i) for i in range(arity))

    def test_error_order_follows_declaration_not_input(self):
        c = validator.string("c", "desc").required()
        a = validator.string("a", "desc").required()
        b = validator.string("b", "desc").required()
        errors = validate({"b": 1, "a": []}, c, a, b).map_n(
            lambda *values: None
        ).or_else_errors(lambda e: e)
        assert list(errors) == ["c", "a"]

    def test_every_extractor_runs(self):
        """Extraction does not stop at the first failure."""
        seen = []

        def counting(key):
            def extract(arguments):
                seen.append(key)
                return Invalid(key, f"{key} is bad")
            return Arg(key, "desc", True, None, SchemaType.STRING, extract)

        validate({}, counting("x"), counting("y"), counting("z")).map_n(
            lambda *values: None
        ).or_else_errors(lambda e: None)
        assert seen == ["x", "y", "z"]

    def test_fold_on_pending_result(self):
        a = validator.integer("a", "desc").required()
        pending = validate({"a": 3}, a).map_n(lambda x: x * 2)
        assert pending.fold(lambda value: f"ok:{value}", lambda errors: "failed") == "ok:6"

    def test_none_arguments_treated_as_empty(self):
        a = validator.string("a", "desc").optional("d")
        assert validate(None, a).map_n(lambda x: x).or_else_errors(lambda e: None) == "d"


class TestArity:
    """Test the supported range of combined arguments."""

    def test_zero_args_rejected(self):
        with pytest.raises(TypeError):
            validate({})

    def test_more_than_max_rejected(self):
        with pytest.raises(TypeError):
            validate({}, *_strings(MAX_ARITY + 1))

    def test_validated_n_from_results(self):
        combined = ValidatedN(Valid(1), Valid(2))
        assert len(combined) == 2
        assert combined.map_n(lambda x, y: x + y).or_else_errors(lambda e: 0) == 3

    def test_validated_n_rejects_empty(self):
        with pytest.raises(TypeError):
            ValidatedN()


class TestErrorHelpers:
    """Test error collection and formatting."""

    def test_collect_errors_keeps_order(self):
        results = [Invalid("b", "b bad"), Valid(1), Invalid("a", "a bad")]
        assert list(collect_errors(results).items()) == [("b", "b bad"), ("a", "a bad")]

    def test_format_errors_joins_messages(self):
        assert format_errors({"a": "a is required", "b": "b is required"}) == "a is required, b is required"
