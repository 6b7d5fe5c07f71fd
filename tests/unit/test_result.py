"""Unit tests for the Success/Failure result type."""

import pytest

from jsonous.errors import UnwrapError
from jsonous.result import Failure, Success

pytestmark = pytest.mark.unit


class TestSuccess:
    def test_map_applies_function(self):
        assert Success(2).map(lambda v: v * 10) == Success(20)

    def test_and_then_returns_function_result(self):
        assert Success(2).and_then(lambda v: Failure(f"bad {v}")) == Failure("bad 2")

    def test_failure_side_methods_are_no_ops(self):
        calls: list[str] = []
        ok = Success("x")

        assert ok.map_error(lambda e: e + "!") is ok
        assert ok.or_else(lambda e: Success(e)) is ok
        assert ok.else_do(calls.append) is ok
        assert calls == []

    def test_cata_dispatches_to_success_handler(self):
        out = Success(3).cata(success=lambda v: f"ok:{v}", failure=lambda e: f"err:{e}")
        assert out == "ok:3"

    def test_unwrap_and_unwrap_or(self):
        assert Success(1).unwrap() == 1
        assert Success(1).unwrap_or(5) == 1
        assert Success(1).is_success() and not Success(1).is_failure()


class TestFailure:
    def test_map_and_and_then_short_circuit(self):
        calls: list[object] = []
        err = Failure("boom")

        assert err.map(calls.append) is err
        assert err.and_then(calls.append) is err
        assert calls == []

    def test_map_error_rewrites_message(self):
        assert Failure("boom").map_error(str.upper) == Failure("BOOM")

    def test_or_else_receives_error(self):
        assert Failure("boom").or_else(lambda e: Success(len(e))) == Success(4)

    def test_else_do_runs_side_effect_and_passes_through(self):
        seen: list[str] = []
        err = Failure("boom")

        assert err.else_do(seen.append) is err
        assert seen == ["boom"]

    def test_cata_dispatches_to_failure_handler(self):
        out = Failure("e").cata(success=lambda v: f"ok:{v}", failure=lambda e: f"err:{e}")
        assert out == "err:e"

    def test_unwrap_raises_with_error_attached(self):
        with pytest.raises(UnwrapError) as exc_info:
            Failure("the diagnostic").unwrap()

        assert exc_info.value.error == "the diagnostic"
        assert "the diagnostic" in str(exc_info.value)
        assert exc_info.value.hint

    def test_unwrap_or_returns_default(self):
        assert Failure("e").unwrap_or(7) == 7


def test_variants_support_structural_pattern_matching():
    def describe(result):
        match result:
            case Success(value):
                return f"value={value}"
            case Failure(error):
                return f"error={error}"

    assert describe(Success(1)) == "value=1"
    assert describe(Failure("no")) == "error=no"


def test_results_are_immutable():
    ok = Success(1)
    with pytest.raises(AttributeError):
        ok.value = 2  # type: ignore[misc]
