from __future__ import annotations

import pytest

from stateful import (
    WILDCARD,
    ActionNotDefinedError,
    Context,
    DefaultParams,
    State,
    States,
    Transition,
    Transitions,
    ValidationError,
)
from stateful.domain.models.result import Err, Ok
from tests.fakes import RecordingStateful

pytestmark = pytest.mark.unit


def _noop(_ctx, _obj, _params) -> None:
    return None


def _rule() -> Transition:
    return Transition("", ["transitionTest_a", "transitionTest_b"], "transitionTest_d")


def test_is_allowed_to_run_checks_source_membership() -> None:
    rule = _rule()

    assert rule.is_allowed_to_run(State("transitionTest_a"))
    assert rule.is_allowed_to_run("transitionTest_b")
    assert not rule.is_allowed_to_run("transitionTest_c")


def test_is_allowed_to_run_accepts_any_state_with_wildcard_source() -> None:
    rule = Transition("any", [WILDCARD], "d", _noop)

    assert rule.is_allowed_to_run("whatever")
    assert rule.is_allowed_to_run("d")


def test_is_allowed_to_transfer_requires_exact_destination() -> None:
    rule = _rule()

    assert rule.is_allowed_to_transfer("transitionTest_d")
    assert not rule.is_allowed_to_transfer("transitionTest_c")
    assert not rule.is_allowed_to_transfer(WILDCARD)


def test_constructor_normalises_sources_and_destination() -> None:
    rule = Transition("1", ("a", "b"), "c", _noop)

    assert isinstance(rule.get_source_states(), States)
    assert rule.get_source_states() == States(["a", "b"])
    assert isinstance(rule.get_destination_state(), State)
    assert rule.get_id() == "1"


def test_wildcard_destination_is_rejected() -> None:
    with pytest.raises(ValidationError, match="wildcard"):
        Transition("bad", ["a"], WILDCARD, _noop)


class TestTransfer:
    def test_single_action_runs(self) -> None:
        seen: list[str] = []
        rule = Transition("t", ["a"], "b", lambda ctx, obj, params: seen.append(obj.get_id()))

        result = rule.transfer(Context.background(), RecordingStateful(), DefaultParams())

        assert result == Ok(None)
        assert seen == ["_test_stateful_object"]

    def test_falls_back_to_batch_action_with_one_element(self) -> None:
        batches: list[int] = []
        rule = Transition(
            "t", ["a"], "b", batch_action=lambda ctx, objs, params: batches.append(len(objs))
        )

        assert rule.transfer(Context.background(), RecordingStateful(), DefaultParams()).is_ok()
        assert batches == [1]

    def test_without_any_action_reports_missing_function(self) -> None:
        result = _rule().transfer(Context.background(), RecordingStateful(), DefaultParams())

        assert isinstance(result, Err)
        assert isinstance(result.error, ActionNotDefinedError)
        assert result.error.batch is False
        assert "not found transfer function" in str(result.error)

    def test_reported_error_is_returned_unchanged(self) -> None:
        error = ValueError("there was an error")
        rule = Transition("t", ["a"], "b", lambda ctx, obj, params: Err(error))

        result = rule.transfer(Context.background(), RecordingStateful(), DefaultParams())

        assert result.error is error


class TestBatchTransfer:
    def test_batch_action_receives_all_objects(self) -> None:
        received: list[list[str]] = []

        def _batch(ctx, objs, params) -> None:
            received.append([obj.get_id() for obj in objs])
            params.set("success", True)

        params = DefaultParams()
        objs = [RecordingStateful(object_id="x"), RecordingStateful(object_id="y")]
        rule = Transition("t", ["a"], "b", batch_action=_batch)

        assert rule.batch_transfer(Context.background(), objs, params) == Ok(None)
        assert received == [["x", "y"]]
        assert params.get("success") == (True, True)

    def test_batch_action_wins_over_single_action(self) -> None:
        calls: list[str] = []
        rule = Transition(
            "t",
            ["a"],
            "b",
            action=lambda ctx, obj, params: calls.append("single"),
            batch_action=lambda ctx, objs, params: calls.append("batch"),
        )

        rule.batch_transfer(Context.background(), [RecordingStateful()] * 2, DefaultParams())

        assert calls == ["batch"]

    def test_falls_back_to_sequential_single_action(self) -> None:
        order: list[str] = []
        rule = Transition("t", ["a"], "b", lambda ctx, obj, params: order.append(obj.get_id()))
        objs = [RecordingStateful(object_id=str(i)) for i in range(3)]

        result = rule.batch_transfer(Context.background(), objs, DefaultParams())

        assert result == Ok(None)
        assert order == ["0", "1", "2"]

    def test_sequential_fallback_stops_at_first_failure(self) -> None:
        order: list[str] = []
        error = ValueError("second failed")

        def _action(ctx, obj, params):
            order.append(obj.get_id())
            if obj.get_id() == "1":
                return Err(error)
            return Ok(None)

        rule = Transition("t", ["a"], "b", _action)
        objs = [RecordingStateful(object_id=str(i)) for i in range(3)]

        result = rule.batch_transfer(Context.background(), objs, DefaultParams())

        assert result.error is error
        assert order == ["0", "1"]
        assert all(obj.commits == [] for obj in objs)

    def test_without_any_action_reports_missing_batch_function(self) -> None:
        result = _rule().batch_transfer(Context.background(), [RecordingStateful()], DefaultParams())

        assert isinstance(result.error, ActionNotDefinedError)
        assert result.error.batch is True
        assert "not found batch transfer function" in str(result.error)


class TestTransitions:
    def _transitions(self) -> Transitions:
        return Transitions(
            [
                Transition("a1", ["a"], "b", _noop),
                Transition("a2", ["b"], "c", _noop),
                Transition("any", [WILDCARD], "c", _noop),
            ]
        )

    def test_find_returns_first_match(self) -> None:
        transitions = self._transitions()

        assert transitions.find("a", "b").id == "a1"
        assert transitions.find("b", "c").id == "a2"
        assert transitions.find("b", "a") is None

    def test_earlier_wildcard_wins_over_later_specific_rule(self) -> None:
        transitions = Transitions(
            [
                Transition("wild", [WILDCARD], "done", _noop),
                Transition("specific", ["a"], "done", _noop),
            ]
        )

        assert transitions.find("a", "done").id == "wild"

    def test_contains_matches_by_id(self) -> None:
        transitions = self._transitions()

        assert transitions.contains(Transition("a2", ["x"], "y"))
        assert not transitions.contains(Transition("zz", ["a"], "b"))

    def test_all_states_dedupes_in_first_seen_order_without_wildcard(self) -> None:
        transitions = Transitions(
            [
                Transition("1", ["State1"], "State2", _noop),
                Transition("2", ["State2", "State4"], "State3", _noop),
                Transition("3", [WILDCARD], "State1", _noop),
            ]
        )

        assert list(transitions.all_states()) == ["State1", "State2", "State4", "State3"]

    def test_available_for_keeps_registration_order(self) -> None:
        ids = [t.id for t in self._transitions().available_for("b")]

        assert ids == ["a2", "any"]
