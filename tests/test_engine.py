"""Tests for the DiagnosticEngine session lifecycle."""

import pytest

from hvac_diagnostics.data.hardcoded_flows import DEFAULT_RECOMMENDATION
from hvac_diagnostics.domain.models import (
    Category,
    Flow,
    FlowKey,
    Recommendation,
    Step,
    Terminate,
)
from hvac_diagnostics.execution.engine import DiagnosticEngine
from hvac_diagnostics.execution.exceptions import (
    InvalidAnswerError,
    SessionTerminatedError,
    UnknownFlowError,
)
from hvac_diagnostics.repositories.flow import StaticFlowRepository
from hvac_diagnostics.services.flow_router import FlowRouter
from hvac_diagnostics.state.models import DiagnosticSession, SessionStatus


def run_path(engine, hint, choices, on_complete=None):
    """Starts a session and feeds it `choices`; returns the session and last result."""
    session = engine.start(hint)
    result = session
    for choice in choices:
        result = engine.answer(session, choice, on_complete=on_complete)
    return session, result


class TestStart:
    def test_cooling_hint(self, engine):
        """Scenario: an AC that isn't cooling starts on the thermostat question."""
        session = engine.start("my AC isn't cooling")

        step = engine.current_step(session)
        assert session.flow_key == FlowKey.COOLING_FAILURE
        assert session.current_position == 0
        assert session.answers == {}
        assert "thermostat" in step.prompt
        assert step.options == ("Yes, it's set correctly", "No, I'll fix it now")

    def test_empty_hint_selects_fallback(self, engine, flow_repository):
        session = engine.start("")

        assert session.flow_key == FlowKey.GENERIC_FALLBACK
        assert len(flow_repository.get_flow(session.flow_key).steps) == 3

    def test_no_hint_selects_fallback(self, engine):
        assert engine.start().flow_key == FlowKey.GENERIC_FALLBACK

    @pytest.mark.parametrize("hint", [None, "", "zzz", "COOL", "Leaky", "🔥"])
    def test_start_is_total(self, engine, hint):
        session = engine.start(hint)

        assert session.flow_key in set(FlowKey)
        assert session.status == SessionStatus.ACTIVE

    def test_sessions_are_independent(self, engine):
        first = engine.start("not cooling")
        second = engine.start("not cooling")

        engine.answer(first, "Yes")

        assert first.session_id != second.session_id
        assert second.current_position == 0
        assert second.answers == {}

    def test_start_flow_bypasses_router(self, engine):
        session = engine.start_flow(FlowKey.WATER_LEAK)

        assert session.flow_key == FlowKey.WATER_LEAK

    def test_start_flow_with_unknown_key(self, engine):
        with pytest.raises(UnknownFlowError):
            engine.start_flow("mold-growth")

    def test_router_returning_unregistered_flow_fails_fast(self):
        class NoiseOnlyRouter(FlowRouter):
            def find_flow(self, hint):
                return FlowKey.ABNORMAL_NOISE

        repository = StaticFlowRepository(flows={})
        engine = DiagnosticEngine(repository=repository, router=NoiseOnlyRouter())

        with pytest.raises(UnknownFlowError):
            engine.start("anything")


class TestAnswer:
    def test_advances_on_yes(self, engine):
        """Scenario: 'Yes' at the thermostat step moves on to the vents question."""
        session = engine.start("my AC isn't cooling")

        result = engine.answer(session, "Yes, it's set correctly")

        assert result is session
        assert session.current_position == 1
        assert session.answers == {0: "Yes, it's set correctly"}
        assert "vents" in engine.current_step(session).prompt

    def test_terminates_on_no(self, engine, sink):
        """Scenario: 'No' at the thermostat step finishes with a thermostat tip."""
        session = engine.start("my AC isn't cooling")

        result = engine.answer(session, "No, I'll fix it now", on_complete=sink)

        assert isinstance(result, Recommendation)
        assert result.category == Category.SCHEDULED_REPAIR
        assert "thermostat" in result.text.lower()
        assert session.status == SessionStatus.TERMINATED
        assert session.recommendation == result
        assert sink.calls == [(result.text, result.category)]

    def test_water_leak_condensation_override(self, engine):
        """Scenario: water from the outdoor unit on a humid day is normal."""
        session, result = run_path(
            engine,
            "water under the outdoor unit",
            ["From the outdoor unit", "AC on a humid day"],
        )

        assert session.flow_key == FlowKey.WATER_LEAK
        assert isinstance(result, Recommendation)
        assert result.category == Category.MAINTENANCE
        assert "normal condensation" in result.text

    def test_water_leak_without_override_uses_resolver(self, engine):
        _, result = run_path(
            engine,
            "water leak",
            ["From the outdoor unit", "Neither", "Yes"],
        )

        assert result.category == Category.EMERGENCY_REPAIR

    def test_full_cooling_path_to_ice(self, engine, sink):
        session, result = run_path(
            engine,
            "not cooling",
            ["Yes", "Yes", "Yes", "Yes", "Yes", "Yes"],
            on_complete=sink,
        )

        assert result.category == Category.EMERGENCY_REPAIR
        assert "Ice buildup" in result.text
        assert sorted(session.answers) == [0, 1, 2, 3, 4, 5]
        assert len(sink.calls) == 1

    def test_converging_branch_records_only_visited_steps(self, engine):
        session, result = run_path(
            engine,
            "not cooling",
            ["Yes", "Yes", "Yes", "Yes", "It's humming", "Book a Technician"],
        )

        assert sorted(session.answers) == [0, 1, 2, 3, 4, 6]
        assert "failed capacitor" in result.text

    def test_heating_path(self, engine):
        _, result = run_path(
            engine,
            "furnace is dead",
            ["Yes", "Yes", "No, it does absolutely nothing", "Yes", "No"],
        )

        assert result.category == Category.SCHEDULED_REPAIR
        assert "control board" in result.text

    def test_noise_path(self, engine):
        _, result = run_path(engine, "grinding noise", ["Outdoor", "Grinding"])

        assert result.text.startswith("A grinding / scraping noise often indicates")


class TestInvalidAnswers:
    def test_maybe_is_rejected_and_session_unchanged(self):
        """Scenario: 'Maybe' against ['Yes', 'No'] is rejected in place."""
        flow = Flow(
            key=FlowKey.GENERIC_FALLBACK,
            title="Yes or No",
            steps=(
                Step(
                    prompt="Is it on?",
                    options=("Yes", "No"),
                    transitions=(Terminate(), Terminate()),
                ),
            ),
            default_recommendation=DEFAULT_RECOMMENDATION,
        )
        engine = DiagnosticEngine(
            repository=StaticFlowRepository(flows={FlowKey.GENERIC_FALLBACK: flow})
        )
        session = engine.start()

        with pytest.raises(InvalidAnswerError):
            engine.answer(session, "Maybe")

        assert session.current_position == 0
        assert session.answers == {}
        assert session.status == SessionStatus.ACTIVE

    def test_rejected_mid_flow(self, engine, sink):
        session, _ = run_path(engine, "cooling", ["Yes", "Yes"])
        before = session.model_copy(deep=True)

        with pytest.raises(InvalidAnswerError):
            engine.answer(session, "Perhaps", on_complete=sink)

        assert session.current_position == before.current_position == 2
        assert session.answers == before.answers
        assert sink.calls == []

    def test_ambiguous_answer_is_rejected(self, engine):
        session = engine.start("strange noise")

        with pytest.raises(InvalidAnswerError):
            engine.answer(session, "In")

        assert session.current_position == 0

    def test_session_can_continue_after_rejection(self, engine):
        session = engine.start("cooling")

        with pytest.raises(InvalidAnswerError):
            engine.answer(session, "Maybe")
        engine.answer(session, "Yes")

        assert session.current_position == 1


class TestTermination:
    def test_terminated_session_is_absorbing(self, engine):
        session = engine.start("cooling")
        engine.answer(session, "No")

        with pytest.raises(SessionTerminatedError):
            engine.answer(session, "Yes")
        with pytest.raises(SessionTerminatedError):
            engine.current_step(session)

    def test_sink_called_once_per_session(self, engine, sink):
        session = engine.start("cooling")
        engine.answer(session, "No", on_complete=sink)

        with pytest.raises(SessionTerminatedError):
            engine.answer(session, "No", on_complete=sink)

        assert len(sink.calls) == 1

    def test_sink_not_called_while_flow_continues(self, engine, sink):
        session = engine.start("cooling")

        engine.answer(session, "Yes", on_complete=sink)

        assert sink.calls == []


class TestProperties:
    def test_determinism(self, engine):
        choices = ["From the outdoor unit", "Heat Pump in winter", "No, just leaking water"]

        _, first = run_path(engine, "water leak", choices)
        _, second = run_path(engine, "water leak", choices)

        assert first == second

    def test_every_path_terminates_within_seven_answers(self, engine, flow_repository):
        """Walks every path of every flow through the engine."""

        def walk(session: DiagnosticSession, depth: int) -> int:
            assert depth < 7
            paths = 0
            for option in engine.current_step(session).options:
                branch = session.model_copy(deep=True)
                result = engine.answer(branch, option)
                if isinstance(result, Recommendation):
                    assert branch.status == SessionStatus.TERMINATED
                    assert isinstance(result.category, Category)
                    paths += 1
                else:
                    paths += walk(result, depth + 1)
            return paths

        total = 0
        for flow in flow_repository.list_flows():
            total += walk(engine.start_flow(flow.key), 0)

        # 8 cooling + 8 heating + 12 noise + 7 leak + 9 fallback
        assert total == 44
