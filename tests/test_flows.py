"""Tests for the flow data model, the built-in flows and the flow registry."""

import dataclasses

import pytest

from hvac_diagnostics.data.hardcoded_flows import DEFAULT_RECOMMENDATION, HARDCODED_FLOWS
from hvac_diagnostics.data.resolvers import RESOLVERS
from hvac_diagnostics.domain.models import (
    Category,
    Flow,
    FlowKey,
    Goto,
    Step,
    Terminate,
)
from hvac_diagnostics.execution.exceptions import UnknownFlowError
from hvac_diagnostics.repositories.flow import StaticFlowRepository


def _step(options, transitions, prompt="Question?"):
    return Step(prompt=prompt, options=tuple(options), transitions=tuple(transitions))


class TestStepValidation:
    def test_step_requires_options(self):
        with pytest.raises(ValueError):
            _step([], [])

    def test_step_requires_one_transition_per_option(self):
        with pytest.raises(ValueError):
            _step(["Yes", "No"], [Terminate()])

    def test_step_rejects_duplicate_options(self):
        with pytest.raises(ValueError):
            _step(["Yes", "Yes"], [Terminate(), Terminate()])

    def test_can_terminate(self):
        assert _step(["Yes", "No"], [Goto(1), Terminate()]).can_terminate
        assert not _step(["Yes"], [Goto(1)]).can_terminate


class TestFlowValidation:
    def _flow(self, steps):
        return Flow(
            key=FlowKey.GENERIC_FALLBACK,
            title="Test",
            steps=tuple(steps),
            default_recommendation=DEFAULT_RECOMMENDATION,
        )

    def test_goto_out_of_range_is_rejected(self):
        with pytest.raises(ValueError, match="missing step"):
            self._flow([_step(["Yes"], [Goto(3)])])

    def test_self_loop_is_rejected(self):
        with pytest.raises(ValueError, match="itself"):
            self._flow([_step(["Yes", "No"], [Goto(0), Terminate()])])

    def test_cycle_is_rejected(self):
        with pytest.raises(ValueError, match="cycle"):
            self._flow([
                _step(["Yes", "No"], [Goto(1), Terminate()]),
                _step(["Back"], [Goto(0)]),
            ])

    def test_empty_flow_is_rejected(self):
        with pytest.raises(ValueError):
            self._flow([])

    def test_longest_path_counts_answers(self):
        flow = self._flow([
            _step(["A", "B"], [Goto(1), Goto(2)]),
            _step(["C"], [Goto(2)]),
            _step(["D"], [Terminate()]),
        ])

        assert flow.longest_path() == 3

    def test_flows_are_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            HARDCODED_FLOWS[FlowKey.COOLING_FAILURE].title = "Changed"

    def test_registry_mapping_is_read_only(self):
        with pytest.raises(TypeError):
            HARDCODED_FLOWS[FlowKey.COOLING_FAILURE] = None


class TestBuiltInFlows:
    def test_all_flow_keys_have_a_flow(self):
        assert set(HARDCODED_FLOWS) == set(FlowKey)

    @pytest.mark.parametrize(
        "flow_key, step_count, longest",
        [
            (FlowKey.COOLING_FAILURE, 7, 6),
            (FlowKey.HEATING_FAILURE, 5, 5),
            (FlowKey.ABNORMAL_NOISE, 2, 2),
            (FlowKey.WATER_LEAK, 4, 3),
            (FlowKey.GENERIC_FALLBACK, 3, 3),
        ],
    )
    def test_shape(self, flow_key, step_count, longest):
        flow = HARDCODED_FLOWS[flow_key]

        assert len(flow.steps) == step_count
        assert flow.longest_path() == longest
        assert flow.longest_path() <= 7

    def test_every_named_resolver_is_registered(self):
        for flow in HARDCODED_FLOWS.values():
            for name in flow.terminal_resolvers():
                assert name in RESOLVERS

    def test_only_water_leak_has_overrides(self):
        for key, flow in HARDCODED_FLOWS.items():
            if key == FlowKey.WATER_LEAK:
                assert [o.answer_prefix for o in flow.overrides] == ["AC"]
                assert flow.overrides[0].recommendation.category == Category.MAINTENANCE
            else:
                assert flow.overrides == ()

    def test_default_recommendation(self):
        for flow in HARDCODED_FLOWS.values():
            assert flow.default_recommendation.category == Category.SCHEDULED_REPAIR
            assert "professional technician" in flow.default_recommendation.text


class TestStaticFlowRepository:
    def test_get_flow_by_key_and_by_string(self, flow_repository):
        by_enum = flow_repository.get_flow(FlowKey.WATER_LEAK)
        by_str = flow_repository.get_flow("water-leak")

        assert by_enum is by_str

    def test_unknown_key_fails_fast(self, flow_repository):
        with pytest.raises(UnknownFlowError):
            flow_repository.get_flow("not-a-flow")

    def test_key_missing_from_registry(self):
        repository = StaticFlowRepository(
            flows={FlowKey.COOLING_FAILURE: HARDCODED_FLOWS[FlowKey.COOLING_FAILURE]}
        )

        with pytest.raises(UnknownFlowError):
            repository.get_flow(FlowKey.WATER_LEAK)

    def test_list_flows(self, flow_repository):
        keys = {flow.key for flow in flow_repository.list_flows()}

        assert keys == set(FlowKey)

    def test_rejects_flows_longer_than_limit(self):
        # The cooling flow needs six answers on its longest path
        with pytest.raises(ValueError, match="cooling-failure"):
            StaticFlowRepository(max_answers=5)

    def test_rejects_unregistered_resolver(self):
        flow = Flow(
            key=FlowKey.GENERIC_FALLBACK,
            title="Broken",
            steps=(_step(["Yes"], [Terminate("does.not.exist")]),),
            default_recommendation=DEFAULT_RECOMMENDATION,
        )

        with pytest.raises(ValueError, match="does.not.exist"):
            StaticFlowRepository(flows={FlowKey.GENERIC_FALLBACK: flow})
