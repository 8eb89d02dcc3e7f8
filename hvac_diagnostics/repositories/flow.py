from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Optional, Union

from ..config import settings
from ..data.hardcoded_flows import HARDCODED_FLOWS
from ..data.resolvers import RESOLVERS, Resolver
from ..domain.models import Flow, FlowKey
from ..execution.exceptions import UnknownFlowError


# The Interface
class FlowRepository(ABC):
    """
    Defines how the application accesses Flow definitions.
    The engine only depends on this interface, so flows could come from
    somewhere else later without changing the DiagnosticEngine code.
    """

    @abstractmethod
    def get_flow(self, flow_key: Union[FlowKey, str]) -> Flow:
        """
        Retrieves a flow by key.
        Raises UnknownFlowError if not found.
        """
        pass

    @abstractmethod
    def list_flows(self) -> List[Flow]:
        """Returns every registered flow."""
        pass


class StaticFlowRepository(FlowRepository):
    """
    Serves the compiled-in flows.

    Every flow is checked once on construction: each resolver it names must be
    registered, and no path may need more than `max_answers` answers.
    """

    def __init__(
        self,
        flows: Optional[Mapping[FlowKey, Flow]] = None,
        resolvers: Mapping[str, Resolver] = RESOLVERS,
        max_answers: Optional[int] = None,
    ):
        limit = max_answers if max_answers is not None else settings.MAX_FLOW_ANSWERS
        source = flows if flows is not None else HARDCODED_FLOWS

        # Index for O(1) lookup
        self._index: Dict[FlowKey, Flow] = {}
        for key, flow in source.items():
            self._validate(flow, resolvers, limit)
            self._index[FlowKey(key)] = flow

    def get_flow(self, flow_key: Union[FlowKey, str]) -> Flow:
        try:
            key = FlowKey(flow_key)
        except ValueError:
            raise UnknownFlowError(f"Flow '{flow_key}' not found.") from None
        if key not in self._index:
            raise UnknownFlowError(f"Flow '{key.value}' not found.")
        return self._index[key]

    def list_flows(self) -> List[Flow]:
        return list(self._index.values())

    @staticmethod
    def _validate(flow: Flow, resolvers: Mapping[str, Resolver], limit: int):
        missing = [name for name in flow.terminal_resolvers() if name not in resolvers]
        if missing:
            raise ValueError(
                f"Flow '{flow.key.value}' references unknown resolvers: {missing}"
            )
        longest = flow.longest_path()
        if longest > limit:
            raise ValueError(
                f"Flow '{flow.key.value}' needs up to {longest} answers "
                f"(limit is {limit})."
            )
