"""
Router Service.

Maps a free-text symptom hint (typed by the user, or the `symptom` argument of
the chat assistant's startDiagnostic call) to one of the built-in flows.
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from ..domain.models import FlowKey

logger = logging.getLogger(__name__)

# Checked in order; the first flow with a matching keyword wins.
KEYWORD_TABLE: Tuple[Tuple[FlowKey, Tuple[str, ...]], ...] = (
    (FlowKey.COOLING_FAILURE, ("cool", "cold air")),
    (FlowKey.HEATING_FAILURE, ("heat", "furnace", "ignit")),
    (FlowKey.ABNORMAL_NOISE, ("noise", "sound", "loud")),
    (FlowKey.WATER_LEAK, ("leak", "water", "drip")),
)

FALLBACK_FLOW = FlowKey.GENERIC_FALLBACK


def select_flow(hint: Optional[str] = None) -> FlowKey:
    """
    Returns the flow for a symptom hint. Never raises: empty or unrecognised
    hints select the generic fallback flow.
    """
    text = (hint or "").lower()
    for flow_key, keywords in KEYWORD_TABLE:
        if any(keyword in text for keyword in keywords):
            logger.debug(f"Hint {hint!r} routed to '{flow_key.value}'")
            return flow_key
    logger.debug(f"Hint {hint!r} routed to fallback '{FALLBACK_FLOW.value}'")
    return FALLBACK_FLOW


class FlowRouter(ABC):
    @abstractmethod
    def find_flow(self, hint: Optional[str]) -> FlowKey:
        """
        Analyzes the user's symptom description and returns the key of the
        flow to run. Must always return a valid key.
        """
        pass


class KeywordFlowRouter(FlowRouter):
    """
    Substring keyword matching in a fixed priority order
    (cooling, heating, noise, leak).
    """
    def find_flow(self, hint: Optional[str]) -> FlowKey:
        return select_flow(hint)
