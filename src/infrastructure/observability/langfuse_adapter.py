"""
Infrastructure adapter: Langfuse -> IObservabilityHandler.

Langfuse is imported lazily inside the methods so the module can be loaded
even when LANGFUSE_* environment variables are not yet set (e.g. during testing).
The SecretsManagerAdapter.load_into_env() call in the AgentCore entrypoint must
run before this adapter is first used.

Each traced turn is tagged with its market and planner action, so traces can be
filtered by "IN" / "US" or by "analyse_us_stock" in the Langfuse UI.
"""

from typing import Any, Optional

from src.domain.entities.turn_decision import TurnDecision
from src.domain.ports.observability_port import IObservabilityHandler

TRACE_TAG: str = "stock-unlock"


def build_trace_metadata(
    decision: TurnDecision,
    user_id: Optional[str] = None,
    session_id: Optional[str] = None,
) -> dict:
    """Map a planned turn onto the langfuse_* keys the CallbackHandler reads.

    Keys without the langfuse_ prefix land in the trace's metadata.
    """
    symbol = None
    if decision.us_analysis is not None:
        symbol = decision.us_analysis.symbol
    elif decision.equity_record is not None:
        symbol = decision.equity_record.symbol

    return {
        "langfuse_user_id": user_id,
        "langfuse_session_id": session_id,
        "langfuse_tags": [TRACE_TAG, decision.market.value, decision.action.value],
        "turn_kind": decision.classification.kind.value,
        "previous_market": decision.previous_market.value,
        "resolved_symbol": symbol,
        "failure_reason": decision.failure_reason.value if decision.failure_reason else None,
    }


class LangfuseObservabilityHandler(IObservabilityHandler):
    """Wraps the Langfuse LangChain CallbackHandler used to trace each chat turn."""

    def __init__(self) -> None:
        from langfuse.langchain import CallbackHandler
        self._handler = CallbackHandler()

    def as_callback(self) -> Any:
        return self._handler

    def turn_metadata(
        self,
        decision: TurnDecision,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> dict:
        return build_trace_metadata(decision, user_id=user_id, session_id=session_id)

    def flush(self) -> None:
        """Flush pending traces to the Langfuse backend before the process exits."""
        from langfuse import get_client
        get_client().flush()
