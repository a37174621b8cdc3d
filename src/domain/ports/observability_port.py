"""
Port (interface) for tracing handlers attached to each chat turn.
Infrastructure adapters (e.g. LangfuseObservabilityHandler) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from src.domain.entities.turn_decision import TurnDecision


class IObservabilityHandler(ABC):
    @abstractmethod
    def as_callback(self) -> Any:
        """Return the framework-native callback object (e.g. a LangChain CallbackHandler)."""
        ...

    @abstractmethod
    def turn_metadata(
        self,
        decision: TurnDecision,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> dict:
        """Return run-config metadata that ties the trace to the planned turn."""
        ...

    @abstractmethod
    def flush(self) -> None:
        """Flush any buffered telemetry data to the remote backend."""
        ...
