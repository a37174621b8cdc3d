"""
Domain entities for conversation history and per-turn classification.
Zero external dependencies - pure Python dataclasses and enums only.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MarketMode(str, Enum):
    US = "US"
    IN = "IN"
    UNKNOWN = "UNKNOWN"


class TurnKind(str, Enum):
    MARKET_SELECTION = "market_selection"
    SYMBOL_LIKE = "symbol_like"
    GREETING = "greeting"
    OTHER = "other"
    AMBIGUOUS = "ambiguous"


@dataclass(frozen=True)
class ConversationMessage:
    """One role-tagged message. Only user messages feed market resolution."""

    role: str
    text: str

    @property
    def is_user(self) -> bool:
        return self.role == "user"


@dataclass(frozen=True)
class TurnClassification:
    """Tagged classification of the latest user turn.

    kind:   which branch of the classifier matched.
    text:   the trimmed user text the classification was made from.
    market: the selected market, set only when kind is MARKET_SELECTION.
    """

    kind: TurnKind
    text: str = ""
    market: Optional[MarketMode] = None
