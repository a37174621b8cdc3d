"""
Domain entities for the per-turn planning decision handed to the generation layer.
Zero external dependencies - pure Python dataclasses and enums only.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.domain.entities.analysis import USStockAnalysis
from src.domain.entities.conversation import MarketMode, TurnClassification
from src.domain.entities.equity_record import EquityRecord


class TurnAction(str, Enum):
    ACKNOWLEDGE_SELECTION = "acknowledge_selection"
    ASK_MARKET = "ask_market"
    ASK_WHICH_MARKET = "ask_which_market"
    ANALYSE_US_STOCK = "analyse_us_stock"
    LOOKUP_INDIA_STOCK = "lookup_india_stock"
    ASK_CLARIFICATION = "ask_clarification"


class FailureReason(str, Enum):
    DATA_UNAVAILABLE = "data_unavailable"
    NOT_IN_DIRECTORY = "not_in_directory"


@dataclass(frozen=True)
class TurnDecision:
    """Outcome of planning one turn.

    previous_market: market resolved from history before this turn.
    market:          effective market after this turn (a selection overrides).
    us_analysis / equity_record are populated only by a successful lookup;
    failure_reason is set when the lookup was attempted and came back empty.
    """

    previous_market: MarketMode
    market: MarketMode
    classification: TurnClassification
    action: TurnAction
    us_analysis: Optional[USStockAnalysis] = None
    equity_record: Optional[EquityRecord] = None
    failure_reason: Optional[FailureReason] = None

    @property
    def fetched_data(self) -> bool:
        return self.us_analysis is not None or self.equity_record is not None

    def to_dict(self) -> dict:
        return {
            "previous_market": self.previous_market.value,
            "market": self.market.value,
            "classification": {
                "kind": self.classification.kind.value,
                "text": self.classification.text,
                "market": self.classification.market.value if self.classification.market else None,
            },
            "action": self.action.value,
            "us_analysis": self.us_analysis.to_dict() if self.us_analysis else None,
            "equity_record": self.equity_record.to_dict() if self.equity_record else None,
            "failure_reason": self.failure_reason.value if self.failure_reason else None,
        }
