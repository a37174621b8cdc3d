"""
Use-case: decide what the assistant does with the latest user turn.
Depends only on Domain entities, the conversation-state service and injected lookups.

Decision table (market before this turn x turn classification):

  UNKNOWN  MARKET_SELECTION              -> ACKNOWLEDGE_SELECTION
  UNKNOWN  SYMBOL_LIKE                   -> ASK_WHICH_MARKET
  UNKNOWN  anything else                 -> ASK_MARKET
  US / IN  MARKET_SELECTION              -> ACKNOWLEDGE_SELECTION (never fetches)
  US       SYMBOL_LIKE                   -> ANALYSE_US_STOCK
  IN       SYMBOL_LIKE or OTHER          -> LOOKUP_INDIA_STOCK
  US / IN  anything else                 -> ASK_CLARIFICATION
"""

import logging
from dataclasses import replace
from typing import Optional, Protocol, Sequence

from src.application.services.conversation_state import (
    classify_market,
    classify_turn,
    split_history,
)
from src.domain.entities.analysis import USStockAnalysis
from src.domain.entities.conversation import ConversationMessage, MarketMode, TurnKind
from src.domain.entities.equity_record import EquityRecord
from src.domain.entities.turn_decision import FailureReason, TurnAction, TurnDecision
from src.domain.errors import DataUnavailable

logger = logging.getLogger(__name__)


class USMarketData(Protocol):
    def execute(self, symbol: str) -> USStockAnalysis: ...


class EquityLookup(Protocol):
    def resolve(self, query: str) -> Optional[EquityRecord]: ...


class TurnPlanner:
    def __init__(self, us_market_data: USMarketData, india_directory: EquityLookup) -> None:
        """
        Args:
            us_market_data:  AssembleUSMarketDataUseCase (or any object with execute(symbol)).
            india_directory: LazyEquityDirectory shared for the life of the process.
        """
        self._us_market_data = us_market_data
        self._india_directory = india_directory

    def plan(self, messages: Sequence[ConversationMessage]) -> TurnDecision:
        """Classify the latest user message against prior history and run its lookup."""
        history, latest_text = split_history(messages)
        previous = classify_market(history)
        classification = classify_turn(latest_text, previous)
        kind = classification.kind

        if kind is TurnKind.MARKET_SELECTION:
            return TurnDecision(
                previous_market=previous,
                market=classification.market,
                classification=classification,
                action=TurnAction.ACKNOWLEDGE_SELECTION,
            )

        decision = TurnDecision(
            previous_market=previous,
            market=previous,
            classification=classification,
            action=TurnAction.ASK_CLARIFICATION,
        )

        if previous is MarketMode.UNKNOWN:
            action = (
                TurnAction.ASK_WHICH_MARKET
                if kind is TurnKind.SYMBOL_LIKE
                else TurnAction.ASK_MARKET
            )
            return replace(decision, action=action)

        if previous is MarketMode.US and kind is TurnKind.SYMBOL_LIKE:
            return self._analyse_us(decision)

        if previous is MarketMode.IN and kind in (TurnKind.SYMBOL_LIKE, TurnKind.OTHER):
            return self._lookup_india(decision)

        return decision

    def _analyse_us(self, decision: TurnDecision) -> TurnDecision:
        symbol = decision.classification.text
        try:
            analysis = self._us_market_data.execute(symbol)
        except DataUnavailable:
            return replace(
                decision,
                action=TurnAction.ANALYSE_US_STOCK,
                failure_reason=FailureReason.DATA_UNAVAILABLE,
            )
        return replace(decision, action=TurnAction.ANALYSE_US_STOCK, us_analysis=analysis)

    def _lookup_india(self, decision: TurnDecision) -> TurnDecision:
        query = decision.classification.text
        record = self._india_directory.resolve(query)
        if record is None:
            logger.info("No NIFTY 500 match for %r", query)
            return replace(
                decision,
                action=TurnAction.LOOKUP_INDIA_STOCK,
                failure_reason=FailureReason.NOT_IN_DIRECTORY,
            )
        return replace(decision, action=TurnAction.LOOKUP_INDIA_STOCK, equity_record=record)
