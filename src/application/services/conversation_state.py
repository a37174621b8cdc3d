"""
Application service: deterministic market and turn classification from raw history.

Business decisions owned here:
  - Which phrases select the US or India market.
  - What counts as a ticker-shaped token.
  - Which short utterances are greetings.

The resolver keeps no state between requests; the market is replayed from the
full message history on every turn, so the same history always gives the same
answer.
"""

import re
from typing import Optional, Sequence

from src.domain.entities.conversation import (
    ConversationMessage,
    MarketMode,
    TurnClassification,
    TurnKind,
)

US_EXACT_TRIGGERS: frozenset[str] = frozenset({"us", "usa"})
US_PHRASE_TRIGGERS: tuple[str, ...] = ("us stocks", "united states")
INDIA_EXACT_TRIGGERS: frozenset[str] = frozenset({"india"})
INDIA_PHRASE_TRIGGERS: tuple[str, ...] = ("indian stocks", "nifty 500")

SYMBOL_MIN_LENGTH: int = 1
SYMBOL_MAX_LENGTH: int = 15
_SYMBOL_PATTERN = re.compile(r"[A-Za-z0-9.]+")

GREETING_KEYWORDS: frozenset[str] = frozenset(
    {"hi", "hello", "hey", "help", "stock", "stocks", "analyse", "analyze", "research"}
)
_GREETING_PUNCTUATION = " !?.,"


def detect_market_selection(text: str) -> Optional[MarketMode]:
    """Return the market *text* selects, or None. US phrases are checked first."""
    lowered = text.strip().lower()
    if not lowered:
        return None
    if lowered in US_EXACT_TRIGGERS or any(p in lowered for p in US_PHRASE_TRIGGERS):
        return MarketMode.US
    if lowered in INDIA_EXACT_TRIGGERS or any(p in lowered for p in INDIA_PHRASE_TRIGGERS):
        return MarketMode.IN
    return None


def classify_market(history: Sequence[ConversationMessage]) -> MarketMode:
    """Replay user messages in order; the most recent selection wins."""
    mode = MarketMode.UNKNOWN
    for message in history:
        if not message.is_user:
            continue
        selected = detect_market_selection(message.text)
        if selected is not None:
            mode = selected
    return mode


def looks_like_symbol(text: str) -> bool:
    """Heuristic: a single token of letters, digits and dots within the length bounds."""
    if not text:
        return False
    if not SYMBOL_MIN_LENGTH <= len(text) <= SYMBOL_MAX_LENGTH:
        return False
    return _SYMBOL_PATTERN.fullmatch(text) is not None


def _is_greeting(text: str) -> bool:
    return text.lower().strip(_GREETING_PUNCTUATION) in GREETING_KEYWORDS


def classify_turn(text: str, market: MarketMode) -> TurnClassification:
    """Classify the latest user text given the market resolved before it.

    Order: market selection, then greeting (only while no market is chosen, and
    ahead of the ticker test so "hello" is not read as a symbol), then
    ticker-shaped text, then any other non-empty text.
    """
    stripped = text.strip()

    selected = detect_market_selection(stripped)
    if selected is not None:
        return TurnClassification(TurnKind.MARKET_SELECTION, stripped, selected)

    if market is MarketMode.UNKNOWN and (not stripped or _is_greeting(stripped)):
        return TurnClassification(TurnKind.GREETING, stripped)

    if looks_like_symbol(stripped):
        return TurnClassification(TurnKind.SYMBOL_LIKE, stripped)

    if stripped:
        return TurnClassification(TurnKind.OTHER, stripped)
    return TurnClassification(TurnKind.AMBIGUOUS, stripped)


def split_history(
    messages: Sequence[ConversationMessage],
) -> tuple[list[ConversationMessage], str]:
    """Split *messages* into prior user history and the latest user text.

    Assistant messages are dropped. With no user message the latest text is "".
    """
    user_messages = [m for m in messages if m.is_user]
    if not user_messages:
        return [], ""
    return user_messages[:-1], user_messages[-1].text.strip()
