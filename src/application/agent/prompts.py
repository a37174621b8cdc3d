"""
System prompt and per-turn prompt addenda for the equity research assistant.
Keeping the prompt in the application layer keeps it close to the turn-planning
rules it encodes, while remaining independent from any infrastructure SDK.
"""

import json

from src.domain.entities.conversation import MarketMode
from src.domain.entities.turn_decision import FailureReason, TurnAction, TurnDecision

SYSTEM_PROMPT = """You are Stock Unlock, an equity research assistant for two markets:
US-listed stocks and Indian stocks in the NIFTY 500 index.

You have access to the following tools:
- analyse_us_stock      - live quote, 52-week range, SMA(50/200), RSI(14) and
  1M/6M/1Y returns for a US ticker symbol.
- lookup_nifty500_stock - fundamentals (market cap, price, P/E, P/B, ROE, ROCE,
  returns) for a NIFTY 500 company by symbol or company name.
- search_research_documents - passages from indexed annual reports, earnings
  releases and filings, when available. Cite the source and page you quote.

Guidelines:
1. Use only the structured data provided in this prompt or returned by a tool;
   never invent numbers.
   Figures from the two data tools take precedence over figures in documents.
2. Explain what each metric says about the stock in plain language.
3. Do not recommend buying or selling and do not rank securities.
4. Keep US and Indian stocks separate; stay in the market the user chose.
5. Present numbers with units (USD, INR, %) and say when a value is unavailable.
"""

MARKET_QUESTION = (
    "Hello, Welcome to Stock Unlock. "
    "Do you want to research **Indian stocks** or **US stocks**?"
)

WHICH_MARKET_QUESTION = (
    "That looks like a stock symbol. Before I look it up, which market is it from: "
    "**Indian stocks** (NIFTY 500) or **US stocks**?"
)

_MARKET_LABELS = {
    MarketMode.US: "US stocks.",
    MarketMode.IN: "Indian NIFTY 500 stocks.",
}


def canned_reply(decision: TurnDecision) -> str | None:
    """Return a fixed reply for turns that must not reach the language model."""
    if decision.action is TurnAction.ASK_MARKET:
        return MARKET_QUESTION
    if decision.action is TurnAction.ASK_WHICH_MARKET:
        return WHICH_MARKET_QUESTION
    return None


def build_system_prompt(decision: TurnDecision) -> str:
    """Append the turn-specific instructions and data for *decision* to SYSTEM_PROMPT."""
    return SYSTEM_PROMPT + _turn_addendum(decision)


def _turn_addendum(decision: TurnDecision) -> str:
    action = decision.action
    text = decision.classification.text

    if action is TurnAction.ACKNOWLEDGE_SELECTION:
        return (
            "\n\nThe user has just chosen their market: "
            + _MARKET_LABELS[decision.market]
            + "\nAcknowledge their choice briefly and ask them to type the stock symbol "
            "(for US) or the company name / symbol (for Indian NIFTY 500). "
            "Do not analyse any stock yet."
        )

    if action is TurnAction.ANALYSE_US_STOCK:
        if decision.us_analysis is not None:
            return (
                "\n\nThe user is analysing a **US stock**. "
                "Here is structured JSON data for this symbol:\n"
                + json.dumps(decision.us_analysis.to_dict())
            )
        if decision.failure_reason is FailureReason.DATA_UNAVAILABLE:
            return (
                f"\n\nThe user asked for the US stock symbol {text!r}, but live data could "
                "not be fetched. Politely tell them that live data is not available right "
                "now for that symbol and ask them to double-check it."
            )

    if action is TurnAction.LOOKUP_INDIA_STOCK:
        if decision.equity_record is not None:
            return (
                "\n\nThe user is analysing an **Indian stock from the NIFTY 500 list**. "
                "Here is structured JSON data for this stock:\n"
                + json.dumps(decision.equity_record.to_dict())
            )
        if decision.failure_reason is FailureReason.NOT_IN_DIRECTORY:
            return (
                f"\n\nThe user asked for {text!r}, which is **not present in the NIFTY 500 "
                "list**. Politely tell them that this stock is not part of the NIFTY 500 "
                "list in the current version and ask them to enter a stock that is."
            )

    if action is TurnAction.ASK_CLARIFICATION:
        if decision.market is MarketMode.US:
            hint = "a US ticker symbol such as AAPL or MSFT"
        else:
            hint = "a NIFTY 500 company name or symbol such as TCS or HDFC Bank"
        return (
            "\n\nThe user's latest message is not a stock to look up. Answer general "
            f"questions briefly, then ask them to type {hint} for an analysis."
        )

    return ""
