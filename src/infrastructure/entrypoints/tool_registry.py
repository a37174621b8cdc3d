"""
LangChain @tool wrappers - Infrastructure entrypoint / Composition Root.

The @tool decorator is a LangChain/LangGraph infrastructure concern and must
NOT appear in the application or domain layers. This module binds the US
market-data use-case and the NIFTY 500 directory to tool callables that can be
passed to build_agent_graph() for follow-up questions within a turn, plus
the optional research-document search.
"""

import logging
from typing import Optional

from langchain_core.tools import tool

from src.application.services.equity_directory import LazyEquityDirectory
from src.application.use_cases.assemble_market_data import AssembleUSMarketDataUseCase
from src.application.use_cases.retrieve_documents import RetrieveResearchDocumentsUseCase
from src.domain.entities.conversation import MarketMode
from src.domain.errors import DataUnavailable

logger = logging.getLogger(__name__)


def create_tools(
    us_market_data: AssembleUSMarketDataUseCase,
    india_directory: LazyEquityDirectory,
    research: Optional[RetrieveResearchDocumentsUseCase] = None,
) -> list:
    """Build and return the LangChain tools with injected dependencies.

    Args:
        us_market_data:  AssembleUSMarketDataUseCase wired to a stock data provider.
        india_directory: The process-wide LazyEquityDirectory.
        research:        Retrieval use-case over the research index; the document
                         search tool is omitted when None.

    Returns:
        List of @tool callables ready to be passed to build_agent_graph().
    """

    @tool
    def analyse_us_stock(symbol: str) -> dict:
        """Retrieve live quote data and technical indicators for a US ticker symbol.

        Args:
            symbol: US stock ticker symbol (e.g. 'AAPL', 'MSFT', 'BRK.B').

        Returns:
            Dictionary with keys: symbol, current_price, fifty_two_week_high,
            fifty_two_week_low, market_cap, currency, pe_ratio, pb_ratio,
            return_on_equity, sma_short (50-day), sma_long (200-day), rsi (14-day),
            return_1m, return_6m, return_1y (percent). Indicator values are null
            when there is not enough price history.
            Returns {'error': '<message>'} if live data is unavailable.
        """
        if not symbol or not symbol.strip():
            return {"error": "symbol must be a non-empty string"}
        try:
            return us_market_data.execute(symbol.strip()).to_dict()
        except DataUnavailable as exc:
            return {"error": str(exc)}

    @tool
    def lookup_nifty500_stock(query: str) -> dict:
        """Look up an Indian NIFTY 500 company by NSE symbol or company name.

        Args:
            query: NSE symbol (e.g. 'TCS') or company name (e.g. 'HDFC Bank').

        Returns:
            Dictionary with keys: symbol, company_name, market_capitalization,
            current_price, pe, pb, roe, roce, return_1m, return_6m, return_1y.
            Returns {'error': '<message>'} if the company is not in the NIFTY 500 list.
        """
        record = india_directory.resolve(query)
        if record is None:
            return {"error": f"{query!r} is not in the NIFTY 500 list"}
        return record.to_dict()

    tools = [analyse_us_stock, lookup_nifty500_stock]
    if research is None:
        return tools

    @tool
    def search_research_documents(query: str, market: Optional[str] = None) -> str:
        """Search indexed equity research (annual reports, earnings releases, filings).

        Use for qualitative questions about a company's business, strategy, risks or
        management commentary. Numbers from analyse_us_stock or lookup_nifty500_stock
        take precedence over figures quoted in these passages.

        Args:
            query:  Natural-language question, e.g. 'TCS attrition commentary'.
            market: 'US' or 'IN' to restrict results to one market's documents.

        Returns:
            Relevant passages with [Source, Page, Market] headers separated by '---',
            or an empty string if nothing relevant is indexed.
        """
        market_tag = market.strip().upper() if market else None
        if market_tag not in (None, MarketMode.US.value, MarketMode.IN.value):
            market_tag = None
        try:
            return research.execute(query, market=market_tag)
        except Exception as exc:
            logger.warning("Research document search failed for %r: %s", query, exc)
            return "Research document search is unavailable right now."

    tools.append(search_research_documents)
    return tools
