"""Tests for the LangChain tool wrappers."""

from unittest.mock import Mock

from src.domain.entities.analysis import IndicatorSet, USStockAnalysis
from src.domain.entities.equity_record import EquityRecord
from src.domain.entities.stock_price import StockQuote
from src.domain.errors import DataUnavailable
from src.infrastructure.entrypoints.tool_registry import create_tools


def build_tools(market_data=None, directory=None, research=None):
    tools = create_tools(market_data or Mock(), directory or Mock(), research)
    return {t.name: t for t in tools}


class TestAnalyseUSStockTool:
    """Test the US analysis tool."""

    def test_returns_flat_analysis(self):
        market_data = Mock()
        market_data.execute.return_value = USStockAnalysis(
            quote=StockQuote("NVDA", 120.0, 150.0, 80.0, 2.9e12),
            indicators=IndicatorSet(sma_short=115.0),
        )
        tools = build_tools(market_data=market_data)

        result = tools["analyse_us_stock"].invoke({"symbol": " NVDA "})

        market_data.execute.assert_called_once_with("NVDA")
        assert result["current_price"] == 120.0
        assert result["sma_short"] == 115.0

    def test_data_unavailable_becomes_error(self):
        market_data = Mock()
        market_data.execute.side_effect = DataUnavailable("ZZZZ", "not found")
        tools = build_tools(market_data=market_data)

        result = tools["analyse_us_stock"].invoke({"symbol": "ZZZZ"})

        assert "error" in result
        assert "ZZZZ" in result["error"]

    def test_blank_symbol_is_rejected(self):
        market_data = Mock()
        tools = build_tools(market_data=market_data)

        assert "error" in tools["analyse_us_stock"].invoke({"symbol": "  "})
        market_data.execute.assert_not_called()


class TestLookupNifty500Tool:
    """Test the NIFTY 500 lookup tool."""

    def test_returns_record(self):
        directory = Mock()
        directory.resolve.return_value = EquityRecord(symbol="ITC", company_name="ITC Ltd", pe=25.0)
        tools = build_tools(directory=directory)

        result = tools["lookup_nifty500_stock"].invoke({"query": "itc"})

        directory.resolve.assert_called_once_with("itc")
        assert result["company_name"] == "ITC Ltd"
        assert result["pe"] == 25.0

    def test_miss_becomes_error(self):
        directory = Mock()
        directory.resolve.return_value = None
        tools = build_tools(directory=directory)

        result = tools["lookup_nifty500_stock"].invoke({"query": "Acme"})

        assert result == {"error": "'Acme' is not in the NIFTY 500 list"}


class TestSearchResearchDocumentsTool:
    """Test the optional research-document search tool."""

    def test_tool_absent_without_index(self):
        assert "search_research_documents" not in build_tools()

    def test_forwards_query_and_market(self):
        research = Mock()
        research.execute.return_value = "[Source: tcs-ar.pdf, Page: 4, Market: IN]\nAttrition eased."
        tools = build_tools(research=research)

        result = tools["search_research_documents"].invoke({"query": "TCS attrition", "market": "in"})

        research.execute.assert_called_once_with("TCS attrition", market="IN")
        assert "Attrition eased." in result

    def test_unknown_market_searches_everything(self):
        research = Mock()
        research.execute.return_value = ""
        tools = build_tools(research=research)

        tools["search_research_documents"].invoke({"query": "capex", "market": "europe"})

        research.execute.assert_called_once_with("capex", market=None)

    def test_search_failure_becomes_message(self):
        research = Mock()
        research.execute.side_effect = RuntimeError("ThrottlingException")
        tools = build_tools(research=research)

        result = tools["search_research_documents"].invoke({"query": "guidance"})

        assert result == "Research document search is unavailable right now."
