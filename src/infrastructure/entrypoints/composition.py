"""
Composition Root shared by the FastAPI and AgentCore entrypoints.

Wires every infrastructure adapter once per process and hands them to the
application layer. The LazyEquityDirectory created here is the single
process-wide directory snapshot; it parses the CSV on the first lookup.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from src.application.agent.graph import build_agent_graph
from src.application.services.equity_directory import LazyEquityDirectory
from src.application.use_cases.assemble_market_data import AssembleUSMarketDataUseCase
from src.application.use_cases.plan_turn import TurnPlanner
from src.application.use_cases.retrieve_documents import RetrieveResearchDocumentsUseCase
from src.application.use_cases.run_agent import RunChatTurnUseCase
from src.infrastructure.entrypoints.tool_registry import create_tools
from src.infrastructure.knowledge_base.faiss_vector_store import FAISSVectorStore
from src.infrastructure.llm.bedrock_adapter import BedrockChatAdapter
from src.infrastructure.moderation.bedrock_guardrail_adapter import BedrockGuardrailModerator
from src.infrastructure.observability.langfuse_adapter import LangfuseObservabilityHandler
from src.infrastructure.reference_data.csv_reader import CSVReferenceTableReader
from src.infrastructure.stock_data.yfinance_adapter import YFinanceStockDataProvider

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_NIFTY500_CSV = os.path.join("data", "nifty500.csv")
DEFAULT_VECTORSTORE_DIR = "vectorstore"

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format=LOG_FORMAT,
    )


def load_research_retrieval(path: str) -> Optional[RetrieveResearchDocumentsUseCase]:
    """Load the research index at *path*; None when it was never built or cannot be read."""
    if not os.path.isdir(path):
        logger.info("No research index at %s; document search disabled", path)
        return None
    try:
        store = FAISSVectorStore.load(path)
    except Exception:
        logger.exception("Could not load research index at %s; document search disabled", path)
        return None
    return RetrieveResearchDocumentsUseCase(store)


@dataclass(frozen=True)
class Container:
    planner: TurnPlanner
    chat: RunChatTurnUseCase
    observability: LangfuseObservabilityHandler


def build_container() -> Container:
    stock_provider = YFinanceStockDataProvider()
    us_market_data = AssembleUSMarketDataUseCase(stock_provider)
    india_directory = LazyEquityDirectory(
        CSVReferenceTableReader(os.environ.get("NIFTY500_CSV_PATH", DEFAULT_NIFTY500_CSV))
    )
    planner = TurnPlanner(us_market_data, india_directory)

    guardrail_id = os.environ.get("BEDROCK_GUARDRAIL_ID")
    moderator = (
        BedrockGuardrailModerator(
            guardrail_id,
            guardrail_version=os.environ.get("BEDROCK_GUARDRAIL_VERSION", "DRAFT"),
        )
        if guardrail_id
        else None
    )

    llm = BedrockChatAdapter()
    observability = LangfuseObservabilityHandler()
    research = load_research_retrieval(os.environ.get("VECTORSTORE_DIR", DEFAULT_VECTORSTORE_DIR))
    tools = create_tools(us_market_data, india_directory, research)
    graph = build_agent_graph(llm, tools)
    chat = RunChatTurnUseCase(graph, planner, observability, moderator=moderator)
    return Container(planner=planner, chat=chat, observability=observability)
