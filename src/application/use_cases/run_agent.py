"""
Use-case: answer one chat turn - moderate, plan, then stream the LangGraph agent.
langchain_core.messages is treated as framework (not infrastructure) because
LangGraph is the orchestration framework used throughout the application layer.
"""

import asyncio
import logging
from typing import Any, AsyncGenerator, Optional, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from src.application.agent.prompts import build_system_prompt, canned_reply
from src.application.services.conversation_state import split_history
from src.application.use_cases.plan_turn import TurnPlanner
from src.domain.entities.conversation import ConversationMessage
from src.domain.entities.moderation import ModerationResult
from src.domain.ports.moderation_port import IContentModerator
from src.domain.ports.observability_port import IObservabilityHandler

logger = logging.getLogger(__name__)

DEFAULT_DENIAL = "Your message violates our guidelines. I can't answer that."


class RunChatTurnUseCase:
    RECURSION_LIMIT: int = 10

    def __init__(
        self,
        graph: Any,
        planner: TurnPlanner,
        observability: IObservabilityHandler,
        moderator: Optional[IContentModerator] = None,
    ) -> None:
        """
        Args:
            graph:         Compiled LangGraph StateGraph returned by build_agent_graph().
            planner:       TurnPlanner wired with the US assembler and India directory.
            observability: IObservabilityHandler implementation (e.g. Langfuse adapter).
            moderator:     Optional IContentModerator; moderation is skipped when None.
        """
        self._graph = graph
        self._planner = planner
        self._observability = observability
        self._moderator = moderator

    async def execute(
        self,
        messages: Sequence[ConversationMessage],
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> AsyncGenerator[dict, None]:
        """Stream reply events for the latest user message in *messages*.

        Yields dicts of shape:
            {"node": str, "content": str, "type": str}

        Moderation denials and the market questions are single fixed events that
        never reach the language model.
        """
        _, latest_text = split_history(messages)

        if latest_text and self._moderator is not None:
            verdict = await self._moderate(latest_text, session_id)
            if verdict is not None and verdict.flagged:
                logger.warning("Moderation flagged message in session %s", session_id)
                yield _fixed_event("moderation", verdict.denial_message or DEFAULT_DENIAL)
                return

        decision = await asyncio.to_thread(self._planner.plan, messages)
        logger.info(
            "Turn planned: market=%s kind=%s action=%s failure=%s",
            decision.market.value,
            decision.classification.kind.value,
            decision.action.value,
            decision.failure_reason.value if decision.failure_reason else None,
        )

        reply = canned_reply(decision)
        if reply is not None:
            yield _fixed_event("planner", reply)
            return

        config = {
            "callbacks": [self._observability.as_callback()],
            "metadata": self._observability.turn_metadata(
                decision, user_id=user_id, session_id=session_id
            ),
            "recursion_limit": self.RECURSION_LIMIT,
        }
        async for chunk in self._graph.astream(
            {
                "messages": to_langchain_messages(messages),
                "system_prompt": build_system_prompt(decision),
            },
            config=config,
            stream_mode="updates",
        ):
            for node_name, update in chunk.items():
                last_msg = update["messages"][-1]
                yield {
                    "node": node_name,
                    "content": last_msg.content if hasattr(last_msg, "content") else str(last_msg),
                    "type": last_msg.__class__.__name__,
                }

    async def _moderate(
        self, text: str, session_id: Optional[str]
    ) -> Optional[ModerationResult]:
        """Run the moderator; an unreachable guardrail lets the turn through unflagged."""
        try:
            return await asyncio.to_thread(self._moderator.check, text)
        except Exception as exc:
            logger.warning(
                "Moderation unavailable for session %s, continuing unmoderated: %s",
                session_id,
                exc,
            )
            return None


def to_langchain_messages(messages: Sequence[ConversationMessage]) -> list[BaseMessage]:
    converted: list[BaseMessage] = []
    for message in messages:
        if not message.text:
            continue
        if message.is_user:
            converted.append(HumanMessage(content=message.text))
        else:
            converted.append(AIMessage(content=message.text))
    return converted


def _fixed_event(node: str, content: str) -> dict:
    return {"node": node, "content": content, "type": "AIMessage"}
