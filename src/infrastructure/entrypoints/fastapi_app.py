"""
FastAPI entry point - local development server.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

import json
from typing import Literal

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

load_dotenv()

from src.domain.entities.conversation import ConversationMessage  # noqa: E402
from src.infrastructure.entrypoints.composition import (  # noqa: E402
    build_container,
    configure_logging,
)

configure_logging()

# ---------------------------------------------------------------------------
# Composition Root - wire all dependencies once at startup
# ---------------------------------------------------------------------------
_container = build_container()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(title="Stock Unlock API")


class MessageModel(BaseModel):
    role: Literal["user", "assistant"]
    text: str = ""


class ChatRequest(BaseModel):
    messages: list[MessageModel] = Field(default_factory=list)
    session_id: str | None = None
    user_id: str | None = None

    def to_domain(self) -> list[ConversationMessage]:
        return [ConversationMessage(role=m.role, text=m.text) for m in self.messages]


@app.post("/chat")
async def chat(body: ChatRequest):
    """Stream the assistant's response as Server-Sent Events."""

    async def event_stream():
        async for event in _container.chat.execute(
            messages=body.to_domain(),
            user_id=body.user_id,
            session_id=body.session_id,
        ):
            yield f"data: {json.dumps(event)}\n\n"
        yield "data: [DONE]\n\n"

    return StreamingResponse(event_stream(), media_type="text/event-stream")


@app.post("/plan")
def plan(body: ChatRequest) -> dict:
    """Return the structured turn decision without calling the language model."""
    return _container.planner.plan(body.to_domain()).to_dict()


@app.get("/health")
async def health():
    return {"status": "ok"}
