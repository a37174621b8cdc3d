"""
AgentCore Runtime entry point - cloud deployment.

Langfuse secrets are fetched from AWS Secrets Manager at container startup
(before any Langfuse import) so LANGFUSE_* env vars are available process-wide.

Payload shape:
    {"messages": [{"role": "user", "text": "..."}, ...], "session_id": "...", "user_id": "..."}

Deploy:
    agentcore configure \\
        --entrypoint src/infrastructure/entrypoints/agentcore_handler.py \\
        --requirements-file pyproject.toml \\
        --execution-role <AGENTCORE_EXECUTION_ROLE_ARN> \\
        --ecr-uri <ECR_REPOSITORY_URL>
    agentcore deploy --env LANGFUSE_SECRET_ARN=<arn> --env NIFTY500_CSV_PATH=<path>
"""

import os

# ---------------------------------------------------------------------------
# Secret bootstrap - must run before any library that reads LANGFUSE_* env vars
# ---------------------------------------------------------------------------
_secret_arn = os.environ.get("LANGFUSE_SECRET_ARN")
if _secret_arn:
    from src.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter
    SecretsManagerAdapter().load_into_env(_secret_arn)

# ---------------------------------------------------------------------------
# Composition Root - wire all dependencies once at container startup
# ---------------------------------------------------------------------------
from bedrock_agentcore.runtime import BedrockAgentCoreApp  # noqa: E402

from src.domain.entities.conversation import ConversationMessage  # noqa: E402
from src.infrastructure.entrypoints.composition import (  # noqa: E402
    build_container,
    configure_logging,
)

configure_logging()
_container = build_container()

app = BedrockAgentCoreApp()


@app.entrypoint
async def invoke(payload: dict, context=None):
    """AgentCore entrypoint - streams reply events for the latest user message."""
    messages = parse_messages(payload.get("messages"), payload.get("prompt"))

    async for event in _container.chat.execute(
        messages=messages,
        user_id=payload.get("user_id"),
        session_id=payload.get("session_id"),
    ):
        yield event


def parse_messages(raw_messages, prompt: str | None = None) -> list[ConversationMessage]:
    """Convert payload messages to domain messages, skipping unknown roles.

    A bare "prompt" string is accepted as a single user message.
    """
    messages = [
        ConversationMessage(role=m.get("role", ""), text=str(m.get("text") or ""))
        for m in raw_messages or []
        if isinstance(m, dict) and m.get("role") in ("user", "assistant")
    ]
    if not messages and prompt:
        messages.append(ConversationMessage(role="user", text=prompt))
    return messages


if __name__ == "__main__":
    app.run()
