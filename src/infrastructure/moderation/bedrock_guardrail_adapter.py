"""
Infrastructure adapter: Amazon Bedrock Guardrails -> IContentModerator.
The ApplyGuardrail API evaluates user input against a configured guardrail
without invoking a model. All boto3 details are confined here.
"""

import logging
import os

import boto3

from src.domain.entities.moderation import ModerationResult
from src.domain.ports.moderation_port import IContentModerator

logger = logging.getLogger(__name__)


class BedrockGuardrailModerator(IContentModerator):
    """Checks user text with a Bedrock guardrail (source=INPUT)."""

    INTERVENED = "GUARDRAIL_INTERVENED"

    def __init__(
        self,
        guardrail_id: str,
        guardrail_version: str = "DRAFT",
        region: str | None = None,
    ) -> None:
        self._guardrail_id = guardrail_id
        self._guardrail_version = guardrail_version
        self._client = boto3.client(
            "bedrock-runtime",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def check(self, text: str) -> ModerationResult:
        response = self._client.apply_guardrail(
            guardrailIdentifier=self._guardrail_id,
            guardrailVersion=self._guardrail_version,
            source="INPUT",
            content=[{"text": {"text": text}}],
        )
        if response.get("action") != self.INTERVENED:
            return ModerationResult(flagged=False)

        outputs = response.get("outputs") or []
        denial = " ".join(o.get("text", "") for o in outputs).strip() or None
        logger.info("Guardrail %s intervened on user input", self._guardrail_id)
        return ModerationResult(flagged=True, denial_message=denial)
