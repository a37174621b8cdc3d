"""
Port (interface) for content moderation services.
Infrastructure adapters (e.g. BedrockGuardrailModerator) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.moderation import ModerationResult


class IContentModerator(ABC):
    @abstractmethod
    def check(self, text: str) -> ModerationResult:
        """Return whether *text* violates the content policy."""
        ...
