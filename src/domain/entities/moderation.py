"""
Domain entity for a content moderation verdict.
Zero external dependencies - pure Python dataclass only.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ModerationResult:
    flagged: bool
    denial_message: Optional[str] = None
