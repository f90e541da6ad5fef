from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LyricflowError(Exception):
    """
    Typed error carrying a stable machine-readable code.
    """

    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return self.message


@dataclass
class MalformedResponseError(LyricflowError):
    """
    Every repair strategy failed on a model response.

    raw_text keeps the untouched response for diagnostics.
    """

    code: str = "malformed_response"
    message: str = "Transcription response malformed. The conversation might be too complex or long."
    raw_text: str = field(default="", repr=False)
    details: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        if self.details is None:
            self.details = {"raw_length": len(self.raw_text)}
