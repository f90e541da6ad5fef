from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ViolationType(str, Enum):
    INVERTED_TIMES = "INVERTED_TIMES"
    OVERLAP = "OVERLAP"
    EMPTY_TEXT = "EMPTY_TEXT"
    WORD_OUTSIDE_PARENT = "WORD_OUTSIDE_PARENT"
    UNSORTED = "UNSORTED"


class Severity(str, Enum):
    MINOR = "minor"
    MAJOR = "major"


@dataclass(frozen=True)
class Violation:
    """
    A single review finding.

    segment_index:
      - 0-based index into the segment list
    word_index:
      - 0-based index into segment.words (word-level findings only)
    data:
      - additional structured info (e.g. overlap seconds)
    """
    type: ViolationType
    severity: Severity
    segment_index: int
    start: float
    end: float
    message: str
    data: Dict[str, Any]
    word_index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "type": self.type.value,
            "severity": self.severity.value,
            "segment_index": self.segment_index,
            "time": {"start": self.start, "end": self.end},
            "message": self.message,
            "data": self.data,
        }
        if self.word_index is not None:
            out["word_index"] = self.word_index
        return out
