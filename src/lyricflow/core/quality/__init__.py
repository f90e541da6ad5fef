from __future__ import annotations

from lyricflow.core.quality.report import ReviewProfile, ReviewReport, review_segments
from lyricflow.core.quality.violations import Severity, Violation, ViolationType

__all__ = [
    "ReviewProfile",
    "ReviewReport",
    "review_segments",
    "Severity",
    "Violation",
    "ViolationType",
]
