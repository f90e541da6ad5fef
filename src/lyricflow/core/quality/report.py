from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from lyricflow.core.timestamps.format import format_display_time
from lyricflow.core_types import Segment
from .violations import Severity, Violation, ViolationType


@dataclass(frozen=True)
class ReviewProfile:
    """
    Threshold configuration.

    Notes:
    - max_overlap = 0 means any overlap between neighbours is reported.
    - tolerance absorbs float noise when comparing times (seconds).
    """
    max_overlap: float = 0.0
    tolerance: float = 0.0005

    def to_dict(self) -> Dict[str, Any]:
        return {"max_overlap": self.max_overlap, "tolerance": self.tolerance}


@dataclass
class ReviewReport:
    version: str = "1.0"
    profile: ReviewProfile = field(default_factory=ReviewProfile)
    total_segments: int = 0
    violations: List[Violation] = field(default_factory=list)

    def summary(self) -> Dict[str, Any]:
        by_type: Dict[str, int] = {}
        major = 0
        for v in self.violations:
            by_type[v.type.value] = by_type.get(v.type.value, 0) + 1
            if v.severity == Severity.MAJOR:
                major += 1
        return {
            "total_segments": self.total_segments,
            "violation_count": len(self.violations),
            "major_count": major,
            "by_type": by_type,
        }

    def ok(self) -> bool:
        return all(v.severity != Severity.MAJOR for v in self.violations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "thresholds": self.profile.to_dict(),
            "summary": self.summary(),
            "violations": [v.to_dict() for v in self.violations],
        }


def _span(seg: Segment) -> str:
    return f"{format_display_time(seg.start)}-{format_display_time(seg.end)}"


def _check_words(i: int, seg: Segment, tol: float) -> List[Violation]:
    out: List[Violation] = []
    if not seg.words or seg.end < seg.start:
        return out
    for j, w in enumerate(seg.words):
        if w.start < seg.start - tol or w.end > seg.end + tol:
            out.append(
                Violation(
                    type=ViolationType.WORD_OUTSIDE_PARENT,
                    severity=Severity.MINOR,
                    segment_index=i,
                    word_index=j,
                    start=w.start,
                    end=w.end,
                    message=f"word {w.text!r} falls outside its line {_span(seg)}",
                    data={"parent_start": seg.start, "parent_end": seg.end},
                )
            )
    return out


def review_segments(segments: Sequence[Segment], profile: Optional[ReviewProfile] = None) -> ReviewReport:
    """
    Flag timing anomalies for a human to look at.

    Nothing is corrected here: the model's text stays authoritative and
    suspicious times are only reported.
    """
    prof = profile or ReviewProfile()
    tol = prof.tolerance
    report = ReviewReport(profile=prof, total_segments=len(segments))
    vs = report.violations

    for i, seg in enumerate(segments):
        if seg.end < seg.start - tol:
            vs.append(
                Violation(
                    type=ViolationType.INVERTED_TIMES,
                    severity=Severity.MAJOR,
                    segment_index=i,
                    start=seg.start,
                    end=seg.end,
                    message=f"segment ends before it starts ({_span(seg)})",
                    data={"duration": round(seg.end - seg.start, 3)},
                )
            )

        if not seg.text.strip():
            vs.append(
                Violation(
                    type=ViolationType.EMPTY_TEXT,
                    severity=Severity.MINOR,
                    segment_index=i,
                    start=seg.start,
                    end=seg.end,
                    message=f"segment {_span(seg)} has no text",
                    data={},
                )
            )

        vs.extend(_check_words(i, seg, tol))

        if i == 0:
            continue
        prev = segments[i - 1]
        if seg.start < prev.start - tol:
            vs.append(
                Violation(
                    type=ViolationType.UNSORTED,
                    severity=Severity.MAJOR,
                    segment_index=i,
                    start=seg.start,
                    end=seg.end,
                    message=f"segment starts before its predecessor ({_span(seg)} after {_span(prev)})",
                    data={"previous_start": prev.start},
                )
            )
            continue

        overlap = prev.end - seg.start
        if overlap > prof.max_overlap + tol:
            vs.append(
                Violation(
                    type=ViolationType.OVERLAP,
                    severity=Severity.MINOR,
                    segment_index=i,
                    start=seg.start,
                    end=seg.end,
                    message=f"segment overlaps its predecessor by {overlap:.3f}s",
                    data={"overlap": round(overlap, 3)},
                )
            )

    return report
