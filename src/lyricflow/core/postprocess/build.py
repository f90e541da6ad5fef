from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from lyricflow.core.contracts import BuildConfig
from lyricflow.core.text import join_words
from lyricflow.core.timestamps.parse import parse_timestamp
from lyricflow.core_types import Segment, Word
from lyricflow.utils.logger import get_logger

logger = get_logger(__name__)


def _first_present(record: Dict[str, Any], keys: Iterable[str]) -> Any:
    # mode-aware schema uses startTime/endTime, simple schema start/end
    for k in keys:
        v = record.get(k)
        if v is not None:
            return v
    return None


def _times(record: Dict[str, Any]) -> tuple[float, float]:
    start = parse_timestamp(_first_present(record, ("startTime", "start")))
    end = parse_timestamp(_first_present(record, ("endTime", "end")))
    return start, end


def _text(record: Dict[str, Any]) -> str:
    v = record.get("text")
    if v is None:
        return ""
    return (v if isinstance(v, str) else str(v)).strip()


def _clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def build_words(raw_words: Any, *, parent: Optional[tuple[float, float]] = None) -> List[Word]:
    """
    Raw word records -> Words sorted by start.

    With parent=(start, end) every time is pulled into that window; an
    inverted parent window (end < start) is left alone.
    """
    if not isinstance(raw_words, list):
        return []

    words: List[Word] = []
    for rw in raw_words:
        if not isinstance(rw, dict):
            continue
        text = _text(rw)
        if not text:
            continue
        start, end = _times(rw)
        words.append(Word(start=start, end=end, text=text))

    words.sort(key=lambda w: w.start)

    if parent is not None:
        p0, p1 = parent
        if p1 >= p0:
            for w in words:
                w.start = _clamp(w.start, p0, p1)
                w.end = _clamp(w.end, p0, p1)
    return words


def build_segment(record: Dict[str, Any], config: BuildConfig) -> Optional[Segment]:
    start, end = _times(record)
    text = _text(record)

    words: Optional[List[Word]] = None
    if config.keep_words and "words" in record:
        words = build_words(record.get("words"), parent=(start, end) if config.clamp_words else None)

    if not text and words:
        text = join_words(words)
    if not text and config.drop_empty:
        return None

    if end < start:
        logger.debug(f"Segment ends before it starts ({start:.3f} > {end:.3f}): {text[:40]!r}")
    return Segment(start=start, end=end, text=text, words=words)


def build_segments(records: Iterable[Any], config: Optional[BuildConfig] = None) -> List[Segment]:
    """
    Raw segment records (as recovered from the model response) -> Segments.

    - every timestamp goes through normalize+parse, so bad fields become 0
    - word lists are sorted (and clamped, see BuildConfig)
    - the result is always sorted by start; input order is never trusted
    - overlapping/inverted segments are passed through untouched
    """
    cfg = config or BuildConfig()
    segments: List[Segment] = []
    skipped = 0
    for record in records or []:
        if not isinstance(record, dict):
            skipped += 1
            continue
        seg = build_segment(record, cfg)
        if seg is None:
            skipped += 1
            continue
        segments.append(seg)

    if skipped:
        logger.info(f"Skipped {skipped} unusable segment record(s)")

    # stable: equal starts keep model order
    segments.sort(key=lambda s: s.start)
    return segments
