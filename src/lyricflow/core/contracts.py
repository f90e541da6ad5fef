from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

TranscriptionMode = Literal["line", "word"]
ExportFormat = Literal["srt", "lrc", "ttml"]

DEFAULT_LRC_BY = "LyricFlow AI"


@dataclass(frozen=True)
class BuildConfig:
    """
    Knobs for turning raw segment records into Segments.

    - keep_words: False discards any "words" arrays (line mode).
    - clamp_words: pull word times into the parent [start, end] window.
    - drop_empty: drop segments with no text and no words.
    """

    keep_words: bool = True
    clamp_words: bool = True
    drop_empty: bool = True

    @classmethod
    def for_mode(cls, mode: TranscriptionMode, *, clamp_words: bool = True, drop_empty: bool = True) -> "BuildConfig":
        return cls(keep_words=(mode == "word"), clamp_words=clamp_words, drop_empty=drop_empty)


@dataclass(frozen=True)
class LrcGapPolicy:
    """
    Clear-marker placement for LRC output.

    Notes:
    - A clear marker is an empty "[mm:ss.xx]" line that blanks the display.
    - Between segments: emitted when next.start - prev.end > gap_threshold,
      at prev.end + clear_offset (never later than next.start).
    - After the last segment: at last.end + trailing_clear_offset; with
      require_duration_bound only if that instant is within the known audio
      duration.
    """

    gap_threshold: float = 4.0
    clear_offset: float = 1.0
    trailing_clear_offset: float = 4.0
    require_duration_bound: bool = True
