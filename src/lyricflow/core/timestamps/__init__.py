from __future__ import annotations

from lyricflow.core.timestamps.format import (
    format_display_time,
    format_duration,
    format_lrc_time,
    format_srt_time,
    format_ttml_time,
)
from lyricflow.core.timestamps.parse import (
    CANONICAL_ZERO,
    normalize_timestamp,
    parse_timestamp,
)

__all__ = [
    "CANONICAL_ZERO",
    "normalize_timestamp",
    "parse_timestamp",
    "format_srt_time",
    "format_ttml_time",
    "format_lrc_time",
    "format_display_time",
    "format_duration",
]
