from __future__ import annotations

from lyricflow.core.export.lrc import generate_lrc
from lyricflow.core.export.registry import file_extension, render, supported_formats
from lyricflow.core.export.srt import generate_srt
from lyricflow.core.export.ttml import generate_ttml

__all__ = [
    "generate_srt",
    "generate_lrc",
    "generate_ttml",
    "render",
    "file_extension",
    "supported_formats",
]
