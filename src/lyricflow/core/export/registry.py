from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence

from lyricflow.core.contracts import LrcGapPolicy
from lyricflow.core.export.lrc import generate_lrc
from lyricflow.core.export.srt import generate_srt
from lyricflow.core.export.ttml import generate_ttml
from lyricflow.core_types import ExportMetadata, Segment

Renderer = Callable[..., str]


def _render_srt(segments, *, metadata=None, audio_duration=None, gap_policy=None) -> str:
    return generate_srt(segments)


def _render_lrc(segments, *, metadata=None, audio_duration=None, gap_policy=None) -> str:
    return generate_lrc(segments, metadata, audio_duration=audio_duration, policy=gap_policy)


def _render_ttml(segments, *, metadata=None, audio_duration=None, gap_policy=None) -> str:
    return generate_ttml(segments, metadata)


_RENDERERS: Dict[str, Renderer] = {
    "srt": _render_srt,
    "lrc": _render_lrc,
    "ttml": _render_ttml,
}

_EXTENSIONS: Dict[str, str] = {
    "srt": ".srt",
    "lrc": ".lrc",
    "ttml": ".ttml",
}


def supported_formats() -> list[str]:
    return sorted(_RENDERERS)


def _key(fmt: str) -> str:
    key = (fmt or "").strip().lower().lstrip(".")
    if key not in _RENDERERS:
        raise ValueError(f"Unsupported export format {fmt!r}; expected one of: {', '.join(supported_formats())}")
    return key


def file_extension(fmt: str) -> str:
    return _EXTENSIONS[_key(fmt)]


def render(
    fmt: str,
    segments: Sequence[Segment],
    *,
    metadata: Optional[ExportMetadata] = None,
    audio_duration: Optional[float] = None,
    gap_policy: Optional[LrcGapPolicy] = None,
) -> str:
    """
    Single entrypoint for emitters. Formats ignore the arguments they do not use.
    """
    renderer = _RENDERERS[_key(fmt)]
    return renderer(segments, metadata=metadata, audio_duration=audio_duration, gap_policy=gap_policy)
