from __future__ import annotations

from typing import List, Optional, Sequence

from lyricflow.core.contracts import DEFAULT_LRC_BY, LrcGapPolicy
from lyricflow.core.timestamps.format import format_lrc_time
from lyricflow.core_types import ExportMetadata, Segment


def _one_line(value: str) -> str:
    return " ".join(value.splitlines()).strip()


def lrc_header(metadata: Optional[ExportMetadata]) -> List[str]:
    meta = metadata or ExportMetadata()
    lines: List[str] = []
    if meta.title:
        lines.append(f"[ti:{_one_line(meta.title)}]")
    if meta.artist:
        lines.append(f"[ar:{_one_line(meta.artist)}]")
    if meta.album:
        lines.append(f"[al:{_one_line(meta.album)}]")
    lines.append(f"[by:{_one_line(meta.by or '') or DEFAULT_LRC_BY}]")
    return lines


def generate_lrc(
    segments: Sequence[Segment],
    metadata: Optional[ExportMetadata] = None,
    audio_duration: Optional[float] = None,
    policy: Optional[LrcGapPolicy] = None,
) -> str:
    """
    LRC lyrics: header tags, then one [mm:ss.xx] line per segment.

    Silent stretches longer than policy.gap_threshold get an empty
    timestamp line (clear marker) so players blank the display. See
    LrcGapPolicy for the placement rules, including the trailing marker.
    """
    pol = policy or LrcGapPolicy()
    lines = lrc_header(metadata)

    n = len(segments)
    for i, seg in enumerate(segments):
        lines.append(f"{format_lrc_time(seg.start)}{_one_line(seg.text)}")

        if i < n - 1:
            nxt = segments[i + 1]
            if nxt.start - seg.end > pol.gap_threshold:
                lines.append(format_lrc_time(min(seg.end + pol.clear_offset, nxt.start)))
            continue

        clear_at = seg.end + pol.trailing_clear_offset
        if not pol.require_duration_bound:
            lines.append(format_lrc_time(clear_at))
        elif audio_duration and audio_duration > 0 and clear_at <= audio_duration:
            lines.append(format_lrc_time(clear_at))

    return "\n".join(lines)
