from __future__ import annotations

from typing import List, Sequence

from lyricflow.core.timestamps.format import format_srt_time
from lyricflow.core_types import Segment


def generate_srt(segments: Sequence[Segment]) -> str:
    """
    Numbered SRT blocks, 1-based, separated by a blank line.

    Text is written verbatim.
    """
    blocks: List[str] = []
    for idx, seg in enumerate(segments, start=1):
        blocks.append(f"{idx}\n{format_srt_time(seg.start)} --> {format_srt_time(seg.end)}\n{seg.text}\n")
    return "\n".join(blocks)
