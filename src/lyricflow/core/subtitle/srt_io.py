from __future__ import annotations

import re
from pathlib import Path
from typing import List

from lyricflow.core.timestamps.parse import parse_timestamp
from lyricflow.core_types import Segment
from lyricflow.utils.io import read_text

# lenient on purpose: hand-edited files use '.', single-digit hours, or
# position hints after the end time
_TIMECODE_RE = re.compile(r"^\s*(?P<start>[\d:.,]+)\s*-->\s*(?P<end>[\d:.,]+)(?:\s+.*)?$")

# SRT index line is usually an integer, but we allow non-integer and ignore it.
_INDEX_RE = re.compile(r"^\s*\d+\s*$")


def parse_srt(raw: str) -> List[Segment]:
    """
    Parse SRT text into Segments.

    - Splits blocks by blank lines.
    - Ignores the cue index line if present.
    - Blocks without a timecode line are skipped.
    - Preserves cue text line breaks.
    """
    raw = (raw or "").lstrip("\ufeff")
    raw = raw.replace("\r\n", "\n").replace("\r", "\n")

    blocks = [blk for blk in raw.split("\n\n") if blk.strip() != ""]
    segments: List[Segment] = []

    for blk in blocks:
        lines = blk.strip("\n").split("\n")

        idx = 1 if _INDEX_RE.match(lines[0]) else 0
        if idx >= len(lines):
            continue

        m = _TIMECODE_RE.match(lines[idx])
        if not m:
            continue

        text_lines = lines[idx + 1 :]
        while text_lines and text_lines[-1].strip() == "":
            text_lines.pop()

        segments.append(
            Segment(
                start=parse_timestamp(m.group("start")),
                end=parse_timestamp(m.group("end")),
                text="\n".join(text_lines).strip("\n"),
            )
        )

    return segments


def read_srt(path: str | Path) -> List[Segment]:
    return parse_srt(read_text(Path(path)))
