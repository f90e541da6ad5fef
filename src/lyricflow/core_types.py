from __future__ import annotations

from pydantic import BaseModel
from typing import List, Literal, Optional


class Word(BaseModel):
    start: float
    end: float
    text: str


class Segment(BaseModel):
    start: float
    end: float
    text: str
    # only populated in word-level (karaoke) mode
    words: Optional[List[Word]] = None

    @property
    def duration(self) -> float:
        return self.end - self.start

    @property
    def has_words(self) -> bool:
        return bool(self.words)


class Transcript(BaseModel):
    mode: Literal["line", "word"] = "line"
    segments: List[Segment]

    @property
    def end(self) -> float:
        return max((s.end for s in self.segments), default=0.0)


class ExportMetadata(BaseModel):
    """
    Song/recording metadata attached to an export.

    Lives beside the segment list, never on a Segment: the UI edits it
    freely while the segments stay untouched.
    """

    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    by: Optional[str] = None
