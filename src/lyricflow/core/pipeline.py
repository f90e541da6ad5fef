from __future__ import annotations

from typing import Dict, Iterable, Optional

from lyricflow.core.contracts import BuildConfig, ExportFormat, LrcGapPolicy, TranscriptionMode
from lyricflow.core.export.registry import render
from lyricflow.core.postprocess.build import build_segments
from lyricflow.core.repair.json_repair import repair_and_parse
from lyricflow.core_types import ExportMetadata, Transcript
from lyricflow.utils.logger import get_logger

logger = get_logger(__name__)


def process_response(
    raw_text: str,
    mode: TranscriptionMode = "line",
    config: Optional[BuildConfig] = None,
) -> Transcript:
    """
    Model response text -> Transcript with start-sorted segments.

    raw text -> repair_and_parse -> build_segments. Raises
    MalformedResponseError when the text cannot be recovered at all.
    """
    cfg = config or BuildConfig.for_mode(mode)
    data = repair_and_parse(raw_text)
    segments = build_segments(data["segments"], cfg)

    if mode == "word":
        missing = sum(1 for s in segments if not s.words)
        if missing:
            logger.warning(f"{missing}/{len(segments)} segment(s) came back without word timings")

    logger.info(f"Built {len(segments)} segment(s) from {len(data['segments'])} raw record(s) (mode={mode})")
    return Transcript(mode=mode, segments=segments)


def export_transcript(
    transcript: Transcript,
    fmt: ExportFormat,
    *,
    metadata: Optional[ExportMetadata] = None,
    audio_duration: Optional[float] = None,
    gap_policy: Optional[LrcGapPolicy] = None,
) -> str:
    return render(
        fmt,
        transcript.segments,
        metadata=metadata,
        audio_duration=audio_duration,
        gap_policy=gap_policy,
    )


def export_all(
    transcript: Transcript,
    formats: Iterable[ExportFormat] = ("srt", "lrc", "ttml"),
    *,
    metadata: Optional[ExportMetadata] = None,
    audio_duration: Optional[float] = None,
    gap_policy: Optional[LrcGapPolicy] = None,
) -> Dict[str, str]:
    return {
        fmt: export_transcript(
            transcript,
            fmt,
            metadata=metadata,
            audio_duration=audio_duration,
            gap_policy=gap_policy,
        )
        for fmt in formats
    }
