from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from lyricflow.config import AppConfig, load_config
from lyricflow.core.contracts import TranscriptionMode
from lyricflow.core.errors import MalformedResponseError
from lyricflow.core.export.registry import file_extension, supported_formats
from lyricflow.core.pipeline import export_transcript, process_response
from lyricflow.core.quality.report import review_segments
from lyricflow.core.subtitle.srt_io import read_srt
from lyricflow.core.timestamps.format import format_duration
from lyricflow.core.timestamps.parse import normalize_timestamp, parse_timestamp
from lyricflow.core_types import ExportMetadata, Transcript
from lyricflow.utils.io import dump_json, read_text, write_text
from lyricflow.utils.logger import get_logger, set_level

app = typer.Typer(help="Repair timestamped model transcriptions and export SRT / LRC / TTML")

logger = get_logger(__name__)


def _config() -> AppConfig:
    cfg = load_config()
    set_level(cfg.log_level)
    return cfg


def _normalize_mode(m: Optional[str]) -> TranscriptionMode:
    m2 = (m or "line").strip().lower()
    if m2 in ("line", "subtitle", "lines"):
        return "line"
    if m2 in ("word", "karaoke", "words"):
        return "word"
    raise typer.BadParameter("mode must be one of: line, word")


def _normalize_format(f: str) -> str:
    f2 = (f or "").strip().lower().lstrip(".")
    if f2 not in supported_formats():
        raise typer.BadParameter(f"format must be one of: {', '.join(supported_formats())}")
    return f2


def _emit(content: str, out: Optional[Path], input_path: Path, fmt: str) -> None:
    if out is None:
        typer.echo(content)
        return
    target = out / f"{input_path.stem}{file_extension(fmt)}" if out.is_dir() else out
    write_text(target, content if content.endswith("\n") else content + "\n")
    logger.info(f"Wrote {fmt.upper()} -> {target}")


def _metadata(cfg: AppConfig, title, artist, album, by) -> ExportMetadata:
    return ExportMetadata(title=title, artist=artist, album=album, by=by or cfg.lrc_by)


@app.command()
def export(
    input: Path = typer.Argument(..., exists=True, dir_okay=False, help="Raw model response (JSON-ish text)"),
    format: str = typer.Option("srt", "--format", "-f", help="Output format: srt/lrc/ttml"),
    mode: str = typer.Option("line", help="Transcription mode: line/word"),
    out: Optional[Path] = typer.Option(None, help="Output file or directory (default: stdout)"),
    title: Optional[str] = typer.Option(None, help="Song title (LRC/TTML)"),
    artist: Optional[str] = typer.Option(None, help="Artist (LRC)"),
    album: Optional[str] = typer.Option(None, help="Album (LRC)"),
    by: Optional[str] = typer.Option(None, help="LRC [by:] attribution"),
    duration: Optional[float] = typer.Option(None, help="Total audio duration in seconds (LRC trailing clear marker)"),
):
    """Repair a model response and render it."""
    cfg = _config()
    fmt = _normalize_format(format)
    m = _normalize_mode(mode)

    try:
        transcript = process_response(read_text(input), mode=m, config=cfg.build_config(m))
    except MalformedResponseError as e:
        typer.echo(f"error[{e.code}]: {e.message}", err=True)
        raise typer.Exit(code=2)

    logger.info(f"{len(transcript.segments)} segment(s), {format_duration(transcript.end)} of timed text")
    content = export_transcript(
        transcript,
        fmt,
        metadata=_metadata(cfg, title, artist, album, by),
        audio_duration=duration,
        gap_policy=cfg.gap_policy(),
    )
    _emit(content, out, input, fmt)


@app.command()
def convert(
    input: Path = typer.Argument(..., exists=True, dir_okay=False, help="Existing .srt file"),
    format: str = typer.Option("lrc", "--format", "-f", help="Output format: srt/lrc/ttml"),
    out: Optional[Path] = typer.Option(None, help="Output file or directory (default: stdout)"),
    title: Optional[str] = typer.Option(None, help="Song title (LRC/TTML)"),
    artist: Optional[str] = typer.Option(None, help="Artist (LRC)"),
    album: Optional[str] = typer.Option(None, help="Album (LRC)"),
    by: Optional[str] = typer.Option(None, help="LRC [by:] attribution"),
    duration: Optional[float] = typer.Option(None, help="Total audio duration in seconds (LRC trailing clear marker)"),
):
    """Re-render an SRT file as another format."""
    cfg = _config()
    fmt = _normalize_format(format)
    segments = sorted(read_srt(input), key=lambda s: s.start)
    content = export_transcript(
        Transcript(mode="line", segments=segments),
        fmt,
        metadata=_metadata(cfg, title, artist, album, by),
        audio_duration=duration,
        gap_policy=cfg.gap_policy(),
    )
    _emit(content, out, input, fmt)


@app.command()
def normalize(timestamps: List[str] = typer.Argument(..., help="Timestamps to normalize")):
    """Print canonical HH:MM:SS.mmm and seconds for each timestamp."""
    _config()
    for ts in timestamps:
        typer.echo(f"{ts}\t{normalize_timestamp(ts)}\t{parse_timestamp(ts):.3f}")


@app.command()
def review(
    input: Path = typer.Argument(..., exists=True, dir_okay=False, help="Raw model response (JSON-ish text)"),
    mode: str = typer.Option("line", help="Transcription mode: line/word"),
):
    """Report timing anomalies as JSON; exit code 1 on major findings."""
    cfg = _config()
    m = _normalize_mode(mode)
    try:
        transcript = process_response(read_text(input), mode=m, config=cfg.build_config(m))
    except MalformedResponseError as e:
        typer.echo(f"error[{e.code}]: {e.message}", err=True)
        raise typer.Exit(code=2)

    report = review_segments(transcript.segments)
    typer.echo(dump_json(report.to_dict()))
    if not report.ok():
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
