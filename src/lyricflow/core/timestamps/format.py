from __future__ import annotations

import math


def _safe_seconds(sec: float) -> float:
    if sec is None or not math.isfinite(sec) or sec < 0:
        return 0.0
    return float(sec)


def _split_ms(sec: float):
    ms = int(round(_safe_seconds(sec) * 1000))
    h = ms // 3600000
    ms %= 3600000
    m = ms // 60000
    ms %= 60000
    s = ms // 1000
    ms %= 1000
    return h, m, s, ms


def format_srt_time(sec: float) -> str:
    # SRT timestamp: HH:MM:SS,mmm
    h, m, s, ms = _split_ms(sec)
    return f"{h:02d}:{m:02d}:{s:02d},{ms:03d}"


def format_ttml_time(sec: float) -> str:
    # TTML clock time: HH:MM:SS.mmm (same shape as the canonical timestamp)
    h, m, s, ms = _split_ms(sec)
    return f"{h:02d}:{m:02d}:{s:02d}.{ms:03d}"


def format_lrc_time(sec: float) -> str:
    """
    LRC tag: [MM:SS.xx] with centiseconds.

    Minutes are not wrapped into hours; past 99 minutes the field just grows.
    """
    total_cs = int(round(_safe_seconds(sec) * 100))
    cs = total_cs % 100
    total_s = total_cs // 100
    s = total_s % 60
    m = total_s // 60
    return f"[{m:02d}:{s:02d}.{cs:02d}]"


def format_display_time(sec: float) -> str:
    total_ms = int(round(_safe_seconds(sec) * 1000))
    total_s, ms = divmod(total_ms, 1000)
    m, s = divmod(total_s, 60)
    return f"{m:02d}:{s:02d}.{ms:03d}"


def format_duration(sec: float) -> str:
    """Coarse M:SS used for media lengths."""
    total_s = int(_safe_seconds(sec))
    m, s = divmod(total_s, 60)
    return f"{m}:{s:02d}"
