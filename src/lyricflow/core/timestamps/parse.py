from __future__ import annotations

import math
import re
from typing import Any, Tuple

from lyricflow.utils.logger import get_logger

logger = get_logger(__name__)

CANONICAL_ZERO = "00:00:00.000"

# anything that is not part of a timestamp: unit suffixes, brackets, commentary
_NOISE_RE = re.compile(r"[^\d:.]")


def _clean(ts: Any) -> str:
    if ts is None or isinstance(ts, bool):
        return ""
    if isinstance(ts, (int, float)):
        if not math.isfinite(ts) or ts < 0:
            return ""
        # fixed-point so large or tiny floats never come out in exponent form
        ts = f"{ts:.6f}" if isinstance(ts, float) else str(ts)
    if not isinstance(ts, str):
        return ""
    # SRT uses a comma before the milliseconds
    return _NOISE_RE.sub("", ts.strip().replace(",", "."))


def _int_field(s: str) -> int:
    """Integer part of a field; '' and '.' count as 0."""
    head = s.split(".", 1)[0]
    return int(head) if head else 0


def _millis(frac: str) -> int:
    # exactly three digits: truncate extra, right-pad missing
    digits = frac[:3].ljust(3, "0")
    return int(digits)


def _seconds_field(s: str) -> Tuple[int, int]:
    parts = s.split(".")
    sec = int(parts[0]) if parts[0] else 0
    ms = _millis(parts[1]) if len(parts) > 1 else 0
    return sec, ms


def _to_total_ms(clean: str) -> int:
    if ":" not in clean:
        # bare decimal seconds ("12.5") or a seconds-only field
        sec, ms = _seconds_field(clean)
        return sec * 1000 + ms

    parts = clean.split(":")
    if len(parts) > 3:
        parts = parts[-3:]

    h = m = 0
    if len(parts) == 3:
        h = _int_field(parts[0])
        m = _int_field(parts[1])
    else:
        m = _int_field(parts[0])
    sec, ms = _seconds_field(parts[-1])
    return (((h * 60) + m) * 60 + sec) * 1000 + ms


def _format_canonical(total_ms: int) -> str:
    total_s, milli = divmod(total_ms, 1000)
    total_m, sec = divmod(total_s, 60)
    hour, minute = divmod(total_m, 60)
    return f"{hour:02d}:{minute:02d}:{sec:02d}.{milli:03d}"


def normalize_timestamp(ts: Any) -> str:
    """
    Reformat a free-form timestamp into canonical HH:MM:SS.mmm.

    Accepted shapes (after noise stripping):
      - H:MM:SS[.fff], MM:SS[.fff], SS[.fff]
      - bare decimal seconds ("65.5") or a JSON number
    Overflowing fields carry over ("00:75" -> 00:01:15.000). Anything
    unusable becomes 00:00:00.000.
    """
    clean = _clean(ts)
    if clean.strip(":."):
        try:
            return _format_canonical(_to_total_ms(clean))
        except ValueError:
            # digit run past the int/str conversion limit
            pass
    if ts not in (None, ""):
        logger.debug(f"Unparseable timestamp {ts!r} -> {CANONICAL_ZERO}")
    return CANONICAL_ZERO


def canonical_to_seconds(canonical: str) -> float:
    h, m, rest = canonical.split(":")
    sec, milli = rest.split(".")
    total_ms = (((int(h) * 60) + int(m)) * 60 + int(sec)) * 1000 + int(milli)
    try:
        value = total_ms / 1000
    except OverflowError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def parse_timestamp(ts: Any) -> float:
    """
    Free-form timestamp -> seconds.

    Never raises: garbage resolves to 0.0 so one bad field cannot sink a
    whole transcription.
    """
    return canonical_to_seconds(normalize_timestamp(ts))
