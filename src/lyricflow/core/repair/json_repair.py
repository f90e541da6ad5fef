from __future__ import annotations

import json
import re
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from lyricflow.core.errors import MalformedResponseError
from lyricflow.utils.logger import get_logger

logger = get_logger(__name__)

RepairResult = Dict[str, List[Any]]
RepairStrategy = Callable[[str], Optional[RepairResult]]

# opening fence with optional language tag; the closing fence may be missing on truncated output
_FENCE_BLOCK_RE = re.compile(r"```[\w-]*[ \t]*\n?(.*?)(?:```|$)", re.DOTALL)

_START_KEYS = ("startTime", "start")
_END_KEYS = ("endTime", "end")

# string-aware: a "]" inside word text does not close the block
_WORDS_BLOCK_RE = re.compile(r'"words"\s*:\s*\[(?:"(?:[^"\\]|\\.)*(?:"|$)|[^\]"])*(?:\]|$)')
_FIELD_RE = re.compile(
    r'"(startTime|start|endTime|end|text)"\s*:\s*("(?:[^"\\]|\\.)*"|-?\d+(?:\.\d+)?)'
)
_FIELD_KEYS = {
    "startTime": "start",
    "start": "start",
    "endTime": "end",
    "end": "end",
    "text": "text",
}

_CLOSERS = {"{": "}", "[": "]"}


def strip_code_fences(text: str) -> str:
    t = (text or "").strip()
    if "```" in t:
        m = _FENCE_BLOCK_RE.search(t)
        if m:
            t = m.group(1)
    return t.strip()


def _loads(text: str) -> Optional[Any]:
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        return None


def _looks_like_segment(obj: Dict[str, Any]) -> bool:
    return "text" in obj and any(k in obj for k in _START_KEYS)


def _coerce(parsed: Any, *, allow_single: bool = True) -> Optional[RepairResult]:
    """
    Accept {"segments": [...]}, a bare list, or (optionally) one segment object.
    """
    if isinstance(parsed, list):
        return {"segments": parsed}
    if isinstance(parsed, dict):
        segs = parsed.get("segments")
        if isinstance(segs, list):
            return {"segments": segs}
        if allow_single and _looks_like_segment(parsed):
            return {"segments": [parsed]}
    return None


def _closers_at_braces(text: str) -> Dict[int, str]:
    """
    Single string-aware pass over text.

    Maps the offset of every '}' (outside strings) to the closers still
    needed there. Offsets where nothing is open are left out, and so is
    everything after a mismatched closer.
    """
    closers: Dict[int, str] = {}
    stack: List[str] = []
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            stack.append(_CLOSERS[ch])
        elif ch in ("}", "]"):
            if not stack or stack[-1] != ch:
                break
            stack.pop()
            if ch == "}" and stack:
                closers[i] = "".join(reversed(stack))
    return closers


def _has_timing(record: Any) -> bool:
    return (
        isinstance(record, dict)
        and any(record.get(k) is not None for k in _START_KEYS)
        and any(record.get(k) is not None for k in _END_KEYS)
        and bool(record.get("text") or record.get("words"))
    )


def _direct_parse(text: str) -> Optional[RepairResult]:
    return _coerce(_loads(text))


def _truncation_repair(text: str) -> Optional[RepairResult]:
    """
    Walk back over every '}' and try to re-close the structure there.

    Hypotheses per cut point, in order:
      1) {"segments": [ ... }   -> append "]}"
      2) [ ... }                -> append "]"
      3) already complete       -> as is
      4) nested cut (e.g. inside "words") -> close every open bracket,
         kept only if the re-closed last record still has start, end and
         text or words
    """
    closers = _closers_at_braces(text)
    pos = text.rfind("}")
    while pos != -1:
        prefix = text[: pos + 1]
        for candidate in (prefix + "]}", prefix + "]", prefix):
            result = _coerce(_loads(candidate), allow_single=False)
            if result is not None:
                return result
        if pos in closers:
            result = _coerce(_loads(prefix + closers[pos]), allow_single=False)
            if result is not None and result["segments"] and _has_timing(result["segments"][-1]):
                return result
        pos = text.rfind("}", 0, pos)
    return None


def _array_scan(text: str) -> Optional[RepairResult]:
    start = text.find("[")
    if start == -1:
        return None
    # a parseable array must end on ']', so only those cut points are worth a try
    pos = text.rfind("]")
    while pos > start:
        parsed = _loads(text[start : pos + 1])
        if isinstance(parsed, list):
            return {"segments": parsed}
        pos = text.rfind("]", start, pos)
    return None


def _decode_value(raw: str) -> str:
    if raw.startswith('"'):
        decoded = _loads(raw)
        return decoded if isinstance(decoded, str) else raw[1:-1]
    return raw


def _regex_scrape(text: str) -> Optional[RepairResult]:
    """
    Last resort: pull start/end/text triples straight out of the text.

    Word arrays are dropped first so word timings are not mistaken for
    segments. A record is closed as soon as one of its keys shows up again.
    """
    body = _WORDS_BLOCK_RE.sub("", text)
    records: List[Dict[str, str]] = []
    current: Dict[str, str] = {}
    for m in _FIELD_RE.finditer(body):
        key = _FIELD_KEYS[m.group(1)]
        if key in current:
            records.append(current)
            current = {}
        current[key] = _decode_value(m.group(2))
    records.append(current)

    complete = [r for r in records if len(r) == len(set(_FIELD_KEYS.values()))]
    if not complete:
        return None
    return {"segments": complete}


DEFAULT_STRATEGIES: Tuple[Tuple[str, RepairStrategy], ...] = (
    ("direct", _direct_parse),
    ("truncation", _truncation_repair),
    ("array_scan", _array_scan),
    ("regex_scrape", _regex_scrape),
)


def repair_and_parse(
    raw_text: str,
    strategies: Optional[Sequence[Tuple[str, RepairStrategy]]] = None,
) -> RepairResult:
    """
    Best-effort parse of a (possibly truncated or malformed) model response.

    Strategies run in order and the first non-None result wins. Each later
    strategy trades precision for recall. Raises MalformedResponseError only
    when all of them give up.
    """
    text = strip_code_fences(raw_text)
    for name, strategy in strategies or DEFAULT_STRATEGIES:
        result = strategy(text)
        if result is None:
            logger.debug(f"JSON repair strategy '{name}' found nothing")
            continue
        if name != "direct":
            logger.warning(
                f"Model response was malformed; recovered {len(result['segments'])} segment(s) via '{name}'"
            )
        return result

    logger.error(f"All JSON repair strategies failed (raw length={len(raw_text or '')})")
    raise MalformedResponseError(raw_text=raw_text or "")
