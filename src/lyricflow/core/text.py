from __future__ import annotations

import re
from typing import Sequence

from lyricflow.core_types import Word

# Hiragana/Katakana, CJK ext A, CJK unified, compatibility ideographs,
# half-width Katakana, Hangul jamo/compat jamo/syllables
CJK_RE = re.compile(
    "[\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff\uff66-\uff9f"
    "\u1100-\u11ff\u3130-\u318f\uac00-\ud7af]"
)


def has_cjk(text: str) -> bool:
    return bool(CJK_RE.search(text or ""))


def needs_space_after(words: Sequence[Word], index: int) -> bool:
    """
    Dense scripts pack without spaces; the last word of a line never gets one.
    """
    if index >= len(words) - 1:
        return False
    return not has_cjk(words[index].text)


def join_words(words: Sequence[Word]) -> str:
    parts = []
    for i, w in enumerate(words):
        parts.append(w.text)
        if needs_space_after(words, i):
            parts.append(" ")
    return "".join(parts)
