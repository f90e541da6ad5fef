from __future__ import annotations

from typing import List, Optional, Sequence

from lyricflow.core.text import needs_space_after
from lyricflow.core.timestamps.format import format_ttml_time
from lyricflow.core_types import ExportMetadata, Segment

DEFAULT_TITLE = "Lyrics"

_XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)

_DOCUMENT = """<?xml version="1.0" encoding="UTF-8"?>
<tt xmlns="http://www.w3.org/ns/ttml" xmlns:tts="http://www.w3.org/ns/ttml#styling" xml:lang="mul">
  <head>
    <metadata>
      <ttm:title xmlns:ttm="http://www.w3.org/ns/ttml#metadata">{title}</ttm:title>
    </metadata>
    <styling>
      <style xml:id="s1" tts:fontSize="100%" tts:fontFamily="sansSerif" tts:color="white" />
    </styling>
  </head>
  <body>
    <div>
{body}
    </div>
  </body>
</tt>"""


def xml_escape(text: str) -> str:
    # '&' first, otherwise the other entities get double-escaped
    out = text or ""
    for raw, entity in _XML_ESCAPES:
        out = out.replace(raw, entity)
    return out


def _paragraph(seg: Segment) -> str:
    begin = format_ttml_time(seg.start)
    end = format_ttml_time(seg.end)

    if not seg.words:
        return f'      <p begin="{begin}" end="{end}">{xml_escape(seg.text)}</p>'

    # spans are concatenated with no separator: stray whitespace between
    # elements would render as visible spaces
    spans: List[str] = []
    for i, w in enumerate(seg.words):
        content = xml_escape(w.text) + (" " if needs_space_after(seg.words, i) else "")
        spans.append(f'<span begin="{format_ttml_time(w.start)}" end="{format_ttml_time(w.end)}">{content}</span>')
    return f'      <p begin="{begin}" end="{end}">{"".join(spans)}</p>'


def generate_ttml(segments: Sequence[Segment], metadata: Optional[ExportMetadata] = None) -> str:
    title = (metadata.title if metadata else None) or DEFAULT_TITLE
    body = "\n".join(_paragraph(seg) for seg in segments)
    return _DOCUMENT.format(title=xml_escape(title), body=body)
