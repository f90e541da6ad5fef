from __future__ import annotations

from lyricflow.core.contracts import LrcGapPolicy
from lyricflow.core.export.lrc import generate_lrc
from lyricflow.core_types import ExportMetadata, Segment


def _segs(*spans):
    return [Segment(start=s, end=e, text=t) for s, e, t in spans]


def test_header_tags_and_default_attribution() -> None:
    out = generate_lrc(_segs((0.0, 1.0, "A")), ExportMetadata(title="Song", artist="Band", album="LP"))
    assert out.splitlines()[:4] == ["[ti:Song]", "[ar:Band]", "[al:LP]", "[by:LyricFlow AI]"]

    out = generate_lrc(_segs((0.0, 1.0, "A")), ExportMetadata(by="me"))
    assert out.splitlines()[0] == "[by:me]"


def test_gap_over_threshold_inserts_clear_marker() -> None:
    out = generate_lrc(_segs((0.0, 2.0, "A"), (7.0, 9.0, "B")))
    assert out == "[by:LyricFlow AI]\n[00:00.00]A\n[00:03.00]\n[00:07.00]B"


def test_gap_at_threshold_has_no_marker() -> None:
    out = generate_lrc(_segs((0.0, 2.0, "A"), (6.0, 8.0, "B")))
    assert out == "[by:LyricFlow AI]\n[00:00.00]A\n[00:06.00]B"


def test_clear_marker_never_passes_next_start() -> None:
    out = generate_lrc(_segs((0.0, 2.0, "A"), (8.0, 9.0, "B")), policy=LrcGapPolicy(clear_offset=10.0))
    assert "[00:08.00]\n[00:08.00]B" in out


def test_trailing_marker_needs_known_duration_by_default() -> None:
    segs = _segs((0.0, 2.0, "A"))
    assert generate_lrc(segs).splitlines()[-1] == "[00:00.00]A"
    assert generate_lrc(segs, audio_duration=20.0).splitlines()[-1] == "[00:06.00]"
    # marker at 6.0 does not fit into 5 seconds of audio
    assert generate_lrc(segs, audio_duration=5.0).splitlines()[-1] == "[00:00.00]A"


def test_trailing_marker_unconditional_policy() -> None:
    policy = LrcGapPolicy(trailing_clear_offset=1.0, require_duration_bound=False)
    out = generate_lrc(_segs((0.0, 2.0, "A")), policy=policy)
    assert out.splitlines()[-1] == "[00:03.00]"


def test_long_recordings_keep_growing_minutes() -> None:
    out = generate_lrc(_segs((6000.0, 6001.0, "late")))
    assert "[100:00.00]late" in out


def test_multiline_text_is_flattened() -> None:
    out = generate_lrc(_segs((0.0, 1.0, "two\nlines")), ExportMetadata(title="a\nb"))
    assert "[ti:a b]" in out
    assert "[00:00.00]two lines" in out


def test_empty_segment_list_is_header_only() -> None:
    assert generate_lrc([]) == "[by:LyricFlow AI]"
