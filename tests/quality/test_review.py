from lyricflow.core.contracts import BuildConfig
from lyricflow.core.postprocess.build import build_segments
from lyricflow.core.quality import ReviewProfile, Severity, ViolationType, review_segments
from lyricflow.core_types import Segment


def test_clean_transcript_passes() -> None:
    segs = [Segment(start=0.0, end=1.0, text="a"), Segment(start=1.0, end=2.0, text="b")]
    rep = review_segments(segs)
    assert rep.ok()
    assert rep.violations == []
    assert rep.summary()["total_segments"] == 2


def test_inverted_segment_is_a_major_finding() -> None:
    rep = review_segments([Segment(start=5.0, end=3.0, text="x")])
    assert not rep.ok()
    (v,) = rep.violations
    assert v.type == ViolationType.INVERTED_TIMES
    assert v.severity == Severity.MAJOR
    assert "00:05.000-00:03.000" in v.message


def test_overlap_respects_profile() -> None:
    segs = [Segment(start=0.0, end=2.0, text="a"), Segment(start=1.5, end=3.0, text="b")]
    rep = review_segments(segs)
    assert [v.type for v in rep.violations] == [ViolationType.OVERLAP]
    assert rep.violations[0].data == {"overlap": 0.5}
    assert rep.ok()

    assert review_segments(segs, ReviewProfile(max_overlap=1.0)).violations == []


def test_unsorted_and_empty_text() -> None:
    segs = [Segment(start=3.0, end=4.0, text="late"), Segment(start=1.0, end=2.0, text=" ")]
    rep = review_segments(segs)
    types = {v.type for v in rep.violations}
    assert types == {ViolationType.UNSORTED, ViolationType.EMPTY_TEXT}
    assert rep.summary()["major_count"] == 1


def test_words_outside_parent_only_without_clamping() -> None:
    records = [
        {
            "start": "1",
            "end": "2",
            "text": "a",
            "words": [{"start": "0.5", "end": "2.5", "text": "a"}],
        }
    ]
    clamped = build_segments(records, BuildConfig(clamp_words=True))
    assert review_segments(clamped).violations == []

    raw = build_segments(records, BuildConfig(clamp_words=False))
    rep = review_segments(raw)
    (v,) = rep.violations
    assert v.type == ViolationType.WORD_OUTSIDE_PARENT
    assert v.word_index == 0
    assert v.to_dict()["word_index"] == 0


def test_report_serializes() -> None:
    rep = review_segments([Segment(start=2.0, end=1.0, text="x")])
    d = rep.to_dict()
    assert d["summary"]["by_type"] == {"INVERTED_TIMES": 1}
    assert d["violations"][0]["time"] == {"start": 2.0, "end": 1.0}
    assert d["thresholds"]["max_overlap"] == 0.0
