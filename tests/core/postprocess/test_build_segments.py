from lyricflow.core.contracts import BuildConfig
from lyricflow.core.postprocess.build import build_segments, build_words
from lyricflow.core.repair.json_repair import repair_and_parse


def test_segments_are_sorted_by_start_regardless_of_input_order() -> None:
    raw = (
        '{"segments":[{"startTime":"00:00:02.000","endTime":"00:00:01.000","text":"b"},'
        '{"startTime":"00:00:00.000","endTime":"00:00:01.000","text":"a"}]}'
    )
    segs = build_segments(repair_and_parse(raw)["segments"])

    assert [s.text for s in segs] == ["a", "b"]
    assert segs[0].start == 0 and segs[0].end == 1
    # inverted times pass through untouched
    assert segs[1].start == 2 and segs[1].end == 1


def test_both_key_conventions_are_accepted() -> None:
    segs = build_segments(
        [
            {"start": "00:01.000", "end": "00:02.000", "text": "simple"},
            {"startTime": "00:00:03.000", "endTime": "00:00:04.000", "text": "aware"},
            {"startTime": "00:00:05.000", "start": "99", "endTime": "00:00:06.000", "text": "both"},
        ]
    )
    assert [(s.start, s.end) for s in segs] == [(1.0, 2.0), (3.0, 4.0), (5.0, 6.0)]


def test_text_is_trimmed_and_coerced() -> None:
    segs = build_segments(
        [
            {"start": "0", "end": "1", "text": "  padded  "},
            {"start": "1", "end": "2", "text": 42},
        ]
    )
    assert [s.text for s in segs] == ["padded", "42"]


def test_bad_timestamps_resolve_to_zero() -> None:
    segs = build_segments([{"startTime": "soon", "endTime": None, "text": "x"}])
    assert segs[0].start == 0
    assert segs[0].end == 0


def test_unusable_records_are_skipped() -> None:
    segs = build_segments(
        [
            "not a record",
            None,
            {"start": "0", "end": "1", "text": "   "},
            {"start": "1", "end": "2", "text": "kept"},
        ]
    )
    assert [s.text for s in segs] == ["kept"]


def test_empty_text_kept_when_drop_empty_is_off() -> None:
    segs = build_segments([{"start": "0", "end": "1", "text": ""}], BuildConfig(drop_empty=False))
    assert len(segs) == 1
    assert segs[0].text == ""


def test_words_sorted_and_clamped_into_parent() -> None:
    segs = build_segments(
        [
            {
                "startTime": "00:00:01.000",
                "endTime": "00:00:03.000",
                "text": "one two three",
                "words": [
                    {"startTime": "00:00:02.500", "endTime": "00:00:03.400", "text": "three"},
                    {"startTime": "00:00:00.800", "endTime": "00:00:01.500", "text": "one"},
                    {"startTime": "00:00:01.500", "endTime": "00:00:02.500", "text": "two"},
                ],
            }
        ]
    )
    words = segs[0].words
    assert [w.text for w in words] == ["one", "two", "three"]
    assert words[0].start == 1.0
    assert words[-1].end == 3.0


def test_clamping_can_be_disabled() -> None:
    words = build_words(
        [{"start": "0.5", "end": "5", "text": "wide"}],
        parent=None,
    )
    assert (words[0].start, words[0].end) == (0.5, 5.0)


def test_inverted_parent_does_not_clamp_words() -> None:
    words = build_words([{"start": "2", "end": "3", "text": "w"}], parent=(5.0, 1.0))
    assert (words[0].start, words[0].end) == (2.0, 3.0)


def test_empty_words_are_dropped_and_text_synthesized() -> None:
    segs = build_segments(
        [
            {
                "start": "0",
                "end": "2",
                "text": "",
                "words": [
                    {"start": "1", "end": "2", "text": "world"},
                    {"start": "0", "end": "1", "text": "hello"},
                    {"start": "1", "end": "1", "text": " "},
                ],
            },
            {
                "start": "3",
                "end": "4",
                "words": [
                    {"start": "3", "end": "3.5", "text": "你"},
                    {"start": "3.5", "end": "4", "text": "好"},
                ],
            },
        ]
    )
    assert [s.text for s in segs] == ["hello world", "你好"]
    assert len(segs[0].words) == 2


def test_line_mode_discards_words() -> None:
    record = {"start": "0", "end": "1", "text": "x", "words": [{"start": "0", "end": "1", "text": "x"}]}
    assert build_segments([record], BuildConfig.for_mode("line"))[0].words is None
    assert len(build_segments([record], BuildConfig.for_mode("word"))[0].words) == 1


def test_segments_without_words_key_have_no_word_list() -> None:
    segs = build_segments([{"start": "0", "end": "1", "text": "x"}])
    assert segs[0].words is None


def test_equal_starts_keep_input_order() -> None:
    segs = build_segments(
        [
            {"start": "5", "end": "6", "text": "first"},
            {"start": "5", "end": "7", "text": "second"},
            {"start": "1", "end": "2", "text": "zero"},
        ]
    )
    assert [s.text for s in segs] == ["zero", "first", "second"]
