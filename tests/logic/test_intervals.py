import pytest

from microdiary.logic.intervals import Gap, Interval, find_gaps, overlaps


def span(start, end):
    return Interval(start_time=start, end_time=end)


def test_overlaps_identical_spans():
    assert overlaps(span("09:00", "10:00"), span("09:00", "10:00"))

def test_overlaps_partial():
    assert overlaps(span("09:00", "10:30"), span("10:00", "11:00"))

def test_overlaps_contained():
    assert overlaps(span("08:00", "12:00"), span("09:00", "11:00"))

def test_back_to_back_spans_do_not_overlap():
    assert not overlaps(span("09:00", "10:00"), span("10:00", "11:00"))

def test_disjoint_spans_do_not_overlap():
    assert not overlaps(span("09:00", "10:00"), span("11:00", "12:00"))

@pytest.mark.parametrize("a, b", [
    (("09:00", "10:00"), ("10:00", "11:00")),
    (("09:00", "10:30"), ("10:00", "11:00")),
    (("08:00", "12:00"), ("09:00", "11:00")),
    (("09:00", "10:00"), ("11:00", "12:00")),
    (("10:00", "10:00"), ("09:00", "11:00")),
])
def test_overlaps_is_symmetric(a, b):
    assert overlaps(span(*a), span(*b)) == overlaps(span(*b), span(*a))

def test_overlaps_accepts_any_object_with_times():
    class Row:
        start_time = "09:00"
        end_time = "10:00"
    assert overlaps(Row(), span("09:30", "09:45"))


def test_find_gaps_empty_input():
    assert find_gaps([]) == []

def test_find_gaps_empty_input_ignores_window():
    assert find_gaps([], day_start="00:00", day_end="23:59", min_gap_minutes=1) == []

def test_find_gaps_between_entries():
    entries = [span("06:00", "07:00"), span("09:00", "10:00")]
    gaps = find_gaps(entries, day_start="06:00", day_end="10:00")
    assert gaps == [Gap(start="07:00", end="09:00")]

def test_find_gaps_below_threshold():
    entries = [span("06:00", "07:00"), span("07:10", "08:00")]
    assert find_gaps(entries, day_start="06:00", day_end="08:00", min_gap_minutes=15) == []

def test_find_gaps_reports_exact_threshold():
    entries = [span("06:00", "07:00"), span("07:15", "08:00")]
    gaps = find_gaps(entries, day_start="06:00", day_end="08:00", min_gap_minutes=15)
    assert gaps == [Gap(start="07:00", end="07:15")]

def test_find_gaps_trailing_gap():
    gaps = find_gaps([span("06:00", "08:00")], day_start="06:00", day_end="12:00")
    assert len(gaps) == 1
    assert gaps[0].start == "08:00"
    assert gaps[0].end == "12:00"

def test_find_gaps_leading_gap_uses_day_start():
    gaps = find_gaps([span("08:00", "23:59")])
    assert gaps == [Gap(start="06:00", end="08:00")]

def test_find_gaps_sorts_input():
    entries = [span("09:00", "10:00"), span("06:00", "07:00")]
    gaps = find_gaps(entries, day_start="06:00", day_end="10:00")
    assert gaps == [Gap(start="07:00", end="09:00")]

def test_find_gaps_contained_entry_does_not_move_cursor_back():
    entries = [span("06:00", "12:00"), span("07:00", "08:00"), span("13:00", "14:00")]
    gaps = find_gaps(entries, day_start="06:00", day_end="14:00")
    assert gaps == [Gap(start="12:00", end="13:00")]

def test_find_gaps_is_chronological():
    entries = [span("12:00", "13:00"), span("07:00", "08:00"), span("09:00", "10:00")]
    gaps = find_gaps(entries, day_start="06:00", day_end="14:00")
    assert [(g.start, g.end) for g in gaps] == [
        ("06:00", "07:00"),
        ("08:00", "09:00"),
        ("10:00", "12:00"),
        ("13:00", "14:00"),
    ]

def test_gap_serializes_with_from_and_to():
    assert Gap(start="07:00", end="09:00").model_dump(by_alias=True) == {"from": "07:00", "to": "09:00"}
