import pytest

from conftest import make_meeting
from meeting_agent.core.agent.conflicts import find_conflicts

TEN = "2025-03-10T10:00:00+05:30"


def test_no_existing_meetings():
    assert find_conflicts(TEN, 30, []) == []


def test_candidate_starting_inside_existing():
    existing = [make_meeting("Standup", TEN, 60)]
    assert find_conflicts("2025-03-10T10:30:00+05:30", 60, existing) == existing


def test_candidate_ending_inside_existing():
    existing = [make_meeting("Standup", TEN, 60)]
    assert find_conflicts("2025-03-10T09:30:00+05:30", 45, existing) == existing


def test_existing_contained_in_candidate():
    existing = [make_meeting("Quick chat", "2025-03-10T10:15:00+05:30", 15)]
    assert find_conflicts(TEN, 120, existing) == existing


def test_identical_window_conflicts():
    existing = [make_meeting("Standup", TEN, 60)]
    assert find_conflicts(TEN, 60, existing) == existing


def test_back_to_back_meetings_do_not_conflict():
    # 10:00-11:00 existing, 11:00-11:30 candidate
    existing = [make_meeting("Standup", TEN, 60)]
    assert find_conflicts("2025-03-10T11:00:00+05:30", 30, existing) == []
    # and the other side: 09:00-10:00 candidate
    assert find_conflicts("2025-03-10T09:00:00+05:30", 60, existing) == []


def test_offsets_are_compared_as_instants():
    existing = [make_meeting("Standup", TEN, 60)]
    # 04:45 UTC == 10:15 IST
    assert find_conflicts("2025-03-10T04:45:00Z", 15, existing) == existing


def test_naive_candidate_uses_default_timezone():
    existing = [make_meeting("Standup", TEN, 60)]
    assert find_conflicts("2025-03-10T10:30:00", 15, existing) == existing


def test_returns_only_overlapping_meetings():
    a = make_meeting("A", TEN, 60)
    b = make_meeting("B", "2025-03-10T12:00:00+05:30", 60)
    c = make_meeting("C", "2025-03-10T10:45:00+05:30", 30)
    assert find_conflicts("2025-03-10T10:30:00+05:30", 30, [a, b, c]) == [a, c]


def test_unparseable_existing_meeting_is_skipped():
    broken = make_meeting("Broken", "next tuesday-ish", 60)
    ok = make_meeting("Standup", TEN, 60)
    assert find_conflicts(TEN, 30, [broken, ok]) == [ok]


def test_out_of_range_existing_meeting_is_skipped():
    far = make_meeting("Far", "9999-12-31T23:30:00+00:00", 60)
    ok = make_meeting("Standup", TEN, 60)
    assert find_conflicts(TEN, 30, [far, ok]) == [ok]


@pytest.mark.parametrize(
    "a_start, a_len, b_start, b_len",
    [
        (TEN, 60, "2025-03-10T10:30:00+05:30", 60),
        (TEN, 120, "2025-03-10T10:15:00+05:30", 15),
        (TEN, 60, "2025-03-10T11:00:00+05:30", 30),
        (TEN, 30, "2025-03-10T14:00:00+05:30", 30),
        (TEN, 60, "2025-03-10T09:59:00+05:30", 2),
    ],
)
def test_conflict_verdict_is_symmetric(a_start, a_len, b_start, b_len):
    a = make_meeting("A", a_start, a_len)
    b = make_meeting("B", b_start, b_len)
    forward = bool(find_conflicts(a.datetime, a.duration_minutes, [b]))
    backward = bool(find_conflicts(b.datetime, b.duration_minutes, [a]))
    assert forward == backward


def test_does_not_mutate_input():
    existing = [make_meeting("Standup", TEN, 60)]
    snapshot = [m.model_copy(deep=True) for m in existing]
    find_conflicts(TEN, 30, existing)
    assert existing == snapshot
