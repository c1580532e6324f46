from dataclasses import replace

from salon.domain.scheduling.slots import suggest_slots
from salon.domain.scheduling.timeline import BookedSlot, SchedulingPolicy
from salon.shared.validators import time_to_minutes

POLICY = SchedulingPolicy(
    interval=30,
    default_duration=30,
    suggestion_start="09:00",
    suggestion_end="20:00",
    max_suggestions=8,
)


def slot(time, duration=30):
    return BookedSlot(id=f"cita-{time}", time=time, duration=duration, status="CONFIRMADA")


def test_empty_day_starts_at_opening():
    assert suggest_slots([], POLICY) == [
        "09:00", "09:30", "10:00", "10:30", "11:00", "11:30", "12:00", "12:30",
    ]


def test_back_to_back_start_is_suggested():
    suggestions = suggest_slots([slot("09:00")], POLICY)
    assert suggestions[0] == "09:30"
    assert "09:00" not in suggestions


def test_skips_occupied_and_short_gaps():
    day = [slot("09:00", duration=45), slot("11:00", duration=60)]
    suggestions = suggest_slots(day, POLICY)

    # 09:30 overlaps, 10:00 leaves a 15 minute gap, 10:30 ends right at 11:00
    assert suggestions[:3] == ["10:30", "12:00", "12:30"]


def test_window_end_is_inclusive():
    policy = replace(POLICY, suggestion_start="19:00", max_suggestions=20)
    assert suggest_slots([], policy) == ["19:00", "19:30", "20:00"]


def test_capped_at_max_suggestions():
    policy = replace(POLICY, max_suggestions=3)
    assert len(suggest_slots([], policy)) == 3


def test_step_follows_interval():
    policy = replace(POLICY, interval=60)
    assert suggest_slots([], policy)[:3] == ["09:00", "10:00", "11:00"]


def test_suggestions_never_collide_with_booked_slots():
    day = [slot("09:30"), slot("10:15", duration=90), slot("13:00", duration=120), slot("16:45")]
    suggestions = suggest_slots(day, replace(POLICY, max_suggestions=30))

    assert suggestions == sorted(suggestions)
    for suggestion in suggestions:
        start = time_to_minutes(suggestion)
        end = start + POLICY.default_duration
        assert time_to_minutes("09:00") <= start <= time_to_minutes("20:00")
        for booked in day:
            assert not (start < booked.end and booked.start < end)
            if start >= booked.end:
                assert start - booked.end == 0 or start - booked.end >= POLICY.interval
            elif end <= booked.start:
                assert booked.start - end == 0 or booked.start - end >= POLICY.interval
