from salon.domain.scheduling.availability import (
    CONFLICT_EXACT,
    CONFLICT_OVERLAP,
    CONFLICT_SPACING,
    MESSAGE_EXACT,
    MESSAGE_OVERLAP_ALLOWED,
    check_availability,
    classify,
    find_conflicts,
)
from salon.domain.scheduling.timeline import BookedSlot, gap_between, intervals_intersect
from salon.shared.validators import time_to_minutes


def slot(time, duration=30, status="PENDIENTE", id=None):
    return BookedSlot(id=id or f"cita-{time}", time=time, duration=duration, status=status)


def at(time):
    return time_to_minutes(time)


class TestIntervals:
    def test_touching_intervals_do_not_intersect(self):
        assert not intervals_intersect(600, 630, 630, 660)

    def test_partial_overlap_intersects(self):
        assert intervals_intersect(600, 645, 615, 645)

    def test_gap_is_symmetric(self):
        assert gap_between(600, 630, 650, 680) == 20
        assert gap_between(650, 680, 600, 630) == 20


class TestClassify:
    def test_same_start_is_exact(self):
        conflict = classify(at("10:00"), at("10:30"), slot("10:00"), 30)
        assert conflict.kind == CONFLICT_EXACT

    def test_exact_wins_over_overlap(self):
        conflict = classify(at("10:00"), at("11:00"), slot("10:00", duration=90), 30)
        assert conflict.kind == CONFLICT_EXACT

    def test_intersecting_is_overlap(self):
        conflict = classify(at("10:15"), at("10:45"), slot("10:00", duration=45), 30)
        assert conflict.kind == CONFLICT_OVERLAP
        assert conflict.gap is None

    def test_short_gap_is_spacing(self):
        conflict = classify(at("10:50"), at("11:20"), slot("10:00", duration=45), 30)
        assert conflict.kind == CONFLICT_SPACING
        assert conflict.gap == 5

    def test_gap_equal_to_interval_is_fine(self):
        assert classify(at("11:15"), at("11:45"), slot("10:00", duration=45), 30) is None

    def test_back_to_back_has_no_spacing_conflict(self):
        # Zero gap is not a spacing violation
        assert classify(at("10:30"), at("11:00"), slot("10:00"), 30) is None


class TestCheckAvailability:
    def test_empty_day_is_available(self):
        result = check_availability(at("10:00"), 30, [], 30)
        assert result.available
        assert result.conflicts == []
        assert result.overlaps == []
        assert result.message is None

    def test_exact_conflict_blocks(self):
        result = check_availability(at("10:00"), 30, [slot("10:00")], 30)
        assert not result.available
        assert [c.kind for c in result.conflicts] == [CONFLICT_EXACT]
        assert result.overlaps == []
        assert result.message == MESSAGE_EXACT

    def test_soft_overlap_blocks_when_not_allowed(self):
        result = check_availability(at("10:15"), 30, [slot("10:00", duration=45)], 30)
        assert not result.available
        assert result.conflicts == []
        assert [c.kind for c in result.overlaps] == [CONFLICT_OVERLAP]
        assert "30 minutos" in result.message

    def test_day_example(self):
        day = [slot("10:00", duration=45)]
        assert check_availability(at("10:15"), 30, day, 30).overlaps[0].kind == CONFLICT_OVERLAP
        assert check_availability(at("10:50"), 30, day, 30).overlaps[0].kind == CONFLICT_SPACING
        assert check_availability(at("11:15"), 30, day, 30).available

    def test_interval_comes_from_argument(self):
        day = [slot("10:00", duration=45)]
        assert check_availability(at("11:00"), 30, day, 10).available
        assert not check_availability(at("11:00"), 30, day, 20).available

    def test_overlap_allowed_reports_union_span(self):
        day = [slot("10:00", duration=45), slot("10:30", duration=60)]
        result = check_availability(at("10:15"), 30, day, 30, allow_overlap=True)

        assert result.available
        assert result.message == MESSAGE_OVERLAP_ALLOWED
        assert len(result.overlaps) == 2
        # 10:00 until 11:30
        assert result.total_occupied == 90

    def test_overlap_allowed_keeps_exact_conflicts_listed(self):
        result = check_availability(at("10:00"), 30, [slot("10:00")], 30, allow_overlap=True)
        assert result.available
        assert [c.kind for c in result.conflicts] == [CONFLICT_EXACT]
        assert result.total_occupied == 30

    def test_spacing_only_does_not_extend_span(self):
        result = check_availability(at("10:50"), 30, [slot("10:00", duration=45)], 30, allow_overlap=True)
        assert result.available
        assert result.total_occupied == 30

    def test_same_input_same_result(self):
        day = [slot("09:00"), slot("10:00", duration=45), slot("12:00")]
        first = check_availability(at("10:15"), 30, day, 30)
        second = check_availability(at("10:15"), 30, day, 30)
        assert first == second


def test_find_conflicts_is_ordered_by_start():
    day = [slot("12:10", duration=60), slot("11:00", duration=60), slot("11:40")]
    conflicts = find_conflicts(at("11:30"), 30, day, 30)
    assert [c.slot.time for c in conflicts] == ["11:00", "11:40", "12:10"]
