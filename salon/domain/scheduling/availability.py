"""
Availability Checker

Classifies a candidate appointment against the day's booked slots:
- exacto: same start time as an existing appointment
- solapamiento: occupied intervals intersect
- intervalo_insuficiente: no intersection, but the gap is shorter than the configured interval
"""

from dataclasses import dataclass, field
from typing import Optional

from .timeline import BookedSlot, gap_between, intervals_intersect

CONFLICT_EXACT = "exacto"
CONFLICT_OVERLAP = "solapamiento"
CONFLICT_SPACING = "intervalo_insuficiente"

MESSAGE_EXACT = "Ya hay una cita programada para esa fecha y hora"
MESSAGE_OVERLAP = "El horario se superpone con otras citas o no respeta el intervalo de {interval} minutos"
MESSAGE_OVERLAP_ALLOWED = "Horario disponible con superposición permitida"


@dataclass(frozen=True)
class Conflict:
    slot: BookedSlot
    kind: str
    gap: Optional[int] = None

    def to_dict(self) -> dict:
        data = self.slot.to_dict()
        data["tipo"] = self.kind
        if self.gap is not None:
            data["separacion"] = self.gap
        return data


@dataclass
class AvailabilityResult:
    available: bool
    duration: int
    interval: int
    conflicts: list[Conflict] = field(default_factory=list)
    overlaps: list[Conflict] = field(default_factory=list)
    total_occupied: Optional[int] = None
    message: Optional[str] = None


def classify(start: int, end: int, slot: BookedSlot, interval: int) -> Optional[Conflict]:
    """Return the single conflict kind between the candidate and one slot, if any"""
    if slot.start == start:
        return Conflict(slot=slot, kind=CONFLICT_EXACT)

    if intervals_intersect(start, end, slot.start, slot.end):
        return Conflict(slot=slot, kind=CONFLICT_OVERLAP)

    gap = gap_between(start, end, slot.start, slot.end)
    if 0 < gap < interval:
        return Conflict(slot=slot, kind=CONFLICT_SPACING, gap=gap)

    return None


def find_conflicts(start: int, duration: int, day: list[BookedSlot], interval: int) -> list[Conflict]:
    """Classify every booked slot of the day, ordered by start time"""
    end = start + duration
    conflicts = []
    for slot in sorted(day, key=lambda s: (s.start, s.id)):
        conflict = classify(start, end, slot, interval)
        if conflict is not None:
            conflicts.append(conflict)
    return conflicts


def occupied_span(start: int, duration: int, conflicts: list[Conflict]) -> int:
    """Union span max(end) - min(start) of the candidate and every intersecting slot"""
    intersecting = [c.slot for c in conflicts if c.kind != CONFLICT_SPACING]
    starts = [start] + [s.start for s in intersecting]
    ends = [start + duration] + [s.end for s in intersecting]
    return max(ends) - min(starts)


def check_availability(
    start: int,
    duration: int,
    day: list[BookedSlot],
    interval: int,
    allow_overlap: bool = False,
) -> AvailabilityResult:
    """
    Decide whether a candidate [start, start + duration) fits in the day.

    Exact conflicts win over overlaps and spacing violations. When overlap is
    allowed the candidate is always available and the union span of the
    intersecting appointments is echoed back.
    """
    conflicts = find_conflicts(start, duration, day, interval)
    exact = [c for c in conflicts if c.kind == CONFLICT_EXACT]
    soft = [c for c in conflicts if c.kind != CONFLICT_EXACT]

    if not allow_overlap:
        if exact:
            return AvailabilityResult(
                available=False,
                duration=duration,
                interval=interval,
                conflicts=exact,
                message=MESSAGE_EXACT,
            )
        if soft:
            return AvailabilityResult(
                available=False,
                duration=duration,
                interval=interval,
                overlaps=soft,
                message=MESSAGE_OVERLAP.format(interval=interval),
            )
        return AvailabilityResult(available=True, duration=duration, interval=interval)

    if not conflicts:
        return AvailabilityResult(available=True, duration=duration, interval=interval)

    return AvailabilityResult(
        available=True,
        duration=duration,
        interval=interval,
        conflicts=exact,
        overlaps=soft,
        total_occupied=occupied_span(start, duration, conflicts),
        message=MESSAGE_OVERLAP_ALLOWED,
    )
