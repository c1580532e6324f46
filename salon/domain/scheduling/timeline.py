"""Day window types shared by the availability, slot and occupancy calculations"""

from dataclasses import dataclass
from typing import Optional

from ... import config
from ...shared.validators import minutes_to_time, time_to_minutes


@dataclass(frozen=True)
class SchedulingPolicy:
    """Business-window constants used by the scheduling engine"""

    interval: int = config.APPOINTMENT_INTERVAL_MINUTES
    default_duration: int = config.DEFAULT_SERVICE_DURATION
    suggestion_start: str = config.SUGGESTION_WINDOW_START
    suggestion_end: str = config.SUGGESTION_WINDOW_END
    max_suggestions: int = config.MAX_SUGGESTIONS
    occupancy_start: str = config.OCCUPANCY_WINDOW_START
    occupancy_end: str = config.OCCUPANCY_WINDOW_END
    occupancy_step: int = config.OCCUPANCY_SLOT_MINUTES
    utilization_slots: int = config.UTILIZATION_SLOTS


@dataclass(frozen=True)
class BookedSlot:
    """An appointment projected onto the day as minutes since midnight"""

    id: str
    time: str
    duration: int
    status: str
    client_name: str = ""
    service_label: Optional[str] = None
    price: Optional[float] = None

    @property
    def start(self) -> int:
        return time_to_minutes(self.time)

    @property
    def end(self) -> int:
        return self.start + self.duration

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "cliente": self.client_name,
            "servicio": self.service_label,
            "hora": self.time,
            "horaFin": minutes_to_time(self.end),
            "duracion": self.duration,
            "estado": self.status,
        }


def intervals_intersect(start: int, end: int, other_start: int, other_end: int) -> bool:
    """Half-open [start, end) intersection"""
    return start < other_end and other_start < end


def gap_between(start: int, end: int, other_start: int, other_end: int) -> int:
    """Minutes separating two non-intersecting intervals"""
    if other_start >= end:
        return other_start - end
    return start - other_end
