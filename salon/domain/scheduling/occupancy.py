"""
Occupancy Reporter

Aggregates a day's appointments (cancelled included) into statistics,
same-time conflicts and the free half-hour listing.
"""

import math
from collections import defaultdict

from ...models import (
    ACTIVE_STATUSES,
    APPOINTMENT_STATUSES,
    STATUS_CANCELLED,
    STATUS_DONE,
)
from ...shared.validators import minutes_to_time, time_to_minutes
from .timeline import BookedSlot, SchedulingPolicy


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def build_statistics(day: list[BookedSlot]) -> dict:
    by_status = {status: 0 for status in APPOINTMENT_STATUSES}
    for slot in day:
        by_status[slot.status] = by_status.get(slot.status, 0) + 1

    return {
        "totalCitas": len(day),
        "citasPorEstado": by_status,
        "ingresosTotales": sum(s.price or 0 for s in day if s.status == STATUS_DONE),
        "ingresosEstimados": sum(s.price or 0 for s in day if s.status in ACTIVE_STATUSES),
        "tiempoTotalOcupado": sum(s.duration for s in day if s.status != STATUS_CANCELLED),
    }


def find_time_conflicts(day: list[BookedSlot]) -> list[dict]:
    """Every time of day shared by more than one non-cancelled appointment"""
    by_time = defaultdict(list)
    for slot in day:
        if slot.status != STATUS_CANCELLED:
            by_time[slot.time].append(slot)

    conflicts = []
    for time_of_day in sorted(by_time):
        slots = by_time[time_of_day]
        if len(slots) > 1:
            conflicts.append(
                {
                    "hora": time_of_day,
                    "cantidad": len(slots),
                    "citas": [
                        {
                            "id": s.id,
                            "cliente": s.client_name,
                            "servicio": s.service_label,
                            "estado": s.status,
                        }
                        for s in slots
                    ],
                }
            )
    return conflicts


def free_slots(day: list[BookedSlot], policy: SchedulingPolicy) -> list[str]:
    """Fixed-step start times in the occupancy window not taken by a non-cancelled appointment"""
    taken = {s.time for s in day if s.status != STATUS_CANCELLED}
    start = time_to_minutes(policy.occupancy_start)
    end = time_to_minutes(policy.occupancy_end)

    return [
        minutes_to_time(minute)
        for minute in range(start, end + 1, policy.occupancy_step)
        if minutes_to_time(minute) not in taken
    ]


def build_occupancy_report(day: list[BookedSlot], policy: SchedulingPolicy) -> dict:
    """Statistics, conflicts, free slots and summary percentages for one day"""
    statistics = build_statistics(day)
    active_count = sum(1 for s in day if s.status != STATUS_CANCELLED)
    total = statistics["totalCitas"]

    utilization = 0
    if policy.utilization_slots > 0:
        utilization = int(round_half_up(active_count / policy.utilization_slots * 100))

    efficiency = 0
    if total > 0:
        efficiency = int(round_half_up(statistics["citasPorEstado"][STATUS_DONE] / total * 100))

    return {
        "estadisticas": statistics,
        "conflictos": find_time_conflicts(day),
        "horariosDisponibles": free_slots(day, policy),
        "resumen": {
            "ocupacionPorcentaje": utilization,
            "horasOcupadas": round_half_up(statistics["tiempoTotalOcupado"] / 60, 1),
            "eficiencia": efficiency,
        },
    }
