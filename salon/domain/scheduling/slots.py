"""
Slot Suggester

Greedy forward scan over the business window at interval granularity. Every
candidate is assumed to occupy a default-length block, so services longer or
shorter than that block may still collide once actually booked.
"""

from ...shared.validators import minutes_to_time, time_to_minutes
from .availability import find_conflicts
from .timeline import BookedSlot, SchedulingPolicy


def suggest_slots(day: list[BookedSlot], policy: SchedulingPolicy) -> list[str]:
    """
    Propose free start times (HH:MM), earliest first.

    A candidate is kept when it intersects no booked slot and leaves at least
    `policy.interval` minutes on both sides. Start times run from the window
    start up to and including the window end.
    """
    window_start = time_to_minutes(policy.suggestion_start)
    window_end = time_to_minutes(policy.suggestion_end)
    step = policy.interval if policy.interval > 0 else policy.default_duration
    block = policy.default_duration

    suggestions = []
    candidate = window_start
    while candidate <= window_end and len(suggestions) < policy.max_suggestions:
        if not find_conflicts(candidate, block, day, policy.interval):
            suggestions.append(minutes_to_time(candidate))
        candidate += step

    return suggestions
