from __future__ import annotations

from seedmerge.components.spawn_streak import SpawnStreak
from seedmerge.constants import MAX_SPAWN_STREAK, SEED_VALUES


def opposite_seed(value: int) -> int:
    first, second = SEED_VALUES
    return second if value == first else first


def select_spawn_value(streak: SpawnStreak, requested: int, *, max_streak: int = MAX_SPAWN_STREAK) -> int:
    """Return the value actually spawned for ``requested`` and update ``streak``.

    The request comes from the session's independent pre-roll. A run of
    ``max_streak`` identical spawns arms ``force_next``; the following spawn
    then takes the other seed regardless of the request.
    """
    if streak.force_next:
        value = opposite_seed(streak.last_value)
        streak.force_next = False
        # The forced spawn is the first of a new run.
        streak.streak = 1
        streak.last_value = value
        return value

    if requested == streak.last_value:
        streak.streak += 1
        if streak.streak >= max_streak:
            streak.force_next = True
            streak.streak = 0
    else:
        streak.last_value = requested
        streak.streak = 1
    return requested
