from dataclasses import dataclass

@dataclass(slots=True)
class SpawnStreak:
    """Bookkeeping for anti-streak spawn forcing."""
    last_value: int = -1
    streak: int = 0
    force_next: bool = False
