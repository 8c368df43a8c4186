from dataclasses import dataclass

@dataclass(slots=True)
class ExpiringTile:
    """Marks a tile removed from the live set that still occupies its cell until deleted."""
    delay: float
