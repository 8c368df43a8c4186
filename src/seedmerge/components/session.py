from dataclasses import dataclass

@dataclass(slots=True)
class Session:
    """Score keeping and the pre-selected value of the next spawned tile."""
    score: int = 0
    high_score: int = 0
    next_value: int = 2
