from dataclasses import dataclass, field
from typing import Any, Dict

@dataclass(slots=True)
class ScheduledEvent:
    """A bus event deferred until ``remaining`` seconds of ticks have elapsed.

    ``sequence`` orders events that fall due together (FIFO by scheduling order).
    """
    event: str
    remaining: float
    sequence: int
    payload: Dict[str, Any] = field(default_factory=dict)
