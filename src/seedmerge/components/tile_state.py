from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

Color = Tuple[int, int, int]


@dataclass(slots=True, frozen=True)
class TileState:
    """Appearance of a tile face value."""
    value: int
    background: Color
    text_color: Color


@dataclass(slots=True)
class TileStateTable:
    """Configured tile appearances stored on a single entity.

    Lookup is by face value; a value without an entry is a configuration error
    that callers report and recover from.
    """
    states: List[TileState] = field(default_factory=list)

    @classmethod
    def from_rows(cls, rows: Iterable[Tuple[int, Color, Color]]) -> "TileStateTable":
        return cls(states=[TileState(value, background, text) for value, background, text in rows])

    def index_of(self, value: int) -> int:
        for index, state in enumerate(self.states):
            if state.value == value:
                return index
        return -1

    def state_for(self, value: int) -> Optional[TileState]:
        index = self.index_of(value)
        if index < 0:
            return None
        return self.states[index]

    def values(self) -> List[int]:
        return [state.value for state in self.states]
