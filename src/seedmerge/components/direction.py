from enum import Enum
from typing import Tuple


class Direction(Enum):
    """Unit step of a sweep; ``y`` grows downward, so UP is (0, -1)."""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def step(self, cell: Tuple[int, int]) -> Tuple[int, int]:
        return (cell[0] + self.dx, cell[1] + self.dy)


NEIGHBOUR_DIRECTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)
