from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple

Cell = Tuple[int, int]


@dataclass(slots=True)
class Grid:
    """Fixed width x height board of cells.

    ``cells`` maps every (x, y) coordinate to the entity of the tile occupying it,
    or None when empty. Row ``y = 0`` is the top edge. The mapping is only
    mutated through the routines in ``seedmerge.systems.board_ops`` so that it
    stays in sync with each tile's BoardPosition.
    """
    width: int
    height: int
    cells: Dict[Cell, Optional[int]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.width}x{self.height}")
        if not self.cells:
            self.cells = {(x, y): None for y in range(self.height) for x in range(self.width)}

    @property
    def size(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def iter_cells(self) -> Iterator[Cell]:
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)
