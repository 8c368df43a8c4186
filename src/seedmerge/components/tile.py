from dataclasses import dataclass
from typing import Optional

from seedmerge.components.tile_state import TileState


@dataclass(slots=True)
class Tile:
    """A numbered piece on the board.

    locked: True once the tile resulted from a merge during the current sweep.
    state: appearance entry for ``value``; None when the table has no entry for it.
    """
    value: int
    locked: bool = False
    state: Optional[TileState] = None
