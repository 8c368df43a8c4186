from dataclasses import dataclass

@dataclass(slots=True)
class Board:
    """Board-wide flags.

    waiting: a changed sweep is settling; direction input is dropped meanwhile.
    game_over: the terminal state was reported; direction input is ignored.
    generation: bumped on every clear so settle events from an older board are stale.
    """
    waiting: bool = False
    game_over: bool = False
    generation: int = 0
