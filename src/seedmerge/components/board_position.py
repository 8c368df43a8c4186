from dataclasses import dataclass

@dataclass(slots=True)
class BoardPosition:
    x: int
    y: int

    @property
    def cell(self) -> tuple[int, int]:
        return (self.x, self.y)
