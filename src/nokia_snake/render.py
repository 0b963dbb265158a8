"""Plain-text rendering of game snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING

from nokia_snake.grid import CellType

if TYPE_CHECKING:
    from nokia_snake.game import Snapshot
    from nokia_snake.grid import Grid

_GLYPHS: dict[int, str] = {
    CellType.EMPTY: " ",
    CellType.SNAKE: "o",
    CellType.HEAD: "@",
    CellType.FOOD: "*",
}


def render_text(snapshot: Snapshot, grid: Grid) -> str:
    """Draw *snapshot* as a bordered ASCII board with a status line."""
    frame = grid.raster(snapshot.snake, snapshot.food)
    border = "#" * (grid.width + 2)
    rows = [border]
    for row in frame:
        rows.append("#" + "".join(_GLYPHS[int(v)] for v in row) + "#")
    rows.append(border)
    rows.append(
        f"{snapshot.status.value.upper()}  score {snapshot.score}  "
        f"hi {snapshot.high_score}  speed {snapshot.speed:g}"
    )
    return "\n".join(rows)


class TextRenderer:
    """Renderer that keeps the most recent frame as text."""

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self.last_frame: str | None = None

    def draw(self, snapshot: Snapshot) -> None:
        self.last_frame = render_text(snapshot, self.grid)
