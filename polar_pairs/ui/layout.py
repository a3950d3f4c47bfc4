"""Layout constants for the puzzle UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from ..game import CellKind, Character

# Tile metrics
TILE_SIZE: int = 64
BOARD_OUTER_PADDING: int = 32
STATUS_HEIGHT: int = 96
CHARACTER_INSET: int = 8

# Movement animation
CELLS_PER_SECOND: float = 15.0
BREAK_DELAY: float = 0.2

# Colors expressed as RGB tuples
BACKGROUND_COLOR: Tuple[int, int, int] = (12, 14, 26)
GRID_LINE_COLOR: Tuple[int, int, int] = (58, 64, 96)
TEXT_COLOR: Tuple[int, int, int] = (232, 236, 244)
ACCENT_COLOR: Tuple[int, int, int] = (255, 94, 0)
BLOCKED_COLOR: Tuple[int, int, int] = (200, 60, 70)

CELL_COLORS: Dict[CellKind, Tuple[int, int, int]] = {
    CellKind.EMPTY: (20, 24, 44),
    CellKind.PASSABLE: (20, 24, 44),
    CellKind.INVISIBLE: (20, 24, 44),
    CellKind.WALL: (96, 104, 132),
    CellKind.HEAVY_ONLY: (118, 88, 60),
    CellKind.LIGHT_ONLY: (50, 96, 140),
    CellKind.HEAVY_FINISH: (220, 170, 90),
    CellKind.LIGHT_FINISH: (110, 190, 250),
    CellKind.BREAKABLE: (170, 220, 240),
}

CHARACTER_COLORS: Dict[Character, Tuple[int, int, int]] = {
    Character.HEAVY: (245, 245, 240),
    Character.LIGHT: (70, 80, 110),
}


@dataclass(frozen=True)
class BoardGeometry:
    """Pixel rectangles for the major UI regions."""

    board: Tuple[int, int, int, int]
    status: Tuple[int, int, int, int]
    window: Tuple[int, int]


def compute_geometry(level_width: int, level_height: int, tile_size: int = TILE_SIZE) -> BoardGeometry:
    """Compute the rectangles used to render a level of the given size."""

    board_width = level_width * tile_size
    board_height = level_height * tile_size

    board_x = BOARD_OUTER_PADDING
    board_y = BOARD_OUTER_PADDING

    status_y = board_y + board_height + BOARD_OUTER_PADDING // 2

    window_width = board_x + board_width + BOARD_OUTER_PADDING
    window_height = status_y + STATUS_HEIGHT + BOARD_OUTER_PADDING

    return BoardGeometry(
        board=(board_x, board_y, board_width, board_height),
        status=(board_x, status_y, board_width, STATUS_HEIGHT),
        window=(window_width, window_height),
    )
