from __future__ import annotations

from polar_pairs.game import CellKind, Character, Direction, Level, PuzzleGame
from polar_pairs.ui import PolarPairsUI, layout


def make_ui(pygame) -> PolarPairsUI:
    level = Level(
        name="Render",
        width=4,
        height=3,
        heavy_start=(1, 1),
        light_start=(2, 1),
        walls=[(0, 0)],
        heavy_finish=[(3, 2)],
        light_lanes=[(3, 0)],
    )
    return PolarPairsUI(PuzzleGame(level), cell_size=32, surface=pygame.Surface((128, 96)))


def pixel(surface, x: int, y: int):
    return tuple(surface.get_at((x, y)))[:3]


def test_render_returns_board_sized_surface(pygame_module):
    ui = make_ui(pygame_module)

    surface = ui.render()

    assert surface.get_size() == (128, 96)


def test_cells_are_drawn_with_bottom_row_at_bottom(pygame_module):
    ui = make_ui(pygame_module)

    surface = ui.render()

    assert ui.cell_rect(0, 0) == (0, 64, 32, 32)
    assert pixel(surface, 16, 80) == layout.CELL_COLORS[CellKind.WALL]
    assert pixel(surface, 112, 16) == layout.CELL_COLORS[CellKind.HEAVY_FINISH]
    assert pixel(surface, 112, 80) == layout.CELL_COLORS[CellKind.LIGHT_ONLY]
    assert pixel(surface, 48, 80) == layout.CELL_COLORS[CellKind.EMPTY]


def test_characters_are_drawn_on_their_cells(pygame_module):
    ui = make_ui(pygame_module)

    surface = ui.render()

    assert pixel(surface, 48, 48) == layout.CHARACTER_COLORS[Character.HEAVY]
    assert pixel(surface, 80, 48) == layout.CHARACTER_COLORS[Character.LIGHT]


def test_blocked_move_draws_border(pygame_module):
    ui = make_ui(pygame_module)
    ui.request_move(Direction.DOWN)
    ui.update(1.0)
    ui.request_move(Direction.DOWN)

    surface = ui.render()

    assert pixel(surface, 1, 1) == layout.BLOCKED_COLOR


def test_compute_geometry_places_status_below_board():
    geometry = layout.compute_geometry(7, 11, 64)

    assert geometry.board == (32, 32, 448, 704)
    assert geometry.status == (32, 752, 448, 96)
    assert geometry.window == (512, 880)
