"""Minimal pygame based UI helpers for headless testing.

Rendering is kept deterministic so it can be exercised in automated tests using
the SDL ``dummy`` video driver. The UI only consumes :class:`MoveOutcome`
values produced by the game and never inspects resolver internals.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from ..game import CellKind, Character, Direction, MoveOutcome, Position, PuzzleGame
from . import layout


# Pygame is only needed by the UI helpers. The import is performed lazily in
# ``ensure_pygame`` so test environments can choose the SDL drivers first.
_PYGAME = None


def ensure_pygame():
    global _PYGAME
    if _PYGAME is None:
        os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
        _PYGAME = __import__("pygame")
        _PYGAME.display.init()
        _PYGAME.font.init()
    return _PYGAME


def key_directions() -> Dict[int, Direction]:
    pygame = ensure_pygame()
    return {
        pygame.K_UP: Direction.UP,
        pygame.K_w: Direction.UP,
        pygame.K_DOWN: Direction.DOWN,
        pygame.K_s: Direction.DOWN,
        pygame.K_LEFT: Direction.LEFT,
        pygame.K_a: Direction.LEFT,
        pygame.K_RIGHT: Direction.RIGHT,
        pygame.K_d: Direction.RIGHT,
    }


@dataclass
class MoveAnimation:
    """Constant speed interpolation of one resolved move.

    Each character covers its own distance at the same speed, so the longer
    slide defines how long the move takes.
    """

    outcome: MoveOutcome
    speed: float = layout.CELLS_PER_SECOND
    elapsed: float = 0.0

    @property
    def duration(self) -> float:
        return self.outcome.resolution.duration_distance / self.speed

    @property
    def done(self) -> bool:
        return self.elapsed >= self.duration

    def advance(self, delta: float) -> bool:
        self.elapsed += max(0.0, delta)
        return self.done

    def progress(self, character: Character) -> float:
        distance = self.outcome.resolution.distance(character)
        if distance <= 0:
            return 1.0
        return min(1.0, self.elapsed * self.speed / distance)

    def position(self, character: Character) -> Tuple[float, float]:
        resolution = self.outcome.resolution
        start = resolution.starts[character]
        target = resolution.targets[character]
        t = self.progress(character)
        return (
            start[0] + (target[0] - start[0]) * t,
            start[1] + (target[1] - start[1]) * t,
        )


class PolarPairsUI:
    """Small pygame driven UI wrapper used by the app and the tests."""

    def __init__(
        self,
        game: PuzzleGame,
        *,
        cell_size: int = 32,
        surface=None,
        use_display: bool = False,
    ) -> None:
        pygame = ensure_pygame()
        self.game = game
        self.cell_size = cell_size
        width = self.game.level.width * cell_size
        height = self.game.level.height * cell_size
        self.surface = surface or pygame.Surface((width, height))
        self.screen = None
        if use_display:
            self.screen = pygame.display.set_mode((width, height))
        self.animation: Optional[MoveAnimation] = None
        self.last_outcome: Optional[MoveOutcome] = None
        self.breaking: Dict[Position, float] = {}
        self.blocked_timer = 0.0
        self.font = pygame.font.Font(pygame.font.get_default_font(), 14)

    # ------------------------------------------------------------------
    # Input handling
    def process_events(self, events: Iterable[object]) -> None:
        pygame = ensure_pygame()
        directions = key_directions()
        for event in events:
            if event.type != pygame.KEYDOWN:
                continue
            if event.key in directions:
                self.request_move(directions[event.key])
            elif event.key == pygame.K_r:
                self.restart()

    def request_move(self, direction: Direction) -> Optional[MoveOutcome]:
        if self.animation is not None:
            return None
        outcome = self.game.move(direction)
        if outcome is None:
            return None
        self.last_outcome = outcome
        self.animation = MoveAnimation(outcome)
        for position in outcome.resolution.broken:
            self.breaking[position] = layout.BREAK_DELAY
        if outcome.resolution.blocked:
            self.blocked_timer = 0.25
        return outcome

    def restart(self) -> None:
        self.game.restart()
        self.animation = None
        self.last_outcome = None
        self.breaking.clear()
        self.blocked_timer = 0.0

    def update(self, delta: float) -> None:
        for position in list(self.breaking):
            self.breaking[position] -= delta
            if self.breaking[position] <= 0:
                del self.breaking[position]
        self.blocked_timer = max(0.0, self.blocked_timer - delta)
        if self.animation is not None and self.animation.advance(delta):
            self.animation = None
            self.game.complete_move()

    @property
    def busy(self) -> bool:
        return self.animation is not None

    def character_position(self, character: Character) -> Tuple[float, float]:
        if self.animation is not None:
            return self.animation.position(character)
        x, y = self.game.positions[character]
        return float(x), float(y)

    # ------------------------------------------------------------------
    # Rendering helpers
    def render(self):
        pygame = ensure_pygame()
        self.surface.fill(layout.BACKGROUND_COLOR)
        self._draw_cells()
        self._draw_characters()
        if self.blocked_timer > 0:
            pygame.draw.rect(self.surface, layout.BLOCKED_COLOR, self.surface.get_rect(), 3)
        if self.screen:
            self.screen.blit(self.surface, (0, 0))
            pygame.display.flip()
        return self.surface

    def cell_rect(self, x: float, y: float) -> Tuple[int, int, int, int]:
        # Level coordinates grow upward, screen coordinates grow downward.
        top = (self.game.level.height - 1 - y) * self.cell_size
        return (
            int(round(x * self.cell_size)),
            int(round(top)),
            self.cell_size,
            self.cell_size,
        )

    def displayed_kind(self, position: Position) -> CellKind:
        if position in self.breaking:
            return CellKind.BREAKABLE
        kind = self.game.grid.kind_at(position)
        return kind if kind is not None else CellKind.EMPTY

    def _draw_cells(self) -> None:
        pygame = ensure_pygame()
        for x in range(self.game.grid.width):
            for y in range(self.game.grid.height):
                rect = pygame.Rect(*self.cell_rect(x, y))
                color = layout.CELL_COLORS[self.displayed_kind((x, y))]
                self.surface.fill(color, rect)
                pygame.draw.rect(self.surface, layout.GRID_LINE_COLOR, rect, 1)

    def _draw_characters(self) -> None:
        pygame = ensure_pygame()
        inset = 2 * layout.CHARACTER_INSET * self.cell_size // layout.TILE_SIZE
        for character in Character:
            x, y = self.character_position(character)
            rect = pygame.Rect(*self.cell_rect(x, y))
            inner = rect.inflate(-inset, -inset)
            pygame.draw.ellipse(self.surface, layout.CHARACTER_COLORS[character], inner)
            if self.game.finished[character]:
                pygame.draw.ellipse(self.surface, layout.ACCENT_COLOR, inner, 2)

    def status_lines(self) -> Tuple[str, ...]:
        heavy = self.game.moves[Character.HEAVY]
        light = self.game.moves[Character.LIGHT]
        lines = [
            f"{self.game.level.name}",
            f"Heavy {heavy}/{self.game.level.heavy_par}  Light {light}/{self.game.level.light_par}",
        ]
        if self.game.won:
            lines.append(f"Solved! Score {self.game.score}/3")
        return tuple(lines)


__all__ = ["MoveAnimation", "PolarPairsUI", "ensure_pygame", "key_directions"]
