"""Core simulation for the two-character sliding puzzle."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple, Union

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

DEFAULT_WIDTH = 7
DEFAULT_HEIGHT = 11
MAX_SCORE = 3


class PuzzleError(Exception):
    """Base class for errors raised by the puzzle core."""


class LevelError(PuzzleError, ValueError):
    """Raised when a level description cannot be turned into a playable grid."""


class InvariantViolation(PuzzleError, AssertionError):
    """Raised when a resolution breaks a positional invariant."""


class Direction(Enum):
    """Axis aligned move directions. ``y`` grows upward."""

    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def vector(self) -> Tuple[int, int]:
        return self.value

    @property
    def horizontal(self) -> bool:
        return self.value[0] != 0

    @staticmethod
    def from_name(name: str) -> "Direction":
        name = name.upper()
        try:
            return Direction[name]
        except KeyError as exc:
            raise ValueError(f"Unknown direction: {name}") from exc

    def reverse(self) -> "Direction":
        mapping = {
            Direction.UP: Direction.DOWN,
            Direction.DOWN: Direction.UP,
            Direction.LEFT: Direction.RIGHT,
            Direction.RIGHT: Direction.LEFT,
        }
        return mapping[self]

    def step(self, position: Position) -> Position:
        return position[0] + self.value[0], position[1] + self.value[1]


class CellKind(Enum):
    """Closed set of cell types. Values match the level codes of the original game."""

    EMPTY = 0
    WALL = 1
    HEAVY_ONLY = 2
    LIGHT_ONLY = 3
    HEAVY_FINISH = 4
    LIGHT_FINISH = 5
    BREAKABLE = 6
    INVISIBLE = 7
    PASSABLE = 8


class Character(Enum):
    """The two movers. Each owns one lane kind and one finish kind."""

    HEAVY = "heavy"
    LIGHT = "light"

    @property
    def other(self) -> "Character":
        return Character.LIGHT if self is Character.HEAVY else Character.HEAVY

    @property
    def finish_kind(self) -> CellKind:
        if self is Character.HEAVY:
            return CellKind.HEAVY_FINISH
        return CellKind.LIGHT_FINISH

    @property
    def lane_kinds(self) -> FrozenSet[CellKind]:
        """Kinds reserved for this character (lane plus finish)."""
        if self is Character.HEAVY:
            return frozenset({CellKind.HEAVY_ONLY, CellKind.HEAVY_FINISH})
        return frozenset({CellKind.LIGHT_ONLY, CellKind.LIGHT_FINISH})

    def can_enter(self, kind: Optional[CellKind]) -> bool:
        if kind is None or kind in (CellKind.WALL, CellKind.INVISIBLE):
            return False
        return kind not in self.other.lane_kinds


class Grid:
    """Fixed size two dimensional array of cell kinds."""

    def __init__(self, width: int, height: int, fill: CellKind = CellKind.EMPTY):
        if width <= 0 or height <= 0:
            raise LevelError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._cells: List[List[CellKind]] = [[fill] * height for _ in range(width)]

    def inside(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Optional[CellKind]:
        if not self.inside((x, y)):
            return None
        return self._cells[x][y]

    def set(self, x: int, y: int, kind: CellKind) -> None:
        if not self.inside((x, y)):
            raise IndexError(f"Cell {(x, y)} is outside a {self.width}x{self.height} grid")
        self._cells[x][y] = kind

    def kind_at(self, position: Position) -> Optional[CellKind]:
        return self.get(position[0], position[1])

    def positions_of(self, kind: CellKind) -> List[Position]:
        return [
            (x, y)
            for x in range(self.width)
            for y in range(self.height)
            if self._cells[x][y] is kind
        ]

    def snapshot(self) -> Tuple[Tuple[CellKind, ...], ...]:
        return tuple(tuple(column) for column in self._cells)


@dataclass
class Level:
    """In-memory representation of a level definition."""

    name: str
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    heavy_start: Optional[Position] = None
    light_start: Optional[Position] = None
    walls: List[Position] = field(default_factory=list)
    invisible: List[Position] = field(default_factory=list)
    heavy_lanes: List[Position] = field(default_factory=list)
    light_lanes: List[Position] = field(default_factory=list)
    heavy_finish: List[Position] = field(default_factory=list)
    light_finish: List[Position] = field(default_factory=list)
    breakable: List[Position] = field(default_factory=list)
    heavy_par: int = 0
    light_par: int = 0
    level_id: str = ""

    @property
    def metadata(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "level_id": self.level_id or self.name,
            "dimensions": f"{self.width}x{self.height}",
            "par": {"heavy": self.heavy_par, "light": self.light_par},
        }

    def inside(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def start(self, character: Character) -> Position:
        start = self.heavy_start if character is Character.HEAVY else self.light_start
        if start is None:
            raise LevelError(f"Level {self.name!r} has no {character.value} start position")
        return start

    def finish_tiles(self, character: Character) -> Set[Position]:
        tiles = self.heavy_finish if character is Character.HEAVY else self.light_finish
        return set(tiles)

    def par(self, character: Character) -> int:
        return self.heavy_par if character is Character.HEAVY else self.light_par

    def _layers(self) -> Sequence[Tuple[CellKind, List[Position]]]:
        # Later layers win when two lists name the same cell.
        return (
            (CellKind.WALL, self.walls),
            (CellKind.INVISIBLE, self.invisible),
            (CellKind.HEAVY_ONLY, self.heavy_lanes),
            (CellKind.LIGHT_ONLY, self.light_lanes),
            (CellKind.HEAVY_FINISH, self.heavy_finish),
            (CellKind.LIGHT_FINISH, self.light_finish),
            (CellKind.BREAKABLE, self.breakable),
        )

    def validate(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise LevelError(
                f"Level {self.name!r} has a zero-sized grid ({self.width}x{self.height})"
            )
        heavy = self.start(Character.HEAVY)
        light = self.start(Character.LIGHT)
        for character, position in ((Character.HEAVY, heavy), (Character.LIGHT, light)):
            if not self.inside(position):
                raise LevelError(
                    f"{character.value} start {position} lies outside level {self.name!r}"
                )
        if heavy == light:
            raise LevelError(f"Both characters start on {heavy} in level {self.name!r}")
        for kind, positions in self._layers():
            for position in positions:
                if not self.inside(position):
                    raise LevelError(
                        f"{kind.name.lower()} tile {position} lies outside level {self.name!r}"
                    )
        if self.heavy_par < 0 or self.light_par < 0:
            raise LevelError(f"Par values must not be negative in level {self.name!r}")
        grid = self.build_grid()
        for character, position in ((Character.HEAVY, heavy), (Character.LIGHT, light)):
            if not character.can_enter(grid.kind_at(position)):
                raise LevelError(
                    f"{character.value} start {position} is on a "
                    f"{grid.kind_at(position).name.lower()} tile"
                )

    def build_grid(self) -> Grid:
        """Translate the descriptor into a fresh grid."""
        grid = Grid(self.width, self.height)
        for kind, positions in self._layers():
            for x, y in positions:
                grid.set(x, y, kind)
        return grid


LAYOUT_SYMBOLS: Dict[str, str] = {
    "X": "walls",
    "I": "invisible",
    "&": "heavy_lanes",
    "$": "light_lanes",
    "*": "heavy_finish",
    "^": "light_finish",
    "!": "breakable",
}


def _coerce_position(value: object, label: str) -> Position:
    try:
        x, y = value  # type: ignore[misc]
        return int(x), int(y)
    except (TypeError, ValueError) as exc:
        raise LevelError(f"Invalid {label} position: {value!r}") from exc


class LevelLoader:
    """Load level files stored as JSON."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def load(self, name: str) -> Level:
        path = self.root / f"{name}.json"
        if not path.exists():
            raise FileNotFoundError(path)
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError as exc:
            raise LevelError(f"Level file {path} is not valid JSON: {exc}") from exc
        level = self._parse_level(data, name)
        level.validate()
        logger.debug("Loaded level %s (%s)", name, level.name)
        return level

    def available(self) -> List[str]:
        """Level names ordered by their numeric suffix (level_2 before level_10)."""
        if not self.root.exists():
            return []
        names = [path.stem for path in self.root.glob("*.json")]
        return sorted(names, key=lambda name: (self._extract_level_number(name), name))

    @staticmethod
    def _extract_level_number(name: str) -> int:
        try:
            return int(name.rsplit("_", 1)[-1])
        except (ValueError, IndexError):
            return 999

    def _parse_level(self, data: Dict, name: str) -> Level:
        if not isinstance(data, dict):
            raise LevelError(f"Level {name!r} must be a JSON object")
        par = data.get("par", {})
        try:
            level = Level(
                name=str(data.get("name", name)),
                width=int(data.get("width", DEFAULT_WIDTH)),
                height=int(data.get("height", DEFAULT_HEIGHT)),
                heavy_par=int(par.get("heavy", 0)),
                light_par=int(par.get("light", 0)),
                level_id=name,
            )
        except (TypeError, ValueError, AttributeError) as exc:
            raise LevelError(f"Level {name!r} has malformed header fields: {exc}") from exc
        if data.get("heavy_start") is not None:
            level.heavy_start = _coerce_position(data["heavy_start"], "heavy_start")
        if data.get("light_start") is not None:
            level.light_start = _coerce_position(data["light_start"], "light_start")
        for attribute in LAYOUT_SYMBOLS.values():
            entries = data.get(attribute, [])
            if not isinstance(entries, list):
                raise LevelError(f"Level {name!r} field {attribute!r} must be a list")
            for entry in entries:
                getattr(level, attribute).append(_coerce_position(entry, attribute))
        layout = data.get("layout")
        if layout is not None:
            if not isinstance(layout, list) or not all(isinstance(row, str) for row in layout):
                raise LevelError(f"Level {name!r} field 'layout' must be a list of strings")
            self._parse_layout(level, layout)
        return level

    @staticmethod
    def _parse_layout(level: Level, rows: Iterable[str]) -> None:
        # The first row is the top of the board, so it maps to the largest y.
        rows = list(rows)
        if len(rows) > level.height:
            raise LevelError(
                f"Layout of {level.name!r} has {len(rows)} rows for height {level.height}"
            )
        for row_index, row in enumerate(rows):
            y = level.height - row_index - 1
            if len(row) > level.width:
                raise LevelError(
                    f"Layout row {row_index} of {level.name!r} is wider than {level.width}"
                )
            for x, symbol in enumerate(row):
                if symbol == ".":
                    continue
                if symbol == "B":
                    level.heavy_start = (x, y)
                elif symbol == "S":
                    level.light_start = (x, y)
                elif symbol in LAYOUT_SYMBOLS:
                    getattr(level, LAYOUT_SYMBOLS[symbol]).append((x, y))
                else:
                    raise LevelError(
                        f"Unknown layout symbol {symbol!r} at {(x, y)} in {level.name!r}"
                    )


class BreakableTracker:
    """Owns the record of breakable cells and flips them once consumed."""

    def __init__(self, grid: Grid):
        self.grid = grid
        self.remaining: Set[Position] = set(grid.positions_of(CellKind.BREAKABLE))
        self._broken: List[Position] = []

    def consume(self, position: Position) -> bool:
        if self.grid.kind_at(position) is not CellKind.BREAKABLE:
            return False
        self.grid.set(position[0], position[1], CellKind.PASSABLE)
        self.remaining.discard(position)
        self._broken.append(position)
        logger.debug("Breakable tile %s consumed", position)
        return True

    def drain(self) -> Tuple[Position, ...]:
        broken = tuple(self._broken)
        self._broken.clear()
        return broken


@dataclass(frozen=True)
class Squeeze:
    """The front character is pushed backward while the rear advances."""

    front: Character
    breaks: Optional[Position] = None


@dataclass(frozen=True)
class Standard:
    """Both characters slide forward, front first."""

    front: Character


MovePlan = Union[Squeeze, Standard]


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one directional input."""

    direction: Direction
    starts: Dict[Character, Position]
    targets: Dict[Character, Position]
    squeeze: bool = False
    pushed: Optional[Character] = None
    broken: Tuple[Position, ...] = ()

    @property
    def heavy_target(self) -> Position:
        return self.targets[Character.HEAVY]

    @property
    def light_target(self) -> Position:
        return self.targets[Character.LIGHT]

    def moved(self, character: Character) -> bool:
        return self.targets[character] != self.starts[character]

    @property
    def blocked(self) -> bool:
        return not any(self.moved(character) for character in Character)

    @property
    def both_moved(self) -> bool:
        return all(self.distance(character) > 0 for character in Character)

    def distance(self, character: Character) -> float:
        start = self.starts[character]
        target = self.targets[character]
        return math.hypot(target[0] - start[0], target[1] - start[1])

    @property
    def duration_distance(self) -> float:
        return max(self.distance(character) for character in Character)


class MovementResolver:
    """Computes both characters' targets for a single directional input."""

    def __init__(self, grid: Grid, tracker: BreakableTracker):
        self.grid = grid
        self.tracker = tracker

    def anchored(self, character: Character, position: Position) -> bool:
        return self.grid.kind_at(position) in character.lane_kinds

    def plan(
        self,
        positions: Dict[Character, Position],
        direction: Direction,
    ) -> MovePlan:
        heavy = positions[Character.HEAVY]
        light = positions[Character.LIGHT]
        dx = heavy[0] - light[0]
        dy = heavy[1] - light[1]
        along = dx if direction.horizontal else dy
        across = dy if direction.horizontal else dx
        if abs(along) == 1 and across == 0:
            step = direction.vector[0] if direction.horizontal else direction.vector[1]
            front = Character.HEAVY if along * step > 0 else Character.LIGHT
            ahead = direction.step(positions[front])
            kind = self.grid.kind_at(ahead)
            breaks = ahead if kind is CellKind.BREAKABLE else None
            blocked = breaks is not None or not front.can_enter(kind)
            if blocked and not any(
                self.anchored(character, positions[character]) for character in Character
            ):
                return Squeeze(front=front, breaks=breaks)
        return Standard(front=self._front_by_coordinate(heavy, light, direction))

    @staticmethod
    def _front_by_coordinate(heavy: Position, light: Position, direction: Direction) -> Character:
        axis = 0 if direction.horizontal else 1
        sign = direction.vector[axis]
        if sign > 0:
            heavy_front = heavy[axis] > light[axis]
        else:
            heavy_front = heavy[axis] < light[axis]
        return Character.HEAVY if heavy_front else Character.LIGHT

    @staticmethod
    def _passes_through(current: Position, nxt: Position, other: Position) -> bool:
        if current[0] == nxt[0] == other[0]:
            low, high = sorted((current[1], nxt[1]))
            return low < other[1] < high
        if current[1] == nxt[1] == other[1]:
            low, high = sorted((current[0], nxt[0]))
            return low < other[0] < high
        return False

    def slide(
        self,
        start: Position,
        character: Character,
        direction: Direction,
        obstacle: Optional[Position] = None,
    ) -> Position:
        current = start
        while True:
            nxt = direction.step(current)
            kind = self.grid.kind_at(nxt)
            if not character.can_enter(kind):
                break
            if obstacle is not None and (
                nxt == obstacle or self._passes_through(current, nxt, obstacle)
            ):
                break
            current = nxt
            if kind is character.finish_kind:
                break
            if kind is CellKind.BREAKABLE:
                self.tracker.consume(nxt)
        return current

    def resolve(
        self,
        heavy: Position,
        light: Position,
        direction: Direction,
        *,
        heavy_finished: bool = False,
        light_finished: bool = False,
    ) -> Resolution:
        starts = {Character.HEAVY: heavy, Character.LIGHT: light}
        finished = {Character.HEAVY: heavy_finished, Character.LIGHT: light_finished}
        targets = dict(starts)
        if all(finished.values()):
            return Resolution(direction=direction, starts=starts, targets=targets)

        plan = self.plan(starts, direction)
        front = plan.front
        rear = front.other
        pushed: Optional[Character] = None
        if isinstance(plan, Squeeze):
            if plan.breaks is not None:
                self.tracker.consume(plan.breaks)
            if not finished[front]:
                targets[front] = self.slide(starts[front], front, direction.reverse())
            if not finished[rear]:
                targets[rear] = self.slide(starts[rear], rear, direction)
            pushed = front
        else:
            if not finished[front]:
                targets[front] = self.slide(
                    starts[front], front, direction, obstacle=starts[rear]
                )
            if not finished[rear]:
                targets[rear] = self.slide(
                    starts[rear], rear, direction, obstacle=targets[front]
                )

        if targets[front] == targets[rear]:
            # Step the rear character back so the two never share a cell.
            targets[rear] = direction.reverse().step(targets[front])

        resolution = Resolution(
            direction=direction,
            starts=starts,
            targets=targets,
            squeeze=isinstance(plan, Squeeze),
            pushed=pushed,
            broken=self.tracker.drain(),
        )
        self._check(resolution)
        return resolution

    def _check(self, resolution: Resolution) -> None:
        for character, target in resolution.targets.items():
            if not self.grid.inside(target):
                raise InvariantViolation(
                    f"{character.value} target {target} is outside the grid"
                )
        if resolution.heavy_target == resolution.light_target:
            raise InvariantViolation(
                f"Both characters resolved onto {resolution.heavy_target}"
            )


def score_level(
    heavy_moves: int,
    heavy_par: int,
    light_moves: int,
    light_par: int,
    simultaneous: bool,
) -> int:
    score = 0
    if heavy_moves <= heavy_par:
        score += 1
    if light_moves <= light_par:
        score += 1
    if simultaneous:
        score += 1
    return max(0, min(MAX_SCORE, score))


class GameState(Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    WON = "won"


@dataclass
class MoveOutcome:
    """Everything the animation layer needs to replay one move."""

    resolution: Resolution
    finished: Tuple[Character, ...] = ()
    won: bool = False
    score: Optional[int] = None


class PuzzleGame:
    """Turn orchestration: accepts one direction at a time and tracks the win."""

    def __init__(self, level: Level, *, progress=None):
        level.validate()
        self.level = level
        self.progress = progress
        self.reset()

    def reset(self) -> None:
        self.grid = self.level.build_grid()
        self.tracker = BreakableTracker(self.grid)
        self.resolver = MovementResolver(self.grid, self.tracker)
        self.positions: Dict[Character, Position] = {
            character: self.level.start(character) for character in Character
        }
        self.moves: Dict[Character, int] = {character: 0 for character in Character}
        self.finished: Dict[Character, bool] = {character: False for character in Character}
        self.simultaneous = False
        self.state = GameState.IDLE
        self.score: Optional[int] = None
        self.history: List[Resolution] = []
        self.accumulated_events: Dict[str, List[Dict[str, object]]] = {
            key: [] for key in ("broken", "finished", "blocked", "squeeze", "won")
        }
        self.last_events: Dict[str, List[Dict[str, object]]] = {
            key: [] for key in self.accumulated_events
        }

    def restart(self) -> None:
        logger.info("Restarting level %s", self.level.level_id or self.level.name)
        self.reset()

    def load(self, level: Level) -> None:
        level.validate()
        self.level = level
        self.reset()

    @property
    def won(self) -> bool:
        return self.state is GameState.WON

    def move(self, direction: Direction) -> Optional[MoveOutcome]:
        if self.state is not GameState.IDLE:
            logger.debug("Ignoring %s while %s", direction.name, self.state.value)
            return None
        if all(self.finished.values()):
            return None

        resolution = self.resolver.resolve(
            self.positions[Character.HEAVY],
            self.positions[Character.LIGHT],
            direction,
            heavy_finished=self.finished[Character.HEAVY],
            light_finished=self.finished[Character.LIGHT],
        )
        self.history.append(resolution)
        events: Dict[str, List[Dict[str, object]]] = {key: [] for key in self.accumulated_events}

        for character in Character:
            if resolution.moved(character):
                self.moves[character] += 1
            self.positions[character] = resolution.targets[character]

        newly_finished: List[Character] = []
        for character in Character:
            was_finished = self.finished[character]
            self.finished[character] = (
                self.positions[character] in self.level.finish_tiles(character)
            )
            if self.finished[character] and not was_finished:
                newly_finished.append(character)
                events["finished"].append(
                    {"character": character.value, "position": self.positions[character]}
                )

        if resolution.blocked:
            events["blocked"].append({"direction": direction.name})
        if resolution.squeeze:
            events["squeeze"].append(
                {
                    "direction": direction.name,
                    "pushed": resolution.pushed.value if resolution.pushed else None,
                }
            )
        for position in resolution.broken:
            events["broken"].append({"position": position})

        if (
            not self.simultaneous
            and resolution.both_moved
            and len(newly_finished) == len(Character)
        ):
            self.simultaneous = True

        outcome = MoveOutcome(resolution=resolution, finished=tuple(newly_finished))
        if all(self.finished.values()):
            self.state = GameState.WON
            outcome.won = True
            outcome.score = self._score_win()
            events["won"].append({"score": outcome.score})
        else:
            self.state = GameState.RESOLVING

        self.last_events = events
        for key, value in events.items():
            self.accumulated_events[key].extend(value)
        if outcome.won:
            self._persist_score()
        return outcome

    def complete_move(self) -> None:
        """Called once the move animation has finished playing."""
        if self.state is GameState.RESOLVING:
            self.state = GameState.IDLE

    def _score_win(self) -> int:
        if self.score is not None:
            return self.score
        self.score = score_level(
            self.moves[Character.HEAVY],
            self.level.heavy_par,
            self.moves[Character.LIGHT],
            self.level.light_par,
            self.simultaneous,
        )
        level_id = self.level.level_id or self.level.name
        logger.info(
            "Level %s won: heavy %d/%d, light %d/%d, simultaneous=%s, score=%d",
            level_id,
            self.moves[Character.HEAVY],
            self.level.heavy_par,
            self.moves[Character.LIGHT],
            self.level.light_par,
            self.simultaneous,
            self.score,
        )
        return self.score

    def _persist_score(self) -> None:
        """Hand the final score to the progress store once the win is committed.

        A store that does not track this level is logged and skipped; storage
        errors propagate to the caller.
        """
        if self.progress is None or self.score is None:
            return
        level_id = self.level.level_id or self.level.name
        try:
            self.progress.record_score(level_id, self.score)
        except KeyError:
            logger.warning("Progress store does not track level %s; score not saved", level_id)

    def play(self, directions: Iterable[Direction]) -> List[MoveOutcome]:
        outcomes: List[MoveOutcome] = []
        for direction in directions:
            outcome = self.move(direction)
            if outcome is not None:
                outcomes.append(outcome)
            self.complete_move()
        return outcomes

    def playthrough(self, directions: Iterable[Direction]) -> Dict[str, object]:
        self.play(directions)
        return {
            "metadata": self.level.metadata,
            "positions": {
                character.value: list(self.positions[character]) for character in Character
            },
            "moves": {character.value: self.moves[character] for character in Character},
            "finished": {
                character.value: self.finished[character] for character in Character
            },
            "simultaneous": self.simultaneous,
            "won": self.won,
            "score": self.score,
            "events": {
                key: [self._normalise_event(event) for event in value]
                for key, value in self.accumulated_events.items()
            },
        }

    @staticmethod
    def _normalise_event(event: Dict[str, object]) -> Dict[str, object]:
        normalised: Dict[str, object] = {}
        for key, value in event.items():
            if isinstance(value, tuple):
                normalised[key] = list(value)
            else:
                normalised[key] = value
        return normalised


def parse_moves(moves: Iterable[str]) -> List[Direction]:
    return [Direction.from_name(move) for move in moves]


class SolutionValidator:
    """Replay a stored move list and check that it wins with the expected score."""

    def __init__(self, level_loader: LevelLoader, solutions_root: Path):
        self.level_loader = level_loader
        self.solutions_root = Path(solutions_root)

    def load_solution(self, name: str) -> Dict:
        path = self.solutions_root / f"{name}.json"
        if not path.exists():
            raise FileNotFoundError(path)
        return json.loads(path.read_text())

    def replay(self, level_name: str, solution: Dict) -> PuzzleGame:
        game = PuzzleGame(self.level_loader.load(level_name))
        game.play(parse_moves(solution.get("moves", [])))
        return game

    def validate(self, level_name: str, solution_name: Optional[str] = None) -> bool:
        solution = self.load_solution(solution_name or level_name)
        game = self.replay(level_name, solution)
        if not game.won:
            return False
        expected_score = solution.get("expected_score")
        if expected_score is not None and game.score != expected_score:
            return False
        return True
