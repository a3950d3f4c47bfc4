"""Interactive window for playing puzzle levels with pygame."""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from ..game import LevelLoader, PuzzleGame
from ..progress import ProgressStore
from . import layout
from .toolkit import PolarPairsUI, ensure_pygame

logger = logging.getLogger(__name__)

LEVEL_ENV_VAR = "POLAR_PAIRS_LEVEL_ROOT"
SAVE_ENV_VAR = "POLAR_PAIRS_SAVE_PATH"


@dataclass(frozen=True)
class UIDirectories:
    """Bundle with resolved locations required by the UI."""

    level_root: Path
    save_path: Path


def _default_level_root() -> Path:
    return Path(__file__).resolve().parents[1] / "levels"


def _default_save_path() -> Path:
    return Path.home() / ".polar_pairs" / "progress.json"


def _read_path(env_var: str, fallback: Path) -> Path:
    value = os.environ.get(env_var)
    if value:
        return Path(value).expanduser()
    return fallback


def resolve_directories(check_exists: bool = True) -> UIDirectories:
    """Resolve UI locations using environment variables.

    Parameters
    ----------
    check_exists:
        When *True*, raise :class:`FileNotFoundError` if the level directory
        does not exist. The save file is created on first write, so only its
        location is resolved.
    """

    level_root = _read_path(LEVEL_ENV_VAR, _default_level_root())
    save_path = _read_path(SAVE_ENV_VAR, _default_save_path())

    if check_exists and not level_root.exists():
        raise FileNotFoundError(f"Level directory does not exist: {level_root}")

    return UIDirectories(level_root=level_root, save_path=save_path)


def choose_level(progress: ProgressStore, requested: Optional[str] = None) -> str:
    """Return the level to open: the requested one when unlocked, else the latest unlocked."""

    latest = progress.unlocked_levels()[-1]
    if requested is None:
        return latest
    if not progress.is_unlocked(requested):
        logger.warning("Level %s is locked, opening %s instead", requested, latest)
        return latest
    return requested


class PolarPairsApp:
    """Pygame driven application: one level at a time, progress saved on wins."""

    def __init__(
        self,
        directories: UIDirectories,
        *,
        level_name: Optional[str] = None,
        tile_size: int = layout.TILE_SIZE,
    ) -> None:
        self.loader = LevelLoader(directories.level_root)
        self.level_names = self.loader.available()
        if not self.level_names:
            raise FileNotFoundError(f"No levels found in {directories.level_root}")
        self.progress = ProgressStore(self.level_names, directories.save_path)
        self.tile_size = tile_size
        self.level_name = choose_level(self.progress, level_name)
        self.game = PuzzleGame(self.loader.load(self.level_name), progress=self.progress)
        self._build_view()

    def _build_view(self) -> None:
        pygame = ensure_pygame()
        self.geometry = layout.compute_geometry(
            self.game.level.width, self.game.level.height, self.tile_size
        )
        self.screen = pygame.display.set_mode(self.geometry.window)
        pygame.display.set_caption(f"Polar Pairs - {self.game.level.name}")
        board_size = self.geometry.board[2:]
        self.ui = PolarPairsUI(
            self.game, cell_size=self.tile_size, surface=pygame.Surface(board_size)
        )
        self.clock = pygame.time.Clock()

    def switch_level(self, level_name: str) -> None:
        logger.info("Switching to level %s", level_name)
        self.level_name = level_name
        self.game.load(self.loader.load(level_name))
        self._build_view()

    def next_level(self) -> bool:
        next_name = self.progress.next_level(self.level_name)
        if next_name is None or not self.progress.is_unlocked(next_name):
            return False
        self.switch_level(next_name)
        return True

    def draw(self) -> None:
        pygame = ensure_pygame()
        self.screen.fill(layout.BACKGROUND_COLOR)
        self.screen.blit(self.ui.render(), self.geometry.board[:2])
        x, y = self.geometry.status[:2]
        for line in self.ui.status_lines():
            text = self.ui.font.render(line, True, layout.TEXT_COLOR)
            self.screen.blit(text, (x, y))
            y += text.get_height() + 6
        pygame.display.flip()

    def run(self) -> None:
        pygame = ensure_pygame()
        running = True
        while running:
            delta = self.clock.tick(60) / 1000.0
            gameplay_events: List[object] = []
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_n:
                    self.next_level()
                else:
                    gameplay_events.append(event)
            self.ui.process_events(gameplay_events)
            self.ui.update(delta)
            self.draw()
        pygame.quit()


def run(directories: Optional[UIDirectories] = None, level_name: Optional[str] = None) -> None:
    """Entry point helper that instantiates and runs the UI."""

    app = PolarPairsApp(directories or resolve_directories(), level_name=level_name)
    app.run()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Polar Pairs launcher")
    parser.add_argument(
        "--info",
        action="store_true",
        help="Print resolved level and save locations and exit.",
    )
    parser.add_argument(
        "--list-levels",
        action="store_true",
        help="List the levels found in the level directory and exit.",
    )
    parser.add_argument("--level", help="Name of the level to open, e.g. level_2.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def bootstrap_directories() -> UIDirectories:
    """Return resolved locations and print a short bootstrap message."""

    directories = resolve_directories()
    message = (
        "Polar Pairs bootstrap\n"
        f"  levels: {directories.level_root}\n"
        f"  progress: {directories.save_path}\n"
        f"Set {LEVEL_ENV_VAR} or {SAVE_ENV_VAR} to use other locations."
    )
    print(message)
    return directories


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.info:
        bootstrap_directories()
        return 0

    directories = resolve_directories()
    if args.list_levels:
        loader = LevelLoader(directories.level_root)
        print("Available levels:")
        for name in loader.available():
            print(f"  {name}: {loader.load(name).name}")
        return 0

    run(directories, level_name=args.level)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation entry point
    raise SystemExit(main())
