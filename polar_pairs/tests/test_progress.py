import json
import logging
from pathlib import Path

import pytest

from polar_pairs.game import Direction, LevelLoader, PuzzleGame
from polar_pairs.progress import ProgressStore

LEVELS = ["level_1", "level_2", "level_3"]


def test_first_level_starts_unlocked():
    store = ProgressStore(LEVELS)

    assert store.unlocked_levels() == ["level_1"]
    assert store.score("level_1") == 0
    assert not store.is_unlocked("level_2")


def test_scores_only_ratchet_upward():
    store = ProgressStore(LEVELS)

    assert store.record_score("level_1", 2)
    assert not store.record_score("level_1", 1)
    assert store.score("level_1") == 2
    assert store.record_score("level_1", 3)
    assert store.score("level_1") == 3


def test_positive_score_unlocks_next_level():
    store = ProgressStore(LEVELS)

    store.record_score("level_1", 1)

    assert store.unlocked_levels() == ["level_1", "level_2"]


def test_zero_score_does_not_unlock():
    store = ProgressStore(LEVELS)
    store.unlock("level_2")

    assert not store.record_score("level_2", 0)
    assert not store.is_unlocked("level_3")


def test_scores_are_clamped():
    store = ProgressStore(LEVELS)

    store.record_score("level_1", 7)

    assert store.score("level_1") == 3


def test_unknown_level_raises_key_error():
    store = ProgressStore(LEVELS)

    with pytest.raises(KeyError):
        store.record_score("level_99", 2)


def test_next_level_at_end_of_list():
    store = ProgressStore(LEVELS)

    assert store.next_level("level_1") == "level_2"
    assert store.next_level("level_3") is None
    assert store.next_level("level_99") is None


def test_progress_persists_between_stores(tmp_path: Path):
    path = tmp_path / "save" / "progress.json"
    store = ProgressStore(LEVELS, path)
    store.record_score("level_1", 2)

    reloaded = ProgressStore(LEVELS, path)

    assert reloaded.score("level_1") == 2
    assert reloaded.is_unlocked("level_2")
    payload = json.loads(path.read_text())
    assert payload["levels"]["level_1"] == {"unlocked": True, "score": 2}
    assert payload["levels"]["level_3"] == {"unlocked": False, "score": 0}


def test_corrupt_progress_file_resets_to_defaults(tmp_path: Path, caplog):
    path = tmp_path / "progress.json"
    path.write_text("definitely not json")

    with caplog.at_level(logging.WARNING, logger="polar_pairs.progress"):
        store = ProgressStore(LEVELS, path)

    assert store.unlocked_levels() == ["level_1"]
    assert "Could not read progress file" in caplog.text
    assert json.loads(path.read_text())["levels"]["level_1"]["unlocked"] is True


def test_reset_forgets_progress(tmp_path: Path):
    store = ProgressStore(LEVELS, tmp_path / "progress.json")
    store.record_score("level_1", 3)

    store.reset()

    assert store.score("level_1") == 0
    assert store.unlocked_levels() == ["level_1"]


def test_winning_a_level_updates_injected_store():
    level_root = Path(__file__).resolve().parents[1] / "levels"
    loader = LevelLoader(level_root)
    store = ProgressStore(loader.available())
    game = PuzzleGame(loader.load("level_1"), progress=store)

    game.move(Direction.UP)

    assert game.won
    assert store.score("level_1") == 3
    assert store.is_unlocked("level_2")
