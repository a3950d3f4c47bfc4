"""Simple command line demo for the puzzle logic."""

from pathlib import Path

from .game import Character, LevelLoader, PuzzleGame, SolutionValidator, parse_moves


def main() -> None:
    package_root = Path(__file__).resolve().parent
    level_loader = LevelLoader(package_root / "levels")
    validator = SolutionValidator(level_loader, package_root / "solutions")

    print("=== Polar Pairs Demo ===")
    for level_name in level_loader.available():
        level = level_loader.load(level_name)
        solution = validator.load_solution(level_name)
        game = PuzzleGame(level)
        results = game.playthrough(parse_moves(solution["moves"]))

        print(f"Level: {results['metadata']['name']} ({results['metadata']['dimensions']})")
        for character in Character:
            print(
                f"  {character.value}: {results['moves'][character.value]} moves "
                f"(par {level.par(character)}), finished={results['finished'][character.value]}"
            )
        print(f"  broken tiles: {[event['position'] for event in results['events']['broken']]}")
        print(f"  score: {results['score']}")


if __name__ == "__main__":
    main()
