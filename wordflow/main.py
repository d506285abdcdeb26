"""
Command line entry point for WordFlow puzzle tooling.

Usage:
    python -m wordflow.main validate data/puzzles.json
    python -m wordflow.main analyze data/puzzles.json --id cat-dog --output results/analysis.json
    python -m wordflow.main replay data/puzzles.json gestures.json --id cat-dog --verbose
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .core import (
    LexiconUnavailable,
    PuzzleLoadError,
    PuzzleValidationFailed,
    Puzzle,
    ensure_playable,
    load_lexicon,
    load_puzzles,
    render_grid,
    validate_puzzle,
)
from .core.cascade import filter_cascading_errors
from .engine import (
    AppConfig,
    GameSession,
    TraceStateMachine,
    WordDiscoveryEngine,
    load_gestures,
    replay_gestures,
)
from .logging_config import setup_logging


def load_config(config_path: Optional[str]) -> AppConfig:
    """Load configuration from a YAML file, or defaults when no path is given."""
    if config_path is None:
        return AppConfig()

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return AppConfig(**data)


def _select_puzzles(puzzles: List[Puzzle], puzzle_id: Optional[str]) -> List[Puzzle]:
    if puzzle_id is None:
        return puzzles
    selected = [p for p in puzzles if p.id == puzzle_id]
    if not selected:
        raise PuzzleLoadError(f"No puzzle with id '{puzzle_id}'")
    return selected


def _write_output(output: Optional[str], payload) -> None:
    if not output:
        return
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(payload, f, indent=2, default=str)


def run_validate(args, config: AppConfig) -> int:
    lexicon = load_lexicon(args.dictionary or config.dictionary_path)
    puzzles = load_puzzles(args.puzzles or config.puzzles_path, config.minimum_word_length)
    puzzles = _select_puzzles(puzzles, args.id)

    failures = 0
    report = []
    for puzzle in puzzles:
        result = validate_puzzle(puzzle, lexicon)
        report.append(result.model_dump(mode="json"))

        if result.valid:
            print(f"✓ {puzzle.title} ({puzzle.id}): valid, {len(result.words)} words")
        else:
            failures += 1
            print(f"✗ {puzzle.title} ({puzzle.id}): {len(result.errors)} errors")
            shown = filter_cascading_errors(result.errors, config.max_errors)
            for err in shown:
                print(f"  - {err.message}")
            if len(shown) < len(result.errors) or shown[-1].code == "ADDITIONAL_ERRORS":
                if args.output:
                    print(f"  (all {len(result.errors)} errors written to {args.output})")
                else:
                    print(f"  (pass --output to save all {len(result.errors)} errors)")

        if args.verbose and result.grid:
            print(result.grid)
            print(f"Coverage: {result.coverage:.0%}")

    print()
    print(f"{len(puzzles) - failures}/{len(puzzles)} puzzles passed validation")
    _write_output(args.output, report)
    return 1 if failures else 0


def run_analyze(args, config: AppConfig) -> int:
    lexicon = load_lexicon(args.dictionary or config.dictionary_path)
    puzzles = load_puzzles(args.puzzles or config.puzzles_path, config.minimum_word_length)
    puzzles = _select_puzzles(puzzles, args.id)
    engine = WordDiscoveryEngine(lexicon)

    report = []
    for puzzle in puzzles:
        min_length = args.min_length or puzzle.minimum_word_length
        result = engine.discover(puzzle.grid, min_length)
        metrics = result.metrics

        print(f"=== {puzzle.title} ({puzzle.id}) ===")
        print(render_grid(puzzle.grid))
        print(f"Words: {metrics.word_count} ({metrics.path_count} paths)")
        print(f"By length: {metrics.count_by_length}")
        print(f"Average length: {metrics.average_length:.2f}")
        print(f"Longest: {metrics.longest_word or '-'}")
        print(f"Grid utilization: {metrics.grid_utilization:.0%}")
        print(f"Uncommon letters: {metrics.uncommon_letter_count}")
        if metrics.uncovered:
            cells = ", ".join(f"({c.x}, {c.y})" for c in metrics.uncovered)
            print(f"Unreachable letters: {cells}")
        if args.verbose:
            print("Found: " + " ".join(result.unique_words))
        print()

        report.append({"puzzle_id": puzzle.id, **result.model_dump(mode="json")})

    _write_output(args.output, report)
    return 0


def run_replay(args, config: AppConfig) -> int:
    lexicon = load_lexicon(args.dictionary or config.dictionary_path)
    puzzles = load_puzzles(args.puzzles or config.puzzles_path, config.minimum_word_length)
    if args.id is not None:
        session = GameSession.start(_select_puzzles(puzzles, args.id)[0])
    elif args.index is not None or len(puzzles) == 1:
        session = GameSession.start_from(puzzles, index=args.index or 0)
    else:
        raise PuzzleLoadError("--id or --index is required when the puzzle file holds several puzzles")
    puzzle = session.puzzle

    ensure_playable(puzzle, lexicon)

    machine = TraceStateMachine(puzzle.grid, debounce=config.debounce_seconds)
    paths = replay_gestures(machine, load_gestures(args.gestures))

    outcomes = []
    for path in paths:
        session, outcome = session.submit(path)
        outcomes.append(outcome.model_dump(mode="json"))

        line = f"{outcome.kind.upper():<14} {outcome.word or '-'}"
        if outcome.kind == "success":
            line += f" (+{outcome.score})"
        print(line)
        if args.verbose:
            print(render_grid(puzzle.grid, highlight=path))

    print()
    print(f"Score: {session.score}")
    print(f"Found {len(session.found_words)}/{len(puzzle.word_set)} words")
    if session.is_complete:
        print("Puzzle complete!")

    _write_output(args.output, {"session": session.get_state(), "outcomes": outcomes})
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate, analyze and replay WordFlow puzzles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  dictionary_path: data/words.txt
  puzzles_path: data/puzzles.json
  minimum_word_length: 4
  debounce_seconds: 0.05
  max_errors: 5
  log_level: INFO
        """
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", "-c", help="Path to YAML configuration file")
    common.add_argument("--dictionary", "-d", help="Word list (overrides config)")
    common.add_argument("--id", help="Only use the puzzle with this id")
    common.add_argument("--output", "-o", help="Path to save a JSON report")
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print grids and debug logging"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    validate = sub.add_parser("validate", parents=[common], help="Check puzzle structure")
    validate.add_argument("puzzles", nargs="?", help="Puzzle JSON file (overrides config)")

    analyze = sub.add_parser("analyze", parents=[common], help="Discover every word in each grid")
    analyze.add_argument("puzzles", nargs="?", help="Puzzle JSON file (overrides config)")
    analyze.add_argument("--min-length", type=int, help="Shortest word to report")

    replay = sub.add_parser("replay", parents=[common], help="Replay a recorded gesture log")
    replay.add_argument("puzzles", help="Puzzle JSON file")
    replay.add_argument("gestures", help="Gesture log JSON file")
    replay.add_argument("--index", type=int, help="Play the puzzle at this position in the file")

    return parser


COMMANDS = {
    "validate": run_validate,
    "analyze": run_analyze,
    "replay": run_replay,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    setup_logging("DEBUG" if args.verbose else config.log_level)

    try:
        return COMMANDS[args.command](args, config)
    except LexiconUnavailable as e:
        print(f"Dictionary unavailable: {e}", file=sys.stderr)
        return 1
    except PuzzleValidationFailed as e:
        print(f"Puzzle is not playable: {e}", file=sys.stderr)
        return 1
    except (PuzzleLoadError, ValueError, IndexError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
