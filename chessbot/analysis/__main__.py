"""
Analyze the games of a PGN file and print every move's classification.

Usage:
    python -m chessbot.analysis games.pgn
    python -m chessbot.analysis games.pgn --evaluator rich --max-games 5
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterator, List, Optional

import chess
import chess.pgn
from tqdm import tqdm

from chessbot.analysis.analyzer import GameAnalyzer
from chessbot.analysis.classification import BANDS
from chessbot.config import EngineConfig
from chessbot.evaluation import SimpleEvaluator

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def read_games(pgn_path: Path, max_games: Optional[int] = None) -> Iterator[chess.pgn.Game]:
    """Stream games from a PGN file."""
    if not pgn_path.exists():
        raise FileNotFoundError(f"PGN file not found: {pgn_path}")

    count = 0
    with open(pgn_path, "r", encoding="utf-8", errors="ignore") as pgn_file:
        while max_games is None or count < max_games:
            game = chess.pgn.read_game(pgn_file)
            if game is None:
                break
            count += 1
            yield game

    logger.info(f"Read {count} games from {pgn_path}")


def format_game(analyzer: GameAnalyzer, game: chess.pgn.Game) -> List[str]:
    """Analysis lines of one game: a header, one line per move and a summary."""
    positions = analyzer.analyze_game(game)
    report = analyzer.report(positions)

    white = game.headers.get("White", "?")
    black = game.headers.get("Black", "?")
    lines = [f"{white} - {black} ({game.headers.get('Result', '*')})"]

    for index, position in enumerate(positions[1:], start=1):
        move_number = (index + 1) // 2
        lines.append(
            f"{move_number:>3}. {position.san:<8} {position.evaluation:>10.2f}  "
            f"{position.classification.label}"
        )

    lines.append(f"  White: {report.summary(chess.WHITE)}")
    lines.append(f"  Black: {report.summary(chess.BLACK)}")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Classify the moves of PGN games",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("pgn", type=Path, help="PGN file to analyze")
    parser.add_argument(
        "--evaluator",
        choices=["simple", "rich"],
        default="simple",
        help="Evaluator used to score positions",
    )
    parser.add_argument(
        "--bands",
        choices=sorted(BANDS),
        default=None,
        help="Classification bands (default: the evaluator's own)",
    )
    parser.add_argument("--max-games", type=int, default=None, help="Stop after N games")
    parser.add_argument("--seed", type=int, default=None, help="Jitter seed for the rich evaluator")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    if args.evaluator == "rich":
        evaluator = EngineConfig(seed=args.seed).make_evaluator()
    else:
        evaluator = SimpleEvaluator()
    bands = BANDS[args.bands] if args.bands else None
    analyzer = GameAnalyzer(evaluator=evaluator, bands=bands)

    try:
        games = read_games(args.pgn, args.max_games)
        for game in tqdm(games, desc="Analyzing", unit="game"):
            print("\n".join(format_game(analyzer, game)))
            print()
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
