"""
Game Analyzer

Re-scores every position of a game with an evaluator and classifies each
move by the evaluation swing it caused.

Usage:
    analyzer = GameAnalyzer()                      # SimpleEvaluator, absolute bands
    positions = analyzer.analyze(["e2e4", "e7e5", "g1f3"])
    report = analyzer.report(positions)
"""

import logging
from typing import Iterable, List, Optional, Union

import chess
import chess.pgn

from chessbot.analysis.classification import (
    ABSOLUTE_BANDS,
    SIGNED_BANDS,
    ClassificationBands,
    classify,
)
from chessbot.analysis.positions import EvaluatedPosition, GameReport
from chessbot.evaluation.base import Evaluator, position_key
from chessbot.evaluation.simple import SimpleEvaluator
from chessbot.search.rules import InvalidPreconditionError, apply_move

logger = logging.getLogger(__name__)

MoveLike = Union[chess.Move, str]


def default_bands(evaluator: Evaluator) -> ClassificationBands:
    """Material-only evaluation is classified on absolute bands, anything richer on signed ones."""
    if isinstance(evaluator, SimpleEvaluator):
        return ABSOLUTE_BANDS
    return SIGNED_BANDS


class GameAnalyzer:
    """
    Builds and classifies analysis traces.

    Attributes:
        evaluator: Evaluator scoring every position of the trace
        bands: Classification thresholds
    """

    def __init__(
        self,
        evaluator: Optional[Evaluator] = None,
        bands: Optional[ClassificationBands] = None,
    ):
        self.evaluator = evaluator if evaluator is not None else SimpleEvaluator()
        self.bands = bands if bands is not None else default_bands(self.evaluator)

    @staticmethod
    def initial_position(fen: str = chess.STARTING_FEN) -> EvaluatedPosition:
        """First trace entry: no move, evaluation 0."""
        return EvaluatedPosition(fen=fen, san="", uci="", evaluation=0.0)

    def evaluated_position(
        self,
        board: chess.Board,
        move: chess.Move,
        recent_path: Iterable[str] = (),
    ) -> EvaluatedPosition:
        """
        Play `move` on a copy of `board` and record the resulting position.

        Raises:
            InvalidPreconditionError: If `move` is illegal in `board`
        """
        child = apply_move(board, move)
        return EvaluatedPosition(
            fen=child.fen(),
            san=board.san(move),
            uci=move.uci(),
            evaluation=self.evaluator.evaluate(child, tuple(recent_path)),
        )

    def _parse_move(self, board: chess.Board, move: MoveLike) -> chess.Move:
        if isinstance(move, chess.Move):
            return move
        try:
            return chess.Move.from_uci(move)
        except ValueError:
            pass
        try:
            return board.parse_san(move)
        except ValueError as e:
            raise InvalidPreconditionError(f"Cannot read move {move!r} in position {board.fen()}: {e}") from e

    def trace_moves(
        self,
        moves: Iterable[MoveLike],
        start_fen: str = chess.STARTING_FEN,
    ) -> List[EvaluatedPosition]:
        """
        Evaluate the position after every move of a move list.

        Args:
            moves: Moves as chess.Move, UCI strings or SAN strings
            start_fen: Position the moves start from

        Returns:
            Unclassified trace, starting with the initial position
        """
        board = chess.Board(start_fen)
        positions = [self.initial_position(board.fen())]
        path = [position_key(board)]

        for move_like in moves:
            move = self._parse_move(board, move_like)
            positions.append(self.evaluated_position(board, move, path))
            board = apply_move(board, move)
            path.append(position_key(board))

        return positions

    def trace_game(self, game: chess.pgn.Game) -> List[EvaluatedPosition]:
        """Evaluate the main line of a PGN game."""
        return self.trace_moves(game.mainline_moves(), start_fen=game.board().fen())

    def classify(self, positions: List[EvaluatedPosition]) -> List[EvaluatedPosition]:
        """Classify a trace with this analyzer's bands and evaluator perspective."""
        return classify(positions, self.bands, self.evaluator.favors)

    def analyze(
        self,
        moves: Iterable[MoveLike],
        start_fen: str = chess.STARTING_FEN,
    ) -> List[EvaluatedPosition]:
        """Trace and classify a move list."""
        positions = self.classify(self.trace_moves(moves, start_fen))
        logger.debug(f"Analyzed {len(positions) - 1} moves with {self.evaluator!r}, {self.bands.name} bands")
        return positions

    def analyze_game(self, game: chess.pgn.Game) -> List[EvaluatedPosition]:
        """Trace and classify the main line of a PGN game."""
        return self.classify(self.trace_game(game))

    def report(self, positions: List[EvaluatedPosition]) -> GameReport:
        """Per-side classification counts of a classified trace."""
        return GameReport.from_positions(positions)
