"""
Abstract Evaluator Interface

This module defines the abstract base class for all position evaluators.
The search and the game analyzer only talk to this interface, so either
evaluator configuration can be plugged into both.

Key Principles:
    1. Evaluators are stateless (apart from an optional random source)
    2. evaluate() returns a score from a FIXED perspective, given by the
       `favors` attribute: positive = good for `favors`
    3. Checkmate positions return +/- the evaluator's mate score, signed so
       that the side to move (the mated side) loses

Convention:
    - Material values in centipawns (pawn = 100, queen = 900)
    - Return 0 for drawn positions
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

import chess


# Evaluation constants
MATE_SCORE = 100000  # Score of a checkmate (search subtracts ply from root)
REPETITION_PENALTY = 5000  # Score of a position repeated along the search path


def position_key(board: chess.Board) -> str:
    """
    Repetition key of a position.

    Only the piece-placement field of the FEN is used: castling rights,
    en-passant target and move counters are ignored.
    """
    return board.board_fen()


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    All evaluator implementations must inherit from this class and implement
    the evaluate() method. This ensures compatibility with the search
    algorithm and the game analyzer.

    Attributes:
        favors: Colour for which positive scores are good
        mate_score: Magnitude returned for a checkmated position
    """

    favors: chess.Color = chess.WHITE
    mate_score: float = MATE_SCORE

    @abstractmethod
    def evaluate(self, board: chess.Board, recent_path: Sequence[str] = ()) -> float:
        """
        Evaluate a chess position from the `favors` perspective.

        Args:
            board: python-chess Board object to evaluate
            recent_path: Position keys on the line leading to `board`

        Returns:
            float: Evaluation in centipawns

        Raises:
            NotImplementedError: If subclass doesn't implement this method
        """
        pass

    def sign_for(self, color: chess.Color) -> int:
        """Return +1 if scores favor `color`, -1 otherwise."""
        return 1 if color == self.favors else -1

    def is_draw(self, board: chess.Board) -> bool:
        """
        Check if position is a draw by rule.

        Helper method to detect draws that don't require evaluation:
            - Stalemate
            - Insufficient material
            - Fifty-move rule
            - Threefold repetition

        Args:
            board: python-chess Board object

        Returns:
            bool: True if position is drawn, False otherwise
        """
        return (
            board.is_stalemate()
            or board.is_insufficient_material()
            or board.is_fifty_moves()
            or board.can_claim_threefold_repetition()
        )

    def evaluate_terminal(self, board: chess.Board) -> Optional[float]:
        """
        Evaluate terminal positions (checkmate, stalemate, draw).

        Args:
            board: python-chess Board object

        Returns:
            float: Evaluation if terminal position
            None: If position is not terminal
        """
        if board.is_checkmate():
            # The side to move is mated and loses
            return -self.sign_for(board.turn) * self.mate_score

        if self.is_draw(board):
            return 0.0

        return None

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"
