"""
Simple Material Evaluation

Material-only evaluator used for quick game analysis. No piece-square
tables, no repetition handling and no jitter: the same position always
gets the same score.

Scores are WHITE-positive. Checkmate is worth +/-1000.
"""

from typing import Sequence

import chess
import numpy as np

from chessbot.evaluation.base import Evaluator

# Indexed by python-chess piece type (index 0 unused)
MATERIAL_VALUES = np.array([0, 100, 320, 330, 500, 900, 0], dtype=np.int32)

SIMPLE_MATE_SCORE = 1000


class SimpleEvaluator(Evaluator):
    """Material balance from White's perspective."""

    favors = chess.WHITE
    mate_score = SIMPLE_MATE_SCORE

    def evaluate(self, board: chess.Board, recent_path: Sequence[str] = ()) -> float:
        terminal_score = self.evaluate_terminal(board)
        if terminal_score is not None:
            return terminal_score

        balance = 0
        for piece in board.piece_map().values():
            value = int(MATERIAL_VALUES[piece.piece_type])
            balance += value if piece.color == chess.WHITE else -value
        return float(balance)
