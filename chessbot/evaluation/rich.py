"""
Rich Piece-Square Table Evaluation

This is the evaluator the search runs on. It combines:
    1. Material counting (pawn=1, knight=3, bishop=3, rook=5, queen=9,
       king=0, scaled x100)
    2. Piece-Square Tables (positional bonuses/penalties)
    3. A repetition penalty along the line currently being searched
    4. A tiny random jitter that breaks exact ties between moves

Scores are BLACK-positive: positive favours Black, negative favours White.
The search re-orients them for whichever side it is playing.

The evaluator is shallow (no king safety, no mobility beyond
the tables).
"""

from typing import Optional, Sequence

import chess
import numpy as np

from chessbot.evaluation.base import Evaluator, REPETITION_PENALTY, position_key

#fmt: off
# ============================================================================
# Material Values
# ============================================================================
# Indexed by python-chess piece type (index 0 unused).

MATERIAL_VALUES = np.array([0, 1, 3, 3, 5, 9, 0], dtype=np.int32)
MATERIAL_SCALE = 100


# ============================================================================
# Piece-Square Tables (PSTs)
# ============================================================================
# Values are from White's perspective: row 0 = rank 1, row 7 = rank 8.
# Black pieces look up the mirrored rank.

PAWN_TABLE = np.array([
    [  0,   0,   0,   0,   0,   0,   0,   0],  # Rank 1
    [  2,  -2,  -3,   0,   0,  -3,  -2,   2],  # Rank 2
    [  0,   0,   0,  -3,  -3,   0,   0,   0],  # Rank 3
    [  2,   2,   3,   6,   6,   3,   2,   2],  # Rank 4
    [  3,   3,   6,  12,  12,   6,   3,   3],  # Rank 5
    [  9,   9,  12,  18,  18,  12,   9,   9],  # Rank 6
    [ 27,  27,  27,  27,  27,  27,  27,  27],  # Rank 7
    [  0,   0,   0,   0,   0,   0,   0,   0],  # Rank 8 (promotion)
], dtype=np.int32)

KNIGHT_TABLE = np.array([
    [-30, -25, -20, -20, -20, -20, -25, -30],
    [-25, -12,   0,   0,   0,   0, -12, -25],
    [-20,   3,   6,   9,   9,   6,   3, -20],
    [-20,   3,   9,  12,  12,   9,   3, -20],
    [-20,   3,   9,  12,  12,   9,   3, -20],
    [-20,   3,   6,   9,   9,   6,   3, -20],
    [-25, -12,   0,   3,   3,   0, -12, -25],
    [-30, -25, -20, -20, -20, -20, -25, -30],
], dtype=np.int32)

BISHOP_TABLE = np.array([
    [-12,  -6,  -6,  -6,  -6,  -6,  -6, -12],
    [ -6,   3,   0,   0,   0,   0,   3,  -6],
    [ -6,   6,   6,   6,   6,   6,   6,  -6],
    [ -6,   0,   6,   9,   9,   6,   0,  -6],
    [ -6,   3,   6,   9,   9,   6,   3,  -6],
    [ -6,   0,   6,   6,   6,   6,   0,  -6],
    [ -6,   0,   0,   0,   0,   0,   0,  -6],
    [-12,  -6,  -6,  -6,  -6,  -6,  -6, -12],
], dtype=np.int32)

# Rooks like the 7th rank
ROOK_TABLE = np.array([
    [  0,   0,   0,   4,   4,   0,   0,   0],
    [ -4,   0,   0,   0,   0,   0,   0,  -4],
    [ -4,   0,   0,   0,   0,   0,   0,  -4],
    [ -4,   0,   0,   0,   0,   0,   0,  -4],
    [ -4,   0,   0,   0,   0,   0,   0,  -4],
    [ -4,   0,   0,   0,   0,   0,   0,  -4],
    [  4,  15,  15,  15,  15,  15,  15,   4],
    [  0,   0,   0,   0,   0,   0,   0,   0],
], dtype=np.int32)

KING_TABLE = np.array([
    [-40, -32, -24, -16, -16, -24, -32, -40],
    [-24, -16,  -8,   0,   0,  -8, -16, -24],
    [-24,  -8,  16,  24,  24,  16,  -8, -24],
    [-24,  -8,  24,  32,  32,  24,  -8, -24],
    [-24,  -8,  24,  32,  32,  24,  -8, -24],
    [-24,  -8,  16,  24,  24,  16,  -8, -24],
    [-24, -24,   0,   0,   0,   0, -24, -24],
    [-40, -24, -24, -24, -24, -24, -24, -40],
], dtype=np.int32)

# Stacked by piece type: PIECE_SQUARE_TABLES[piece_type, rank, file]
PIECE_SQUARE_TABLES = np.stack([
    np.zeros((8, 8), dtype=np.int32),
    PAWN_TABLE,
    KNIGHT_TABLE,
    BISHOP_TABLE,
    ROOK_TABLE,
    np.zeros((8, 8), dtype=np.int32),  # queens carry material only
    KING_TABLE,
])
#fmt: on

JITTER_AMPLITUDE = 0.1  # jitter is drawn from [-0.05, 0.05)


def piece_value(piece: chess.Piece, square: chess.Square) -> int:
    """
    Material plus positional value of a piece on a square.

    Args:
        piece: The piece
        square: Square it stands on

    Returns:
        int: Value in centipawns, always from the piece owner's point of view
    """
    rank = chess.square_rank(square)
    if piece.color == chess.BLACK:
        rank = 7 - rank
    file = chess.square_file(square)

    material = MATERIAL_VALUES[piece.piece_type] * MATERIAL_SCALE
    return int(material + PIECE_SQUARE_TABLES[piece.piece_type, rank, file])


class RichEvaluator(Evaluator):
    """
    Material + piece-square tables + repetition avoidance + jitter.

    Attributes:
        jitter: Whether the random tie-breaking term is added
        rng: numpy random Generator feeding the jitter
    """

    favors = chess.BLACK

    def __init__(
        self,
        jitter: bool = True,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the evaluator.

        Args:
            jitter: Add the tie-breaking jitter (disable for deterministic scores)
            rng: Random source for the jitter (default: fresh Generator)
            seed: Seed for the default Generator, ignored when `rng` is given
        """
        self.jitter = jitter
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def material_and_position(self, board: chess.Board) -> float:
        """Sum of piece values, Black adds and White subtracts."""
        score = 0
        for square, piece in board.piece_map().items():
            value = piece_value(piece, square)
            score += value if piece.color == chess.BLACK else -value
        return float(score)

    def repetition_score(self, board: chess.Board, recent_path: Sequence[str]) -> Optional[float]:
        """
        Penalty for a position already seen twice on the current line.

        Returns:
            float: -5000 with White to move, +5000 with Black to move
            None: If the position does not repeat
        """
        if not recent_path:
            return None

        key = position_key(board)
        repetitions = sum(1 for seen in recent_path if seen == key)
        if repetitions >= 2:
            return -REPETITION_PENALTY if board.turn == chess.WHITE else REPETITION_PENALTY
        return None

    def evaluate(self, board: chess.Board, recent_path: Sequence[str] = ()) -> float:
        """
        Evaluate position (Black's perspective).

        Args:
            board: Chess board to evaluate
            recent_path: Position keys of the line leading to `board`

        Returns:
            float: Evaluation in centipawns (positive = Black better)
        """
        terminal_score = self.evaluate_terminal(board)
        if terminal_score is not None:
            return terminal_score

        repetition = self.repetition_score(board, recent_path)
        if repetition is not None:
            return float(repetition)

        score = self.material_and_position(board)

        if self.jitter:
            score += (self.rng.random() - 0.5) * JITTER_AMPLITUDE

        return score

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(jitter={self.jitter})"
