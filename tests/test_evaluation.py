"""
Unit Tests for Evaluation Module

Tests for position evaluation functions, focusing on:
    - Material counting accuracy
    - Piece-square table lookups and mirroring for Black
    - Terminal position detection (checkmate, stalemate)
    - Repetition penalty along the search path
    - Jitter bounds and reproducibility
"""

import chess
import numpy as np
import pytest

from chessbot.evaluation import (
    Evaluator,
    MATE_SCORE,
    REPETITION_PENALTY,
    RichEvaluator,
    SimpleEvaluator,
    position_key,
)
from chessbot.evaluation.rich import PIECE_SQUARE_TABLES, piece_value


FOOLS_MATE = "rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq - 0 2"


def fools_mate_board():
    board = chess.Board(FOOLS_MATE)
    board.push_san("Qh4#")
    return board


class TestRichEvaluator:
    """Tests for RichEvaluator (Black-positive)."""

    @pytest.fixture
    def evaluator(self):
        """Deterministic evaluator."""
        return RichEvaluator(jitter=False)

    def test_starting_position_is_balanced(self, evaluator):
        """Both sides share one mirrored table, so the start scores exactly 0."""
        assert evaluator.evaluate(chess.Board()) == 0.0

    def test_favors_black(self, evaluator):
        assert evaluator.favors == chess.BLACK
        assert evaluator.sign_for(chess.BLACK) == 1
        assert evaluator.sign_for(chess.WHITE) == -1

    def test_missing_white_queen(self, evaluator):
        """Queens carry material only, so a missing queen is exactly 900."""
        board = chess.Board("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNB1KBNR w KQkq - 0 1")

        assert evaluator.evaluate(board) == 900.0

    def test_missing_black_rook(self, evaluator):
        """Black down a rook is negative (White better)."""
        board = chess.Board("rnbqkbn1/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQq - 0 1")

        # Rook on h8 sits on a 0 bonus square
        assert evaluator.evaluate(board) == -500.0

    def test_piece_value_includes_table_bonus(self):
        """Knight on e4 = 300 material + 12 positional."""
        assert piece_value(chess.Piece(chess.KNIGHT, chess.WHITE), chess.E4) == 312

    def test_black_lookup_mirrors_rank(self):
        """A black piece on the mirrored square is worth the same."""
        for piece_type in (chess.PAWN, chess.KNIGHT, chess.BISHOP, chess.ROOK, chess.KING):
            for square in (chess.A2, chess.E4, chess.G7, chess.H1):
                white = piece_value(chess.Piece(piece_type, chess.WHITE), square)
                black = piece_value(chess.Piece(piece_type, chess.BLACK), chess.square_mirror(square))
                assert white == black

    def test_pawn_on_seventh_rank(self):
        """Pawns about to promote get the largest pawn bonus."""
        assert piece_value(chess.Piece(chess.PAWN, chess.WHITE), chess.E7) == 127
        assert piece_value(chess.Piece(chess.PAWN, chess.BLACK), chess.E2) == 127

    def test_queen_has_no_positional_bonus(self):
        assert not np.any(PIECE_SQUARE_TABLES[chess.QUEEN])
        for square in (chess.A1, chess.D4, chess.H8):
            assert piece_value(chess.Piece(chess.QUEEN, chess.WHITE), square) == 900

    def test_central_knight_beats_rim_knight(self, evaluator):
        board_rim = chess.Board("7k/7p/8/8/8/8/P7/N6K w - - 0 1")
        board_center = chess.Board("7k/7p/8/8/4N3/8/P7/7K w - - 0 1")

        # White-side gain shows up as a MORE NEGATIVE score
        assert evaluator.evaluate(board_center) < evaluator.evaluate(board_rim)

    def test_checkmate_white_mated(self, evaluator):
        """White to move and mated: Black wins, so the score is +MATE_SCORE."""
        assert evaluator.evaluate(fools_mate_board()) == MATE_SCORE

    def test_checkmate_black_mated(self, evaluator):
        board = chess.Board("R5k1/5ppp/8/8/8/8/8/7K b - - 0 1")
        assert board.is_checkmate()

        assert evaluator.evaluate(board) == -MATE_SCORE

    def test_stalemate_is_zero(self, evaluator):
        board = chess.Board("k7/2Q5/1K6/8/8/8/8/8 b - - 0 1")
        assert board.is_stalemate()

        assert evaluator.evaluate(board) == 0.0

    def test_insufficient_material_is_zero(self, evaluator):
        board = chess.Board("8/8/8/8/8/7k/8/K7 w - - 0 1")

        assert evaluator.evaluate(board) == 0.0


class TestRepetitionPenalty:
    """Tests for the repetition penalty."""

    @pytest.fixture
    def evaluator(self):
        return RichEvaluator(jitter=False)

    def test_seen_twice_white_to_move(self, evaluator):
        board = chess.Board()
        key = position_key(board)

        assert evaluator.evaluate(board, (key, "x", key)) == -REPETITION_PENALTY

    def test_seen_twice_black_to_move(self, evaluator):
        board = chess.Board("rnbqkbnr/pppppppp/8/8/8/5N2/PPPPPPPP/RNBQKB1R b KQkq - 1 1")
        key = position_key(board)

        assert evaluator.evaluate(board, (key, key)) == REPETITION_PENALTY

    def test_seen_once_is_not_penalized(self, evaluator):
        board = chess.Board()

        assert evaluator.evaluate(board, (position_key(board),)) == 0.0

    def test_penalty_overrides_material(self, evaluator):
        """Black up a queen, but the repetition decides the score."""
        board = chess.Board("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNB1KBNR w KQkq - 0 1")
        key = position_key(board)

        assert evaluator.evaluate(board, (key, key)) == -REPETITION_PENALTY

    def test_key_ignores_rights_and_counters(self):
        a = chess.Board("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1")
        b = chess.Board("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w - - 12 40")

        assert position_key(a) == position_key(b)
        assert position_key(a) == "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


class TestJitter:
    """Tests for the tie-breaking jitter."""

    def test_jitter_is_bounded(self):
        evaluator = RichEvaluator(seed=3)
        board = chess.Board()

        scores = [evaluator.evaluate(board) for _ in range(200)]

        assert all(abs(score) <= 0.05 for score in scores)
        assert len(set(scores)) > 1, "Jitter should vary between calls"

    def test_seeded_jitter_is_reproducible(self):
        board = chess.Board()

        first = [RichEvaluator(seed=11).evaluate(board) for _ in range(3)]
        second = [RichEvaluator(seed=11).evaluate(board) for _ in range(3)]

        assert first == second

    def test_injected_generator_is_used(self):
        rng = np.random.default_rng(5)
        expected = (np.random.default_rng(5).random() - 0.5) * 0.1

        score = RichEvaluator(rng=rng).evaluate(chess.Board())

        assert score == pytest.approx(expected)

    def test_disabled_jitter_is_deterministic(self):
        evaluator = RichEvaluator(jitter=False)
        board = chess.Board("r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3")

        scores = [evaluator.evaluate(board) for _ in range(5)]

        assert len(set(scores)) == 1, f"Evaluator is not deterministic: {scores}"

    def test_jitter_never_touches_terminal_scores(self):
        evaluator = RichEvaluator(seed=1)

        assert evaluator.evaluate(fools_mate_board()) == MATE_SCORE


class TestSimpleEvaluator:
    """Tests for SimpleEvaluator (White-positive, material only)."""

    @pytest.fixture
    def evaluator(self):
        return SimpleEvaluator()

    def test_starting_position(self, evaluator):
        assert evaluator.evaluate(chess.Board()) == 0.0

    def test_material_values(self, evaluator):
        no_black_bishop = chess.Board("rn1qkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1")
        no_white_knight = chess.Board("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/R1BQKBNR w KQkq - 0 1")
        no_white_queen = chess.Board("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNB1KBNR w KQkq - 0 1")

        assert evaluator.evaluate(no_black_bishop) == 330.0
        assert evaluator.evaluate(no_white_knight) == -320.0
        assert evaluator.evaluate(no_white_queen) == -900.0

    def test_no_positional_terms(self, evaluator):
        board_rim = chess.Board("7k/7p/8/8/8/8/P7/N6K w - - 0 1")
        board_center = chess.Board("7k/7p/8/8/4N3/8/P7/7K w - - 0 1")

        assert evaluator.evaluate(board_rim) == evaluator.evaluate(board_center)

    def test_checkmate(self, evaluator):
        assert evaluator.evaluate(fools_mate_board()) == -1000.0

    def test_ignores_repetition_path(self, evaluator):
        board = chess.Board()
        key = position_key(board)

        assert evaluator.evaluate(board, (key, key, key)) == 0.0


class TestEvaluatorInterface:
    """Tests for Evaluator abstract interface."""

    def test_evaluator_is_abstract(self):
        with pytest.raises(TypeError):
            Evaluator()

    def test_is_draw_helper(self):
        evaluator = SimpleEvaluator()

        assert evaluator.is_draw(chess.Board("k7/8/1K6/8/8/8/8/1Q6 b - - 0 1")) is False
        assert evaluator.is_draw(chess.Board("k7/2Q5/1K6/8/8/8/8/8 b - - 0 1"))
        assert evaluator.is_draw(chess.Board("8/8/8/8/8/7k/8/K7 w - - 0 1"))
        assert not evaluator.is_draw(chess.Board())

    def test_evaluate_terminal_none_for_normal_position(self):
        assert RichEvaluator().evaluate_terminal(chess.Board()) is None

    def test_repr(self):
        assert repr(SimpleEvaluator()) == "SimpleEvaluator()"
        assert repr(RichEvaluator(jitter=False)) == "RichEvaluator(jitter=False)"


class TestDrawRules:
    """Claimable draws score 0 under both evaluators."""

    FIFTY_MOVE_ROOK_ENDGAME = "4k3/8/8/8/8/8/8/R3K3 w - - 100 80"

    @pytest.fixture(params=[SimpleEvaluator, lambda: RichEvaluator(jitter=False)])
    def evaluator(self, request):
        return request.param()

    def test_fifty_move_rule(self, evaluator):
        board = chess.Board(self.FIFTY_MOVE_ROOK_ENDGAME)

        assert evaluator.is_draw(board)
        assert evaluator.evaluate(board) == 0.0

    def test_clock_below_fifty_moves_is_scored(self, evaluator):
        board = chess.Board("4k3/8/8/8/8/8/8/R3K3 w - - 99 80")

        assert not evaluator.is_draw(board)
        assert evaluator.evaluate(board) != 0.0

    def test_threefold_repetition(self, evaluator):
        # White is a queen up, but the position has occurred three times
        board = chess.Board("rnb1kbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1")
        for move in ["g1f3", "g8f6", "f3g1", "f6g8"] * 2:
            board.push_uci(move)

        assert evaluator.is_draw(board)
        assert evaluator.evaluate(board) == 0.0
