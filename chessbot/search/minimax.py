"""
Minimax Search with Alpha-Beta Pruning

This module implements the move search of the chess bot: a fixed-depth
minimax over the game tree, with alpha-beta pruning and the evaluator as
leaf heuristic.

Key Concepts:
    - Minimax: Recursive algorithm that assumes optimal play by both sides
    - Alpha-Beta: Optimization that prunes branches that can't affect result
    - Mate distance: mates closer to the root score higher, so the fastest
      mate is preferred without a separate mate search
    - Repetition path: the keys of the positions on the line being explored
      are threaded through the recursion as an immutable tuple, and the
      evaluator penalizes a position seen twice on that line. Within a
      single search that needs a depth of at least 8; pass the game so far
      as `history` to catch repetitions of earlier positions

Not implemented: iterative deepening, transposition table, quiescence
search and move ordering. Moves are searched in generation order, which
also decides ties.

References:
    - Minimax: https://www.chessprogramming.org/Minimax
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
"""

import logging
import time
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

import chess

from chessbot.evaluation.base import Evaluator, MATE_SCORE
from chessbot.evaluation.rich import RichEvaluator
from chessbot.search.rules import apply_move, legal_moves, position_key

logger = logging.getLogger(__name__)

# Depth presets
QUICK_DEPTH = 2
STANDARD_DEPTH = 3
STRONG_DEPTH = 4


class SearchResult(NamedTuple):
    """
    Outcome of a root search.

    Attributes:
        move: Best move found (None if the position has no legal moves)
        score: Score of that move from the side to move's point of view
        nodes: Number of positions visited
    """
    move: Optional[chess.Move]
    score: float
    nodes: int


def minimax(
    board: chess.Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing_player: bool,
    evaluator: Evaluator,
    orientation: int,
    ply_from_root: int = 0,
    path: Tuple[str, ...] = (),
    nodes_searched: Optional[List[int]] = None,
) -> float:
    """
    Minimax search with alpha-beta pruning.

    Scores are always from the ROOT side's point of view: the root side is
    the maximizing player, its opponent minimizes.

    Args:
        board: Current chess position (never modified)
        depth: Remaining search depth (decrements each recursive call)
        alpha: Best score the maximizer is already assured of
        beta: Best score the minimizer is already assured of
        maximizing_player: True if the side to move is the root side
        evaluator: Position evaluation function
        orientation: +1 if the evaluator favours the root side, else -1
        ply_from_root: Distance from root (for mate distance scoring)
        path: Position keys from the root down to the parent of `board`
        nodes_searched: Optional mutable list [count] of positions visited

    Returns:
        float: Evaluation of the position

    Algorithm:
        1. Checkmate → -(MATE_SCORE - ply) if the maximizer is mated,
           +(MATE_SCORE - ply) if the minimizer is mated
        2. Depth exhausted or game over (claimable draws
           included) → evaluator score
        3. For each legal move: play it on a copy, recurse with the
           opposite player, update alpha/beta, prune if beta <= alpha
    """
    if nodes_searched is not None:
        nodes_searched[0] += 1

    if board.is_checkmate():
        mate = MATE_SCORE - ply_from_root
        return -mate if maximizing_player else mate

    if depth <= 0 or board.is_game_over(claim_draw=True):
        return orientation * evaluator.evaluate(board, path)

    child_path = path + (position_key(board),)

    if maximizing_player:
        max_eval = -float("inf")
        for move in legal_moves(board):
            eval_score = minimax(
                apply_move(board, move, validate=False),
                depth - 1,
                alpha,
                beta,
                False,
                evaluator,
                orientation,
                ply_from_root + 1,
                child_path,
                nodes_searched,
            )

            max_eval = max(max_eval, eval_score)
            alpha = max(alpha, eval_score)

            # Beta cutoff: Minimizing player won't allow this branch
            if beta <= alpha:
                break

        return max_eval

    else:
        min_eval = float("inf")
        for move in legal_moves(board):
            eval_score = minimax(
                apply_move(board, move, validate=False),
                depth - 1,
                alpha,
                beta,
                True,
                evaluator,
                orientation,
                ply_from_root + 1,
                child_path,
                nodes_searched,
            )

            min_eval = min(min_eval, eval_score)
            beta = min(beta, eval_score)

            # Alpha cutoff: Maximizing player won't allow this branch
            if beta <= alpha:
                break

        return min_eval


def find_mating_move(board: chess.Board, moves: Sequence[chess.Move]) -> Optional[chess.Move]:
    """Return the first move in `moves` that checkmates at once, if any."""
    for move in moves:
        if apply_move(board, move, validate=False).is_checkmate():
            return move
    return None


def find_best_move(
    board: chess.Board,
    depth: int = STANDARD_DEPTH,
    evaluator: Optional[Evaluator] = None,
    history: Sequence[str] = (),
    should_stop: Optional[Callable[[], bool]] = None,
) -> SearchResult:
    """
    Find the best move in the current position.

    Args:
        board: Current chess position (left untouched)
        depth: Search depth in plies (higher = stronger but slower)
        evaluator: Position evaluation function (default: RichEvaluator)
        history: Position keys played before `board`, counted by the
            repetition penalty
        should_stop: Optional callable polled between root moves; when it
            returns True the best move found so far is returned

    Returns:
        SearchResult(move, score, nodes). `move` is None only when the
        position has no legal moves.
    """
    if evaluator is None:
        evaluator = RichEvaluator()

    moves = legal_moves(board)
    if not moves:
        logger.debug(f"No legal moves in {board.fen()}")
        return SearchResult(None, 0.0, 0)

    # A move that mates right away is played without searching further
    mating_move = find_mating_move(board, moves)
    if mating_move is not None:
        logger.debug(f"Immediate checkmate: {mating_move.uci()}")
        return SearchResult(mating_move, float(MATE_SCORE - 1), len(moves))

    start_time = time.time()
    orientation = evaluator.sign_for(board.turn)
    root_path = tuple(history) + (position_key(board),)

    best_move = None
    best_score = -float("inf")
    alpha = -float("inf")
    beta = float("inf")
    nodes = [0]

    for move in moves:
        if should_stop is not None and best_move is not None and should_stop():
            logger.debug("Search stopped by caller")
            break

        score = minimax(
            apply_move(board, move, validate=False),
            depth - 1,
            alpha,
            beta,
            False,
            evaluator,
            orientation,
            ply_from_root=1,
            path=root_path,
            nodes_searched=nodes,
        )

        logger.debug(f"Move: {move.uci()}, Score: {score:.2f}")

        if score > best_score:
            best_score = score
            best_move = move

        alpha = max(alpha, score)

    elapsed = time.time() - start_time
    logger.debug(
        f"Best move: {best_move.uci()}, Score: {best_score:.2f}, "
        f"Nodes searched: {nodes[0]}, Time: {elapsed:.3f}s"
    )

    return SearchResult(best_move, best_score, nodes[0])


def get_best_move(
    board: chess.Board,
    depth: int = STANDARD_DEPTH,
    evaluator: Optional[Evaluator] = None,
) -> Optional[chess.Move]:
    """Best move at `depth`, or None if there is no legal move."""
    return find_best_move(board, depth, evaluator).move


def quick_move(board: chess.Board, evaluator: Optional[Evaluator] = None) -> Optional[chess.Move]:
    """Faster, weaker move (depth 2)."""
    return get_best_move(board, QUICK_DEPTH, evaluator)


def strong_move(board: chess.Board, evaluator: Optional[Evaluator] = None) -> Optional[chess.Move]:
    """Slower, stronger move (depth 4)."""
    return get_best_move(board, STRONG_DEPTH, evaluator)
