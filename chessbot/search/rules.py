"""
Rules Provider

Chess rules are not implemented here: python-chess supplies legal move
generation, move application and the terminal predicates. This module is
the thin seam the search goes through so that every hypothetical move
produces a NEW board and sibling lines never see each other's moves.
"""

from typing import List

import chess

from chessbot.evaluation.base import position_key

__all__ = ['InvalidPreconditionError', 'legal_moves', 'apply_move', 'history_keys', 'position_key']


class InvalidPreconditionError(ValueError):
    """The rules provider was asked to do something impossible (e.g. apply an illegal move)."""


def legal_moves(board: chess.Board) -> List[chess.Move]:
    """
    Legal moves of a position, in python-chess generation order.

    The order matters: it decides ties between equally scored moves and
    which mate the search returns first.
    """
    return list(board.legal_moves)


def apply_move(board: chess.Board, move: chess.Move, validate: bool = True) -> chess.Board:
    """
    Return a new board with `move` played. `board` is left untouched.

    Args:
        board: Position before the move
        move: Move to play
        validate: Check legality first (skip for moves that came from
            legal_moves(board))

    Returns:
        chess.Board: Position after the move

    Raises:
        InvalidPreconditionError: If `move` is not legal in `board`
    """
    if validate and not board.is_legal(move):
        raise InvalidPreconditionError(f"Illegal move {move.uci()} in position {board.fen()}")

    child = board.copy(stack=False)
    child.push(move)
    return child


def history_keys(board: chess.Board) -> List[str]:
    """
    Position keys of the game before `board`, oldest first.

    The positions are rebuilt by replaying `board.move_stack` from the
    start of the game, so a board copied without its stack has no history.
    """
    replay = board.root()
    keys = []
    for move in board.move_stack:
        keys.append(position_key(replay))
        replay.push(move)
    return keys
