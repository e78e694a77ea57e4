"""
Search Module

This module implements the move search: fixed-depth minimax with
alpha-beta pruning over positions produced by python-chess.

Key Components:
    - minimax: Core search algorithm with alpha-beta pruning
    - find_best_move: Root-level search (immediate-mate check + full search)
    - get_best_move / quick_move / strong_move: Depth presets 3 / 2 / 4
    - rules: The rules-provider seam (legal moves, apply move)
"""

from chessbot.search.minimax import (
    QUICK_DEPTH,
    STANDARD_DEPTH,
    STRONG_DEPTH,
    SearchResult,
    find_best_move,
    get_best_move,
    minimax,
    quick_move,
    strong_move,
)
from chessbot.search.rules import InvalidPreconditionError, apply_move, history_keys, legal_moves

__all__ = [
    'minimax',
    'find_best_move',
    'get_best_move',
    'quick_move',
    'strong_move',
    'SearchResult',
    'QUICK_DEPTH',
    'STANDARD_DEPTH',
    'STRONG_DEPTH',
    'InvalidPreconditionError',
    'apply_move',
    'history_keys',
    'legal_moves',
]
