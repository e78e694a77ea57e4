"""
Evaluation Module

This module provides position evaluation functions for the chess engine.
Evaluators are SWAPPABLE: the search and the game analyzer work with any
evaluator that implements the base interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - RichEvaluator: Material + piece-square tables + repetition + jitter
      (Black-positive, used by the search)
    - SimpleEvaluator: Material only (White-positive, used for analysis)

Data Flow:
    chess.Board → evaluator.evaluate() → float (centipawns)
                                          Positive = good for evaluator.favors
"""

from chessbot.evaluation.base import Evaluator, MATE_SCORE, REPETITION_PENALTY, position_key
from chessbot.evaluation.rich import RichEvaluator
from chessbot.evaluation.simple import SimpleEvaluator

__all__ = [
    'Evaluator',
    'RichEvaluator',
    'SimpleEvaluator',
    'MATE_SCORE',
    'REPETITION_PENALTY',
    'position_key',
]
