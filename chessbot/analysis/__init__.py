"""
Analysis Module

Post-game analysis: every position of a game is re-scored and every move
is classified by the evaluation loss it caused for the side that played it.

Key Components:
    - EvaluatedPosition: One entry of the analysis trace
    - Classification: Ordered move-quality labels (Brilliant ... Blunder)
    - classify: Label a trace with SIGNED_BANDS or ABSOLUTE_BANDS
    - GameAnalyzer: Build traces from move lists / PGN games, classify and
      summarize them
"""

from chessbot.analysis.analyzer import GameAnalyzer, default_bands
from chessbot.analysis.classification import (
    ABSOLUTE_BANDS,
    BANDS,
    SIGNED_BANDS,
    ClassificationBands,
    classify,
    classify_move,
    evaluation_loss,
)
from chessbot.analysis.positions import Classification, EvaluatedPosition, GameReport

__all__ = [
    'GameAnalyzer',
    'default_bands',
    'Classification',
    'ClassificationBands',
    'EvaluatedPosition',
    'GameReport',
    'SIGNED_BANDS',
    'ABSOLUTE_BANDS',
    'BANDS',
    'classify',
    'classify_move',
    'evaluation_loss',
]
