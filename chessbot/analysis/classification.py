"""
Move Classification

Labels every move of an analysis trace by how much it changed the
evaluation for the side that played it.

Two band sets are supported, matching the two evaluator configurations:

    SIGNED_BANDS (RichEvaluator)
        loss = evaluation drop for the side that just moved
        <= 0 Best, <= 25 Best, <= 50 Excellent, <= 100 Good,
        <= 200 Inaccuracy, <= 400 Mistake, else Blunder

    ABSOLUTE_BANDS (SimpleEvaluator)
        loss = |evaluation change|, whoever moved
        <= 10 Best, <= 25 Excellent, <= 50 Good, <= 100 Inaccuracy,
        <= 200 Mistake, else Blunder

The loss is always relative to the side that just moved, independent of
which colour the evaluator's scores favour.
"""

from dataclasses import dataclass, replace
from typing import List, Sequence, Tuple

import chess

from chessbot.analysis.positions import Classification, EvaluatedPosition, mover_at


@dataclass(frozen=True)
class ClassificationBands:
    """
    Ascending loss thresholds and the classification each one maps to.

    Attributes:
        name: Band set name
        signed: True if loss is signed by the mover, False for |change|
        thresholds: (upper bound, classification) pairs, ascending
    """

    name: str
    signed: bool
    thresholds: Tuple[Tuple[float, Classification], ...]

    def classify(self, loss: float) -> Classification:
        for upper_bound, classification in self.thresholds:
            if loss <= upper_bound:
                return classification
        return Classification.BLUNDER


SIGNED_BANDS = ClassificationBands(
    name="signed",
    signed=True,
    thresholds=(
        (0, Classification.BEST),
        (25, Classification.BEST),
        (50, Classification.EXCELLENT),
        (100, Classification.GOOD),
        (200, Classification.INACCURACY),
        (400, Classification.MISTAKE),
    ),
)

ABSOLUTE_BANDS = ClassificationBands(
    name="absolute",
    signed=False,
    thresholds=(
        (10, Classification.BEST),
        (25, Classification.EXCELLENT),
        (50, Classification.GOOD),
        (100, Classification.INACCURACY),
        (200, Classification.MISTAKE),
    ),
)

BANDS = {bands.name: bands for bands in (SIGNED_BANDS, ABSOLUTE_BANDS)}


def evaluation_loss(
    previous_eval: float,
    current_eval: float,
    mover: chess.Color,
    favors: chess.Color,
    signed: bool = True,
) -> float:
    """
    How much worse a move made the position for the side that played it.

    Args:
        previous_eval: Evaluation before the move
        current_eval: Evaluation after the move
        mover: Colour that played the move
        favors: Colour the evaluations favour when positive
        signed: If False, return the unsigned size of the change

    Returns:
        float: Positive = the move hurt its player
    """
    change = current_eval - previous_eval
    if not signed:
        return abs(change)
    return -change if mover == favors else change


def classify_move(
    previous_eval: float,
    current_eval: float,
    mover: chess.Color,
    favors: chess.Color = chess.WHITE,
    bands: ClassificationBands = SIGNED_BANDS,
) -> Classification:
    """Classify a single move from the evaluations around it."""
    loss = evaluation_loss(previous_eval, current_eval, mover, favors, bands.signed)
    return bands.classify(loss)


def classify(
    positions: Sequence[EvaluatedPosition],
    bands: ClassificationBands = SIGNED_BANDS,
    favors: chess.Color = chess.WHITE,
) -> List[EvaluatedPosition]:
    """
    Classify every move of an analysis trace.

    Args:
        positions: Trace starting with the initial position
        bands: Threshold set to use
        favors: Colour the trace's evaluations favour when positive

    Returns:
        New list of positions; every element but the first carries a
        classification. An empty trace gives an empty list.
    """
    if not positions:
        return []

    classified = [positions[0]]
    for index in range(1, len(positions)):
        classification = classify_move(
            positions[index - 1].evaluation,
            positions[index].evaluation,
            mover_at(positions, index),
            favors,
            bands,
        )
        classified.append(replace(positions[index], classification=classification))

    return classified
