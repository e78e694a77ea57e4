"""
Analysis trace records.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Sequence

import chess


class Classification(IntEnum):
    """
    Move quality, ordered from best to worst.

    BRILLIANT, GREAT, BOOK and FORCED are never assigned by the classifier;
    they exist so that reports can carry externally supplied labels.
    """

    BRILLIANT = 0
    GREAT = 1
    BEST = 2
    EXCELLENT = 3
    GOOD = 4
    BOOK = 5
    FORCED = 6
    INACCURACY = 7
    MISTAKE = 8
    BLUNDER = 9

    @property
    def label(self) -> str:
        """Human readable name, e.g. 'Inaccuracy'."""
        return self.name.capitalize()


@dataclass(frozen=True)
class EvaluatedPosition:
    """
    One entry of a game's analysis trace.

    Attributes:
        fen: Position after the move
        san: Move that produced it, in SAN ("" for the initial position)
        uci: Same move in UCI notation ("" for the initial position)
        evaluation: Score of the position (evaluator's fixed perspective)
        classification: Move quality, filled in by the classifier
    """

    fen: str
    san: str
    uci: str
    evaluation: float
    classification: Optional[Classification] = None

    @property
    def side_to_move(self) -> chess.Color:
        """Colour to move in `fen` (White when the field is missing)."""
        fields = self.fen.split()
        return chess.BLACK if len(fields) > 1 and fields[1] == "b" else chess.WHITE


def mover_at(positions: Sequence[EvaluatedPosition], index: int) -> chess.Color:
    """
    Colour that played the move leading to positions[index].

    Odd indices belong to the side to move in positions[0], even indices to
    its opponent.
    """
    first_side = positions[0].side_to_move
    return first_side if index % 2 == 1 else not first_side


@dataclass
class GameReport:
    """
    Summary of an analyzed game.

    Attributes:
        positions: Classified analysis trace
        classifications: Per-colour count of each classification
    """

    positions: List[EvaluatedPosition]
    classifications: Dict[chess.Color, Counter] = field(
        default_factory=lambda: {chess.WHITE: Counter(), chess.BLACK: Counter()}
    )

    @classmethod
    def from_positions(cls, positions: Sequence[EvaluatedPosition]) -> "GameReport":
        """Count the classifications of each side."""
        report = cls(positions=list(positions))
        for index in range(1, len(positions)):
            classification = positions[index].classification
            if classification is not None:
                report.classifications[mover_at(positions, index)][classification] += 1
        return report

    def count(self, color: chess.Color, classification: Classification) -> int:
        return self.classifications[color][classification]

    def summary(self, color: chess.Color) -> str:
        """One-line summary such as 'Best: 12, Good: 3, Blunder: 1'."""
        counts = self.classifications[color]
        parts = [f"{c.label}: {counts[c]}" for c in Classification if counts[c]]
        return ", ".join(parts) if parts else "-"
