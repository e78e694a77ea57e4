"""
Engine configuration.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from chessbot.evaluation.rich import RichEvaluator
from chessbot.search.minimax import QUICK_DEPTH, STANDARD_DEPTH, STRONG_DEPTH


@dataclass
class EngineConfig:
    """Configuration for the move search.

    Depth presets are configuration, not separate algorithms: every level
    runs the same fixed-depth minimax.
    """

    # Search depth presets
    default_depth: int = STANDARD_DEPTH
    """Depth used when no level is requested ("medium" / "standard")"""

    quick_depth: int = QUICK_DEPTH
    """Depth of the fast, weak level ("easy" / "quick")"""

    strong_depth: int = STRONG_DEPTH
    """Depth of the slow, strong level ("hard" / "strong")"""

    # Evaluation
    jitter: bool = True
    """Add the random tie-breaking term to evaluations"""

    seed: Optional[int] = None
    """Random seed for the jitter (None for random)"""

    # Logging
    log_file: Path = Path.home() / ".chessbot" / "engine.log"
    """Log file of the UCI front-end"""

    debug: bool = True
    """Log at DEBUG level instead of INFO"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.log_file = Path(self.log_file)

        for name in ("default_depth", "quick_depth", "strong_depth"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

        if not self.quick_depth <= self.default_depth <= self.strong_depth:
            raise ValueError(
                f"depths must satisfy quick <= default <= strong, got "
                f"{self.quick_depth}/{self.default_depth}/{self.strong_depth}"
            )

    def depth_for(self, level: Optional[str] = None) -> int:
        """
        Search depth of a named level.

        Args:
            level: easy/quick, medium/standard or hard/strong (None = default)

        Returns:
            int: Search depth

        Raises:
            ValueError: If the level is unknown
        """
        if level is None:
            return self.default_depth

        depths = {
            "easy": self.quick_depth,
            "quick": self.quick_depth,
            "medium": self.default_depth,
            "standard": self.default_depth,
            "hard": self.strong_depth,
            "strong": self.strong_depth,
        }
        try:
            return depths[level.lower()]
        except KeyError:
            raise ValueError(f"Unknown level {level!r}, expected one of {sorted(depths)}") from None

    def make_evaluator(self) -> RichEvaluator:
        """Search evaluator honouring the jitter settings."""
        return RichEvaluator(jitter=self.jitter, seed=self.seed)

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"EngineConfig(\n"
            f"  Depths: quick={self.quick_depth}, default={self.default_depth}, strong={self.strong_depth}\n"
            f"  Jitter: {self.jitter} (seed={self.seed})\n"
            f"  Log: {self.log_file} (debug={self.debug})\n"
            f")"
        )
