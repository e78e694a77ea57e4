"""
Unit Tests for Engine Configuration
"""

from pathlib import Path

import chess
import pytest

from chessbot.config import EngineConfig
from chessbot.evaluation import RichEvaluator


class TestEngineConfig:
    """Tests for EngineConfig."""

    def test_defaults(self):
        config = EngineConfig()

        assert (config.quick_depth, config.default_depth, config.strong_depth) == (2, 3, 4)
        assert config.jitter is True
        assert config.seed is None
        assert config.log_file == Path.home() / ".chessbot" / "engine.log"

    def test_log_file_coerced_to_path(self):
        config = EngineConfig(log_file="/tmp/chessbot/engine.log")

        assert isinstance(config.log_file, Path)

    @pytest.mark.parametrize("field", ["default_depth", "quick_depth", "strong_depth"])
    def test_non_positive_depth_raises(self, field):
        with pytest.raises(ValueError, match=field):
            EngineConfig(**{field: 0})

    def test_depth_order_is_enforced(self):
        with pytest.raises(ValueError):
            EngineConfig(quick_depth=3, default_depth=2)

        with pytest.raises(ValueError):
            EngineConfig(strong_depth=2)

    @pytest.mark.parametrize(
        "level, depth",
        [
            (None, 3),
            ("easy", 2),
            ("quick", 2),
            ("medium", 3),
            ("standard", 3),
            ("hard", 4),
            ("Strong", 4),
            ("HARD", 4),
        ],
    )
    def test_depth_for(self, level, depth):
        assert EngineConfig().depth_for(level) == depth

    def test_depth_for_custom_presets(self):
        config = EngineConfig(quick_depth=1, default_depth=2, strong_depth=5)

        assert config.depth_for("easy") == 1
        assert config.depth_for("hard") == 5

    def test_unknown_level_raises(self):
        with pytest.raises(ValueError, match="Unknown level"):
            EngineConfig().depth_for("grandmaster")

    def test_make_evaluator(self):
        evaluator = EngineConfig(jitter=False).make_evaluator()

        assert isinstance(evaluator, RichEvaluator)
        assert evaluator.jitter is False

    def test_seeded_evaluators_agree(self):
        first = EngineConfig(seed=42).make_evaluator().evaluate(chess.Board())
        second = EngineConfig(seed=42).make_evaluator().evaluate(chess.Board())

        assert first == second

    def test_repr(self):
        text = repr(EngineConfig(seed=5))

        assert "quick=2, default=3, strong=4" in text
        assert "seed=5" in text
