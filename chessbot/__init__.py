"""
ChessBot

A small chess bot: fixed-depth minimax search with alpha-beta pruning over
a hand-tuned static evaluation, plus a post-game analyzer that classifies
every move of a game. Chess rules come from python-chess.

## Architecture

1. **evaluation**: Position evaluation functions
   - Abstract Evaluator interface (swappable design)
   - RichEvaluator: material + piece-square tables + repetition penalty
     + tie-breaking jitter (the search evaluator)
   - SimpleEvaluator: material only (quick game analysis)

2. **search**: Move search
   - Minimax with alpha-beta pruning, mate-distance scoring
   - Immediate-mate short-circuit at the root
   - Depth presets: quick (2), standard (3), strong (4)

3. **analysis**: Post-game analysis
   - Evaluated position traces
   - Move classification (Best ... Blunder) by evaluation loss

4. **uci**: Universal Chess Interface front-end

## Quick Start

```python
import chess
from chessbot.search import find_best_move
from chessbot.analysis import GameAnalyzer

board = chess.Board()
best_move, score, nodes = find_best_move(board, depth=3)

positions = GameAnalyzer().analyze(["e2e4", "e7e5", "g1f3"])
for position in positions[1:]:
    print(position.san, position.classification.label)
```

### As a UCI Engine

```bash
python -m chessbot.uci
```
"""

__version__ = "0.1.0"
__license__ = "MIT"

from chessbot.analysis import Classification, EvaluatedPosition, GameAnalyzer, classify
from chessbot.config import EngineConfig
from chessbot.evaluation import Evaluator, RichEvaluator, SimpleEvaluator
from chessbot.search import (
    InvalidPreconditionError,
    find_best_move,
    get_best_move,
    quick_move,
    strong_move,
)

__all__ = [
    'Evaluator',
    'RichEvaluator',
    'SimpleEvaluator',
    'find_best_move',
    'get_best_move',
    'quick_move',
    'strong_move',
    'InvalidPreconditionError',
    'Classification',
    'EvaluatedPosition',
    'GameAnalyzer',
    'classify',
    'EngineConfig',
]
