"""
UCI Protocol Interface

Universal Chess Interface front-end, so the bot can be loaded into chess
GUIs (Arena, CuteChess, ...).

Protocol Flow:
    GUI → "uci"
    Engine → "id name ChessBot"
    Engine → "uciok"
    GUI → "isready"
    Engine → "readyok"
    GUI → "position startpos moves e2e4"
    GUI → "go depth 3"
    Engine → "info depth 3 score cp 25 nodes 12345 ..."
    Engine → "bestmove e7e5"

Reference:
    UCI Protocol: https://www.chessprogramming.org/UCI
"""

from chessbot.uci.interface import UCIEngine, setup_logger, uci_score

__all__ = ['UCIEngine', 'setup_logger', 'uci_score']
