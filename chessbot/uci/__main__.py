"""
Main entry point for running ChessBot as a UCI engine.

Usage:
    python -m chessbot.uci
"""

from chessbot.uci.interface import main

if __name__ == "__main__":
    main()
