"""
UCI Protocol Implementation

This module implements the Universal Chess Interface (UCI) protocol so the
bot can be played from chess GUIs. It is also the host that keeps the
search off the interaction thread: every `go` runs in a background thread
on a copy of the board, with its own fresh repetition path.

UCI Commands Supported:
    - uci: Identify engine
    - isready: Synchronization check
    - ucinewgame: Start new game
    - position: Set board position
    - go: Start searching (depth N, or a named level: go level hard)
    - stop: Stop searching
    - quit: Shutdown engine

Threading:
    - Main thread: Listen for UCI commands
    - Search thread: Run minimax search
    - Communication: stop flag polled between root moves

References:
    - UCI Protocol: https://www.chessprogramming.org/UCI
"""

import logging
import sys
import threading
import time
from pathlib import Path
from typing import Optional

import chess

from chessbot.config import EngineConfig
from chessbot.evaluation.base import Evaluator, MATE_SCORE
from chessbot.search.minimax import find_best_move
from chessbot.search.rules import history_keys

# Scores this close to MATE_SCORE are mates
MATE_THRESHOLD = MATE_SCORE - 1000


def setup_logger(log_file: Path, debug: bool = True) -> logging.Logger:
    """
    Setup file-based logger for UCI debugging.

    Args:
        log_file: File the log is written to (its directory is created)
        debug: If True, log at DEBUG level; otherwise INFO level

    Returns:
        Configured logger instance
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("chessbot")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    handler = logging.FileHandler(log_file, mode='w')
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def uci_score(score: float) -> str:
    """
    Format a root score for an `info` line.

    Mate scores become `mate N` (N in moves, negative when the engine is
    the side being mated); everything else is `cp N`.
    """
    if score > MATE_THRESHOLD:
        plies = int(MATE_SCORE - score)
        return f"mate {(plies + 1) // 2}"
    if score < -MATE_THRESHOLD:
        plies = int(MATE_SCORE + score)
        return f"mate -{plies // 2}"
    return f"cp {int(score)}"


class UCIEngine:
    """
    UCI-compliant front-end of the chess bot.

    Attributes:
        board: Current chess position
        config: Engine configuration (depth presets, jitter, logging)
        evaluator: Position evaluation function
        searching: Flag indicating if search is in progress
        stop_search: Flag to stop ongoing search
        search_thread: Background thread for search
    """

    def __init__(self, config: Optional[EngineConfig] = None, evaluator: Optional[Evaluator] = None):
        """
        Initialize UCI engine.

        Args:
            config: Engine configuration (default: EngineConfig())
            evaluator: Position evaluator (default: config.make_evaluator())
        """
        self.config = config if config is not None else EngineConfig()
        self.board = chess.Board()
        self.evaluator = evaluator if evaluator is not None else self.config.make_evaluator()

        # Search state
        self.searching = False
        self.stop_search = False
        self.search_thread: Optional[threading.Thread] = None

        # Engine info
        self.name = "ChessBot"
        self.version = "0.1.0"
        self.author = "ChessBot developers"

        self.logger = setup_logger(self.config.log_file, debug=self.config.debug)
        self.logger.info("=== ChessBot Engine Started ===")
        self.logger.info(f"Log file: {self.config.log_file}")

    def run(self):
        """
        Main UCI command loop.

        Listens for UCI commands on stdin and responds on stdout.
        Runs until 'quit' command is received or stdin is closed.
        """
        while True:
            try:
                command = input().strip()

                if not command:
                    continue

                self.logger.debug(f">>> {command}")

                tokens = command.split()
                cmd = tokens[0].lower()

                if cmd == "uci":
                    self.handle_uci()

                elif cmd == "isready":
                    self.handle_isready()

                elif cmd == "ucinewgame":
                    self.handle_ucinewgame()

                elif cmd == "position":
                    self.handle_position(tokens)

                elif cmd == "go":
                    self.handle_go(tokens)

                elif cmd == "stop":
                    self.handle_stop()

                elif cmd == "quit":
                    self.handle_quit()
                    break

                else:
                    # Unknown commands are ignored (UCI protocol)
                    self.logger.debug(f"Unknown command ignored: {command}")

            except EOFError:
                self.logger.info("EOF received, shutting down")
                break
            except ValueError as e:
                self.logger.error(f"Command error: {e}", exc_info=True)
                print(f"# Error: {e}", file=sys.stderr)

    def handle_uci(self):
        """Handle 'uci' command - identify engine."""
        self.logger.info("Handling: uci")

        print(f"id name {self.name} {self.version}")
        print(f"id author {self.author}")
        print(f"option name Depth type spin default {self.config.default_depth} min 1 max 8")
        print("uciok")
        sys.stdout.flush()

        self.logger.debug("<<< uciok")

    def handle_isready(self):
        """Handle 'isready' command - synchronization."""
        self.logger.info("Handling: isready")
        print("readyok")
        sys.stdout.flush()
        self.logger.debug("<<< readyok")

    def handle_ucinewgame(self):
        """Handle 'ucinewgame' command - reset for new game."""
        self.logger.info("Handling: ucinewgame - resetting board")

        self.board = chess.Board()
        self.stop_search = False

    def handle_position(self, tokens):
        """
        Handle 'position' command - set board position.

        Formats:
            position startpos
            position startpos moves e2e4 e7e5
            position fen <FEN string>
            position fen <FEN string> moves e2e4

        Args:
            tokens: Command tokens (e.g., ['position', 'startpos', 'moves', 'e2e4'])
        """
        self.logger.info(f"Handling: position {' '.join(tokens[1:])}")

        if len(tokens) < 2:
            self.logger.warning("Position command with insufficient arguments")
            return

        if tokens[1] == "startpos":
            board = chess.Board()
            move_index = 2
        elif tokens[1] == "fen":
            try:
                move_index = tokens.index("moves")
            except ValueError:
                move_index = len(tokens)
            fen = " ".join(tokens[2:move_index])

            try:
                board = chess.Board(fen)
            except ValueError as e:
                self.logger.error(f"Invalid FEN: {e}")
                print(f"# Invalid FEN: {e}", file=sys.stderr)
                return
        else:
            self.logger.warning(f"Unknown position type: {tokens[1]}")
            return

        if move_index < len(tokens) and tokens[move_index] == "moves":
            for move_str in tokens[move_index + 1:]:
                try:
                    move = chess.Move.from_uci(move_str)
                except ValueError as e:
                    self.logger.error(f"Invalid move format: {move_str} - {e}")
                    print(f"# Invalid move format: {move_str} - {e}", file=sys.stderr)
                    break

                if not board.is_legal(move):
                    self.logger.error(f"Illegal move: {move_str}")
                    print(f"# Illegal move: {move_str}", file=sys.stderr)
                    break
                board.push(move)

        self.board = board
        self.logger.info(f"Position updated: {self.board.fen()}")

    def handle_go(self, tokens):
        """
        Handle 'go' command - start search.

        Formats:
            go                   (default depth)
            go depth 4
            go level hard        (easy / medium / hard)

        Time controls (movetime, wtime, btime, infinite) are accepted and
        ignored: the search is depth-bounded only.

        Args:
            tokens: Command tokens (e.g., ['go', 'depth', '3'])
        """
        self.logger.info(f"Handling: go {' '.join(tokens[1:])}")

        if self.search_thread and self.search_thread.is_alive():
            self.logger.warning("Search already running, 'go' ignored")
            return

        depth = self.config.default_depth

        i = 1
        while i < len(tokens):
            if tokens[i] == "depth" and i + 1 < len(tokens):
                depth = int(tokens[i + 1])
                i += 2
            elif tokens[i] == "level" and i + 1 < len(tokens):
                depth = self.config.depth_for(tokens[i + 1])
                i += 2
            else:
                i += 1

        self.logger.info(f"Starting search thread with depth={depth}")

        # The search thread works on its own copy of the board
        board_copy = self.board.copy()

        self.stop_search = False
        self.searching = True
        self.search_thread = threading.Thread(
            target=self._search_thread,
            args=(depth, board_copy),
            daemon=True,
        )
        self.search_thread.start()

    def _search_thread(self, depth: int, board: chess.Board):
        """
        Background thread for search.

        Output:
            info depth X score cp Y nodes Z time T  (or score mate N)
            bestmove <move>
        """
        start_time = time.time()

        try:
            self.logger.info(f"Search started: depth={depth}, position={board.fen()}")

            best_move, score, nodes_searched = find_best_move(
                board,
                depth,
                self.evaluator,
                history=history_keys(board),
                should_stop=lambda: self.stop_search,
            )

            elapsed_ms = int((time.time() - start_time) * 1000)
            state = "stopped early" if self.stop_search else "complete"
            self.logger.info(
                f"Search {state}: best_move={best_move.uci() if best_move else 'None'}, "
                f"score={score:.2f}, nodes={nodes_searched}, time={elapsed_ms}ms"
            )

            if best_move is None:
                # No legal moves: the game is over
                print("bestmove 0000")
                sys.stdout.flush()
                return

            info_msg = (
                f"info depth {depth} score {uci_score(score)} "
                f"nodes {nodes_searched} time {elapsed_ms} pv {best_move.uci()}"
            )
            bestmove_msg = f"bestmove {best_move.uci()}"

            print(info_msg)
            print(bestmove_msg)
            sys.stdout.flush()

            self.logger.debug(f"<<< {info_msg}")
            self.logger.debug(f"<<< {bestmove_msg}")

        except ValueError as e:
            self.logger.error(f"Search error: {e}", exc_info=True)
            print(f"# Search error: {e}", file=sys.stderr)

        finally:
            self.searching = False
            self.logger.debug("Search thread finished")

    def handle_stop(self):
        """
        Handle 'stop' command - stop ongoing search.

        Sets stop_search flag and waits for search thread to finish.
        Search will return best move found so far.
        """
        self.logger.info("Handling: stop")
        self.stop_search = True

        if self.search_thread and self.search_thread.is_alive():
            self.search_thread.join(timeout=5.0)
            if self.search_thread.is_alive():
                self.logger.warning("Search thread did not finish within timeout")

    def wait(self, timeout: Optional[float] = None):
        """Block until the running search (if any) has finished."""
        if self.search_thread:
            self.search_thread.join(timeout=timeout)

    def handle_quit(self):
        """Handle 'quit' command - shutdown engine."""
        self.logger.info("Handling: quit - shutting down engine")

        if self.search_thread and self.search_thread.is_alive():
            self.stop_search = True
            self.search_thread.join()

        self.logger.info("=== ChessBot Engine Stopped ===")


def main():
    """Run the engine on stdin/stdout with the default configuration."""
    engine = UCIEngine()
    engine.run()
