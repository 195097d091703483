# tests/conftest.py
"""
Shared fixtures for the ChessAnnotator test suite.
"""
import pytest
import chess
import chess.pgn

# White to move; the rook on d2 can take the undefended queen on d5.
FREE_QUEEN_FEN = "4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1"
# Mirror image for Black: the rook on d7 can take the queen on d4.
FREE_QUEEN_BLACK_FEN = "4k3/3r4/8/8/3Q4/8/8/4K3 b - - 0 1"
# White is in check from an undefended queen; Kxb2 is the only legal move.
FORCED_MOVE_FEN = "k7/8/8/8/8/8/1q6/K7 w - - 0 1"
# Fool's mate: White is checkmated.
CHECKMATE_FEN = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
# Black is stalemated.
STALEMATE_FEN = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"
# Ra8 is a back-rank mate.
BACK_RANK_FEN = "6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1"


@pytest.fixture
def start_board() -> chess.Board:
    return chess.Board()

@pytest.fixture
def free_queen_board() -> chess.Board:
    return chess.Board(FREE_QUEEN_FEN)

@pytest.fixture
def free_queen_black_board() -> chess.Board:
    return chess.Board(FREE_QUEEN_BLACK_FEN)

@pytest.fixture
def forced_move_board() -> chess.Board:
    return chess.Board(FORCED_MOVE_FEN)

@pytest.fixture
def checkmate_board() -> chess.Board:
    return chess.Board(CHECKMATE_FEN)

@pytest.fixture
def stalemate_board() -> chess.Board:
    return chess.Board(STALEMATE_FEN)

@pytest.fixture
def sample_game() -> chess.pgn.Game:
    """
    Provides a simple, standard chess game object for testing.
    The game is: 1. e4 e5 2. Nf3 Nc6 3. Bb5 a6
    """
    game = chess.pgn.Game()
    game.headers["Event"] = "Test Game"
    game.headers["Site"] = "https://www.chess.com/game/live/123456789"
    game.headers["White"] = "Player A"
    game.headers["Black"] = "Player B"

    node = game.add_variation(chess.Move.from_uci("e2e4"))
    node.comment = "[%clk 0:03:00]"
    node = node.add_variation(chess.Move.from_uci("e7e5"))
    node = node.add_variation(chess.Move.from_uci("g1f3"))
    node = node.add_variation(chess.Move.from_uci("b8c6"))
    node = node.add_variation(chess.Move.from_uci("f1b5"))
    node = node.add_variation(chess.Move.from_uci("a7a6"))

    return game

@pytest.fixture
def blunder_game() -> chess.pgn.Game:
    """A two-ply game from FREE_QUEEN_FEN where White ignores the queen and Black takes the rook."""
    game = chess.pgn.Game()
    game.setup(chess.Board(FREE_QUEEN_FEN))
    game.headers["White"] = "Careless"
    game.headers["Black"] = "Greedy"
    node = game.add_variation(chess.Move.from_uci("e1f1"))
    node.add_variation(chess.Move.from_uci("d5d2"))
    return game
