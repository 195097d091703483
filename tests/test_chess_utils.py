# tests/test_chess_utils.py
"""
Unit tests for the board helpers in utils/chess_utils.py.
"""
import pytest
import chess

from chess_annotator.exceptions import EngineProbeError, IllegalMoveError
from chess_annotator.utils.chess_utils import board_from, parse_played_move, probe_move


def test_probe_move_pushes_and_pops(start_board):
    move = chess.Move.from_uci("e2e4")
    with probe_move(start_board, move) as probed:
        assert probed.peek() == move
        assert probed.turn == chess.BLACK
    assert start_board.fen() == chess.STARTING_FEN
    assert start_board.move_stack == []

def test_probe_move_restores_on_error(start_board):
    with pytest.raises(KeyError):
        with probe_move(start_board, chess.Move.from_uci("g1f3")):
            raise KeyError("boom")
    assert start_board.fen() == chess.STARTING_FEN

def test_probe_move_nested(start_board):
    with probe_move(start_board, chess.Move.from_uci("e2e4")):
        with probe_move(start_board, chess.Move.from_uci("e7e5")):
            assert len(start_board.move_stack) == 2
        assert len(start_board.move_stack) == 1
    assert start_board.move_stack == []

def test_probe_move_from_empty_square_raises_probe_error(start_board):
    with pytest.raises(EngineProbeError):
        with probe_move(start_board, chess.Move.from_uci("e4e5")):
            pass
    assert start_board.fen() == chess.STARTING_FEN
    assert start_board.move_stack == []

def test_board_from_copies_boards(start_board):
    copy = board_from(start_board)
    copy.push_san("e4")
    assert start_board.move_stack == []

def test_board_from_rejects_garbage():
    with pytest.raises(EngineProbeError):
        board_from("not a fen")

@pytest.mark.parametrize("played", ["e4", "e2e4", chess.Move.from_uci("e2e4")])
def test_parse_played_move_accepts_san_uci_and_moves(start_board, played):
    assert parse_played_move(start_board, played) == chess.Move.from_uci("e2e4")

@pytest.mark.parametrize("played", ["e5", "e2e5", "Nf6", chess.Move.from_uci("e2e5"), "xyz"])
def test_parse_played_move_rejects_illegal_moves(start_board, played):
    with pytest.raises(IllegalMoveError) as exc_info:
        parse_played_move(start_board, played)
    assert exc_info.value.fen == start_board.fen()
