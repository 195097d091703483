# chess_annotator/utils/chess_utils.py
"""
Generic chess-related utility functions.

This module provides helpers that operate on `chess.Board` handles and are
not tied to a specific component. The `probe_move` context manager is the
only way the evaluation core mutates a board: every probing move is popped
again on exit, including when the body raises.
"""
from contextlib import contextmanager
from typing import Dict, Final, Iterator, Union

import chess

from chess_annotator.exceptions import EngineProbeError, IllegalMoveError

SIDE_SIGN: Final[Dict[chess.Color, int]] = {chess.WHITE: 1, chess.BLACK: -1}
"""Multiplier that turns a White-positive score into the given side's perspective."""


def color_name(color: chess.Color) -> str:
    return "White" if color == chess.WHITE else "Black"


@contextmanager
def probe_move(board: chess.Board, move: chess.Move) -> Iterator[chess.Board]:
    """
    Temporarily plays `move` on `board`.

    The move is pushed on entry and popped on exit, so the board is left
    exactly as it was found. Failures of the board itself are reported as
    `EngineProbeError`.
    """
    depth = len(board.move_stack)
    try:
        board.push(move)
    except (AssertionError, ValueError, IndexError) as e:
        # A failed push may already have recorded the move.
        while len(board.move_stack) > depth:
            board.pop()
        raise EngineProbeError(f"Failed to apply probe move {move.uci()} on '{board.fen()}'") from e
    try:
        yield board
    finally:
        try:
            board.pop()
        except IndexError as e:
            raise EngineProbeError(f"Failed to undo probe move {move.uci()}") from e
        if len(board.move_stack) != depth:
            raise EngineProbeError(f"Board move stack not restored after probing {move.uci()}")


def board_from(position: Union[chess.Board, str]) -> chess.Board:
    """Returns a private board handle for a FEN string or a copy of a board."""
    if isinstance(position, chess.Board):
        return position.copy()
    try:
        return chess.Board(position)
    except ValueError as e:
        raise EngineProbeError(f"Unparseable position: '{position}'") from e


def parse_played_move(board: chess.Board, move: Union[chess.Move, str]) -> chess.Move:
    """
    Resolves a played move given as a `chess.Move`, UCI or SAN string and
    checks that it is legal in `board`.

    Raises:
        IllegalMoveError: The move cannot be parsed or is not legal here.
    """
    fen = board.fen()
    if isinstance(move, chess.Move):
        if not board.is_legal(move):
            raise IllegalMoveError(fen, move.uci())
        return move

    text = move.strip()
    try:
        candidate = chess.Move.from_uci(text)
    except ValueError:
        candidate = None
    if candidate is not None and board.is_legal(candidate):
        return candidate

    try:
        return board.parse_san(text)
    except ValueError as e:
        raise IllegalMoveError(fen, text, str(e)) from e
