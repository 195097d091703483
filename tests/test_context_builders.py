# tests/test_context_builders.py
"""
Unit tests for the functions in context_builders.py.
"""
import pytest
import chess

from chess_annotator.context_builders import build_game_summary, build_ply_records, judgement_to_display
from chess_annotator.types import GameSummary, Line, MoveJudgement, MoveQuality, RankedMove


def _judgement(index: int, quality: MoveQuality, gap: float, error=None) -> MoveJudgement:
    return MoveJudgement(
        ply_index=index,
        move=chess.Move.from_uci("e2e4"),
        san="e4",
        mover=chess.WHITE if index % 2 == 0 else chess.BLACK,
        quality=quality,
        score_gap=gap,
        error=error,
    )

# --- Tests for build_ply_records ---

def test_build_ply_records(sample_game):
    records = build_ply_records(sample_game)

    assert [r.ply_index for r in records] == list(range(6))
    assert [r.san for r in records] == ["e4", "e5", "Nf3", "Nc6", "Bb5", "a6"]
    assert records[0].fen_before == chess.STARTING_FEN
    assert records[1].fen_before == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"
    assert records[1].mover == chess.BLACK
    assert records[0].pgn_node is sample_game.variations[0]

def test_ply_records_chain_positions(sample_game):
    records = build_ply_records(sample_game)
    for current, following in zip(records, records[1:]):
        board = current.board_before
        board.push(current.move)
        assert board.fen() == following.fen_before

def test_ply_records_from_custom_start(blunder_game):
    records = build_ply_records(blunder_game)
    assert records[0].fen_before == blunder_game.board().fen()
    assert [r.san for r in records] == ["Kf1", "Qxd2"]

# --- Tests for judgement_to_display ---

def test_display_for_good_move():
    payload = judgement_to_display(_judgement(0, MoveQuality.GOOD, 0.25))
    assert payload == {
        "ply": 0, "move": "e4", "color": "white", "quality": "Good", "scoreGap": 0.25,
        "suggestedMove": None, "alternateLines": None, "error": None,
    }

def test_display_exposes_arrow_and_lines():
    judgement = MoveJudgement(
        ply_index=1, move=chess.Move.from_uci("e8f8"), san="Kf8", mover=chess.BLACK,
        quality=MoveQuality.BLUNDER, score_gap=14.456,
        suggested_move=RankedMove(chess.Move.from_uci("d7d4"), "Rxd4", -5.1),
        alternate_lines=(Line(("Rxd4", "Kd2", "Rd8"), -5.333),),
    )
    payload = judgement_to_display(judgement)
    assert payload["color"] == "black"
    assert payload["scoreGap"] == pytest.approx(14.46, abs=0.01)
    assert payload["suggestedMove"] == {"from": "d7", "to": "d4", "san": "Rxd4"}
    assert payload["alternateLines"] == [{"moves": ["Rxd4", "Kd2", "Rd8"], "evaluation": -5.33}]

# --- Tests for build_game_summary ---

def test_build_game_summary(sample_game):
    judgements = [
        _judgement(0, MoveQuality.BRILLIANT, 0.0),
        _judgement(1, MoveQuality.GOOD, 0.2),
        _judgement(2, MoveQuality.MISTAKE, 2.0),
        _judgement(3, MoveQuality.GOOD, 0.3),
        _judgement(4, MoveQuality.NORMAL, 0.0, error="probe failed"),
        _judgement(5, MoveQuality.BLUNDER, 5.0),
    ]

    summary = build_game_summary(sample_game, "game1", judgements)

    assert isinstance(summary, GameSummary)
    assert summary.white_player == "Player A"
    assert summary.black_player == "Player B"
    assert summary.total_plies == 6
    assert summary.degraded_plies == 1
    assert summary.white_counts == {"Brilliant": 1, "Mistake": 1}
    assert summary.black_counts == {"Good": 2, "Blunder": 1}
    assert summary.white_average_gap == pytest.approx(1.0)
    assert summary.black_average_gap == pytest.approx(5.5 / 3)

def test_build_game_summary_without_moves(sample_game):
    assert build_game_summary(sample_game, "game1", []) is None
