# tests/test_annotator.py
"""
Unit tests for the PGN comment formatter.
"""
import pytest
import chess
import chess.pgn

from chess_annotator.analysis.annotator import Annotator, format_evaluation
from chess_annotator.types import Line, MoveJudgement, MoveQuality, RankedMove


@pytest.fixture
def annotator() -> Annotator:
    return Annotator()

@pytest.fixture
def good_judgement() -> MoveJudgement:
    return MoveJudgement(
        ply_index=0, move=chess.Move.from_uci("e2e4"), san="e4", mover=chess.WHITE,
        quality=MoveQuality.GOOD, score_gap=0.2,
    )

@pytest.fixture
def blunder_judgement() -> MoveJudgement:
    return MoveJudgement(
        ply_index=0, move=chess.Move.from_uci("e1f1"), san="Kf1", mover=chess.WHITE,
        quality=MoveQuality.BLUNDER, score_gap=13.7,
        suggested_move=RankedMove(chess.Move.from_uci("d2d5"), "Rxd5", 5.4),
        alternate_lines=(
            Line(("Rxd5", "Kf7", "Rd7+"), 5.8),
            Line(("Rd3", "Qxd3"), -10.25),
        ),
    )


@pytest.mark.parametrize("value, expected", [(0.0, "+0.00"), (1.234, "+1.23"), (-9.5, "-9.50")])
def test_format_evaluation(value, expected):
    assert format_evaluation(value) == expected

def test_comment_for_good_move(annotator, good_judgement):
    assert annotator.generate_pgn_node_comment(good_judgement) == "Good (gap 0.20)"
    assert annotator.nag_for(good_judgement) is None

def test_comment_for_blunder(annotator, blunder_judgement):
    comment = annotator.generate_pgn_node_comment(blunder_judgement)
    assert comment == (
        "Blunder (gap 13.70) "
        "[Suggest Rxd5; Lines: 1) Rxd5 Kf7 Rd7+ (+5.80) 2) Rd3 Qxd3 (-10.25)]"
    )
    assert annotator.nag_for(blunder_judgement) == chess.pgn.NAG_BLUNDER

@pytest.mark.parametrize("quality, nag", [
    (MoveQuality.BRILLIANT, None),
    (MoveQuality.NORMAL, None),
    (MoveQuality.INACCURACY, chess.pgn.NAG_DUBIOUS_MOVE),
    (MoveQuality.MISTAKE, chess.pgn.NAG_MISTAKE),
])
def test_nags(annotator, good_judgement, quality, nag):
    judgement = MoveJudgement(**{**good_judgement.__dict__, "quality": quality})
    assert annotator.nag_for(judgement) == nag

def test_degraded_judgement(annotator, good_judgement):
    degraded = MoveJudgement(**{**good_judgement.__dict__, "quality": MoveQuality.NORMAL, "error": "probe failed"})
    assert annotator.generate_pgn_node_comment(degraded) == "Unjudged (probe failed)"
    assert annotator.nag_for(degraded) is None

def test_clock_and_user_comment_are_preserved(annotator, good_judgement):
    comment = annotator.generate_pgn_node_comment(good_judgement, "nice move [%clk 0:02:59.5]")
    assert comment == "Good (gap 0.20) [%clk 0:02:59.5] nice move"

def test_previous_annotation_is_replaced(annotator, blunder_judgement, good_judgement):
    first = annotator.generate_pgn_node_comment(blunder_judgement, "[%clk 0:01:00] ouch")
    second = annotator.generate_pgn_node_comment(good_judgement, first)
    assert second == "Good (gap 0.20) [%clk 0:01:00] ouch"

def test_prepare_context_from_existing_comment(annotator):
    user, clk = annotator.prepare_context_from_existing_comment(
        "Mistake (gap 2.00) [%clk 0:10:00] [Suggest Nf3] keep it simple"
    )
    assert user == "keep it simple"
    assert clk == "[%clk 0:10:00]"
