# tests/test_game_processor.py
"""
Tests for the per-game judgement workflow.
"""
import threading
from unittest.mock import MagicMock

import pytest
import chess
import chess.pgn

from chess_annotator.analysis.annotator import Annotator
from chess_annotator.analysis.move_classifier import MoveClassifier
from chess_annotator.exceptions import EngineProbeError
from chess_annotator.game_processor import GameProcessor
from chess_annotator.pgn.pgn_handler import PGNHandler
from chess_annotator.types import MoveQuality


def make_processor(workers: int = 1, classifier=None, shutdown_event=None) -> GameProcessor:
    return GameProcessor(
        pgn_handler=PGNHandler(),
        move_classifier=classifier or MoveClassifier(),
        annotator=Annotator(),
        workers=workers,
        shutdown_event=shutdown_event,
    )


def test_one_judgement_per_ply_in_order(sample_game):
    judgements = make_processor().judge_game(sample_game)
    assert [j.ply_index for j in judgements] == list(range(6))
    assert [j.san for j in judgements] == ["e4", "e5", "Nf3", "Nc6", "Bb5", "a6"]
    assert [j.mover for j in judgements] == [chess.WHITE, chess.BLACK] * 3

def test_parallel_matches_sequential(sample_game):
    sequential = make_processor(workers=1).judge_game(sample_game)
    parallel = make_processor(workers=4).judge_game(sample_game)
    assert parallel == sequential

def test_process_game_writes_comments_and_headers(blunder_game):
    result = make_processor().process_game(blunder_game)
    first, second = result.judgements

    assert first.quality == MoveQuality.BLUNDER
    node = blunder_game.variations[0]
    assert node.comment.startswith("Blunder (gap")
    assert "[Suggest Rxd5; Lines: 1) Rxd5" in node.comment
    assert chess.pgn.NAG_BLUNDER in node.nags

    assert second.san == "Qxd2"
    assert blunder_game.headers["WhiteAvgGap"] == f"{first.score_gap:.2f}"
    assert result.summary.white_counts == {"Blunder": 1}
    assert result.summary.total_plies == 2

def test_existing_clock_comment_is_kept(sample_game):
    make_processor().process_game(sample_game)
    assert "[%clk 0:03:00]" in sample_game.variations[0].comment

def test_game_without_moves(sample_game):
    empty = chess.pgn.Game()
    result = make_processor().process_game(empty)
    assert result.judgements == []
    assert result.summary is None

def test_failed_ply_degrades_to_neutral_judgement(sample_game):
    real = MoveClassifier()

    def classify(board, move, index):
        if index == 2:
            raise EngineProbeError("rules engine exhausted")
        return real.classify(board, move, index)

    classifier = MagicMock(spec=MoveClassifier)
    classifier.classify.side_effect = classify

    result = make_processor(classifier=classifier).process_game(sample_game)
    assert len(result.judgements) == 6
    degraded = result.judgements[2]
    assert degraded.is_degraded
    assert degraded.quality == MoveQuality.NORMAL
    assert degraded.suggested_move is None
    assert degraded.san == "Nf3"
    assert sample_game.variations[0].variations[0].variations[0].comment.startswith("Unjudged")
    assert result.summary.degraded_plies == 1

@pytest.mark.parametrize("workers", [1, 3])
def test_shutdown_stops_issuing_plies(sample_game, workers):
    event = threading.Event()
    event.set()
    judgements = make_processor(workers=workers, shutdown_event=event).judge_game(sample_game)
    assert judgements == []

def test_progress_is_reported(sample_game):
    progress = MagicMock()
    make_processor().process_game(sample_game, progress)
    progress.reset.assert_called_once_with(total=6)
    assert progress.update.call_count == 6
