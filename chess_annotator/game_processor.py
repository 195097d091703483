# chess_annotator/game_processor.py
"""
Processes a single chess game from judgement to annotation.

This module contains the GameProcessor class, which judges every ply of a
game with the MoveClassifier and writes the verdicts back into the game's
PGN nodes. Each ply depends only on the position it was played from, so
plies may be judged in parallel; each task builds its own board handle.
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional

import chess.pgn

from chess_annotator.analysis.annotator import Annotator
from chess_annotator.analysis.move_classifier import MoveClassifier, neutral_judgement
from chess_annotator.config import settings
from chess_annotator.exceptions import EvaluationError
from chess_annotator.pgn.pgn_handler import PGNHandler
from chess_annotator.types import MoveJudgement, PlyRecord, ProcessedGameResult, ProgressReporter
import chess_annotator.context_builders as builders

logger = logging.getLogger(__name__.split('.')[0] + ".GameProcessor")


class GameProcessor:
    """
    A worker that executes the ply-by-ply judgement workflow for a game.
    """

    def __init__(
        self,
        # --- Service Components (Injected) ---
        pgn_handler: PGNHandler,
        move_classifier: MoveClassifier,
        annotator: Annotator,
        # --- Processing Parameters ---
        workers: int = settings.DEFAULT_WORKERS,
        shutdown_event: Optional[threading.Event] = None,
    ):
        """Initializes the GameProcessor with required components and settings."""
        self.pgn_handler = pgn_handler
        self.move_classifier = move_classifier
        self.annotator = annotator
        self.workers = max(1, workers)
        self.shutdown_event = shutdown_event or threading.Event()
        logger.debug(f"GameProcessor initialized with {self.workers} worker(s).")

    def judge_ply(self, record: PlyRecord) -> MoveJudgement:
        """
        Judges one ply on a fresh board. Evaluation errors degrade to a
        neutral judgement so the rest of the game can still be annotated.
        """
        board = record.board_before
        try:
            return self.move_classifier.classify(board, record.move, record.ply_index)
        except EvaluationError as e:
            logger.warning(f"Ply {record.ply_index} ({record.san}) could not be judged: {e}")
            return neutral_judgement(board, record.move, record.ply_index, e)

    def _judge_sequential(self, records: List[PlyRecord], progress: Optional[ProgressReporter]) -> List[MoveJudgement]:
        judgements: List[MoveJudgement] = []
        for record in records:
            if self.shutdown_event.is_set():
                logger.warning("Shutdown requested; no further plies will be judged.")
                break
            judgements.append(self.judge_ply(record))
            if progress:
                progress.update(1)
        return judgements

    def _judge_parallel(self, records: List[PlyRecord], progress: Optional[ProgressReporter]) -> List[MoveJudgement]:
        results: Dict[int, MoveJudgement] = {}

        def task(record: PlyRecord) -> Optional[MoveJudgement]:
            if self.shutdown_event.is_set():
                return None
            return self.judge_ply(record)

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [executor.submit(task, record) for record in records]
            for record, future in zip(records, futures):
                judgement = future.result()
                if judgement is None:
                    continue
                results[record.ply_index] = judgement
                if progress:
                    progress.update(1)

        # Only a contiguous prefix is meaningful once a shutdown cut the run short.
        judgements: List[MoveJudgement] = []
        for record in records:
            if record.ply_index not in results:
                logger.warning("Shutdown requested; no further plies will be judged.")
                break
            judgements.append(results[record.ply_index])
        return judgements

    def judge_records(
        self, records: List[PlyRecord], progress: Optional[ProgressReporter] = None
    ) -> List[MoveJudgement]:
        """Returns the judgements for `records` in ply order."""
        if self.workers > 1 and len(records) > 1:
            return self._judge_parallel(records, progress)
        return self._judge_sequential(records, progress)

    def judge_game(
        self, game: chess.pgn.Game, progress: Optional[ProgressReporter] = None
    ) -> List[MoveJudgement]:
        """Judges every mainline ply of `game` without touching its PGN nodes."""
        records = builders.build_ply_records(game)
        if progress:
            progress.reset(total=len(records))
        return self.judge_records(records, progress)

    def process_game(
        self, game: chess.pgn.Game, progress: Optional[ProgressReporter] = None
    ) -> ProcessedGameResult:
        """
        Judges a game and writes each verdict into the comment and NAGs of
        its PGN node.
        """
        game_id = self.pgn_handler.extract_game_id(game.headers) or "N/A"
        records = builders.build_ply_records(game)

        if not records:
            logger.info(f"Game {game_id} has no moves to process.")
            return ProcessedGameResult(annotated_game=game, judgements=[], summary=None)

        if progress:
            progress.reset(total=len(records))
            progress.set_description(f"  Game {game_id[:12]}")

        judgements = self.judge_records(records, progress)

        for record, judgement in zip(records, judgements):
            node = record.pgn_node
            if node is None:
                continue
            node.comment = self.annotator.generate_pgn_node_comment(judgement, node.comment)
            nag = self.annotator.nag_for(judgement)
            if nag is not None:
                node.nags.add(nag)

        self._add_final_pgn_headers(game, judgements)
        summary = builders.build_game_summary(game, game_id, judgements)
        return ProcessedGameResult(annotated_game=game, judgements=judgements, summary=summary)

    def _add_final_pgn_headers(self, game: chess.pgn.Game, judgements: List[MoveJudgement]):
        """Adds the average score gap of each side to the game headers."""
        white_gaps = [j.score_gap for j in judgements if j.mover == chess.WHITE and not j.is_degraded]
        black_gaps = [j.score_gap for j in judgements if j.mover == chess.BLACK and not j.is_degraded]

        game.headers["WhiteAvgGap"] = f"{sum(white_gaps) / len(white_gaps):.2f}" if white_gaps else "0.00"
        game.headers["BlackAvgGap"] = f"{sum(black_gaps) / len(black_gaps):.2f}" if black_gaps else "0.00"
