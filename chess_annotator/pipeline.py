# chess_annotator/pipeline.py
"""
The main annotation pipeline for the Chess Annotator application.

`AnnotationPipeline` wires the evaluation core to its game sources (a PGN
file or a player's recent chess.com games) and to its outputs (annotated
PGN plus CSV reports), tracks statistics and honours Ctrl+C between plies.
"""
import logging
import threading
import time
from typing import Iterator, List, Optional, Tuple

import chess.pgn
from tqdm import tqdm

from chess_annotator.analysis.annotator import Annotator
from chess_annotator.analysis.evaluator import StaticEvaluator
from chess_annotator.analysis.line_generator import LineGenerator
from chess_annotator.analysis.move_classifier import MoveClassifier
from chess_annotator.analysis.move_ranker import MoveRanker
from chess_annotator.config import settings
from chess_annotator.exceptions import ChessAnnotatorError, PGNError, ReportGenerationError
from chess_annotator.fetch.chesscom_client import ChessComClient
from chess_annotator.game_processor import GameProcessor
from chess_annotator.pgn.pgn_handler import PGNHandler
from chess_annotator.reporting.report_generator import ReportGenerator
from chess_annotator.statistics import StatisticsTracker
from chess_annotator.types import GameSummary, MoveJudgement
from chess_annotator.utils.signal_manager import SignalManager

logger = logging.getLogger(settings.APP_NAME + ".Pipeline")

# --- TQDM Adapter for our ProgressReporter Protocol ---
class TqdmProgressReporter:
    """An adapter that makes a tqdm progress bar conform to our ProgressReporter protocol."""
    def __init__(self, pbar: tqdm):
        self._pbar = pbar

    def reset(self, total: int = 0) -> None:
        self._pbar.reset(total=total)

    def update(self, n: int = 1) -> None:
        self._pbar.update(n)

    def set_description(self, desc: str) -> None:
        self._pbar.set_description_str(desc)

    def close(self) -> None:
        self._pbar.close()


class AnnotationPipeline:
    """
    Orchestrates the full annotation workflow from game source to outputs.
    """

    def __init__(self, **kwargs):
        """Initializes the entire application stack via dependency injection."""
        # --- Core Parameters ---
        self.max_lines = kwargs.get('max_lines', settings.DEFAULT_MAX_LINES)
        self.line_depth = kwargs.get('line_depth', settings.DEFAULT_LINE_DEPTH)
        self.workers = kwargs.get('workers', settings.DEFAULT_WORKERS)
        self.shutdown_event = threading.Event()

        # --- Component Initialization ---
        evaluator = StaticEvaluator(kwargs.get('evaluation_weights'))
        ranker = MoveRanker(evaluator)
        self.move_classifier = MoveClassifier(
            ranker=ranker,
            line_generator=LineGenerator(ranker, evaluator),
            thresholds=kwargs.get('quality_thresholds'),
            max_lines=self.max_lines,
            line_depth=self.line_depth,
        )
        self.pgn_handler = PGNHandler(pgn_output_columns=kwargs.get('pgn_write_columns', settings.PGN_DEFAULT_COLUMNS))
        self.annotator = Annotator()
        self.chesscom_client = ChessComClient()
        self.report_generator = ReportGenerator()
        self.stats_tracker = StatisticsTracker()

        self.game_processor = GameProcessor(
            pgn_handler=self.pgn_handler,
            move_classifier=self.move_classifier,
            annotator=self.annotator,
            workers=self.workers,
            shutdown_event=self.shutdown_event,
        )

    def _games_from_chesscom(self, username: str) -> Iterator[chess.pgn.Game]:
        for fetched in self.chesscom_client.fetch_recent_games(username):
            if self.shutdown_event.is_set():
                break
            try:
                game = self.pgn_handler.game_from_string(fetched.pgn)
            except PGNError as e:
                logger.warning(f"Skipping unreadable chess.com game {fetched.url}: {e}")
                continue
            if fetched.url and "Link" not in game.headers:
                game.headers["Link"] = fetched.url
            yield game

    def _game_source(self, input_pgn_path: Optional[str], chesscom_user: Optional[str]) -> Iterator[chess.pgn.Game]:
        if chesscom_user:
            return self._games_from_chesscom(chesscom_user)
        if input_pgn_path:
            return self.pgn_handler.stream_games(input_pgn_path, self.shutdown_event)
        raise ValueError("Either an input PGN path or a chess.com username is required.")

    def run(
        self,
        output_pgn_path: str,
        input_pgn_path: Optional[str] = None,
        chesscom_user: Optional[str] = None,
        **kwargs,
    ) -> None:
        """Executes the main annotation run."""
        start_time = time.time()
        self.stats_tracker.reset()

        ply_report = kwargs.get('ply_report_path')
        game_report = kwargs.get('game_report_path')

        logger.info("Starting annotation run...")

        with SignalManager(self.shutdown_event):
            try:
                game_summaries: List[GameSummary] = []
                game_judgements: List[Tuple[str, List[MoveJudgement]]] = []

                with open(output_pgn_path, 'a+', encoding='utf-8') as outfile, \
                     tqdm(total=0, unit="ply", bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt}") as ply_pbar:

                    progress = TqdmProgressReporter(ply_pbar)

                    for game in self._game_source(input_pgn_path, chesscom_user):
                        if self.shutdown_event.is_set():
                            break
                        self.stats_tracker.add_game_read()

                        try:
                            result = self.game_processor.process_game(game, progress)
                        except ChessAnnotatorError as e:
                            logger.error(f"Critical error processing game: {e}. Skipping.")
                            self.stats_tracker.add_game_with_error()
                            continue

                        if not result.judgements:
                            self.stats_tracker.add_game_skipped("no_moves")
                            continue

                        self.pgn_handler.export_annotated_game(result.annotated_game, outfile)
                        self.stats_tracker.add_game_annotated()
                        self.stats_tracker.add_judgements(result.judgements)

                        game_id = result.summary.game_id if result.summary else "N/A"
                        game_judgements.append((game_id, result.judgements))
                        if result.summary:
                            game_summaries.append(result.summary)

                self.stats_tracker.add_output_path(output_pgn_path)
                try:
                    if ply_report:
                        self.report_generator.generate_ply_report(game_judgements, ply_report)
                        self.stats_tracker.add_output_path(ply_report)
                    if game_report:
                        self.report_generator.generate_game_report(game_summaries, game_report)
                        self.stats_tracker.add_output_path(game_report)
                except ReportGenerationError as e:
                    logger.error(f"Report generation failed: {e}")
            finally:
                run_duration = time.time() - start_time
                logger.info(f"Annotation run finished in {run_duration:.2f} seconds.")
                self.stats_tracker.log_summary()
