# chess_annotator/reporting/report_generator.py
"""
Generates CSV reports from move judgements.

This module provides the `ReportGenerator` class, which writes one CSV row
per judged ply and a per-game summary CSV with tier counts for each side.
"""
import csv
import logging
import os
from typing import Any, Dict, Iterable, List, Tuple

from chess_annotator.analysis.annotator import format_evaluation
from chess_annotator.config import settings
from chess_annotator.exceptions import CSVReportError
from chess_annotator.types import GameSummary, MoveJudgement, MoveQuality
from chess_annotator.utils.chess_utils import color_name

logger = logging.getLogger(settings.APP_NAME + ".ReportGenerator")


class ReportGenerator:
    """Generates reports from move judgements."""

    _PLY_CSV_HEADERS: List[str] = [
        "GameID", "Ply", "Color", "Move", "Quality", "ScoreGap",
        "SuggestedMove", "SuggestedFrom", "SuggestedTo", "Line1", "Line2", "Error",
    ]

    _GAME_CSV_HEADERS: List[str] = (
        ["GameID", "White", "Black", "Result", "TotalPlies", "DegradedPlies",
         "WhiteAverageGap", "BlackAverageGap"]
        + [f"White{quality.value}" for quality in MoveQuality]
        + [f"Black{quality.value}" for quality in MoveQuality]
        + ["Event", "Site", "Date"]
    )

    def __init__(self):
        """Initializes the ReportGenerator."""
        logger.debug("ReportGenerator initialized.")

    def _ply_row(self, game_id: str, judgement: MoveJudgement) -> Dict[str, Any]:
        row: Dict[str, Any] = {
            "GameID": game_id,
            "Ply": judgement.ply_index,
            "Color": color_name(judgement.mover),
            "Move": judgement.san,
            "Quality": judgement.quality.value,
            "ScoreGap": f"{judgement.score_gap:.2f}",
            "Error": judgement.error or "",
        }
        if judgement.suggested_move is not None:
            row["SuggestedMove"] = judgement.suggested_move.san
            row["SuggestedFrom"], row["SuggestedTo"] = judgement.suggested_move.arrow
        for i, line in enumerate(judgement.alternate_lines or (), start=1):
            row[f"Line{i}"] = f"{' '.join(line.moves)} ({format_evaluation(line.final_evaluation)})"
        return row

    def _game_row(self, summary: GameSummary) -> Dict[str, Any]:
        row: Dict[str, Any] = {
            **summary.pgn_headers,
            "GameID": summary.game_id,
            "White": summary.white_player,
            "Black": summary.black_player,
            "TotalPlies": summary.total_plies,
            "DegradedPlies": summary.degraded_plies,
            "WhiteAverageGap": f"{summary.white_average_gap:.2f}",
            "BlackAverageGap": f"{summary.black_average_gap:.2f}",
        }
        for quality in MoveQuality:
            row[f"White{quality.value}"] = summary.white_counts.get(quality.value, 0)
            row[f"Black{quality.value}"] = summary.black_counts.get(quality.value, 0)
        return row

    def _write_csv(self, path: str, headers: List[str], rows: List[Dict[str, Any]]) -> None:
        try:
            if (output_dir := os.path.dirname(path)):
                os.makedirs(output_dir, exist_ok=True)

            with open(path, 'w', newline='', encoding='utf-8') as csvfile:
                writer = csv.DictWriter(csvfile, fieldnames=headers, extrasaction='ignore')
                writer.writeheader()
                writer.writerows(rows)
        except (IOError, OSError) as e:
            raise CSVReportError(f"Failed to write CSV report to '{path}'") from e

    def generate_ply_report(
        self, games: Iterable[Tuple[str, List[MoveJudgement]]], output_report_path: str
    ) -> int:
        """
        Writes one row per judged ply for each `(game_id, judgements)` pair.

        Returns:
            The number of rows written.
        """
        rows = [self._ply_row(game_id, j) for game_id, judgements in games for j in judgements]
        if not rows:
            logger.info("No judgements provided; per-ply CSV report will not be generated.")
            return 0

        self._write_csv(output_report_path, self._PLY_CSV_HEADERS, rows)
        logger.info(f"Per-ply CSV report with {len(rows)} rows generated: '{output_report_path}'")
        return len(rows)

    def generate_game_report(self, game_summaries: List[GameSummary], output_report_path: str) -> int:
        """Generates a CSV summary report with one row per game."""
        if not game_summaries:
            logger.info("No game summary data provided; game CSV report will not be generated.")
            return 0

        rows = [self._game_row(summary) for summary in game_summaries]
        self._write_csv(output_report_path, self._GAME_CSV_HEADERS, rows)
        logger.info(f"Game CSV summary report generated for {len(rows)} games: '{output_report_path}'")
        return len(rows)
