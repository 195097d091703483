# chess_annotator/statistics.py
"""
Manages statistics tracking for the Chess Annotator application.

This module provides the StatisticsTracker class, a centralized component
for aggregating and reporting metrics from an annotation run.
"""
import logging
import os
from collections import Counter
from typing import Iterable, List, Optional

from chess_annotator.config import settings
from chess_annotator.types import MoveJudgement, MoveQuality

logger = logging.getLogger(settings.APP_NAME + ".Statistics")


class StatisticsTracker:
    """
    A stateful class to aggregate and report statistics for an annotation run.
    """

    def __init__(self):
        """Initializes the StatisticsTracker with all counters set to zero."""
        self.stats: Counter[str] = Counter()
        self.quality_counts: Counter[str] = Counter()
        self.output_paths: List[str] = []
        logger.debug("StatisticsTracker initialized.")

    def reset(self) -> None:
        """Resets all statistics to their initial state for a new run."""
        self.stats.clear()
        self.quality_counts.clear()
        self.output_paths = []
        logger.info("StatisticsTracker has been reset.")

    def add_game_read(self) -> None:
        self.stats["games_read"] += 1

    def add_game_skipped(self, reason: str) -> None:
        """Increments the counter for skipped games, categorized by reason."""
        self.stats["games_skipped_total"] += 1
        self.stats[f"skipped_{reason}"] += 1

    def add_game_annotated(self) -> None:
        self.stats["games_annotated"] += 1

    def add_game_with_error(self) -> None:
        self.stats["games_with_errors"] += 1

    def add_judgements(self, judgements: Iterable[MoveJudgement]) -> None:
        """Counts judged plies by tier, and degraded plies separately."""
        for judgement in judgements:
            self.stats["plies_judged"] += 1
            if judgement.is_degraded:
                self.stats["plies_degraded"] += 1
            else:
                self.quality_counts[judgement.quality.value] += 1

    def add_output_path(self, path: Optional[str]) -> None:
        if path:
            self.output_paths.append(os.path.abspath(path))

    def log_summary(self) -> None:
        """
        Logs a formatted summary of all collected statistics for the run.
        """
        logger.info("\n--- Annotation Run Summary ---")

        display_order = [
            ("games_read", "Total Games Read"),
            ("games_annotated", "Games Fully Annotated"),
            ("games_skipped_total", "Total Games Skipped"),
            ("skipped_no_moves", "  - Skipped (No Moves Found)"),
            ("games_with_errors", "Games with Critical Errors"),
            ("plies_judged", "Plies Judged"),
            ("plies_degraded", "Plies Left Unjudged"),
        ]

        for key, display_text in display_order:
            if key in self.stats:  # Only display if the key has been populated
                logger.info(f"{display_text}: {self.stats[key]}")

        for quality in MoveQuality:
            if quality.value in self.quality_counts:
                logger.info(f"  {quality.value}: {self.quality_counts[quality.value]}")
        logger.info("---")

        for path in self.output_paths:
            if os.path.exists(path):
                logger.info(f"Output written: '{path}'")
