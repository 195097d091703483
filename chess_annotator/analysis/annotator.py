# chess_annotator/analysis/annotator.py
"""
Handles the generation of PGN comments from move judgements.

This module provides the Annotator class, which is a "dumb" formatting engine.
It takes a finished `MoveJudgement` and assembles the PGN comment and NAG
for the move, abstracting away the details of comment structure and formatting.
"""
import logging
import re
from typing import List, Optional, Tuple

from chess_annotator.config import settings
from chess_annotator.types import Line, MoveJudgement, MoveQuality

logger = logging.getLogger(settings.APP_NAME + ".Annotator")


def format_evaluation(value: float) -> str:
    """White-positive evaluation with an explicit sign, e.g. "+1.20"."""
    return f"{value:+.2f}"


class Annotator:
    """
    Creates formatted PGN comments from move judgements.
    This class is a "dumb" formatter and does not perform any calculations.
    """

    def __init__(self, tag_name: str = "Suggest"):
        """
        Initializes the Annotator.

        Args:
            tag_name: Name of the bracketed tag holding the suggestion and lines.
        """
        self.tag_name = tag_name
        tier_names = "|".join(quality.value for quality in MoveQuality)
        self._our_analysis_tags_patterns = [
            re.compile(r"\[" + re.escape(tag_name) + r"\s+[^\]]+\]"),
            re.compile(r"\b(" + tier_names + r") \(gap [\d.]+\)"),
            re.compile(r"\bUnjudged \([^)]*\)"),
        ]
        logger.debug(f"Annotator initialized with tag '{self.tag_name}'.")

    def format_line(self, line: Line) -> str:
        return f"{' '.join(line.moves)} ({format_evaluation(line.final_evaluation)})"

    def _format_suggestion_tag(self, judgement: MoveJudgement) -> str:
        """Formats the [Suggest ...] tag with the better move and its lines."""
        if judgement.suggested_move is None:
            return ""

        parts = [judgement.suggested_move.san]
        if judgement.alternate_lines:
            numbered = [f"{i + 1}) {self.format_line(line)}" for i, line in enumerate(judgement.alternate_lines)]
            parts.append(f"Lines: {' '.join(numbered)}")
        return f"[{self.tag_name} {'; '.join(parts)}]"

    def format_quality(self, judgement: MoveJudgement) -> str:
        if judgement.is_degraded:
            return f"Unjudged ({judgement.error})"
        return f"{judgement.quality.value} (gap {judgement.score_gap:.2f})"

    def nag_for(self, judgement: MoveJudgement) -> Optional[int]:
        if judgement.is_degraded:
            return None
        return settings.QUALITY_NAGS.get(judgement.quality)

    def prepare_context_from_existing_comment(self, existing_comment: str) -> Tuple[str, str]:
        """
        Parses an existing comment to extract the user's portion and the clock tag.

        Returns:
            A tuple of (user_comment_part, clk_comment_part).
        """
        # 1. Preserve the clock tag if it exists
        clk_part_regex = re.compile(r"(\[%clk\s+[\d:\.]+\])")
        clk_match = clk_part_regex.search(existing_comment)
        clk_comment_part = clk_match.group(1) if clk_match else ""

        # 2. Clean our own tags from a previous run out of the original comment
        cleaned_comment = existing_comment
        if clk_comment_part:
            cleaned_comment = cleaned_comment.replace(clk_comment_part, "").strip()

        for pattern in self._our_analysis_tags_patterns:
            cleaned_comment = pattern.sub("", cleaned_comment).strip()

        # 3. Whatever is left was written by the user
        user_comment_part = " ".join(cleaned_comment.split())

        return user_comment_part, clk_comment_part

    def generate_pgn_node_comment(self, judgement: MoveJudgement, existing_comment: str = "") -> str:
        """
        Generates a complete PGN comment string for a judged move.
        The order is: Quality (gap) [%clk] [Suggest ...] user comment
        """
        user_comment_part, clk_comment_part = self.prepare_context_from_existing_comment(existing_comment)

        final_parts: List[str] = [
            self.format_quality(judgement),
            clk_comment_part,
            self._format_suggestion_tag(judgement),
            user_comment_part,
        ]
        return " ".join(part for part in final_parts if part)
