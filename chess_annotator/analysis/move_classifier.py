# chess_annotator/analysis/move_classifier.py
"""
Classifies played moves by how far they fall short of the best move.

This module provides the `MoveClassifier` class. For a position and the
move actually played it ranks all legal moves, measures the score gap
between the best move and the played one from the mover's perspective,
assigns a `MoveQuality` tier, and for sub-par tiers attaches the best move
and a couple of illustrative continuations.
"""
import logging
from typing import List, Optional, Tuple, Union

import chess

from chess_annotator.analysis.evaluator import StaticEvaluator
from chess_annotator.analysis.line_generator import LineGenerator
from chess_annotator.analysis.move_ranker import MoveRanker
from chess_annotator.config import settings
from chess_annotator.exceptions import IllegalMoveError
from chess_annotator.types import Line, MoveJudgement, MoveQuality, QualityThresholds, RankedMove
from chess_annotator.utils.chess_utils import SIDE_SIGN, board_from, parse_played_move

logger = logging.getLogger(settings.APP_NAME + ".MoveClassifier")


class MoveClassifier:
    """Judges single plies against the ranker's best alternative."""

    def __init__(
        self,
        ranker: Optional[MoveRanker] = None,
        line_generator: Optional[LineGenerator] = None,
        thresholds: Optional[QualityThresholds] = None,
        max_lines: int = settings.DEFAULT_MAX_LINES,
        line_depth: int = settings.DEFAULT_LINE_DEPTH,
    ):
        """
        Initializes the MoveClassifier.

        Args:
            ranker: Ranker used for "what was best here". Shares its evaluator
                    with the line generator when the latter is not given.
            line_generator: Source of alternate lines for sub-par moves.
            thresholds: Score-gap tier bounds; defaults to the configured ones.
            max_lines: Number of alternate lines attached to a sub-par move.
            line_depth: Length in plies of each alternate line.
        """
        self.ranker = ranker or MoveRanker()
        self.line_generator = line_generator or LineGenerator(self.ranker)
        self.thresholds = thresholds or settings.DEFAULT_QUALITY_THRESHOLDS
        self.max_lines = max_lines
        self.line_depth = line_depth
        logger.debug("MoveClassifier initialized.")

    @property
    def evaluator(self) -> StaticEvaluator:
        return self.ranker.evaluator

    def quality_for_gap(self, score_gap: float) -> MoveQuality:
        """Gets the tier for a score gap using the data-driven thresholds."""
        for quality, threshold in self.thresholds.as_list():
            if score_gap <= threshold:
                return quality
        return MoveQuality.BLUNDER  # Anything above the last threshold

    def _best_and_played(
        self, board: chess.Board, ranking: List[RankedMove], played: chess.Move
    ) -> Tuple[float, float]:
        """Returns the White-positive scores of the best move and of the played move."""
        if not ranking:
            # Terminal position: nothing to compare against.
            static = self.evaluator.evaluate(board)
            return static, static

        played_entry = next((r for r in ranking if r.move == played), None)
        if played_entry is None:
            raise IllegalMoveError(board.fen(), played.uci(), "not in the ranked legal moves")
        return ranking[0].score, played_entry.score

    def _order_lines(self, lines: List[Line], mover: chess.Color) -> Tuple[Line, ...]:
        """Best-first for the mover; ties keep the ranking order of their roots."""
        sign = SIDE_SIGN[mover]
        return tuple(sorted(lines, key=lambda line: -sign * line.final_evaluation))

    def classify(
        self, board: chess.Board, played_move: Union[chess.Move, str], move_index: int
    ) -> MoveJudgement:
        """
        Judges `played_move` in the position `board`.

        Args:
            board: The position before the move. It is not modified.
            played_move: A `chess.Move`, or a UCI or SAN string.
            move_index: The ply index of the move within its game.

        Raises:
            IllegalMoveError: `played_move` is not legal in `board`.
            EngineProbeError: The rules engine failed while probing.
        """
        board = board_from(board)
        move = parse_played_move(board, played_move)
        san = board.san(move)
        mover = board.turn

        ranking = self.ranker.rank_moves(board)
        best_score, played_score = self._best_and_played(board, ranking, move)

        # Should already be >= 0 by construction; clamp against evaluator asymmetry.
        score_gap = max(0.0, SIDE_SIGN[mover] * (best_score - played_score))
        quality = self.quality_for_gap(score_gap)

        suggested: Optional[RankedMove] = None
        lines: Optional[Tuple[Line, ...]] = None
        if quality.is_worse_than(MoveQuality.GOOD):
            suggested = ranking[0]
            generated = self.line_generator.generate_lines(
                board, max_lines=self.max_lines, depth=self.line_depth, ranking=ranking
            )
            lines = self._order_lines(generated, mover)

        logger.debug(f"Ply {move_index} {san}: {quality.value} (gap {score_gap:.2f}).")
        return MoveJudgement(
            ply_index=move_index,
            move=move,
            san=san,
            mover=mover,
            quality=quality,
            score_gap=score_gap,
            suggested_move=suggested,
            alternate_lines=lines,
        )

    def classify_fen(self, fen: str, played_move: Union[chess.Move, str], move_index: int) -> MoveJudgement:
        """Same as `classify` for a position given as FEN."""
        return self.classify(board_from(fen), played_move, move_index)


def neutral_judgement(
    board: chess.Board, played_move: chess.Move, move_index: int, error: Exception
) -> MoveJudgement:
    """
    The degraded verdict used when a ply cannot be judged: Normal, with no
    suggestion, carrying the error text.
    """
    try:
        san = board.san(played_move)
    except (AssertionError, ValueError):
        san = played_move.uci()
    return MoveJudgement(
        ply_index=move_index,
        move=played_move,
        san=san,
        mover=board.turn,
        quality=MoveQuality.NORMAL,
        score_gap=0.0,
        error=str(error),
    )
