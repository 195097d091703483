# chess_annotator/analysis/line_generator.py
"""
Builds short illustrative continuations from the top-ranked moves.

Each line starts from one of the best ranked moves and is extended by
repeatedly playing the ranker's single best move. The cost of a line is
dominated by the embedded two-ply lookahead at every step, so both the
number of lines and their depth are fixed per call.
"""
import logging
from typing import List, Optional

import chess

from chess_annotator.analysis.evaluator import StaticEvaluator
from chess_annotator.analysis.move_ranker import MoveRanker
from chess_annotator.config import settings
from chess_annotator.types import Line, RankedMove

logger = logging.getLogger(settings.APP_NAME + ".LineGenerator")


class LineGenerator:
    """Extends the top candidate moves of a position into greedy lines."""

    def __init__(
        self,
        ranker: Optional[MoveRanker] = None,
        evaluator: Optional[StaticEvaluator] = None,
    ):
        self.ranker = ranker or MoveRanker(evaluator)
        self.evaluator = evaluator or self.ranker.evaluator
        logger.debug("LineGenerator initialized.")

    def _extend(self, board: chess.Board, root: RankedMove, depth: int) -> Line:
        """Plays `root` and then the greedy best move `depth - 1` times on `board`."""
        sans = [root.san]
        board.push(root.move)
        for _ in range(depth - 1):
            best = self.ranker.best_move(board)
            if best is None:
                break
            sans.append(best.san)
            board.push(best.move)
        return Line(moves=tuple(sans), final_evaluation=self.evaluator.evaluate(board))

    def generate_lines(
        self,
        board: chess.Board,
        max_lines: int = settings.DEFAULT_MAX_LINES,
        depth: int = settings.DEFAULT_LINE_DEPTH,
        ranking: Optional[List[RankedMove]] = None,
    ) -> List[Line]:
        """
        Returns up to `max_lines` lines of at most `depth` SAN moves each.

        Lines follow the order of their root moves in the ranking. A ranking
        already computed for `board` may be passed in to avoid recomputing it.
        `board` itself is never modified.
        """
        if max_lines < 1:
            raise ValueError(f"max_lines must be at least 1, got {max_lines}")
        if depth < 1:
            raise ValueError(f"depth must be at least 1, got {depth}")

        if ranking is None:
            ranking = self.ranker.rank_moves(board)

        lines: List[Line] = []
        for root in ranking[:max_lines]:
            lines.append(self._extend(board.copy(stack=False), root, depth))

        logger.debug(f"Generated {len(lines)} lines (depth {depth}) for '{board.fen()}'.")
        return lines
