# chess_annotator/analysis/move_ranker.py
"""
Ranks the legal moves of a position best-first.

Each candidate is scored by a greedy two-ply lookahead: the candidate is
played, every opponent reply is played in turn and statically evaluated,
and the candidate keeps the value of the reply that is worst for the side
that moved. This is a bounded heuristic, not a search: there is no tree
beyond the reply, no pruning and no deepening.
"""
import logging
from typing import List, Optional

import chess

from chess_annotator.analysis.evaluator import StaticEvaluator
from chess_annotator.config import settings
from chess_annotator.types import RankedMove
from chess_annotator.utils.chess_utils import probe_move

logger = logging.getLogger(settings.APP_NAME + ".MoveRanker")


class MoveRanker:
    """Orders legal moves by their value after the opponent's best reply."""

    def __init__(self, evaluator: Optional[StaticEvaluator] = None):
        self.evaluator = evaluator or StaticEvaluator()
        logger.debug("MoveRanker initialized.")

    def _score_after_best_reply(self, board: chess.Board) -> float:
        """
        Scores a position in which the opponent of the mover is to move.

        The opponent picks the reply with the lowest score if they are Black
        and the highest if they are White. With no reply available the
        position is scored as it stands.
        """
        replier = board.turn
        best: Optional[float] = None
        for reply in list(board.legal_moves):
            with probe_move(board, reply):
                value = self.evaluator.evaluate(board)
            if best is None:
                best = value
            elif replier == chess.WHITE and value > best:
                best = value
            elif replier == chess.BLACK and value < best:
                best = value

        if best is None:
            return self.evaluator.evaluate(board)
        return best

    def score_move(self, board: chess.Board, move: chess.Move) -> RankedMove:
        """Scores a single legal move of `board`; the board is restored afterwards."""
        san = board.san(move)
        with probe_move(board, move):
            score = self._score_after_best_reply(board)
        return RankedMove(move=move, san=san, score=score)

    def rank_moves(self, board: chess.Board) -> List[RankedMove]:
        """
        Returns every legal move of `board` ranked best-first for the side to move.

        The sort is stable, so equal scores keep the rules engine's
        enumeration order. A position without legal moves yields an empty list.
        """
        ranked = [self.score_move(board, move) for move in list(board.legal_moves)]
        ranked.sort(key=lambda r: r.score, reverse=(board.turn == chess.WHITE))
        logger.debug(f"Ranked {len(ranked)} moves for '{board.fen()}'.")
        return ranked

    def best_move(self, board: chess.Board) -> Optional[RankedMove]:
        ranking = self.rank_moves(board)
        return ranking[0] if ranking else None
