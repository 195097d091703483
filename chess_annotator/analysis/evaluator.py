# chess_annotator/analysis/evaluator.py
"""
Static position scoring.

`StaticEvaluator` assigns a White-positive score to a single position from
four additive terms: material, central occupancy, mobility of the side to
move, and a king-presence bonus. It looks at the position only, never at
the move history, and never mutates the board it is given.
"""
import logging
from typing import Optional

import chess

from chess_annotator.config import settings
from chess_annotator.types import EvaluationWeights
from chess_annotator.utils.chess_utils import SIDE_SIGN

logger = logging.getLogger(settings.APP_NAME + ".StaticEvaluator")


class StaticEvaluator:
    """Scores positions with a fixed, tunable set of heuristic weights."""

    def __init__(self, weights: Optional[EvaluationWeights] = None):
        self.weights: EvaluationWeights = weights or settings.DEFAULT_EVALUATION_WEIGHTS
        logger.debug(f"StaticEvaluator initialized with weights: {self.weights}")

    def material(self, board: chess.Board) -> float:
        """White material minus Black material."""
        score = 0.0
        for piece in board.piece_map().values():
            value = self.weights.piece_values.get(piece.piece_type, 0.0)
            score += value if piece.color == chess.WHITE else -value
        return score

    def center_occupancy(self, board: chess.Board) -> float:
        score = 0.0
        for square in self.weights.center_squares:
            piece = board.piece_at(square)
            if piece is not None:
                score += SIDE_SIGN[piece.color] * self.weights.center_occupancy_bonus
        return score

    def mobility(self, board: chess.Board) -> float:
        """Rewards the side to move for the number of options it has."""
        return SIDE_SIGN[board.turn] * self.weights.mobility_weight * board.legal_moves.count()

    def king_presence(self, board: chess.Board) -> float:
        # Heuristic proxy only; this is not a king-safety model.
        score = 0.0
        if board.king(chess.WHITE) is not None:
            score += self.weights.king_presence_bonus
        if board.king(chess.BLACK) is not None:
            score -= self.weights.king_presence_bonus
        return score

    def evaluate(self, board: chess.Board) -> float:
        """Returns the static score of `board`, positive when White is better."""
        return (
            self.material(board)
            + self.center_occupancy(board)
            + self.mobility(board)
            + self.king_presence(board)
        )


_DEFAULT_EVALUATOR = StaticEvaluator()


def evaluate_position(board: chess.Board) -> float:
    """Scores `board` with the default weights."""
    return _DEFAULT_EVALUATOR.evaluate(board)
