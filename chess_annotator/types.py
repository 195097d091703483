# chess_annotator/types.py
"""
A central module for shared data structures and type definitions.

The evaluation core (evaluator, ranker, line generator, classifier) only
exchanges the immutable records defined here, so judgements can be
computed independently per ply and compared for equality.
"""
import enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Tuple

import chess
import chess.pgn


class MoveQuality(enum.Enum):
    """Quality tier of a played move, declared from best to worst."""
    BRILLIANT = "Brilliant"
    GOOD = "Good"
    NORMAL = "Normal"
    INACCURACY = "Inaccuracy"
    MISTAKE = "Mistake"
    BLUNDER = "Blunder"

    @property
    def rank(self) -> int:
        """Position in the best-to-worst ordering (0 is best)."""
        return list(MoveQuality).index(self)

    def is_worse_than(self, other: "MoveQuality") -> bool:
        return self.rank > other.rank

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EvaluationWeights:
    """Tunable constants of the static evaluator, in pawn units."""
    piece_values: Dict[chess.PieceType, float]
    center_occupancy_bonus: float
    mobility_weight: float
    king_presence_bonus: float
    center_squares: Tuple[chess.Square, ...] = (chess.D4, chess.E4, chess.D5, chess.E5)


@dataclass(frozen=True)
class QualityThresholds:
    """Upper score-gap bounds (inclusive) for each tier; anything above `mistake` is a blunder."""
    brilliant: float
    good: float
    normal: float
    inaccuracy: float
    mistake: float

    def as_list(self) -> List[Tuple[MoveQuality, float]]:
        return [
            (MoveQuality.BRILLIANT, self.brilliant),
            (MoveQuality.GOOD, self.good),
            (MoveQuality.NORMAL, self.normal),
            (MoveQuality.INACCURACY, self.inaccuracy),
            (MoveQuality.MISTAKE, self.mistake),
        ]


@dataclass(frozen=True)
class RankedMove:
    """A legal move with its lookahead score (White-positive)."""
    move: chess.Move
    san: str
    score: float

    @property
    def arrow(self) -> Tuple[str, str]:
        """The (from, to) square names, as used for board arrows."""
        return chess.square_name(self.move.from_square), chess.square_name(self.move.to_square)


@dataclass(frozen=True)
class Line:
    """A short greedy continuation in SAN with the evaluation it ends on."""
    moves: Tuple[str, ...]
    final_evaluation: float

    def __len__(self) -> int:
        return len(self.moves)


@dataclass(frozen=True)
class MoveJudgement:
    """The verdict on a single ply of a game."""
    ply_index: int
    move: chess.Move
    san: str
    mover: chess.Color
    quality: MoveQuality
    score_gap: float
    suggested_move: Optional[RankedMove] = None
    alternate_lines: Optional[Tuple[Line, ...]] = None
    error: Optional[str] = None  # set only on degraded judgements

    @property
    def needs_suggestion(self) -> bool:
        return self.quality.is_worse_than(MoveQuality.GOOD)

    @property
    def is_degraded(self) -> bool:
        return self.error is not None

    @property
    def suggested_arrow(self) -> Optional[Tuple[str, str]]:
        return self.suggested_move.arrow if self.suggested_move else None


@dataclass(frozen=True)
class PlyRecord:
    """Everything required to judge one ply, independent of the other plies."""
    ply_index: int
    fen_before: str
    move: chess.Move
    san: str
    pgn_node: Optional[chess.pgn.ChildNode] = field(default=None, compare=False)

    @property
    def board_before(self) -> chess.Board:
        """A fresh board handle for this ply."""
        return chess.Board(self.fen_before)

    @property
    def mover(self) -> chess.Color:
        return self.board_before.turn


@dataclass(frozen=True)
class GameSummary:
    """Per-game tier counts for both sides."""
    game_id: str
    white_player: str
    black_player: str
    total_plies: int
    degraded_plies: int
    white_counts: Dict[str, int]
    black_counts: Dict[str, int]
    white_average_gap: float
    black_average_gap: float
    pgn_headers: Dict[str, str]


@dataclass(frozen=True)
class ProcessedGameResult:
    """The final output from processing a single game."""
    annotated_game: chess.pgn.Game
    judgements: List[MoveJudgement]
    summary: Optional[GameSummary]


@dataclass(frozen=True)
class ChessComGame:
    """A game as listed by the chess.com monthly archive endpoint."""
    url: str
    pgn: str
    time_control: str
    end_time: int
    rated: bool
    white_username: str
    white_rating: int
    black_username: str
    black_rating: int


class ProgressReporter(Protocol):
    """
    A protocol defining the interface for reporting progress.
    This allows the core logic to report progress without being tied
    to a specific UI implementation like tqdm.
    """
    def reset(self, total: int = 0) -> None:
        """Resets the reporter for a new task with a given total."""
        ...

    def update(self, n: int = 1) -> None:
        """Updates the progress by n steps."""
        ...

    def set_description(self, desc: str) -> None:
        """Sets the description text for the current task."""
        ...

    def close(self) -> None:
        """Closes or finalizes the progress display."""
        ...
