# chess_annotator/config/settings.py
"""
Configuration settings for the Chess Annotator application.

This module centralizes all tunable parameters, default values, thresholds,
and file paths used throughout the application. The evaluation weights and
quality thresholds are calibration constants, not protocol constants: the
CLI and the component constructors accept overrides for all of them.
"""
from typing import Dict, Final, List, Tuple

import chess
import chess.pgn

# Import the data contract definitions from the types module
from chess_annotator.types import EvaluationWeights, MoveQuality, QualityThresholds

# --- Static Evaluation Weights (pawn units) ---
PIECE_VALUES: Final[Dict[chess.PieceType, float]] = {
    chess.PAWN: 1.0,
    chess.KNIGHT: 3.0,
    chess.BISHOP: 3.0,
    chess.ROOK: 5.0,
    chess.QUEEN: 9.0,
    chess.KING: 0.0,   # Kings carry no material value
}

CENTER_OCCUPANCY_BONUS: Final[float] = 0.2
"""Bonus for each of d4/e4/d5/e5 occupied, signed by the occupant's color."""

MOBILITY_WEIGHT: Final[float] = 0.1
"""Value of one legal move for the side to move."""

KING_PRESENCE_BONUS: Final[float] = 0.3
"""Minimal king-safety proxy: awarded to each side whose king is on the board."""

DEFAULT_EVALUATION_WEIGHTS: Final[EvaluationWeights] = EvaluationWeights(
    piece_values=PIECE_VALUES,
    center_occupancy_bonus=CENTER_OCCUPANCY_BONUS,
    mobility_weight=MOBILITY_WEIGHT,
    king_presence_bonus=KING_PRESENCE_BONUS,
)

# --- Score-Gap Move Classification Thresholds ---
# Ordered from best to worst; each value is the largest gap (inclusive)
# that still earns the tier. Anything above the last one is a Blunder.
MOVE_QUALITY_THRESHOLDS: Final[List[Tuple[MoveQuality, float]]] = [
    (MoveQuality.BRILLIANT, 0.1),
    (MoveQuality.GOOD, 0.3),
    (MoveQuality.NORMAL, 0.7),
    (MoveQuality.INACCURACY, 1.5),
    (MoveQuality.MISTAKE, 3.0),
]

DEFAULT_QUALITY_THRESHOLDS: Final[QualityThresholds] = QualityThresholds(
    *(gap for _, gap in MOVE_QUALITY_THRESHOLDS)
)

# --- Line Generation ---
DEFAULT_MAX_LINES: Final[int] = 2
"""Number of alternate lines attached to a sub-par move."""

DEFAULT_LINE_DEPTH: Final[int] = 3
"""Number of plies in each alternate line, root move included."""

# --- Game Processing ---
DEFAULT_WORKERS: Final[int] = 1
"""Plies judged concurrently per game. 1 keeps judgement strictly sequential."""

# --- PGN Annotation Details ---
PGN_DEFAULT_COLUMNS: Final[int] = 80
"""Default PGN move text wrapping width for output files."""

QUALITY_NAGS: Final[Dict[MoveQuality, int]] = {
    MoveQuality.INACCURACY: chess.pgn.NAG_DUBIOUS_MOVE,
    MoveQuality.MISTAKE: chess.pgn.NAG_MISTAKE,
    MoveQuality.BLUNDER: chess.pgn.NAG_BLUNDER,
}
"""NAGs attached to the worse tiers in the exported PGN."""

# --- chess.com Game Source ---
CHESSCOM_ARCHIVE_URL: Final[str] = "https://api.chess.com/pub/player/{username}/games/{year:04d}/{month:02d}"
"""Monthly games archive endpoint of the chess.com published-data API."""

CHESSCOM_RECENT_WINDOW_SECONDS: Final[int] = 24 * 60 * 60
"""Only games that ended within this window are returned."""

HTTP_TIMEOUT_SECONDS: Final[float] = 15.0

HTTP_USER_AGENT: Final[str] = "chess-annotator/0.1.0"

# --- File Names and Paths ---
DEFAULT_PLY_REPORT_FILENAME: Final[str] = "move_judgements.csv"
"""Default filename for the per-ply CSV report."""

DEFAULT_GAME_REPORT_FILENAME: Final[str] = "game_summary_report.csv"
"""Default filename for the per-game CSV summary report."""

DEFAULT_LOG_FILENAME: Final[str] = "chess_annotator.log"
"""Default filename for the application log."""

# --- Logging ---
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
"""Default logging level for the application."""

# --- Application Specific ---
APP_NAME: Final[str] = "ChessAnnotator"
"""Application name, used for logging and other identifiers."""
