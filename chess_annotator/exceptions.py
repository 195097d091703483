# chess_annotator/exceptions.py
"""
Defines custom exceptions for the Chess Annotator application.

Centralizing exceptions here avoids circular dependencies when different
modules need to catch exceptions defined by other components.
"""
from typing import Optional

# --- General ---
class ChessAnnotatorError(Exception):
    """Base class for all application-specific errors."""
    pass

# --- Move Evaluation Errors ---
class EvaluationError(ChessAnnotatorError):
    """Base class for errors raised while judging a single ply."""
    pass

class IllegalMoveError(EvaluationError):
    """The played move is not in the legal-move list of the position it was played from."""

    def __init__(self, fen: str, move: str, reason: Optional[str] = None):
        self.fen = fen
        self.move = move
        message = f"Move '{move}' is not legal in position '{fen}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)

class EngineProbeError(EvaluationError):
    """The rules engine failed while a probing move was applied or undone."""
    pass

# --- PGN Handler Errors ---
class PGNError(ChessAnnotatorError):
    """Base class for PGN handling errors."""
    pass

class PGNImportError(PGNError):
    """Error encountered while reading or parsing a PGN file."""
    pass

class PGNExportError(PGNError):
    """Error encountered while writing or exporting a PGN file."""
    pass

# --- Game Source Errors ---
class GameFetchError(ChessAnnotatorError):
    """Error fetching games from a remote game source such as chess.com."""
    pass

# --- Reporting Errors ---
class ReportGenerationError(ChessAnnotatorError):
    """Base class for errors encountered during report generation."""
    pass

class CSVReportError(ReportGenerationError):
    """Specific error for CSV report generation issues."""
    pass
