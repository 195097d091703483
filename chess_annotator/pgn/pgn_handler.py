# chess_annotator/pgn/pgn_handler.py
"""
Handles all PGN (Portable Game Notation) related operations.

This includes reading and parsing PGN files or strings, extracting game
identifiers, and writing annotated PGNs. It is designed to be resilient
to common errors in PGN files.
"""
import io
import logging
import os
import re
import threading
from collections import OrderedDict
from typing import IO, Dict, Generator, Optional, TextIO

import chess.pgn

from chess_annotator.config import settings
from chess_annotator.exceptions import PGNExportError, PGNImportError

logger = logging.getLogger(settings.APP_NAME + ".PGNHandler")


class PGNHandler:
    """Provides functionalities to read and write PGN files."""

    _GAME_ID_EXTRACTION_PATTERNS: Dict[str, str] = OrderedDict([
        ("SiteLichess", r"lichess\.org/([a-zA-Z0-9]{8,12})"),
        ("SiteChessCom", r"chess\.com/game/live/([0-9]+)"),
        ("SiteChessComDaily", r"chess\.com/game/daily/([0-9]+)"),
        ("SiteChessComAnalysis", r"chess\.com/analysis/game/live/([0-9]+)"),
    ])

    def __init__(self, pgn_output_columns: int = settings.PGN_DEFAULT_COLUMNS):
        """
        Initializes the PGNHandler.

        Args:
            pgn_output_columns: The column width for wrapping move text in
                                output PGN files. 0 means no wrapping.
        """
        self.pgn_output_columns: int = pgn_output_columns
        self._is_first_export_to_handle: Dict[int, bool] = {}

    def extract_game_id(self, headers: chess.pgn.Headers) -> Optional[str]:
        """
        Extracts a unique game identifier from PGN headers.

        Prioritizes Lichess and chess.com URLs, then falls back to the 'GameId' tag.
        """
        for tag_name in ["Site", "Link", "LichessURL"]:
            header_value = headers.get(tag_name)
            if header_value:
                for pattern in self._GAME_ID_EXTRACTION_PATTERNS.values():
                    match = re.search(pattern, header_value)
                    if match:
                        return match.group(1)

        game_id_tag = headers.get("GameId")
        return game_id_tag if game_id_tag and game_id_tag != "?" else None

    def _read_games(
        self, pgn_file: TextIO, source: str, shutdown_event: Optional[threading.Event]
    ) -> Generator[chess.pgn.Game, None, None]:
        game_count = 0
        while not (shutdown_event and shutdown_event.is_set()):
            game = chess.pgn.read_game(pgn_file)
            if game is None:
                break
            if game.errors:
                # python-chess stops the mainline at the first illegal or unparseable move.
                logger.warning(f"Game {game_count + 1} in {source} has parse errors: {game.errors[0]}")
            game_count += 1
            yield game

        if not (shutdown_event and shutdown_event.is_set()):
            logger.info(f"Finished streaming {game_count} games from {source}.")

    def stream_games(
        self, input_pgn_path: str, shutdown_event: Optional[threading.Event] = None
    ) -> Generator[chess.pgn.Game, None, None]:
        """Streams full game objects one by one from an input PGN file."""
        if not os.path.exists(input_pgn_path):
            raise PGNImportError(f"Input PGN file not found: {input_pgn_path}")

        try:
            with open(input_pgn_path, 'r', encoding='utf-8', errors='replace') as pgn_file:
                yield from self._read_games(pgn_file, f"'{input_pgn_path}'", shutdown_event)
        except (IOError, OSError) as e:
            raise PGNImportError(f"IOError reading PGN file '{input_pgn_path}'") from e

    def games_from_string(
        self, pgn_text: str, shutdown_event: Optional[threading.Event] = None
    ) -> Generator[chess.pgn.Game, None, None]:
        """Streams games from PGN text, e.g. an uploaded file or a fetched game."""
        yield from self._read_games(io.StringIO(pgn_text), "PGN text", shutdown_event)

    def game_from_string(self, pgn_text: str) -> chess.pgn.Game:
        """Parses exactly one game from PGN text."""
        game = chess.pgn.read_game(io.StringIO(pgn_text))
        if game is None:
            raise PGNImportError("No game found in PGN text.")
        return game

    def export_annotated_game(self, game: chess.pgn.Game, outfile_handle: IO[str]) -> None:
        """Exports a game to the provided file stream with simple, robust newline handling."""
        handle_id = id(outfile_handle)
        if handle_id not in self._is_first_export_to_handle:
            self._is_first_export_to_handle[handle_id] = outfile_handle.tell() == 0

        try:
            exporter = chess.pgn.StringExporter(
                headers=True, variations=True, comments=True,
                columns=self.pgn_output_columns if self.pgn_output_columns > 0 else None
            )
            pgn_string = game.accept(exporter)

            if not self._is_first_export_to_handle[handle_id]:
                outfile_handle.write("\n\n")

            outfile_handle.write(pgn_string)
            outfile_handle.flush()

            self._is_first_export_to_handle[handle_id] = False

        except (IOError, OSError) as e:
            raise PGNExportError(f"IOError exporting game: {e}") from e
