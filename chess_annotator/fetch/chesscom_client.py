# chess_annotator/fetch/chesscom_client.py
"""
Fetches a player's recent games from the chess.com published-data API.

The monthly archive endpoint returns every game a player finished in a
calendar month. The client requests the current month and keeps only the
games that ended within the configured recent window, most recent first.
"""
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests

from chess_annotator.config import settings
from chess_annotator.exceptions import GameFetchError
from chess_annotator.types import ChessComGame

logger = logging.getLogger(settings.APP_NAME + ".ChessComClient")


def _parse_game(raw: Dict[str, Any]) -> Optional[ChessComGame]:
    """Converts one archive entry; entries without a PGN (e.g. unfinished daily games) are skipped."""
    pgn = raw.get("pgn")
    if not pgn:
        return None
    white = raw.get("white") or {}
    black = raw.get("black") or {}
    return ChessComGame(
        url=raw.get("url", ""),
        pgn=pgn,
        time_control=str(raw.get("time_control", "")),
        end_time=int(raw.get("end_time", 0)),
        rated=bool(raw.get("rated", False)),
        white_username=white.get("username", "?"),
        white_rating=int(white.get("rating", 0)),
        black_username=black.get("username", "?"),
        black_rating=int(black.get("rating", 0)),
    )


class ChessComClient:
    """A thin HTTP client for the chess.com monthly games archive."""

    def __init__(
        self,
        timeout: float = settings.HTTP_TIMEOUT_SECONDS,
        recent_window_seconds: int = settings.CHESSCOM_RECENT_WINDOW_SECONDS,
    ):
        self.timeout = timeout
        self.recent_window_seconds = recent_window_seconds
        logger.debug("ChessComClient initialized.")

    def archive_url(self, username: str, when: Optional[datetime] = None) -> str:
        when = when or datetime.now(timezone.utc)
        return settings.CHESSCOM_ARCHIVE_URL.format(
            username=username.strip().lower(), year=when.year, month=when.month
        )

    def _download_archive(self, url: str, username: str) -> Dict[str, Any]:
        session = requests.Session()
        session.headers.update({"Accept": "application/json", "User-Agent": settings.HTTP_USER_AGENT})
        try:
            resp = session.get(url, timeout=self.timeout)
            if resp.status_code == 404:
                raise GameFetchError(f"chess.com user '{username}' not found (404).")
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            raise GameFetchError(f"Failed to fetch games for '{username}': {e}") from e
        except ValueError as e:
            raise GameFetchError(f"chess.com returned a malformed archive for '{username}'") from e
        finally:
            session.close()

    def fetch_recent_games(self, username: str, now: Optional[float] = None) -> List[ChessComGame]:
        """
        Returns the player's games of the current month that ended within the
        recent window, most recent first.

        Raises:
            GameFetchError: The request failed or the response was unusable.
        """
        if not username or not username.strip():
            raise GameFetchError("A chess.com username is required.")

        now = time.time() if now is None else now
        url = self.archive_url(username, datetime.fromtimestamp(now, tz=timezone.utc))
        logger.info(f"Fetching chess.com games for '{username}' from {url}")
        data = self._download_archive(url, username)

        raw_games = data.get("games")
        if not isinstance(raw_games, list):
            logger.info(f"No games listed for '{username}' this month.")
            return []

        cutoff = now - self.recent_window_seconds
        games = [g for g in (_parse_game(raw) for raw in raw_games) if g is not None and g.end_time >= cutoff]
        games.sort(key=lambda g: g.end_time, reverse=True)

        logger.info(f"Fetched {len(games)} recent games for '{username}'.")
        return games
