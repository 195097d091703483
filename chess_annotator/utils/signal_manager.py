# chess_annotator/utils/signal_manager.py
"""
Turns SIGINT/SIGTERM into a cooperative shutdown request.

Inside the `SignalManager` context the first signal sets the shared
`threading.Event`; the game processor then stops handing out plies and
the pipeline stops reading games. A second signal exits immediately.
The previous handlers are restored on exit.
"""
import logging
import signal
import sys
import threading
from types import FrameType
from typing import Any, List, Optional, Tuple

from chess_annotator.config import settings

logger = logging.getLogger(settings.APP_NAME + ".SignalManager")

FORCED_EXIT_CODE = 130


class SignalManager:
    """Context manager mapping termination signals onto a shutdown event."""

    def __init__(self, shutdown_event: threading.Event):
        self.shutdown_event = shutdown_event
        self._saved: List[Tuple[signal.Signals, Any]] = []

    @staticmethod
    def _signals() -> List[signal.Signals]:
        # SIGTERM is not available on Windows
        return [signal.SIGINT] + ([signal.SIGTERM] if hasattr(signal, "SIGTERM") else [])

    def __enter__(self) -> "SignalManager":
        self._saved = []
        for sig in self._signals():
            try:
                self._saved.append((sig, signal.getsignal(sig)))
                signal.signal(sig, self._handle)
            except (ValueError, OSError) as e:
                # Not the main thread, or a restricted environment.
                logger.warning(f"Could not install handler for {sig.name}: {e}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        for sig, previous in self._saved:
            try:
                if signal.getsignal(sig) == self._handle:
                    signal.signal(sig, previous)
            except (ValueError, OSError) as e:
                logger.warning(f"Could not restore handler for {sig.name}: {e}")
        self._saved = []

    def _handle(self, signum: int, frame: Optional[FrameType]) -> None:
        name = signal.Signals(signum).name
        if self.shutdown_event.is_set():
            logger.critical(f"Second {name} received. Forcing exit.")
            sys.exit(FORCED_EXIT_CODE)
        logger.warning(f"{name} received. Finishing the current ply; press Ctrl+C again to force quit.")
        self.shutdown_event.set()
