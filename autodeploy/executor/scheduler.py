"""Fixed-delay repetition of deployment rounds."""
from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Callable
from typing import Optional

logger = logging.getLogger(__name__)


def run_rounds(
    round_fn: Callable[[], bool],
    interval: float,
    stop_event: Optional[threading.Event] = None,
    max_rounds: Optional[int] = None,
) -> bool:
    """
    Repeat ``round_fn`` with a fixed cooldown between rounds.

    Args:
        round_fn: One unit of work; returns False on a hard failure
        interval: Cooldown in seconds after every successful round
        stop_event: Cancellation token checked between rounds
        max_rounds: Stop after this many rounds (None = forever)

    Returns:
        False as soon as a round fails, True when stopped or finished
    """
    if stop_event is None:
        stop_event = threading.Event()

    completed = 0
    while not stop_event.is_set():
        if not round_fn():
            return False
        completed += 1
        if max_rounds is not None and completed >= max_rounds:
            return True

        logger.info(f"Waiting {interval / 60:g} minute(s) before the next deployment...")
        if stop_event.wait(interval):
            logger.info("Stop requested, no further rounds will start.")
            break
    return True


def install_stop_handler(stop_event: threading.Event) -> None:
    """Set ``stop_event`` on SIGTERM so a running loop ends between rounds."""
    def _handler(signum, frame):
        logger.info(f"Received signal {signum}")
        stop_event.set()

    signal.signal(signal.SIGTERM, _handler)
