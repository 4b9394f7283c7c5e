from __future__ import annotations

import logging
import signal
import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class CancellationToken:
    """One-shot cancellation handle shared by the process boundary and a loop."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Sleep up to timeout seconds; True if cancelled before or during."""
        return self._event.wait(timeout)


@contextmanager
def cancel_on_signals(
    token: CancellationToken, signals: Sequence[int] = SHUTDOWN_SIGNALS
) -> Iterator[CancellationToken]:
    """Route shutdown signals to token.cancel() for the duration of the block.

    The handler only cancels; the foreground code unwinds by itself and the
    process exits after it returns. Previous handlers are restored on exit.
    """
    if threading.current_thread() is not threading.main_thread():
        # signal.signal() is only allowed on the main thread
        yield token
        return

    def _handler(signum, _frame) -> None:
        logger.debug("Received signal %s, cancelling", signum)
        token.cancel()

    previous = {}
    for sig in signals:
        previous[sig] = signal.signal(sig, _handler)
    try:
        yield token
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
