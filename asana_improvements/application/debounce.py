"""Trailing-edge debouncer on an asyncio event loop."""

import asyncio
from collections.abc import Callable


class Debouncer:
    """Coalesce bursts of schedule() calls into one callback.

    The callback runs once ``wait_ms`` milliseconds have passed since the
    most recent schedule(). Every schedule() replaces the pending timer, so
    steady activity postpones the callback indefinitely.

    Example:
        debouncer = Debouncer(run_pass, wait_ms=100)
        debouncer.schedule()
        debouncer.schedule()  # replaces the first timer
        debouncer.flush_now()  # runs run_pass once, right away
    """

    def __init__(
        self,
        callback: Callable[[], object],
        wait_ms: int,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Initialize the debouncer.

        Args:
            callback: Zero-argument function to run when activity settles.
            wait_ms: Quiet period in milliseconds.
            loop: Event loop for the timer. Defaults to the loop running at
                the time of each schedule() call.
        """
        if wait_ms < 0:
            raise ValueError(f"wait_ms must be non-negative, got {wait_ms}")
        self._callback = callback
        self._wait_ms = wait_ms
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def wait_ms(self) -> int:
        return self._wait_ms

    @property
    def pending(self) -> bool:
        """Whether a callback is scheduled and not yet run."""
        return self._handle is not None

    def schedule(self) -> None:
        """(Re)start the quiet-period timer.

        Raises:
            RuntimeError: If no loop was given and none is running.
        """
        loop = self._loop or asyncio.get_running_loop()
        self.cancel()
        self._handle = loop.call_later(self._wait_ms / 1000, self._fire)

    def cancel(self) -> None:
        """Drop the pending callback, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush_now(self) -> bool:
        """Run a pending callback synchronously instead of waiting.

        Returns:
            True if a callback was pending and has run, False otherwise.
        """
        if self._handle is None:
            return False
        self.cancel()
        self._callback()
        return True

    def _fire(self) -> None:
        self._handle = None
        self._callback()
