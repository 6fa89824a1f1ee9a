"""Reactive reconciliation loop.

Watches the page for structural changes and, once the host has stopped
re-rendering for a debounce window, runs the full transform set. One pass
also runs at startup. Nothing that goes wrong in a pass escapes into the
host: errors are logged and the next notification starts a fresh pass.
"""

import asyncio
import logging

from asana_improvements.application.debounce import Debouncer
from asana_improvements.application.transforms import PassReport, TransformSet
from asana_improvements.domain.ports import ChangeRecord, PageDocument, Subscription

logger = logging.getLogger(__name__)


class ReconciliationLoop:
    """Debounced driver for TransformSet.run_all().

    Example:
        reconciler = ReconciliationLoop(document, transforms, debounce_ms=100)
        reconciler.start()   # initial pass, then observe
        ...
        reconciler.stop()
    """

    def __init__(
        self,
        document: PageDocument,
        transforms: TransformSet,
        debounce_ms: int = 100,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._document = document
        self._transforms = transforms
        self._debouncer = Debouncer(self.run_pass, debounce_ms, loop)
        self._subscription: Subscription | None = None
        self._passes = 0
        self._last_report: PassReport | None = None

    @property
    def observing(self) -> bool:
        return self._subscription is not None and self._subscription.active

    @property
    def pending(self) -> bool:
        """Whether a debounced pass is waiting to run."""
        return self._debouncer.pending

    @property
    def passes(self) -> int:
        """Number of passes that completed without a critical error."""
        return self._passes

    @property
    def last_report(self) -> PassReport | None:
        return self._last_report

    def start(self) -> Subscription | None:
        """Run the startup pass and begin observing the page.

        Calling start() on a running loop returns the existing subscription
        without another pass.

        Returns:
            The change subscription, or None if the page refused it.
        """
        if self.observing:
            return self._subscription

        self.run_pass()
        try:
            self._subscription = self._document.observe(self._on_changes)
        except Exception as e:
            logger.error(f"Critical error setting up change observer: {e}", exc_info=True)
            self._subscription = None
        return self._subscription

    def stop(self) -> None:
        """Stop observing and drop any pending pass."""
        self._debouncer.cancel()
        if self._subscription is not None:
            self._subscription.disconnect()
            self._subscription = None

    def schedule(self) -> None:
        """Request a pass after the debounce window."""
        try:
            self._debouncer.schedule()
        except Exception as e:
            logger.error(f"Error scheduling reconciliation pass: {e}")

    def flush_now(self) -> bool:
        """Run a pending pass immediately. Returns False if none was pending."""
        return self._debouncer.flush_now()

    def run_pass(self) -> PassReport | None:
        """Run every transform once, containing any failure."""
        try:
            report = self._transforms.run_all()
        except Exception as e:
            logger.error(f"Error handling page changes: {e}", exc_info=True)
            return None

        self._passes += 1
        self._last_report = report
        if report.total:
            logger.debug(f"Reconciliation pass {self._passes}: {report}")
        return report

    def _on_changes(self, records: list[ChangeRecord]) -> None:
        # Payloads are ignored; every pass re-derives state from the page.
        self.schedule()
