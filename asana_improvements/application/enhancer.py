"""Bootstrap facade and debug surface.

Enhancer wires the resolver, flag, locator, transforms and reconciliation
loop for one page, and exposes them for manual invocation.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from asana_improvements import __version__
from asana_improvements.application.locator import ElementLocator
from asana_improvements.application.reconciler import ReconciliationLoop
from asana_improvements.application.styles import build_css_rules, inject_global_styles
from asana_improvements.application.transforms import PassReport, TransformSet
from asana_improvements.domain.dates import Clock, DateResolver
from asana_improvements.domain.ports import KeyValueStore, PageDocument
from asana_improvements.infrastructure.storage.persisted_flag import PersistedFlag
from asana_improvements.models import EnhancerConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DebugApi:
    """Direct handles on the configuration and every transform.

    Calling these bypasses the debounce schedule entirely.
    """

    config: EnhancerConfig
    version: str
    update_due_dates: Callable[[], int]
    auto_expand_content: Callable[[], int]
    toggle_completed_subtasks: Callable[[], bool]
    apply_completed_tasks_visibility: Callable[[], int]
    reconcile_indicators: Callable[[], int]
    ensure_toggle_control: Callable[[], int]
    run_pass: Callable[[], PassReport | None]


class Enhancer:
    """All enhancements for a single page.

    Example:
        enhancer = Enhancer(document, JsonFileStore(state_path))
        enhancer.initialize()   # styles, startup pass, observe
        api = enhancer.debug_api()
        api.toggle_completed_subtasks()
    """

    def __init__(
        self,
        document: PageDocument,
        store: KeyValueStore,
        config: EnhancerConfig | None = None,
        clock: Clock | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._config = config or EnhancerConfig()
        self._document = document
        self._flag = PersistedFlag(store, self._config.storage.completed_tasks_hidden)
        self._resolver = DateResolver(self._config.date_parser, clock=clock)
        self._locator = ElementLocator(document)
        self._transforms = TransformSet(
            self._config,
            document,
            self._locator,
            self._flag,
            self._resolver,
        )
        self._reconciler = ReconciliationLoop(
            document,
            self._transforms,
            debounce_ms=self._config.performance.mutation_observer_debounce,
            loop=loop,
        )
        self._styles_injected = False

    @property
    def config(self) -> EnhancerConfig:
        return self._config

    @property
    def flag(self) -> PersistedFlag:
        return self._flag

    @property
    def resolver(self) -> DateResolver:
        return self._resolver

    @property
    def transforms(self) -> TransformSet:
        return self._transforms

    @property
    def reconciler(self) -> ReconciliationLoop:
        return self._reconciler

    def inject_styles(self) -> bool:
        """Inject the stylesheet once; later calls are no-ops."""
        if self._styles_injected:
            return True
        css = build_css_rules(self._config)
        self._styles_injected = inject_global_styles(self._document, css)
        return self._styles_injected

    def initialize(self) -> PassReport | None:
        """Inject styles, run the startup pass and start observing.

        Returns:
            The startup pass report, or None if startup failed.
        """
        try:
            self.inject_styles()
            self._reconciler.start()
            return self._reconciler.last_report
        except Exception as e:
            logger.error(f"Critical error during initialization: {e}", exc_info=True)
            return None

    def apply_once(self) -> PassReport | None:
        """Inject styles and run a single pass without observing.

        Suited to static snapshots where nothing re-renders afterwards.
        """
        try:
            self.inject_styles()
            return self._reconciler.run_pass()
        except Exception as e:
            logger.error(f"Critical error during one-shot apply: {e}", exc_info=True)
            return None

    def shutdown(self) -> None:
        """Stop observing the page."""
        self._reconciler.stop()

    def debug_api(self) -> DebugApi:
        transforms = self._transforms
        return DebugApi(
            config=self._config,
            version=__version__,
            update_due_dates=transforms.annotate_due_dates,
            auto_expand_content=transforms.auto_expand,
            toggle_completed_subtasks=transforms.toggle_completed,
            apply_completed_tasks_visibility=transforms.apply_completed_visibility,
            reconcile_indicators=transforms.reconcile_indicators,
            ensure_toggle_control=transforms.ensure_toggle_control,
            run_pass=self._reconciler.run_pass,
        )
