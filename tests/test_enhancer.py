"""Tests for the enhancer facade and stylesheet injection."""

import asyncio
import unittest

from asana_improvements import __version__
from asana_improvements.application import Enhancer, build_css_rules, inject_global_styles
from asana_improvements.application.styles import STYLE_SOURCE
from asana_improvements.infrastructure.page import LxmlDocument
from asana_improvements.infrastructure.storage import MemoryStore
from asana_improvements.models import EnhancerConfig, FeatureFlags, PerformanceConfig, UiConfig

from page_fixtures import HIDDEN_KEY, FixedClock, due_texts, make_document

STYLE = f'style[data-source="{STYLE_SOURCE}"]'


class TestStyles(unittest.TestCase):
    def test_rules_use_ui_settings(self):
        css = build_css_rules(EnhancerConfig(ui=UiConfig(details_pane_width="70%")))
        self.assertIn("width: 70% !important;", css)
        self.assertIn("SpreadsheetCell--isCompact", css)

    def test_paywall_rules_follow_feature_flag(self):
        self.assertIn(".GlobalTopbar-upgradeButton", build_css_rules(EnhancerConfig()))
        config = EnhancerConfig(features=FeatureFlags(hide_paywall_elements=False))
        self.assertNotIn(".GlobalTopbar-upgradeButton", build_css_rules(config))

    def test_injects_tagged_style_into_head(self):
        document = make_document()
        self.assertTrue(inject_global_styles(document, "body { color: red; }"))

        style = document.query_one(STYLE)
        self.assertEqual(style.get_attribute("type"), "text/css")
        self.assertEqual(style.text, "body { color: red; }")
        self.assertIsNotNone(style.closest("head"))

    def test_creates_missing_head(self):
        document = LxmlDocument.from_html("<html><body><p>x</p></body></html>")
        existing = document.root.find("head")
        if existing is not None:
            document.root.remove(existing)

        self.assertTrue(inject_global_styles(document, "p {}"))
        self.assertIsNotNone(document.query_one(f"head > {STYLE}"))

    def test_rejects_empty_css(self):
        with self.assertLogs("asana_improvements.application.styles", "ERROR"):
            self.assertFalse(inject_global_styles(make_document(), ""))


class TestEnhancer(unittest.TestCase):
    def setUp(self):
        self.loop = asyncio.new_event_loop()
        self.document = make_document(due_dates=["Tomorrow"])
        self.store = MemoryStore()
        self.enhancer = Enhancer(self.document, self.store, clock=FixedClock(), loop=self.loop)

    def tearDown(self):
        self.enhancer.shutdown()
        self.loop.close()

    def test_initialize_runs_startup_pass(self):
        report = self.enhancer.initialize()
        self.assertEqual(report.annotated, 1)
        self.assertEqual(report.controls_created, 1)
        self.assertTrue(self.enhancer.reconciler.observing)
        self.assertEqual(len(self.document.query_all(STYLE)), 1)

    def test_styles_are_injected_once(self):
        self.enhancer.initialize()
        self.enhancer.apply_once()
        self.assertTrue(self.enhancer.inject_styles())
        self.assertEqual(len(self.document.query_all(STYLE)), 1)

    def test_apply_once_does_not_observe(self):
        report = self.enhancer.apply_once()
        self.assertEqual(report.annotated, 1)
        self.assertFalse(self.enhancer.reconciler.observing)

    def test_stored_flag_is_honoured(self):
        self.store.set_item(HIDDEN_KEY, "true")
        self.enhancer.apply_once()
        rows = self.document.query_all(".SubtaskTaskRow--completed")
        self.assertTrue(all(row.get_style("display") == "none" for row in rows))

    def test_debug_api(self):
        api = self.enhancer.debug_api()
        self.assertEqual(api.version, __version__)
        self.assertIs(api.config, self.enhancer.config)

        self.assertEqual(api.update_due_dates(), 1)
        self.assertEqual(api.ensure_toggle_control(), 1)
        self.assertEqual(api.reconcile_indicators(), 1)
        self.assertTrue(api.toggle_completed_subtasks())
        self.assertEqual(self.store.snapshot(), {HIDDEN_KEY: "true"})
        self.assertEqual(api.apply_completed_tasks_visibility(), 3)
        self.assertEqual(api.auto_expand_content(), 0)
        self.assertEqual(api.run_pass().annotated, 0)


class TestEnhancerEndToEnd(unittest.IsolatedAsyncioTestCase):
    async def test_host_render_is_reconciled_after_debounce(self):
        document = make_document(due_dates=["Tomorrow"])
        config = EnhancerConfig(performance=PerformanceConfig(mutation_observer_debounce=10))
        enhancer = Enhancer(document, MemoryStore(), config=config, clock=FixedClock())
        enhancer.initialize()

        content = document.query_one(".Content")
        document.append_html(content, '<div class="DueDate">Friday</div>')
        self.assertEqual(due_texts(document)[-1], "Friday")

        await asyncio.sleep(0.2)
        self.assertEqual(due_texts(document), ["Tomorrow (1 days)", "Friday (4 days)"])
        self.assertFalse(enhancer.reconciler.pending)
        self.assertEqual(enhancer.reconciler.passes, 3)

        enhancer.shutdown()
        self.assertFalse(enhancer.reconciler.observing)


if __name__ == "__main__":
    unittest.main()
