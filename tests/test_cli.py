"""Tests for the command line interface."""

import json
import shutil
import tempfile
import unittest
from pathlib import Path

from typer.testing import CliRunner

from asana_improvements import __version__
from asana_improvements.interfaces.cli import app

from page_fixtures import HIDDEN_KEY, page_html


class CliTestCase(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.home = Path(self.tmpdir)
        self.runner = CliRunner()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def invoke(self, *args):
        return self.runner.invoke(app, list(args), env={"ASANA_IMPROVEMENTS_HOME": self.tmpdir})


class TestApply(CliTestCase):
    def setUp(self):
        super().setUp()
        self.page = self.home / "task.html"
        self.page.write_text(page_html(due_dates=["Tomorrow", "Someday"]), encoding="utf-8")

    def test_writes_enhanced_page(self):
        out = self.home / "task.enhanced.html"
        result = self.invoke("apply", str(self.page), "-o", str(out))

        self.assertEqual(result.exit_code, 0, result.output)
        html = out.read_text(encoding="utf-8")
        self.assertIn("Tomorrow (1 days)", html)
        self.assertIn("Someday<", html)
        self.assertIn('id="toggleCompletedSubtasksButton"', html)
        self.assertIn('data-source="asana-workflow-enhancement"', html)
        self.assertIn("Due dates annotated:   1", result.output)

    def test_prints_page_without_output_option(self):
        result = self.invoke("page", "apply", str(self.page))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Tomorrow (1 days)", result.output)

    def test_hidden_preference_is_applied(self):
        (self.home / "state.json").write_text(json.dumps({HIDDEN_KEY: "true"}))
        out = self.home / "out.html"
        result = self.invoke("apply", str(self.page), "-o", str(out))

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(out.read_text(encoding="utf-8").count('style="display: none"'), 3)

    def test_missing_page_is_rejected(self):
        result = self.invoke("apply", str(self.home / "missing.html"))
        self.assertNotEqual(result.exit_code, 0)


class TestResolve(CliTestCase):
    def test_reports_annotation_and_unrecognized_labels(self):
        result = self.invoke("resolve", "Tomorrow", "Someday")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("-> Tomorrow (1 days)", result.output)
        self.assertIn("Someday: unrecognized", result.output)

    def test_today_is_not_annotated(self):
        result = self.invoke("dates", "resolve", "Today")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Today: ", result.output)
        self.assertNotIn("->", result.output)


class TestToggle(CliTestCase):
    def test_toggle_flips_and_persists(self):
        first = self.invoke("toggle")
        self.assertEqual(first.exit_code, 0, first.output)
        self.assertIn("now hidden", first.output)
        state = json.loads((self.home / "state.json").read_text())
        self.assertEqual(state, {HIDDEN_KEY: "true"})

        second = self.invoke("page", "toggle")
        self.assertIn("now shown", second.output)
        state = json.loads((self.home / "state.json").read_text())
        self.assertEqual(state, {HIDDEN_KEY: "false"})

    def test_explicit_state_path(self):
        state_path = self.home / "other" / "prefs.json"
        result = self.invoke("toggle", "--state", str(state_path))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(state_path.read_text()), {HIDDEN_KEY: "true"})
        self.assertFalse((self.home / "state.json").exists())

    def test_corrupt_state_is_reported(self):
        (self.home / "state.json").write_text("{broken")
        result = self.invoke("toggle")
        self.assertEqual(result.exit_code, 1)
        self.assertEqual((self.home / "state.json").read_text(), "{broken")


class TestConfigCommands(CliTestCase):
    def test_show_defaults(self):
        result = self.invoke("config", "show")
        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.output)
        self.assertEqual(data["performance"]["mutation_observer_debounce"], 100)
        self.assertEqual(data["selectors"]["due_date_element"], "div.DueDate")

    def test_init_then_refuse_overwrite(self):
        result = self.invoke("config", "init")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue((self.home / "config.json").exists())

        again = self.invoke("config", "init")
        self.assertEqual(again.exit_code, 1)
        self.assertIn("already exists", again.output)

        forced = self.invoke("config", "init", "--force")
        self.assertEqual(forced.exit_code, 0, forced.output)

    def test_invalid_config_exits_with_error(self):
        (self.home / "config.json").write_text(
            json.dumps({"performance": {"mutation_observer_debounce": -5}})
        )
        result = self.invoke("config", "show")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Invalid configuration", result.output)

    def test_config_changes_behaviour(self):
        (self.home / "config.json").write_text(
            json.dumps({"date_parser": {"tomorrow_keyword": "Morgen"}})
        )
        result = self.invoke("resolve", "Morgen", "Tomorrow")
        self.assertIn("-> Morgen (1 days)", result.output)
        self.assertIn("Tomorrow: unrecognized", result.output)


class TestVersion(CliTestCase):
    def test_version_flag(self):
        result = self.invoke("--version")
        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)


if __name__ == "__main__":
    unittest.main()
