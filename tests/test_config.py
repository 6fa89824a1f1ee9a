"""Tests for configuration models and their storage."""

import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError

from asana_improvements.domain.shared import is_err, is_ok
from asana_improvements.global_config import (
    HOME_ENV_VAR,
    get_config_dir,
    get_config_path,
    get_state_path,
    get_state_store,
    load_config,
    save_config,
)
from asana_improvements.models import DateParserConfig, EnhancerConfig, PerformanceConfig


class TestModels(unittest.TestCase):
    def test_defaults(self):
        config = EnhancerConfig()
        self.assertTrue(config.features.days_left_calculation)
        self.assertEqual(config.performance.mutation_observer_debounce, 100)
        self.assertEqual(config.storage.completed_tasks_hidden, "completedSubtasksHidden")
        self.assertEqual(config.date_parser.day_names[0], "Monday")

    def test_partial_data_keeps_other_defaults(self):
        config = EnhancerConfig.model_validate({"features": {"hide_paywall_elements": False}})
        self.assertFalse(config.features.hide_paywall_elements)
        self.assertTrue(config.features.auto_expand_comments)

    def test_invalid_values_are_rejected(self):
        with self.assertRaises(ValidationError):
            PerformanceConfig(mutation_observer_debounce=-1)
        with self.assertRaises(ValidationError):
            DateParserConfig(day_names=["Monday", "Tuesday"])


class TestConfigStorage(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = Path(self.tmpdir) / "config.json"

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_missing_file_gives_defaults(self):
        result = load_config(self.path)
        self.assertTrue(is_ok(result))
        self.assertEqual(result.value, EnhancerConfig())

    def test_round_trip(self):
        config = EnhancerConfig.model_validate({"controls": {"indicator_color": "#000000"}})
        self.assertTrue(is_ok(save_config(config, self.path)))
        self.assertEqual(load_config(self.path).value, config)

    def test_invalid_json(self):
        self.path.write_text("{")
        result = load_config(self.path)
        self.assertTrue(is_err(result))
        self.assertIn("Invalid JSON", result.error)

    def test_invalid_values(self):
        self.path.write_text(json.dumps({"performance": {"mutation_observer_debounce": "soon"}}))
        result = load_config(self.path)
        self.assertTrue(is_err(result))
        self.assertIn("Invalid configuration", result.error)


class TestConfigLocation(unittest.TestCase):
    def test_env_var_overrides_home(self):
        with patch.dict(os.environ, {HOME_ENV_VAR: "/tmp/asana-home"}):
            self.assertEqual(get_config_dir(), Path("/tmp/asana-home"))
            self.assertEqual(get_config_path(), Path("/tmp/asana-home/config.json"))
            self.assertEqual(get_state_path(), Path("/tmp/asana-home/state.json"))

    def test_default_lives_in_home(self):
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop(HOME_ENV_VAR, None)
            self.assertEqual(get_config_dir(), Path.home() / ".asana_improvements")

    def test_state_store_uses_state_path(self):
        tmpdir = tempfile.mkdtemp()
        try:
            with patch.dict(os.environ, {HOME_ENV_VAR: tmpdir}):
                store = get_state_store()
                self.assertTrue(is_ok(store.set_item("k", "v")))
            self.assertEqual(json.loads((Path(tmpdir) / "state.json").read_text()), {"k": "v"})
        finally:
            shutil.rmtree(tmpdir)


if __name__ == "__main__":
    unittest.main()
