import json
import shutil
import tempfile
import unittest
from pathlib import Path

from flask import Flask

from console_logger.gate import RequestGate, SettingGate, StaticGate
from console_logger.settings import (
    DEFAULT_QUERY_PARAM,
    ENABLED_ENV,
    QUERY_PARAM_ENV,
    SETTINGS_PATH_ENV,
    SettingsStore,
    parse_flag,
)


class SettingsTestCase(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp(prefix="console_logger_settings_")
        self.path = Path(self.temp_dir) / "nested" / "settings.json"

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def store(self, environ=None) -> SettingsStore:
        return SettingsStore(path=str(self.path), environ=environ if environ is not None else {})


class TestParseFlag(unittest.TestCase):
    def test_values(self):
        for raw in ("1", "true", "YES", "on", True):
            self.assertTrue(parse_flag(raw))
        for raw in ("0", "false", "no", "off", "", False):
            self.assertFalse(parse_flag(raw))

    def test_invalid(self):
        with self.assertRaises(ValueError):
            parse_flag("maybe")


class TestSettingsStore(SettingsTestCase):
    def test_disabled_without_file(self):
        store = self.store()
        self.assertFalse(store.is_enabled())
        self.assertFalse(self.path.exists())

    def test_activate_creates_disabled_file(self):
        store = self.store()
        self.assertTrue(store.activate())
        self.assertEqual(json.loads(self.path.read_text())["enabled"], "0")
        self.assertFalse(store.activate())

    def test_activate_keeps_existing_setting(self):
        store = self.store()
        store.set_enabled(True)
        store.activate()
        self.assertTrue(store.is_enabled())

    def test_set_enabled_persists(self):
        self.store().set_enabled(True)

        data = json.loads(self.path.read_text())
        self.assertEqual(data["enabled"], "1")
        self.assertIn("updated_at", data)
        self.assertTrue(self.store().is_enabled())

    def test_env_override(self):
        self.store().set_enabled(True)

        store = self.store({ENABLED_ENV: "0"})
        self.assertFalse(store.is_enabled())
        self.assertTrue(store.stored_enabled())
        self.assertFalse(store.env_override())

        self.assertIsNone(self.store().env_override())

    def test_corrupt_file(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json")

        with self.assertRaises(ValueError):
            self.store().is_enabled()

    def test_path_from_environment(self):
        store = SettingsStore(environ={SETTINGS_PATH_ENV: str(self.path)})
        self.assertEqual(store.path, self.path)

    def test_query_param(self):
        self.assertEqual(self.store().query_param(), DEFAULT_QUERY_PARAM)
        self.assertEqual(self.store({QUERY_PARAM_ENV: "debug"}).query_param(), "debug")


class TestGates(SettingsTestCase):
    def setUp(self):
        super().setUp()
        self.app = Flask(__name__)

    def test_static_gate(self):
        self.assertTrue(StaticGate().should_log())
        self.assertFalse(StaticGate(False).should_log())

    def test_setting_gate(self):
        store = self.store()
        gate = SettingGate(store)
        self.assertFalse(gate.should_log())

        store.set_enabled(True)
        self.assertTrue(gate.should_log())

    def test_request_gate_needs_flag_and_param(self):
        store = self.store()
        gate = RequestGate(store)

        with self.app.test_request_context("/?console_logger"):
            self.assertFalse(gate.should_log())

        store.set_enabled(True)
        with self.app.test_request_context("/?console_logger"):
            self.assertTrue(gate.should_log())
        with self.app.test_request_context("/"):
            self.assertFalse(gate.should_log())

    def test_request_gate_outside_request(self):
        store = self.store()
        store.set_enabled(True)
        self.assertFalse(RequestGate(store).should_log())

    def test_request_gate_custom_param(self):
        store = self.store()
        store.set_enabled(True)
        gate = RequestGate(store, query_param="debug")

        with self.app.test_request_context("/?debug=1"):
            self.assertTrue(gate.should_log())
        with self.app.test_request_context("/?console_logger"):
            self.assertFalse(gate.should_log())


if __name__ == "__main__":
    unittest.main()
