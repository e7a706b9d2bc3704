from __future__ import annotations

import tests._path_setup  # noqa: F401

import dataclasses
import unittest
from pathlib import Path

from safe_tempfile.config import DEFAULT_MAX_ATTEMPTS, TempfileConfig, build_config, env_overrides


class ConfigTest(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = build_config(environ={})
        self.assertEqual(cfg.mode, 0o600)
        self.assertEqual(cfg.max_attempts, DEFAULT_MAX_ATTEMPTS)
        self.assertIsNone(cfg.tmpdir)
        self.assertIsNone(cfg.log_file)
        self.assertFalse(cfg.debug)
        self.assertFalse(cfg.explicit)

    def test_env_overrides_are_applied(self) -> None:
        cfg = build_config(
            environ={
                "TMPDIR": "/var/tmp",
                "SAFE_TEMPFILE_MAX_ATTEMPTS": "5",
                "SAFE_TEMPFILE_DEBUG": "TRUE",
                "SAFE_TEMPFILE_LOG_FILE": "/tmp/t.log",
            }
        )
        self.assertEqual(cfg.tmpdir, "/var/tmp")
        self.assertEqual(cfg.max_attempts, 5)
        self.assertTrue(cfg.debug)
        self.assertEqual(cfg.log_file, Path("/tmp/t.log"))

    def test_invalid_max_attempts_is_ignored(self) -> None:
        for raw in ("many", "0", "-3"):
            with self.assertLogs("safe_tempfile.config", level="WARNING"):
                out = env_overrides({"SAFE_TEMPFILE_MAX_ATTEMPTS": raw})
            self.assertNotIn("max_attempts", out)

    def test_debug_flag_wins_over_environment(self) -> None:
        cfg = build_config(debug=True, environ={"SAFE_TEMPFILE_DEBUG": "false"})
        self.assertTrue(cfg.debug)

    def test_empty_env_values_are_skipped(self) -> None:
        self.assertEqual(env_overrides({"TMPDIR": "", "SAFE_TEMPFILE_DEBUG": ""}), {})

    def test_explicit_name(self) -> None:
        cfg = build_config(name="/tmp/x", environ={})
        self.assertTrue(cfg.explicit)

    def test_config_is_read_only(self) -> None:
        cfg = TempfileConfig()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            cfg.mode = 0o777  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
