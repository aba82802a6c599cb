"""Tests for startup config validation helpers."""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from core.startup_config import (
    REGISTRY_ENV_VAR,
    ConfigValidationError,
    load_library_registry,
    resolve_library_registry,
    resolve_strict_config_validation,
)
from customizer.libraries import BUILTIN_LIBRARIES


class TestStartupConfig(unittest.TestCase):
    def _write_registry(self, content: str, suffix: str = ".yml") -> str:
        handle = tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False)
        handle.write(content)
        handle.flush()
        handle.close()
        self.addCleanup(lambda: Path(handle.name).unlink(missing_ok=True))
        return handle.name

    def test_load_non_strict_missing_returns_builtin(self) -> None:
        registry = load_library_registry("/definitely/missing.yml", strict=False)
        self.assertEqual(set(registry), set(BUILTIN_LIBRARIES))

    def test_load_strict_missing_raises(self) -> None:
        with self.assertRaises(ConfigValidationError):
            load_library_registry("/definitely/missing.yml", strict=True)

    def test_load_yaml_registry(self) -> None:
        path = self._write_registry(
            "libraries:\n"
            "  Round-Anything:\n"
            "    description: Rounded polygons\n"
            "    license: MIT\n"
            "    popular: true\n"
        )
        registry = load_library_registry(path, strict=True)
        self.assertEqual(list(registry), ["Round-Anything"])
        lib = registry["Round-Anything"]
        self.assertEqual(lib.name, "Round-Anything")
        self.assertEqual(lib.license, "MIT")
        self.assertEqual(lib.path, "/libraries/Round-Anything")
        self.assertTrue(lib.popular)

    def test_extend_builtin(self) -> None:
        path = self._write_registry("extend_builtin: true\nlibraries:\n  threads: {}\n")
        registry = load_library_registry(path, strict=True)
        self.assertIn("BOSL2", registry)
        self.assertIn("threads", registry)

    def test_load_json_bare_mapping(self) -> None:
        path = self._write_registry(json.dumps({"KeyLib": {"name": "Key"}}), suffix=".json")
        registry = load_library_registry(path, strict=True)
        self.assertEqual(registry["KeyLib"].name, "Key")

    def test_invalid_yaml_strict_raises(self) -> None:
        path = self._write_registry("libraries: [unclosed\n")
        with self.assertRaises(ConfigValidationError):
            load_library_registry(path, strict=True)

    def test_non_mapping_entry_non_strict_falls_back(self) -> None:
        path = self._write_registry("libraries:\n  Bad: 5\n")
        with self.assertLogs("core.startup_config", level="WARNING"):
            registry = load_library_registry(path, strict=False)
        self.assertEqual(set(registry), set(BUILTIN_LIBRARIES))

    def test_empty_file_strict_raises(self) -> None:
        path = self._write_registry("")
        with self.assertRaises(ConfigValidationError):
            load_library_registry(path, strict=True)

    def test_strict_flag_from_env(self) -> None:
        with patch.dict(os.environ, {"STRICT_CONFIG_VALIDATION": "yes"}):
            self.assertTrue(resolve_strict_config_validation())
        with patch.dict(os.environ, {"STRICT_CONFIG_VALIDATION": "0"}):
            self.assertFalse(resolve_strict_config_validation())

    def test_resolve_defaults_to_builtin(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            self.assertIs(resolve_library_registry(), BUILTIN_LIBRARIES)

    def test_resolve_from_env(self) -> None:
        path = self._write_registry("libraries:\n  EnvLib: {}\n")
        with patch.dict(os.environ, {REGISTRY_ENV_VAR: path}):
            registry = resolve_library_registry()
        self.assertEqual(list(registry), ["EnvLib"])


if __name__ == "__main__":
    unittest.main()
