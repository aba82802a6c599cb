"""Tests for structured logging context helpers."""

import logging
import unittest

from core.structured_logging import (
    _RunContextFilter,
    get_run_id,
    phase_scope,
    set_run_id,
    source_scope,
)


class TestStructuredLogging(unittest.TestCase):
    def _record(self) -> logging.LogRecord:
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", (), None)
        _RunContextFilter().filter(record)
        return record

    def test_set_run_id_explicit(self) -> None:
        self.assertEqual(set_run_id("run-abc"), "run-abc")
        self.assertEqual(get_run_id(), "run-abc")
        self.assertEqual(self._record().run_id, "run-abc")

    def test_set_run_id_generated(self) -> None:
        value = set_run_id()
        self.assertEqual(len(value), 12)
        self.assertEqual(get_run_id(), value)

    def test_phase_and_source_scopes_reset(self) -> None:
        with phase_scope("extract"):
            with source_scope("box.scad"):
                record = self._record()
                self.assertEqual(record.phase, "extract")
                self.assertEqual(record.source, "box.scad")
            self.assertEqual(self._record().source, "-")
        self.assertEqual(self._record().phase, "-")


if __name__ == "__main__":
    unittest.main()
