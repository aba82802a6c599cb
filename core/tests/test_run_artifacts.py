"""Tests for run artifact writer."""

import json
import tempfile
import unittest
from pathlib import Path

from core.run_artifacts import build_extraction_report, write_run_report
from customizer.extractor import extract_schema


class TestRunArtifacts(unittest.TestCase):
    def test_write_run_report(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_run_report(
                report={"status": "success", "value": 1},
                run_id="run-123",
                output_dir=tmpdir,
            )
            self.assertTrue(Path(path).is_file())
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
            self.assertEqual(payload["run_id"], "run-123")
            self.assertEqual(payload["status"], "success")
            self.assertEqual(payload["value"], 1)
            self.assertIn("timestamp_utc", payload)

    def test_build_extraction_report(self) -> None:
        schema = extract_schema("use <MCAD/boxes.scad>\n/* [Box] */\nsize = 1;\nlid = true;\n")
        report = build_extraction_report({"box.scad": schema}, {"files_processed": 1})
        self.assertEqual(report["status"], "success")
        self.assertEqual(report["stats"], {"files_processed": 1})
        self.assertEqual(
            report["files"]["box.scad"],
            {"groups": ["Box"], "parameter_count": 2, "libraries": ["MCAD"]},
        )


if __name__ == "__main__":
    unittest.main()
