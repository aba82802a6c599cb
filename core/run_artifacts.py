"""Run report helpers for extraction runs."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any, Mapping

from customizer.models import Schema

DEFAULT_REPORT_DIR = "output/run_reports"


def build_extraction_report(
    schemas: Mapping[str, Schema],
    stats: Mapping[str, int],
    status: str = "success",
) -> dict[str, Any]:
    """Summarize an extraction run per source file."""
    files = {}
    for path, schema in schemas.items():
        files[path] = {
            "groups": [group.id for group in schema.groups],
            "parameter_count": len(schema.parameters),
            "libraries": sorted(schema.libraries),
        }
    return {"status": status, "stats": dict(stats), "files": files}


def write_run_report(
    report: Mapping[str, Any],
    run_id: str,
    output_dir: str = DEFAULT_REPORT_DIR,
) -> str:
    """Write ``report`` as ``<output_dir>/<run_id>.json`` and return the path.

    ``run_id`` and a UTC ``timestamp_utc`` are added unless the report
    already carries them.
    """
    os.makedirs(output_dir, exist_ok=True)
    payload = {
        "run_id": run_id,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        **report,
    }
    path = os.path.join(output_dir, f"{run_id}.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True, ensure_ascii=False)
        f.write("\n")
    return path
