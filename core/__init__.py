"""Core shared configuration, logging and reporting utilities."""

from core.structured_logging import (
    configure_structured_logging,
    get_run_id,
    phase_scope,
    set_run_id,
    source_scope,
)
from core.startup_config import (
    ConfigValidationError,
    load_library_registry,
    resolve_library_registry,
    resolve_strict_config_validation,
)
from core.run_artifacts import build_extraction_report, write_run_report

__all__ = [
    "configure_structured_logging",
    "get_run_id",
    "phase_scope",
    "set_run_id",
    "source_scope",
    "ConfigValidationError",
    "load_library_registry",
    "resolve_library_registry",
    "resolve_strict_config_validation",
    "build_extraction_report",
    "write_run_report",
]
