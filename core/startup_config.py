"""Startup configuration validation helpers.

Provides strict/non-strict loading of the library registry used by the
include/use detector, plus environment flag resolution.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from customizer.libraries import BUILTIN_LIBRARIES, LibraryDefinition

logger = logging.getLogger(__name__)

REGISTRY_ENV_VAR = "SCAD_LIBRARY_REGISTRY"


class ConfigValidationError(RuntimeError):
    """Raised when strict startup validation fails."""


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag("STRICT_CONFIG_VALIDATION", default=default)


def _fail(msg: str, strict: bool, exc: Optional[BaseException] = None) -> dict[str, LibraryDefinition]:
    if strict:
        raise ConfigValidationError(msg) from exc
    logger.warning("%s; continuing with built-in registry", msg)
    return dict(BUILTIN_LIBRARIES)


def _parse_library_entry(lib_id: str, entry: Any) -> LibraryDefinition:
    if entry is None:
        entry = {}
    if not isinstance(entry, dict):
        raise ValueError(f"library '{lib_id}' must be an object")
    return LibraryDefinition(
        id=lib_id,
        name=str(entry.get("name", lib_id)).strip() or lib_id,
        description=str(entry.get("description", "")),
        license=str(entry.get("license", "")),
        repository=str(entry.get("repository", "")),
        path=str(entry.get("path", f"/libraries/{lib_id}")),
        popular=bool(entry.get("popular", False)),
        requirements=(
            str(entry["requirements"])
            if entry.get("requirements") is not None
            else None
        ),
    )


def load_library_registry(
    registry_path: str,
    strict: bool = False,
) -> dict[str, LibraryDefinition]:
    """Load a library registry from a YAML or JSON file.

    The payload is either ``{libraries: {ID: {...}}}`` or a bare
    ``{ID: {...}}`` mapping. Set ``extend_builtin: true`` at top level to
    merge the entries over the built-in registry instead of replacing it.

    In non-strict mode this returns the built-in registry on read/parse
    failures. In strict mode this raises ``ConfigValidationError``.
    """
    path = Path(registry_path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        return _fail(f"Library registry not found: {registry_path}", strict, exc)

    try:
        if path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        return _fail(
            f"Failed to parse library registry at {registry_path}: {exc}",
            strict,
            exc,
        )

    if payload is None:
        return _fail(f"Library registry is empty: {registry_path}", strict)
    if not isinstance(payload, dict):
        return _fail(
            f"Unexpected library registry payload type: {type(payload).__name__}",
            strict,
        )

    extend_builtin = bool(payload.get("extend_builtin", False))
    entries = payload.get("libraries", payload)
    if not isinstance(entries, dict):
        return _fail("Library registry 'libraries' section must be a mapping", strict)

    registry: dict[str, LibraryDefinition] = dict(BUILTIN_LIBRARIES) if extend_builtin else {}
    for raw_id, entry in entries.items():
        lib_id = str(raw_id).strip()
        if lib_id in {"libraries", "extend_builtin"}:
            continue
        if not lib_id:
            return _fail("Library registry contains an empty id", strict)
        try:
            registry[lib_id] = _parse_library_entry(lib_id, entry)
        except ValueError as exc:
            return _fail(str(exc), strict, exc)

    logger.info("Loaded %d libraries from %s", len(registry), registry_path)
    return registry


def resolve_library_registry(
    registry_path: Optional[str] = None,
    strict: Optional[bool] = None,
) -> Mapping[str, LibraryDefinition]:
    """Resolve the active registry from an explicit path or the environment.

    Falls back to ``SCAD_LIBRARY_REGISTRY`` and then to the built-in
    registry when no path is configured.
    """
    if strict is None:
        strict = resolve_strict_config_validation()
    path = registry_path or os.getenv(REGISTRY_ENV_VAR)
    if not path:
        return BUILTIN_LIBRARIES
    return load_library_registry(path, strict=strict)
