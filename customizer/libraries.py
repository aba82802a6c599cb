"""
Registry of known OpenSCAD library bundles and include/use detection.
"""

import logging
from dataclasses import dataclass, asdict
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional

from customizer.config import LIBRARY_DIRECTIVE_PATTERN

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LibraryDefinition:
    """Metadata for a third-party geometry library.

    Attributes:
        id: Identifier used as the first path segment in include/use
        name: Display name
        description: Short summary of what the library provides
        license: SPDX license identifier
        repository: Upstream repository URL
        path: Mount path of the library bundle
        popular: Whether the bundle is offered by default
        requirements: Minimum OpenSCAD version, if any
    """

    id: str
    name: str
    description: str = ""
    license: str = ""
    repository: str = ""
    path: str = ""
    popular: bool = False
    requirements: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


BUILTIN_LIBRARIES: Mapping[str, LibraryDefinition] = MappingProxyType({
    "MCAD": LibraryDefinition(
        id="MCAD",
        name="MCAD",
        description="Mechanical CAD components (gears, screws, bearings, boxes)",
        license="LGPL-2.1",
        repository="https://github.com/openscad/MCAD",
        path="/libraries/MCAD",
        popular=True,
    ),
    "BOSL2": LibraryDefinition(
        id="BOSL2",
        name="BOSL2",
        description="Advanced geometric primitives, attachments, rounding",
        license="BSD-2-Clause",
        repository="https://github.com/BelfrySCAD/BOSL2",
        path="/libraries/BOSL2",
        popular=True,
        requirements="OpenSCAD 2021.01+",
    ),
    "NopSCADlib": LibraryDefinition(
        id="NopSCADlib",
        name="NopSCADlib",
        description="Parts library for 3D printers and enclosures",
        license="GPL-3.0",
        repository="https://github.com/nophead/NopSCADlib",
        path="/libraries/NopSCADlib",
    ),
    "dotSCAD": LibraryDefinition(
        id="dotSCAD",
        name="dotSCAD",
        description="Artistic patterns, dots, and lines",
        license="LGPL-3.0",
        repository="https://github.com/JustinSDK/dotSCAD",
        path="/libraries/dotSCAD",
    ),
})


def detect_libraries(
    source_text: str,
    registry: Optional[Mapping[str, LibraryDefinition]] = None,
) -> FrozenSet[str]:
    """Return the registry ids referenced by ``include <...>``/``use <...>``.

    An include path ``BOSL2/std.scad`` marks ``BOSL2``. Paths are matched by
    their first segment only, case-sensitively.

    Args:
        source_text: Full OpenSCAD source.
        registry: Known libraries; defaults to ``BUILTIN_LIBRARIES``.

    Returns:
        Frozen set of detected library ids.
    """
    known = BUILTIN_LIBRARIES if registry is None else registry
    detected = set()

    for match in LIBRARY_DIRECTIVE_PATTERN.finditer(source_text):
        include_path = match.group(1)
        for lib_id in known:
            if include_path.startswith(lib_id + "/"):
                detected.add(lib_id)

    if detected:
        logger.debug("Detected libraries: %s", sorted(detected))
    return frozenset(detected)
