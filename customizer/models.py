"""
Data models for extracted Customizer schemas.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple, Union

DefaultValue = Union[str, int, float, bool]
Number = Union[int, float]


@dataclass(frozen=True)
class Group:
    """A named, ordered section of parameters.

    Attributes:
        id: Exact header text (case-sensitive), unique within a schema
        label: Display label (currently identical to ``id``)
        order: Index of first appearance in the source
    """

    id: str
    label: str
    order: int

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "label": self.label, "order": self.order}


@dataclass(frozen=True)
class Dependency:
    """Visibility condition attached to a parameter."""

    parameter: str
    operator: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parameter": self.parameter,
            "operator": self.operator,
            "value": self.value,
        }


@dataclass(frozen=True)
class Parameter:
    """A single customizable top-level assignment.

    Attributes:
        name: Assigned identifier, including a leading ``$`` if present
        type: One of string, integer, number, boolean, color, file
        default: Default value parsed from the assignment
        group: Id of the owning group
        order: Global source-order counter
        description: Human-readable description, possibly empty
        ui_type: One of input, slider, select, toggle, color, file
        unit: Inferred unit for numeric parameters
        minimum: Range lower bound from a slider hint
        maximum: Range upper bound from a slider hint
        step: Range step from a three-part slider hint
        enum: Allowed values from an enumeration hint
        accepted_extensions: File extensions from a file hint
        dependency: Visibility condition from an ``@depends`` directive
    """

    name: str
    type: str
    default: DefaultValue
    group: str
    order: int
    description: str = ""
    ui_type: str = "input"
    unit: Optional[str] = None
    minimum: Optional[Number] = None
    maximum: Optional[Number] = None
    step: Optional[Number] = None
    enum: Optional[Tuple[str, ...]] = None
    accepted_extensions: Optional[Tuple[str, ...]] = None
    dependency: Optional[Dependency] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the parameter to a dictionary suitable for JSON serialization.

        Optional fields are omitted when absent. Keys follow the camelCase
        names consumed by the form generator.

        Returns:
            Dictionary representation of the parameter.
        """
        payload: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "default": self.default,
            "group": self.group,
            "order": self.order,
            "description": self.description,
            "uiType": self.ui_type,
        }
        if self.unit is not None:
            payload["unit"] = self.unit
        if self.minimum is not None:
            payload["minimum"] = self.minimum
        if self.maximum is not None:
            payload["maximum"] = self.maximum
        if self.step is not None:
            payload["step"] = self.step
        if self.enum is not None:
            payload["enum"] = list(self.enum)
        if self.accepted_extensions is not None:
            payload["acceptedExtensions"] = list(self.accepted_extensions)
        if self.dependency is not None:
            payload["dependency"] = self.dependency.to_dict()
        return payload


@dataclass(frozen=True)
class Schema:
    """Complete extraction result handed to the UI and render layers.

    Attributes:
        groups: Groups in order of first appearance
        parameters: Read-only mapping of parameter name to Parameter
        libraries: Identifiers of referenced third-party libraries
    """

    groups: Tuple[Group, ...] = ()
    parameters: Mapping[str, Parameter] = field(
        default_factory=lambda: MappingProxyType({})
    )
    libraries: FrozenSet[str] = frozenset()

    def group_parameters(self, group_id: str) -> Tuple[Parameter, ...]:
        """Return the parameters of one group sorted by source order."""
        members = [p for p in self.parameters.values() if p.group == group_id]
        return tuple(sorted(members, key=lambda p: p.order))

    def defaults(self) -> Dict[str, DefaultValue]:
        """Return parameter defaults, the initial render payload."""
        return {name: param.default for name, param in self.parameters.items()}

    def to_dict(self) -> Dict[str, Any]:
        """Convert the schema to a dictionary suitable for JSON serialization.

        Returns:
            Dictionary with ``groups``, ``parameters`` and a sorted
            ``libraries`` list.
        """
        return {
            "groups": [group.to_dict() for group in self.groups],
            "parameters": {
                name: param.to_dict() for name, param in self.parameters.items()
            },
            "libraries": sorted(self.libraries),
        }
