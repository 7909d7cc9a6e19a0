"""Unstructured resource documents with dotted field path access."""

import copy
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import FieldPathError, ResourceSerializationError


def _split_path(path: str) -> List[str]:
    segments = path.split(".")
    if not path or any(segment == "" for segment in segments):
        raise FieldPathError(path, "invalid field path")
    return segments


@dataclass
class Resource:
    """
    A Kubernetes-style resource held as a nested mapping.

    Field paths use dots to descend into mappings and integer segments to
    index into lists, e.g. ``spec.parameters.region`` or ``spec.items.0.name``.
    """

    object: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Ensure the object is always a mapping."""
        if self.object is None:
            self.object = {}

    def get_value(self, path: str) -> Any:
        """
        Get the value at a dotted field path.

        Args:
            path: Dotted field path

        Returns:
            The value stored at the path

        Raises:
            FieldPathError: If any segment of the path does not exist
        """
        current: Any = self.object
        for segment in _split_path(path):
            if isinstance(current, dict):
                if segment not in current:
                    raise FieldPathError(path, "no such field")
                current = current[segment]
            elif isinstance(current, list):
                try:
                    current = current[int(segment)]
                except (ValueError, IndexError):
                    raise FieldPathError(path, f"no such index {segment!r}")
            else:
                raise FieldPathError(path, f"{segment!r} is not an object or array")
        return current

    def get_string(self, path: str) -> str:
        """Get the string at a dotted field path."""
        value = self.get_value(path)
        if not isinstance(value, str):
            raise FieldPathError(path, f"value is not a string: {type(value).__name__}")
        return value

    def set_value(self, path: str, value: Any) -> None:
        """
        Set the value at a dotted field path, creating intermediate objects.

        Raises:
            FieldPathError: If an intermediate segment is not an object
        """
        segments = _split_path(path)
        current = self.object
        for segment in segments[:-1]:
            child = current.setdefault(segment, {})
            if not isinstance(child, dict):
                raise FieldPathError(path, f"{segment!r} is not an object")
            current = child
        current[segments[-1]] = value

    def to_json_object(self) -> Dict[str, Any]:
        """
        Return a deep, JSON-compatible copy of the resource.

        Raises:
            ResourceSerializationError: If the resource holds values JSON cannot represent
        """
        try:
            return json.loads(json.dumps(self.object))
        except (TypeError, ValueError) as e:
            raise ResourceSerializationError(f"cannot convert resource to JSON: {e}", cause=e)

    def deep_copy(self) -> "Resource":
        """Return an independent copy of this resource."""
        return Resource(copy.deepcopy(self.object))

    @property
    def kind(self) -> Optional[str]:
        return self.object.get("kind")

    @property
    def name(self) -> Optional[str]:
        metadata = self.object.get("metadata")
        return metadata.get("name") if isinstance(metadata, dict) else None


@dataclass
class Composite:
    """An observed or desired composite resource and its connection details."""

    resource: Resource = field(default_factory=Resource)
    connection_details: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Composite":
        return cls(
            resource=Resource(copy.deepcopy(data.get("resource") or {})),
            connection_details=dict(data.get("connectionDetails") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"resource": self.resource.to_json_object()}
        if self.connection_details:
            result["connectionDetails"] = dict(self.connection_details)
        return result
