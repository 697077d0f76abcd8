"""Schema primitives and the state container handed to data source reads."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from infoblox_provider.exceptions import SchemaError


class ValueType(Enum):
    """Attribute value types understood by the host runtime."""

    STRING = "string"
    INT = "int"
    BOOL = "bool"
    MAP = "map"
    LIST = "list"


_ZERO_VALUES = {
    ValueType.STRING: "",
    ValueType.INT: 0,
    ValueType.BOOL: False,
    ValueType.MAP: {},
    ValueType.LIST: [],
}


def _matches_type(value, value_type: ValueType) -> bool:
    if value_type is ValueType.STRING:
        return isinstance(value, str)
    if value_type is ValueType.INT:
        # bool is an int subclass but never a valid INT attribute
        return isinstance(value, int) and not isinstance(value, bool)
    if value_type is ValueType.BOOL:
        return isinstance(value, bool)
    if value_type is ValueType.MAP:
        return isinstance(value, dict)
    return isinstance(value, (list, tuple))


@dataclass
class Schema:  # pylint: disable=too-many-instance-attributes
    """Declaration of a single attribute."""

    type: ValueType
    required: bool = False
    optional: bool = False
    computed: bool = False
    default: Any = None
    description: str = ""
    elem: Optional["Resource"] = None

    def zero_value(self):
        """Return the default for this attribute, or the zero value of its type."""
        if self.default is not None:
            return copy.deepcopy(self.default)
        return copy.deepcopy(_ZERO_VALUES[self.type])


@dataclass
class Resource:
    """A set of attribute declarations plus the function used to read them."""

    schema: Dict[str, Schema] = field(default_factory=dict)
    read: Optional[Callable[["ResourceData", Any], None]] = None

    def validate(self, config: dict):
        """Validate user supplied configuration against the schema.

        Args:
            config (dict): Attributes given by the user.

        Raises:
            SchemaError: When a required attribute is missing, an unknown attribute is given
                or an attribute has the wrong type.
        """
        for key in config:
            if key not in self.schema:
                raise SchemaError(f"An argument named {key!r} is not expected here.")
            attr = self.schema[key]
            if attr.computed and not (attr.optional or attr.required):
                raise SchemaError(f"{key!r} is a computed attribute and cannot be set.")
            if not _matches_type(config[key], attr.type):
                raise SchemaError(f"{key!r}: expected {attr.type.value}, got {type(config[key]).__name__}.")
        for key, attr in self.schema.items():
            if attr.required and key not in config:
                raise SchemaError(f"The argument {key!r} is required, but no definition was found.")

    def data(self, config: Optional[dict] = None) -> "ResourceData":
        """Return a new ResourceData for this resource seeded with config."""
        config = config or {}
        self.validate(config)
        return ResourceData(self, config)


class ResourceData:
    """Host managed state for a single read of a resource."""

    def __init__(self, resource: Resource, config: Optional[dict] = None):
        """Initialize the state with the user supplied config."""
        self.resource = resource
        self._values = dict(config or {})
        self._id = ""

    @property
    def id(self) -> str:  # pylint: disable=invalid-name
        """Identifier of the resource."""
        return self._id

    def set_id(self, value: str):
        """Set the identifier of the resource."""
        self._id = str(value)

    def get(self, key: str):
        """Return the value of an attribute, falling back to its default.

        Raises:
            SchemaError: If the attribute is not declared.
        """
        attr = self._attribute(key)
        if key in self._values:
            return self._values[key]
        return attr.zero_value()

    def set(self, key: str, value):
        """Set a computed attribute after checking it against the schema.

        Raises:
            SchemaError: If the attribute is not declared or the value doesn't match its type.
        """
        attr = self._attribute(key)
        if not _matches_type(value, attr.type):
            raise SchemaError(f"{key}: expected {attr.type.value}, got {type(value).__name__}")
        if attr.type is ValueType.LIST and attr.elem is not None:
            value = [self._apply_elem(key, attr.elem, item) for item in value]
        self._values[key] = value

    def state(self) -> dict:
        """Return the state written back to the host runtime."""
        state = {"id": self._id}
        for key, attr in self.resource.schema.items():
            state[key] = self._values[key] if key in self._values else attr.zero_value()
        return state

    def _attribute(self, key: str) -> Schema:
        try:
            return self.resource.schema[key]
        except KeyError:
            raise SchemaError(f"Invalid address to set: {key!r}") from None

    @staticmethod
    def _apply_elem(key: str, elem: Resource, item) -> dict:
        if not isinstance(item, dict):
            raise SchemaError(f"{key}: list elements must be objects, got {type(item).__name__}")
        flat = {}
        for name, attr in elem.schema.items():
            if name not in item:
                flat[name] = attr.zero_value()
                continue
            if not _matches_type(item[name], attr.type):
                raise SchemaError(f"{key}.{name}: expected {attr.type.value}, got {type(item[name]).__name__}")
            flat[name] = item[name]
        unknown = set(item) - set(elem.schema)
        if unknown:
            raise SchemaError(f"{key}: unexpected attributes {sorted(unknown)}")
        return flat
