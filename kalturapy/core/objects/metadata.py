"""
Property metadata for typed objects.

Each generated type describes its fields with a static table of
PropertyMetadata entries, keyed by wire name. The table drives both
serialization and deserialization.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class PropertyType(str, Enum):
    """Wire types of object properties (values match the generated metadata tags)."""
    BOOL = 'b'
    STRING = 's'
    NUMBER = 'n'
    ENUM_NUMBER = 'en'
    ENUM_STRING = 'es'
    OBJECT = 'o'
    ARRAY = 'a'
    MAP = 'm'
    DATE = 'd'
    CONSTANT = 'c'
    FILE = 'f'


class PropertyStatus(Enum):
    """Outcome of serializing a single property."""
    MISSING = 'missing'
    REMOVED = 'removed'
    EXISTS = 'exists'


class _Unset:
    """Marker for a property that was never assigned."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'UNSET'

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])')


def to_snake_case(name: str) -> str:
    """Converts a camelCase wire name to a snake_case attribute name."""
    return _CAMEL_BOUNDARY.sub('_', name).lower()


@dataclass(frozen=True)
class PropertyMetadata:
    """
    Static description of one property.

    Attributes:
        name: Wire name (e.g. 'mediaType')
        type: Wire type
        sub_type: Type tag of nested objects (object, array and map properties)
        read_only: Read-only properties are never sent to the server
        default: Fixed value of constant properties
        attribute: Python attribute name (derived from name when omitted)
    """
    name: str
    type: PropertyType
    sub_type: Optional[str] = None
    read_only: bool = False
    default: Optional[Any] = None
    attribute: Optional[str] = None

    def __post_init__(self):
        if self.attribute is None:
            object.__setattr__(self, 'attribute', to_snake_case(self.name))


def prop(
    name: str,
    type: PropertyType,
    sub_type: Optional[str] = None,
    read_only: bool = False,
    default: Optional[Any] = None,
    attribute: Optional[str] = None
) -> PropertyMetadata:
    """Shorthand used by generated types to declare a property."""
    return PropertyMetadata(
        name=name,
        type=type,
        sub_type=sub_type,
        read_only=read_only,
        default=default,
        attribute=attribute
    )
