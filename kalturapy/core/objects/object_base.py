"""
Typed object base class.

Every generated type derives from KalturaObjectBase and declares its
properties in a `_properties` tuple. The merged, read-only metadata table
of a class drives conversion to the wire record (to_request_object) and
from server responses (from_response_object).
"""
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .metadata import PropertyMetadata, PropertyStatus, PropertyType, UNSET, prop
from .factory import KalturaTypesFactory
from ..exceptions import TypeMismatchError, UnknownTypeError
from ..logging import get_logger
from ..utils import from_server_date, is_numeric, to_number, to_server_date

logger = get_logger('kalturapy.objects')

TargetPath = Union[str, Sequence[str]]
DependencySpec = Union['DependentProperty', Tuple[str, int], Tuple[str, int, TargetPath]]


@dataclass(frozen=True)
class DependentProperty:
    """
    Binding of a property to the result of another request in the same batch.

    `request` is the zero-based position of the source request when passed
    to set_dependency(); the stored binding holds the one-based wire index.
    """
    property: str
    request: int
    target_path: Optional[TargetPath] = None

    @property
    def placeholder(self) -> str:
        """Wire value, e.g. '{1:result:id}'."""
        path = self.target_path
        if path and not isinstance(path, str):
            path = ':'.join(path)
        suffix = f":{path}" if path else ''
        return f"{{{self.request}:result{suffix}}}"


def create_kaltura_object(
    object_type: Optional[str],
    fallback_type: Optional[str] = None
) -> 'KalturaObjectBase':
    """
    Instantiates an object by discriminator, falling back to a declared type.

    Raises:
        UnknownTypeError: If neither type is registered
    """
    result = KalturaTypesFactory.create_object(object_type) if object_type else None
    used_fallback = False

    if result is None and fallback_type:
        used_fallback = True
        result = KalturaTypesFactory.create_object(fallback_type)

    if result is None:
        raise UnknownTypeError(
            f"Failed to create object of type '{object_type}' (fallback type '{fallback_type}')",
            object_type=object_type,
            fallback_type=fallback_type
        )

    if used_fallback:
        logger.debug(
            f"Could not find object type '{object_type}', falling back to '{fallback_type}'"
        )
    return result


def parse_response_value(
    meta: PropertyMetadata,
    value: Any,
    property_name: Optional[str] = None
) -> Any:
    """
    Parses a single raw server value according to its metadata.

    Returns UNSET when the value should leave the target untouched.

    Raises:
        TypeMismatchError: If the value has the wrong shape for its type
        UnknownTypeError: If a nested object type cannot be resolved
    """
    name = property_name or meta.name
    kind = meta.type

    if value is None:
        return None

    if kind is PropertyType.BOOL:
        if isinstance(value, bool):
            return value
        if str(value) == '0':
            return False
        if str(value) == '1':
            return True
        return UNSET

    if kind in (PropertyType.STRING, PropertyType.ENUM_STRING):
        return str(value)

    if kind in (PropertyType.NUMBER, PropertyType.ENUM_NUMBER):
        try:
            return to_number(value)
        except ValueError:
            raise TypeMismatchError(
                f"Failed to parse property '{name}'. Expected type number, got '{type(value).__name__}'",
                property_name=name
            )

    if kind is PropertyType.OBJECT:
        if not isinstance(value, Mapping):
            raise TypeMismatchError(
                f"Failed to parse property '{name}'. Expected type object, got '{type(value).__name__}'",
                property_name=name
            )
        return create_kaltura_object(value.get('objectType'), meta.sub_type).from_response_object(value)

    if kind is PropertyType.ARRAY:
        if not isinstance(value, list):
            raise TypeMismatchError(
                f"Failed to parse property '{name}'. Expected type array, got '{type(value).__name__}'",
                property_name=name
            )
        parsed = []
        for item in value:
            if not isinstance(item, Mapping):
                raise TypeMismatchError(
                    f"Failed to parse property '{name}'. Expected array of objects",
                    property_name=name
                )
            parsed.append(
                create_kaltura_object(item.get('objectType'), meta.sub_type).from_response_object(item)
            )
        return parsed

    if kind is PropertyType.MAP:
        if not isinstance(value, Mapping):
            raise TypeMismatchError(
                f"Failed to parse property '{name}'. Expected type map, got '{type(value).__name__}'",
                property_name=name
            )
        parsed_map = {}
        for key, item in value.items():
            if not isinstance(item, Mapping):
                raise TypeMismatchError(
                    f"Failed to parse property '{name}'. Expected map of objects",
                    property_name=name
                )
            parsed_map[key] = create_kaltura_object(
                item.get('objectType'), meta.sub_type
            ).from_response_object(item)
        return parsed_map

    if kind is PropertyType.DATE:
        if is_numeric(value):
            return from_server_date(to_number(value))
        raise TypeMismatchError(
            f"Failed to parse property '{name}'. Expected type date, got '{type(value).__name__}'",
            property_name=name
        )

    # constants and files are never read back from responses
    return UNSET


class KalturaObjectBase:
    """
    Base class of all typed objects.

    Unassigned properties hold UNSET; assigning None marks the property for
    deletion on the server. Besides its own fields an object carries:
    - related_objects: side-map of other typed objects (read-only)
    - an allow-list of array properties that may be sent empty
    - dependent-property bindings used inside multi-requests

    Example:
        >>> entry = KalturaMediaEntry(name='clip', media_type=MediaType.VIDEO)
        >>> entry.to_request_object()
        {'objectType': 'KalturaMediaEntry', 'name': 'clip', 'mediaType': 1}
    """

    # 'relatedObjects' should be a list response on the server side; exposing it
    # as a map of base objects avoids a circular type reference.
    _properties: Tuple[PropertyMetadata, ...] = (
        prop('relatedObjects', PropertyType.MAP, sub_type='KalturaListResponse', read_only=True),
    )
    _metadata: Mapping = MappingProxyType({})

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._metadata = cls._build_metadata()

    @classmethod
    def _build_metadata(cls) -> Mapping:
        """Merges the `_properties` declared along the class hierarchy."""
        merged: Dict[str, PropertyMetadata] = {}
        for klass in reversed(cls.__mro__):
            for meta in vars(klass).get('_properties', ()):
                merged[meta.name] = meta
        return MappingProxyType(merged)

    def __init__(self, **kwargs):
        self._allowed_empty_array: List[str] = []
        self._dependent_properties: Dict[str, DependentProperty] = {}

        for meta in self._metadata.values():
            if meta.type is PropertyType.CONSTANT:
                object.__setattr__(self, meta.attribute, meta.default)
            else:
                object.__setattr__(self, meta.attribute, UNSET)
        self.related_objects = {}

        attributes = {meta.attribute for meta in self._metadata.values()}
        for key, value in kwargs.items():
            if key not in attributes:
                raise TypeError(f"{type(self).__name__} got an unexpected property '{key}'")
            setattr(self, key, value)

    @classmethod
    def get_metadata(cls) -> Mapping:
        """Returns the read-only metadata table keyed by wire name."""
        return cls._metadata

    def get_type_name(self) -> Optional[str]:
        """Returns the value of the 'objectType' discriminator."""
        meta = self._metadata.get('objectType')
        return meta.default if meta else None

    def _resolve_property(self, name: str) -> Optional[PropertyMetadata]:
        """Finds metadata by wire name or attribute name."""
        meta = self._metadata.get(name)
        if meta is not None:
            return meta
        for candidate in self._metadata.values():
            if candidate.attribute == name:
                return candidate
        return None

    def allow_empty_array(self, *properties: str) -> 'KalturaObjectBase':
        """
        Lets the given array properties be sent even when empty.

        Unknown names and non-array properties are ignored.
        """
        for name in properties:
            meta = self._resolve_property(name)
            if meta is None:
                logger.debug(
                    f"Ignoring property '{name}' flagged to allow empty array: "
                    f"it does not exist on type {type(self).__name__}"
                )
            elif meta.type is not PropertyType.ARRAY:
                logger.debug(
                    f"Ignoring property '{name}' flagged to allow empty array: it is not an array"
                )
            elif meta.name not in self._allowed_empty_array:
                self._allowed_empty_array.append(meta.name)

        return self

    def set_dependency(self, *dependencies: DependencySpec) -> 'KalturaObjectBase':
        """
        Binds properties to results of other requests in the same multi-request.

        Accepts DependentProperty instances or tuples (property, request) and
        (property, request, target_path). Request indexes are zero-based; the
        server expects one-based indexes so 1 is added here. A later binding
        of the same property replaces the earlier one.

        Example:
            >>> add_content.set_dependency(('entryId', 0, 'id'))
        """
        for item in dependencies:
            if isinstance(item, DependentProperty):
                name, request, target_path = item.property, item.request, item.target_path
            else:
                name, request = item[0], item[1]
                target_path = item[2] if len(item) == 3 else None

            meta = self._resolve_property(name)
            if meta is not None and meta.type is PropertyType.CONSTANT:
                logger.debug(f"Ignoring dependency on constant property '{name}'")
                continue

            wire_name = meta.name if meta is not None else name
            self._dependent_properties[wire_name] = DependentProperty(
                property=wire_name,
                request=request + 1,
                target_path=target_path
            )

        return self

    @property
    def dependent_properties(self) -> Mapping:
        return MappingProxyType(self._dependent_properties)

    def to_request_object(self) -> Dict[str, Any]:
        """
        Serializes the object to its wire record.

        Raises:
            TypeMismatchError: If a value does not match its declared type
        """
        result: Dict[str, Any] = {}

        try:
            for name, meta in self._metadata.items():
                status, value = self._create_request_property_value(meta)

                if status is PropertyStatus.EXISTS:
                    result[name] = value
                elif status is PropertyStatus.REMOVED:
                    result[f"{name}__null"] = ''
        except Exception as e:
            logger.debug(f"Failed to serialize {type(self).__name__}: {e}")
            raise

        return result

    def _create_request_property_value(self, meta: PropertyMetadata) -> Tuple[PropertyStatus, Any]:
        name = meta.name

        if meta.type is PropertyType.CONSTANT:
            if meta.default is not None:
                return PropertyStatus.EXISTS, meta.default
            return PropertyStatus.MISSING, None

        dependency = self._dependent_properties.get(name)
        if dependency is not None:
            return PropertyStatus.EXISTS, dependency.placeholder

        if meta.read_only:
            return PropertyStatus.MISSING, None

        value = getattr(self, meta.attribute, UNSET)

        if value is UNSET:
            return PropertyStatus.MISSING, None
        if value is None:
            return PropertyStatus.REMOVED, None

        kind = meta.type

        if kind is PropertyType.BOOL:
            return PropertyStatus.EXISTS, bool(value)

        if kind is PropertyType.STRING:
            if isinstance(value, Enum):
                value = value.value
            return PropertyStatus.EXISTS, str(value)

        if kind in (PropertyType.NUMBER, PropertyType.ENUM_NUMBER):
            try:
                return PropertyStatus.EXISTS, to_number(value)
            except ValueError:
                raise TypeMismatchError(
                    f"Failed to serialize property. Expected '{name}' to be a number",
                    property_name=name
                )

        if kind is PropertyType.ENUM_STRING:
            if isinstance(value, Enum):
                value = value.value
            if isinstance(value, str):
                return PropertyStatus.EXISTS, value
            return PropertyStatus.MISSING, None

        if kind is PropertyType.OBJECT:
            if isinstance(value, KalturaObjectBase):
                return PropertyStatus.EXISTS, value.to_request_object()
            raise TypeMismatchError(
                f"Failed to serialize property. Expected '{name}' to be a typed object",
                property_name=name
            )

        if kind is PropertyType.ARRAY:
            if not isinstance(value, (list, tuple)):
                raise TypeMismatchError(
                    f"Failed to serialize property. Expected '{name}' to be an array",
                    property_name=name
                )
            parsed = []
            for item in value:
                if not isinstance(item, KalturaObjectBase):
                    raise TypeMismatchError(
                        f"Failed to serialize array. Expected all '{name}' items to be typed objects",
                        property_name=name
                    )
                parsed.append(item.to_request_object())

            if parsed or name in self._allowed_empty_array:
                return PropertyStatus.EXISTS, parsed
            return PropertyStatus.MISSING, None

        if kind is PropertyType.MAP:
            if not isinstance(value, Mapping):
                raise TypeMismatchError(
                    f"Failed to serialize property. Expected '{name}' to be a map",
                    property_name=name
                )
            if not value:
                return PropertyStatus.MISSING, None
            parsed_map = {}
            for key, item in value.items():
                if not isinstance(item, KalturaObjectBase):
                    raise TypeMismatchError(
                        f"Failed to serialize map. Expected all '{name}' items to be typed objects",
                        property_name=name
                    )
                parsed_map[key] = item.to_request_object()
            return PropertyStatus.EXISTS, parsed_map

        if kind is PropertyType.DATE:
            if isinstance(value, datetime):
                return PropertyStatus.EXISTS, to_server_date(value)
            raise TypeMismatchError(
                f"Failed to serialize property. Expected '{name}' to be a date",
                property_name=name
            )

        # files travel as multipart parts, never inside the JSON record
        return PropertyStatus.MISSING, None

    def from_response_object(self, data: Any) -> 'KalturaObjectBase':
        """
        Populates the object from a server response record.

        Absent keys leave fields untouched, null values clear them. Nothing
        is assigned if any property fails to parse.

        Raises:
            TypeMismatchError: If a value has the wrong shape
            UnknownTypeError: If a nested object type cannot be resolved
        """
        if not isinstance(data, Mapping):
            raise TypeMismatchError(
                f"Failed to parse {type(self).__name__}. Expected an object, got '{type(data).__name__}'"
            )

        parsed: Dict[str, Any] = {}
        try:
            for name, meta in self._metadata.items():
                if name not in data:
                    continue
                value = parse_response_value(meta, data[name])
                if value is not UNSET:
                    parsed[meta.attribute] = value
        except Exception as e:
            logger.debug(f"Failed to parse {type(self).__name__}: {e}")
            raise

        for attribute, value in parsed.items():
            setattr(self, attribute, value)

        return self

    def _field_values(self) -> Dict[str, Any]:
        return {
            meta.attribute: getattr(self, meta.attribute, UNSET)
            for meta in self._metadata.values()
        }

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._field_values() == other._field_values()

    __hash__ = None

    def __repr__(self) -> str:
        fields = ', '.join(
            f"{meta.attribute}={getattr(self, meta.attribute)!r}"
            for meta in self._metadata.values()
            if meta.type is not PropertyType.CONSTANT
            and getattr(self, meta.attribute, UNSET) is not UNSET
            and meta.name != 'relatedObjects'
        )
        return f"{type(self).__name__}({fields})"


KalturaObjectBase._metadata = KalturaObjectBase._build_metadata()
