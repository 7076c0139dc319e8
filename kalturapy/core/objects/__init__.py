"""Typed object runtime: metadata tables, serialization and the types registry."""
from .metadata import PropertyType, PropertyStatus, PropertyMetadata, UNSET, prop, to_snake_case
from .factory import KalturaTypesFactory
from .object_base import (
    KalturaObjectBase,
    DependentProperty,
    create_kaltura_object,
    parse_response_value
)

__all__ = [
    'PropertyType',
    'PropertyStatus',
    'PropertyMetadata',
    'UNSET',
    'prop',
    'to_snake_case',
    'KalturaTypesFactory',
    'KalturaObjectBase',
    'DependentProperty',
    'create_kaltura_object',
    'parse_response_value',
]
