"""
Bundled types: enums, objects and service actions.

Importing this package registers every object type with the types factory.
"""
from ..core.objects import KalturaTypesFactory
from .enums import (
    MediaType,
    EntryStatus,
    UploadTokenStatus,
    ResponseProfileType,
    MediaEntryOrderBy
)
from .objects import (
    OBJECT_TYPES,
    KalturaListResponse,
    KalturaFilterPager,
    KalturaStringValue,
    KalturaOperationAttributes,
    KalturaClipAttributes,
    KalturaBaseResponseProfile,
    KalturaDetachedResponseProfile,
    KalturaBaseEntry,
    KalturaMediaEntry,
    KalturaMediaListResponse,
    KalturaBaseEntryFilter,
    KalturaMediaEntryFilter,
    KalturaUploadToken,
    KalturaResource,
    KalturaContentResource,
    KalturaUploadedFileTokenResource
)
from .services import (
    ACTIONS,
    MediaAddAction,
    MediaGetAction,
    MediaUpdateAction,
    MediaDeleteAction,
    MediaListAction,
    MediaAddContentAction,
    UploadTokenAddAction,
    UploadTokenGetAction,
    UploadTokenUploadAction,
    SystemPingAction
)


def register_types() -> None:
    """Registers the bundled object types (safe to call more than once)."""
    KalturaTypesFactory.register_types({
        klass().get_type_name(): klass
        for klass in OBJECT_TYPES
    })


register_types()

__all__ = [
    'register_types',

    # Enums
    'MediaType',
    'EntryStatus',
    'UploadTokenStatus',
    'ResponseProfileType',
    'MediaEntryOrderBy',

    # Objects
    'KalturaListResponse',
    'KalturaFilterPager',
    'KalturaStringValue',
    'KalturaOperationAttributes',
    'KalturaClipAttributes',
    'KalturaBaseResponseProfile',
    'KalturaDetachedResponseProfile',
    'KalturaBaseEntry',
    'KalturaMediaEntry',
    'KalturaMediaListResponse',
    'KalturaBaseEntryFilter',
    'KalturaMediaEntryFilter',
    'KalturaUploadToken',
    'KalturaResource',
    'KalturaContentResource',
    'KalturaUploadedFileTokenResource',

    # Actions
    'MediaAddAction',
    'MediaGetAction',
    'MediaUpdateAction',
    'MediaDeleteAction',
    'MediaListAction',
    'MediaAddContentAction',
    'UploadTokenAddAction',
    'UploadTokenGetAction',
    'UploadTokenUploadAction',
    'SystemPingAction',
]
