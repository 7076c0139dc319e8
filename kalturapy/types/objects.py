"""
Object types of the media, upload token and system services.

Each class declares its wire properties; the `objectType` constant is the
discriminator used by the types factory when parsing responses.
"""
from ..core.objects import KalturaObjectBase, PropertyType, prop


def object_type(name: str):
    return prop('objectType', PropertyType.CONSTANT, default=name)


class KalturaListResponse(KalturaObjectBase):
    _properties = (
        object_type('KalturaListResponse'),
        prop('totalCount', PropertyType.NUMBER, read_only=True),
    )


class KalturaFilterPager(KalturaObjectBase):
    """Pager of list actions (pageIndex is one-based)."""

    _properties = (
        object_type('KalturaFilterPager'),
        prop('pageSize', PropertyType.NUMBER),
        prop('pageIndex', PropertyType.NUMBER),
    )


class KalturaStringValue(KalturaObjectBase):
    _properties = (
        object_type('KalturaStringValue'),
        prop('value', PropertyType.STRING),
        prop('description', PropertyType.STRING),
    )


class KalturaOperationAttributes(KalturaObjectBase):
    _properties = (
        object_type('KalturaOperationAttributes'),
    )


class KalturaClipAttributes(KalturaOperationAttributes):
    """Clip of a source entry; offsets and durations in milliseconds."""

    _properties = (
        object_type('KalturaClipAttributes'),
        prop('offset', PropertyType.NUMBER),
        prop('duration', PropertyType.NUMBER),
        prop('globalOffsetInDestination', PropertyType.NUMBER),
    )


class KalturaBaseResponseProfile(KalturaObjectBase):
    _properties = (
        object_type('KalturaBaseResponseProfile'),
    )


class KalturaDetachedResponseProfile(KalturaBaseResponseProfile):
    _properties = (
        object_type('KalturaDetachedResponseProfile'),
        prop('name', PropertyType.STRING),
        prop('type', PropertyType.ENUM_NUMBER),
        prop('fields', PropertyType.STRING),
    )


class KalturaBaseEntry(KalturaObjectBase):
    _properties = (
        object_type('KalturaBaseEntry'),
        prop('id', PropertyType.STRING, read_only=True),
        prop('name', PropertyType.STRING),
        prop('description', PropertyType.STRING),
        prop('partnerId', PropertyType.NUMBER, read_only=True),
        prop('userId', PropertyType.STRING),
        prop('tags', PropertyType.STRING),
        prop('categories', PropertyType.STRING),
        prop('status', PropertyType.ENUM_STRING, read_only=True),
        prop('referenceId', PropertyType.STRING),
        prop('createdAt', PropertyType.DATE, read_only=True),
        prop('updatedAt', PropertyType.DATE, read_only=True),
        prop('startDate', PropertyType.DATE),
        prop('endDate', PropertyType.DATE),
        prop('operationAttributes', PropertyType.ARRAY, sub_type='KalturaOperationAttributes'),
    )


class KalturaMediaEntry(KalturaBaseEntry):
    _properties = (
        object_type('KalturaMediaEntry'),
        prop('mediaType', PropertyType.ENUM_NUMBER),
        prop('duration', PropertyType.NUMBER, read_only=True),
        prop('dataUrl', PropertyType.STRING, read_only=True),
        prop('conversionProfileId', PropertyType.NUMBER),
        prop('metas', PropertyType.MAP, sub_type='KalturaStringValue'),
    )


class KalturaMediaListResponse(KalturaListResponse):
    _properties = (
        object_type('KalturaMediaListResponse'),
        prop('objects', PropertyType.ARRAY, sub_type='KalturaMediaEntry', read_only=True),
    )


class KalturaBaseEntryFilter(KalturaObjectBase):
    _properties = (
        object_type('KalturaBaseEntryFilter'),
        prop('orderBy', PropertyType.ENUM_STRING),
        prop('idEqual', PropertyType.STRING),
        prop('idIn', PropertyType.STRING),
        prop('nameLike', PropertyType.STRING),
        prop('statusEqual', PropertyType.ENUM_STRING),
        prop('statusIn', PropertyType.STRING),
        prop('createdAtGreaterThanOrEqual', PropertyType.DATE),
        prop('createdAtLessThanOrEqual', PropertyType.DATE),
    )


class KalturaMediaEntryFilter(KalturaBaseEntryFilter):
    _properties = (
        object_type('KalturaMediaEntryFilter'),
        prop('mediaTypeEqual', PropertyType.ENUM_NUMBER),
        prop('mediaTypeIn', PropertyType.STRING),
    )


class KalturaUploadToken(KalturaObjectBase):
    _properties = (
        object_type('KalturaUploadToken'),
        prop('id', PropertyType.STRING, read_only=True),
        prop('partnerId', PropertyType.NUMBER, read_only=True),
        prop('userId', PropertyType.STRING, read_only=True),
        prop('status', PropertyType.ENUM_NUMBER, read_only=True),
        prop('fileName', PropertyType.STRING),
        prop('fileSize', PropertyType.NUMBER),
        prop('uploadedFileSize', PropertyType.NUMBER, read_only=True),
        prop('createdAt', PropertyType.DATE, read_only=True),
        prop('updatedAt', PropertyType.DATE, read_only=True),
        prop('uploadUrl', PropertyType.STRING, read_only=True),
        prop('autoFinalize', PropertyType.ENUM_NUMBER),
    )


class KalturaResource(KalturaObjectBase):
    _properties = (
        object_type('KalturaResource'),
    )


class KalturaContentResource(KalturaResource):
    _properties = (
        object_type('KalturaContentResource'),
    )


class KalturaUploadedFileTokenResource(KalturaContentResource):
    _properties = (
        object_type('KalturaUploadedFileTokenResource'),
        prop('token', PropertyType.STRING),
    )


OBJECT_TYPES = (
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
    KalturaUploadedFileTokenResource,
)
