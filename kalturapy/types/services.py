"""
Service actions.

One request class per action. Parameters are regular properties, so
actions support request options, dependencies and completion callbacks.

Example:
    >>> action = MediaGetAction(entry_id='0_abc123')
    >>> entry = await client.request(action)
"""
from ..core.objects import PropertyType, prop
from ..core.requests import KalturaRequest, KalturaUploadRequest


def service(name: str):
    return prop('service', PropertyType.CONSTANT, default=name)


def action(name: str):
    return prop('action', PropertyType.CONSTANT, default=name)


def result_of(object_type: str):
    return prop('result', PropertyType.OBJECT, sub_type=object_type)


class MediaAddAction(KalturaRequest):
    """Adds a media entry (content is attached with MediaAddContentAction)."""

    response_type = result_of('KalturaMediaEntry')
    _properties = (
        service('media'),
        action('add'),
        prop('entry', PropertyType.OBJECT, sub_type='KalturaMediaEntry'),
    )


class MediaGetAction(KalturaRequest):
    response_type = result_of('KalturaMediaEntry')
    _properties = (
        service('media'),
        action('get'),
        prop('entryId', PropertyType.STRING),
        prop('version', PropertyType.NUMBER),
    )


class MediaUpdateAction(KalturaRequest):
    response_type = result_of('KalturaMediaEntry')
    _properties = (
        service('media'),
        action('update'),
        prop('entryId', PropertyType.STRING),
        prop('mediaEntry', PropertyType.OBJECT, sub_type='KalturaMediaEntry'),
    )


class MediaDeleteAction(KalturaRequest):
    _properties = (
        service('media'),
        action('delete'),
        prop('entryId', PropertyType.STRING),
    )


class MediaListAction(KalturaRequest):
    response_type = result_of('KalturaMediaListResponse')
    _properties = (
        service('media'),
        action('list'),
        prop('filter', PropertyType.OBJECT, sub_type='KalturaMediaEntryFilter'),
        prop('pager', PropertyType.OBJECT, sub_type='KalturaFilterPager'),
    )


class MediaAddContentAction(KalturaRequest):
    """Attaches content (e.g. an uploaded file token) to an entry."""

    response_type = result_of('KalturaMediaEntry')
    _properties = (
        service('media'),
        action('addContent'),
        prop('entryId', PropertyType.STRING),
        prop('resource', PropertyType.OBJECT, sub_type='KalturaResource'),
    )


class UploadTokenAddAction(KalturaRequest):
    response_type = result_of('KalturaUploadToken')
    _properties = (
        service('uploadtoken'),
        action('add'),
        prop('uploadToken', PropertyType.OBJECT, sub_type='KalturaUploadToken'),
    )


class UploadTokenGetAction(KalturaRequest):
    response_type = result_of('KalturaUploadToken')
    _properties = (
        service('uploadtoken'),
        action('get'),
        prop('uploadTokenId', PropertyType.STRING),
    )


class UploadTokenUploadAction(KalturaUploadRequest):
    """
    Uploads file data into an upload token.

    The server accepts the file in resumable chunks; `resume`, `resumeAt`
    and `finalChunk` are filled in by the upload coordinator.
    """

    response_type = result_of('KalturaUploadToken')
    _properties = (
        service('uploadtoken'),
        action('upload'),
        prop('uploadTokenId', PropertyType.STRING),
        prop('fileData', PropertyType.FILE),
        prop('resume', PropertyType.BOOL),
        prop('finalChunk', PropertyType.BOOL),
        prop('resumeAt', PropertyType.NUMBER),
    )

    def supports_chunk_upload(self) -> bool:
        return True


class SystemPingAction(KalturaRequest):
    response_type = prop('result', PropertyType.BOOL)
    _properties = (
        service('system'),
        action('ping'),
    )


ACTIONS = (
    MediaAddAction,
    MediaGetAction,
    MediaUpdateAction,
    MediaDeleteAction,
    MediaListAction,
    MediaAddContentAction,
    UploadTokenAddAction,
    UploadTokenGetAction,
    UploadTokenUploadAction,
    SystemPingAction,
)
