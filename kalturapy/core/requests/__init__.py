"""Requests, multi-requests and their responses."""
from .options import KalturaRequestOptions
from .response import KalturaResponse, KalturaMultiResponse, ParsedResponse
from .request import KalturaRequestBase, KalturaRequest
from .multi_request import KalturaMultiRequest
from .upload_request import KalturaUploadRequest, FileInfo

__all__ = [
    'KalturaRequestOptions',
    'KalturaResponse',
    'KalturaMultiResponse',
    'ParsedResponse',
    'KalturaRequestBase',
    'KalturaRequest',
    'KalturaMultiRequest',
    'KalturaUploadRequest',
    'FileInfo',
]
