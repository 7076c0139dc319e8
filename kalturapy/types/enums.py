"""Enumerations used by the bundled types."""
from enum import Enum


class MediaType(int, Enum):
    VIDEO = 1
    IMAGE = 2
    AUDIO = 5
    LIVE_STREAM_FLASH = 201
    LIVE_STREAM_WINDOWS_MEDIA = 202
    LIVE_STREAM_REAL_MEDIA = 203
    LIVE_STREAM_QUICKTIME = 204


class EntryStatus(str, Enum):
    ERROR_IMPORTING = '-2'
    ERROR_CONVERTING = '-1'
    IMPORT = '0'
    PRECONVERT = '1'
    READY = '2'
    DELETED = '3'
    PENDING = '4'
    MODERATE = '5'
    BLOCKED = '6'
    NO_CONTENT = '7'


class UploadTokenStatus(int, Enum):
    PENDING = 0
    PARTIAL_UPLOAD = 1
    FULL_UPLOAD = 2
    CLOSED = 3
    TIMED_OUT = 4
    DELETED = 5


class ResponseProfileType(int, Enum):
    INCLUDE_FIELDS = 1
    EXCLUDE_FIELDS = 2


class MediaEntryOrderBy(str, Enum):
    CREATED_AT_ASC = '+createdAt'
    CREATED_AT_DESC = '-createdAt'
    NAME_ASC = '+name'
    NAME_DESC = '-name'
    UPDATED_AT_ASC = '+updatedAt'
    UPDATED_AT_DESC = '-updatedAt'
