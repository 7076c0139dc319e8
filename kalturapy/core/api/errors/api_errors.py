"""Kaltura API error codes and exceptions."""
from typing import Dict, Any, Optional


class APIErrorCodes:
    """Well known Kaltura API error codes."""

    ERROR_CODES: Dict[str, str] = {
        'INTERNAL_SERVER_ERROR': 'Internal server error occurred',
        'MISSING_KS': 'Missing KS, session not established',
        'INVALID_KS': 'Invalid KS',
        'SERVICE_FORBIDDEN': 'The access to service is forbidden',
        'INVALID_OBJECT_TYPE': 'Invalid object type',
        'PROPERTY_VALIDATION_CANNOT_BE_NULL': 'A required property cannot be null',
        'ENTRY_ID_NOT_FOUND': 'Entry id not found',
        'UPLOAD_TOKEN_NOT_FOUND': 'Upload token not found',
        'UPLOAD_TOKEN_INVALID_STATUS_FOR_UPLOAD': 'Upload token is in an invalid status for upload',
        'UPLOAD_TOKEN_RESUMING_INVALID_POSITION': 'Resuming point is invalid',
        'UPLOAD_TOKEN_CANNOT_RESUME': 'Cannot resume the upload, original file was not found',
    }

    @classmethod
    def get_message(cls, code: str) -> str:
        """Gets error message for error code."""
        return cls.ERROR_CODES.get(code, f"Unknown error: {code}")


class KalturaAPIException(Exception):
    """Exception raised for errors reported by the Kaltura API."""

    OBJECT_TYPE = 'KalturaAPIException'

    def __init__(
        self,
        message: Optional[str],
        code: Optional[str],
        args: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message or APIErrorCodes.get_message(code or '')
        self.error_args = args or {}
        super().__init__(self.message)

    @classmethod
    def is_error_payload(cls, data: Any) -> bool:
        """Checks whether a raw server value is an API exception payload."""
        return isinstance(data, dict) and data.get('objectType') == cls.OBJECT_TYPE

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> 'KalturaAPIException':
        """Creates an exception from the server error payload."""
        args = data.get('args')
        if isinstance(args, list):
            args = {
                item.get('name'): item.get('value')
                for item in args
                if isinstance(item, dict)
            }
        return cls(data.get('message'), data.get('code'), args if isinstance(args, dict) else None)
