"""
Client-side exceptions for kalturapy.

Every error raised by the runtime itself (as opposed to errors reported by
the server) derives from KalturaClientException and carries a string code.
"""
from typing import Optional, Any, Dict


class KalturaClientException(Exception):
    """Base exception for all client-side errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        args: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            code: Error code (e.g. 'client::upload-failure')
            args: Optional extra arguments describing the error
        """
        self.message = message
        self.code = code
        self.error_args = args or {}
        super().__init__(message)


class TypeMismatchError(KalturaClientException):
    """Raised when a value does not match the declared wire type of a property."""

    def __init__(
        self,
        message: str,
        property_name: Optional[str] = None,
        code: str = 'client::type-mismatch'
    ) -> None:
        self.property_name = property_name
        super().__init__(message, code, {'property': property_name} if property_name else None)


class UnknownTypeError(KalturaClientException):
    """Raised when a discriminator cannot be resolved to a constructible type."""

    def __init__(
        self,
        message: str,
        object_type: Optional[str] = None,
        fallback_type: Optional[str] = None
    ) -> None:
        self.object_type = object_type
        self.fallback_type = fallback_type
        super().__init__(message, 'client::unknown-type', {
            'objectType': object_type,
            'fallbackType': fallback_type
        })


class InvalidBatchResponseError(KalturaClientException):
    """Raised (per member) when a multi-request response has the wrong shape."""

    def __init__(self, message: str, expected: Optional[int] = None) -> None:
        self.expected = expected
        super().__init__(message, 'client::response_type_error')


class ProtocolError(KalturaClientException):
    """Raised when the server omits a field the chunking protocol depends on."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 'client::upload-failure')


class TransferFailureError(KalturaClientException):
    """Raised on transport-level failure of a chunk or whole-file transfer."""

    def __init__(
        self,
        message: str,
        code: str = 'client::upload-failure',
        status: Optional[int] = None
    ) -> None:
        self.status = status
        super().__init__(message, code)


class ResponseParseError(KalturaClientException):
    """Raised when a success or error envelope cannot be parsed."""

    def __init__(
        self,
        message: str,
        code: str = 'client::response-unknown-error'
    ) -> None:
        super().__init__(message, code)
