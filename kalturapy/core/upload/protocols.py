"""
Protocol definitions for upload module.

Defines interfaces (protocols) for dependency injection, so the
coordinator can run against a real HTTP transport or a test double.
"""
from typing import Any, Callable, Protocol


ProgressCallback = Callable[[int, int], None]


class UploadTransport(Protocol):
    """Protocol for sending one multipart upload request."""

    async def post_multipart(
        self,
        url: str,
        file_field: str,
        file_name: str,
        data: bytes
    ) -> Any:
        """
        Send a file part.

        Args:
            url: Endpoint URL including request parameters
            file_field: Name of the file property
            file_name: File name
            data: Bytes to send

        Returns:
            Parsed JSON response

        Raises:
            TransferFailureError: If the transfer fails
        """
        ...
