"""
Chunk upload service.

Sends file chunks (or whole files) to the API as multipart form posts.
"""
from typing import Any, Optional
import asyncio
import json
import logging
import time
import aiohttp

from ...exceptions import TransferFailureError


class ChunkUploader:
    """
    Uploads file parts as multipart/form-data.

    Reuses one HTTP session for all chunks (critical for performance).

    Responsibilities:
    - Build the multipart body ('fileName' + file part)
    - Send it to the endpoint URL
    - Turn transport failures into TransferFailureError
    """

    DEFAULT_TIMEOUT = 600

    def __init__(
        self,
        session: aiohttp.ClientSession,
        timeout: float = DEFAULT_TIMEOUT,
        proxy: Optional[str] = None
    ):
        """
        Initialize chunk uploader.

        Args:
            session: Shared HTTP session (owned by the caller)
            timeout: Request timeout in seconds
            proxy: Optional proxy URL
        """
        self._session = session
        self._timeout = timeout
        self._proxy = proxy
        self._logger = logging.getLogger('kalturapy.upload.chunk')

    @staticmethod
    def build_form(file_field: str, file_name: str, data: bytes) -> aiohttp.FormData:
        """Builds the multipart body of an upload."""
        form = aiohttp.FormData()
        form.add_field('fileName', file_name)
        form.add_field(
            file_field,
            data,
            filename=file_name,
            content_type='application/octet-stream'
        )
        return form

    async def post_multipart(
        self,
        url: str,
        file_field: str,
        file_name: str,
        data: bytes
    ) -> Any:
        """
        Upload one file part.

        Args:
            url: Endpoint URL including the request parameters
            file_field: Name of the file property (e.g. 'fileData')
            file_name: File name sent in the 'fileName' field
            data: Bytes of the part

        Returns:
            Parsed JSON response

        Raises:
            TransferFailureError: On HTTP errors, network errors or invalid JSON
        """
        size_kb = len(data) / 1024
        upload_start = time.time()
        self._logger.debug(f"Uploading {file_name} part ({size_kb:.1f} KB)")

        try:
            async with self._session.post(
                url,
                data=self.build_form(file_field, file_name, data),
                proxy=self._proxy,
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            ) as response:
                response_text = await response.text()
                upload_time = time.time() - upload_start

                if response.status != 200:
                    self._logger.error(
                        f"Upload of {file_name} failed: HTTP {response.status} after {upload_time:.2f}s"
                    )
                    raise TransferFailureError(
                        response_text or 'failed to upload file',
                        status=response.status
                    )

                speed_kbps = (size_kb / upload_time) if upload_time > 0 else 0
                self._logger.debug(f"Part uploaded in {upload_time:.2f}s ({speed_kbps:.1f} KB/s)")
                return self._process_response(response_text)
        except asyncio.TimeoutError:
            upload_time = time.time() - upload_start
            self._logger.error(f"Upload timeout after {upload_time:.2f}s (timeout={self._timeout}s)")
            raise TransferFailureError(f"upload timed out after {upload_time:.2f}s")
        except aiohttp.ClientError as e:
            self._logger.error(f"Network error during upload: {e}")
            raise TransferFailureError(str(e) or 'failed to upload file')

    def _process_response(self, response_text: str) -> Any:
        """
        Parse the server response of an upload.

        Raises:
            TransferFailureError: If the body is not valid JSON
        """
        try:
            return json.loads(response_text)
        except ValueError as e:
            raise TransferFailureError(str(e) or 'failed to upload file')
