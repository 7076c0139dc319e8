"""
Async Kaltura API transport.

Owns the aiohttp session shared by JSON calls and file uploads.
"""
import json
import logging
from typing import Any, Dict, Optional
import aiohttp

from .config import ClientConfig
from .request import RequestBuilder, ResponseHandler
from ..exceptions import TransferFailureError


class AsyncAPIClient:
    """
    Asynchronous Kaltura API transport.

    Features:
    - Full async/await support
    - Configurable proxy, SSL, timeouts
    - Connection pooling (one session for JSON calls and chunk uploads)

    Example:
        >>> config = ClientConfig.default()
        >>> async with AsyncAPIClient(config) as api:
        ...     data = await api.post_json(url, {'ks': ks})
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        """
        Initialize async API transport.

        Args:
            config: Client configuration (uses defaults if not provided)
        """
        self._config = config or ClientConfig.default()
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._chunk_uploader = None
        self._builder = RequestBuilder(self._config)
        self._closed = False

        from ..logging import get_logger
        self._logger = get_logger('kalturapy.api')
        # Only set level if root logger has no handlers (basicConfig not called)
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def config(self) -> ClientConfig:
        """Get current configuration."""
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> 'AsyncAPIClient':
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
        return self._session

    async def close(self):
        """Close transport and release resources."""
        self._closed = True

        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
            self._connector = None

        self._chunk_uploader = None

    def _proxy(self) -> Optional[str]:
        return self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None

    async def post_json(self, url: str, body: Dict[str, Any]) -> Any:
        """
        Post a JSON record and return the parsed JSON response.

        Raises:
            TransferFailureError: On HTTP or network errors
            ResponseParseError: If the response is not valid JSON
        """
        if self._closed:
            raise TransferFailureError("Client is closed", code='client::http-error')

        session = await self._ensure_session()
        payload = json.dumps(body)

        self._logger.debug(f"Request to {url}")
        self._logger.debug(f"Request data: {payload[:300] if len(payload) > 300 else payload}")

        try:
            async with session.post(
                url,
                data=payload,
                headers=self._builder.build_headers(),
                proxy=self._proxy()
            ) as response:
                response_text = await response.text()
                self._logger.debug(
                    f"Response data: {response_text[:1000] if len(response_text) > 1000 else response_text}"
                )

                if response.status != 200:
                    raise TransferFailureError(
                        f"HTTP {response.status}: {response_text[:200]}",
                        code='client::http-error',
                        status=response.status
                    )

                return ResponseHandler.parse_json(response_text)

        except aiohttp.ClientError as e:
            self._logger.error(f"Network error: {e}")
            raise TransferFailureError(f"Network error: {e}", code='client::http-error')

    async def post_multipart(self, url: str, file_field: str, file_name: str, data: bytes) -> Any:
        """
        Post a file part as multipart/form-data.

        Raises:
            TransferFailureError: On HTTP errors, network errors or invalid JSON
        """
        if self._closed:
            raise TransferFailureError("Client is closed", code='client::http-error')
        uploader = await self.get_chunk_uploader()
        return await uploader.post_multipart(url, file_field, file_name, data)

    async def get_chunk_uploader(self):
        """
        Get a chunk uploader bound to this transport's session.

        Returns:
            ChunkUploader sharing the HTTP session
        """
        if self._chunk_uploader is None:
            from ..upload.services import ChunkUploader

            session = await self._ensure_session()
            self._chunk_uploader = ChunkUploader(
                session=session,
                timeout=self._config.timeout.total,
                proxy=self._proxy()
            )
        return self._chunk_uploader
