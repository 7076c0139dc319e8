"""
KalturaClient - High-level async client for the Kaltura API.

Example:
    >>> async with KalturaClient(ks="djJ8...") as client:
    ...     entry = await client.request(MediaGetAction(entry_id='0_abc123'))
    ...     print(entry.name)
"""
from pathlib import Path
from typing import Any, BinaryIO, Callable, Optional, Union

from .core.api import AsyncAPIClient, ClientConfig, KalturaAPIException, ProxyConfig, SSLConfig, TimeoutConfig
from .core.api.request import RequestBuilder, ResponseHandler
from .core.exceptions import KalturaClientException
from .core.logging import get_logger
from .core.objects import UNSET
from .core.requests import (
    KalturaMultiRequest,
    KalturaMultiResponse,
    KalturaRequest,
    KalturaRequestOptions,
    KalturaResponse,
    KalturaUploadRequest
)
from .core.upload import CancelableAction, UploadConnectionsManager, UploadCoordinator, UploadFile
from .types import KalturaUploadToken, UploadTokenAddAction, UploadTokenUploadAction


class KalturaClient:
    """
    High-level async client for Kaltura.

    Owns the HTTP transport, the client-wide request options (ks, partner id)
    and one upload connection pool shared by every upload.

    Basic usage:
        >>> async with KalturaClient(ks=ks) as client:
        ...     ok = await client.request(SystemPingAction())

    Batches:
        >>> batch = KalturaMultiRequest(
        ...     MediaAddAction(entry=KalturaMediaEntry(name='clip')),
        ...     MediaAddContentAction(resource=resource).set_dependency(('entryId', 0, 'id'))
        ... )
        >>> responses = await client.multi_request(batch)

    With custom configuration:
        >>> config = KalturaClient.create_config(endpoint='https://kaltura.local', chunk_size=10_000_000)
        >>> client = KalturaClient(config, ks=ks)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        ks: Optional[str] = None,
        *,
        partner_id: Optional[int] = None,
        api: Optional[AsyncAPIClient] = None
    ):
        """
        Initialize Kaltura client.

        Args:
            config: Optional client configuration
            ks: Kaltura session token sent with every request
            partner_id: Partner id sent with every request
            api: Optional transport (created from config if omitted)
        """
        self._config = config or ClientConfig.default()
        self._logger = get_logger('kalturapy.client')
        self._builder = RequestBuilder(self._config)
        self._api = api

        self._default_options = KalturaRequestOptions()
        self.ks = ks
        self.partner_id = partner_id

        # one pool for all uploads of this client
        self._connections: Optional[UploadConnectionsManager] = None
        if not self._config.parallel_uploads_disabled:
            self._connections = UploadConnectionsManager(
                self._config.max_concurrent_upload_connections or UploadConnectionsManager.DEFAULT_CONNECTIONS
            )
        self._coordinator: Optional[UploadCoordinator] = None

    # =========================================================================
    # Configuration helpers
    # =========================================================================

    @staticmethod
    def create_config(
        endpoint: Optional[str] = None,
        chunk_size: Optional[int] = None,
        sequential: bool = False,
        max_connections: int = 6,
        proxy: Optional[str] = None,
        proxy_user: Optional[str] = None,
        proxy_pass: Optional[str] = None,
        timeout: float = 600,
        verify_ssl: bool = True
    ) -> ClientConfig:
        """
        Create client configuration with common options.

        Args:
            endpoint: Service URL (e.g. "https://www.kaltura.com")
            chunk_size: Upload chunk size in bytes
            sequential: Upload chunks one after the other
            max_connections: Concurrent chunk transfers across all uploads
            proxy: Proxy URL (e.g., "http://proxy:8080")
            proxy_user: Proxy username
            proxy_pass: Proxy password
            timeout: Request timeout in seconds
            verify_ssl: Whether to verify SSL certificates

        Returns:
            ClientConfig instance
        """
        proxy_config = None
        if proxy:
            proxy_config = ProxyConfig(
                url=proxy,
                username=proxy_user,
                password=proxy_pass
            )

        config = ClientConfig(
            chunk_file_size=chunk_size,
            parallel_uploads_disabled=sequential,
            max_concurrent_upload_connections=max_connections,
            proxy=proxy_config,
            timeout=TimeoutConfig(total=timeout),
            ssl=SSLConfig(verify=verify_ssl, check_hostname=verify_ssl)
        )
        if endpoint:
            config.endpoint_url = endpoint
        return config

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def ks(self) -> Optional[str]:
        """Session token sent with every request."""
        value = self._default_options.ks
        return None if value is UNSET else value

    @ks.setter
    def ks(self, value: Optional[str]):
        self._default_options.ks = UNSET if value is None else value

    @property
    def partner_id(self) -> Optional[int]:
        value = self._default_options.partner_id
        return None if value is UNSET else value

    @partner_id.setter
    def partner_id(self, value: Optional[int]):
        self._default_options.partner_id = UNSET if value is None else value

    @property
    def default_options(self) -> KalturaRequestOptions:
        """Client-wide request options (per-request options override them)."""
        return self._default_options

    @property
    def connections(self) -> Optional[UploadConnectionsManager]:
        return self._connections

    # =========================================================================
    # Context manager
    # =========================================================================

    async def __aenter__(self) -> 'KalturaClient':
        """Enter async context - opens the HTTP session."""
        await self._ensure_api().__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context - cleanup."""
        await self.close()

    async def close(self):
        """Close the client and release resources."""
        if self._api:
            await self._api.close()
            self._api = None
        self._coordinator = None

    def _ensure_api(self) -> AsyncAPIClient:
        if self._api is None or self._api.closed:
            self._api = AsyncAPIClient(self._config)
            self._coordinator = None
        return self._api

    def _get_coordinator(self) -> UploadCoordinator:
        api = self._ensure_api()
        if self._coordinator is None:
            self._coordinator = UploadCoordinator(
                self._config,
                api,
                connections=self._connections,
                default_options=self._default_options,
                request_builder=self._builder
            )
        return self._coordinator

    # =========================================================================
    # Requests
    # =========================================================================

    async def execute(self, request: KalturaRequest) -> KalturaResponse:
        """
        Send a single request and return its response (never raises for API errors).

        Transport failures are reported as the response error as well.
        """
        if isinstance(request, KalturaUploadRequest):
            try:
                return KalturaResponse(result=await self.upload(request))
            except (KalturaClientException, KalturaAPIException) as e:
                return KalturaResponse(error=e)

        body = self._builder.prepare_parameters(request.build_request(self._default_options))
        body.pop('service', None)
        body.pop('action', None)
        url = self._builder.build_url(request.service_name, request.action_name)

        self._logger.debug(f"Executing {request.service_name}.{request.action_name}")
        try:
            data = await self._ensure_api().post_json(url, body)
        except KalturaClientException as e:
            self._logger.error(f"Request {request.service_name}.{request.action_name} failed: {e}")
            return request.handle_response(e)

        return request.handle_response(ResponseHandler.unwrap(data, self._config.nested_response))

    async def request(self, request: KalturaRequest) -> Any:
        """
        Send a single request.

        Returns:
            Parsed result of the action

        Raises:
            KalturaAPIException: If the server reported an error
            KalturaClientException: On transport or parsing failures
        """
        response = await self.execute(request)
        if response.error is not None:
            raise response.error
        return response.result

    async def multi_request(self, request: KalturaMultiRequest) -> KalturaMultiResponse:
        """
        Send a batch of requests as a single call.

        Returns:
            KalturaMultiResponse aligned with the batch's requests
        """
        body = self._builder.prepare_parameters(
            request.build_request(
                self._default_options,
                self._config.client_tag,
                self._config.avoid_query_string
            )
        )
        body.pop('service', None)
        url = self._builder.build_url(request.service_name)

        self._logger.debug(f"Executing multi-request of {len(request)} requests")
        try:
            data = await self._ensure_api().post_json(url, body)
        except KalturaClientException as e:
            self._logger.error(f"Multi-request failed: {e}")
            return KalturaMultiResponse([sub.handle_response(e) for sub in request.requests])

        return request.handle_response(
            data,
            nested_response=self._config.nested_response,
            execution_time=ResponseHandler.execution_time(data)
        )

    # =========================================================================
    # Uploads
    # =========================================================================

    def upload(self, request: KalturaUploadRequest) -> CancelableAction:
        """
        Start an upload request.

        Must be called from a running event loop.

        Returns:
            CancelableAction resolving to the parsed result of the final response

        Example:
            >>> action = client.upload(UploadTokenUploadAction(upload_token_id=token.id, file_data=path))
            >>> token = await action
        """
        return self._get_coordinator().transmit(request)

    async def upload_file(
        self,
        source: Union[str, Path, bytes, BinaryIO, UploadFile],
        name: Optional[str] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None
    ) -> KalturaUploadToken:
        """
        Upload a file into a new upload token.

        Args:
            source: File path, bytes, binary stream or UploadFile
            name: Optional file name (defaults to the source's name)
            progress_callback: Called with (uploaded_bytes, total_bytes)

        Returns:
            The upload token after the final chunk

        Example:
            >>> token = await client.upload_file("video.mp4")
            >>> resource = KalturaUploadedFileTokenResource(token=token.id)
        """
        file = source if isinstance(source, UploadFile) else UploadFile(
            str(source) if isinstance(source, Path) else source,
            name
        )

        token = await self.request(UploadTokenAddAction(
            upload_token=KalturaUploadToken(file_name=name or file.name, file_size=file.size)
        ))
        self._logger.info(f"Created upload token {token.id} for {file.name}")

        action = UploadTokenUploadAction(upload_token_id=token.id, file_data=file)
        action.set_progress(progress_callback)
        return await self.upload(action)
