"""
Upload coordinator.

Orchestrates chunked file uploads using injected dependencies: a transport
that performs the HTTP posts and a connection pool shared by every upload
of a client. Two strategies are available:

- sequential: chunk k+1 starts after chunk k completed, resuming from the
  offset reported by the server;
- parallel: chunks are computed from their index alone and sent
  concurrently, bounded by the connection pool.
"""
import asyncio
from typing import TYPE_CHECKING, Any, Optional, Set, Tuple

from .cancelable import CancelableAction
from .connections import UploadConnectionsManager
from .models import ChunkInfo, ParallelUploadState, SequentialUploadState
from .protocols import UploadTransport
from .services import UploadFile
from .strategies import FixedSizeChunkingStrategy
from ..api.config import ClientConfig
from ..api.errors import KalturaAPIException
from ..api.request import RequestBuilder, ResponseHandler
from ..exceptions import KalturaClientException, ProtocolError, ResponseParseError
from ..logging import get_logger
from ..utils import is_numeric, to_number

if TYPE_CHECKING:
    from ..requests.options import KalturaRequestOptions
    from ..requests.upload_request import KalturaUploadRequest

logger = get_logger('kalturapy.upload.coordinator')


class UploadCoordinator:
    """
    Coordinates file uploads.

    Uses dependency injection for all collaborators, making it:
    - Testable (fake transports)
    - Shareable (one connection pool for every upload of a client)

    Example:
        >>> coordinator = UploadCoordinator(config, ChunkUploader(session))
        >>> action = coordinator.transmit(upload_request)
        >>> token = await action
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: UploadTransport,
        connections: Optional[UploadConnectionsManager] = None,
        default_options: Optional['KalturaRequestOptions'] = None,
        request_builder: Optional[RequestBuilder] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            config: Client configuration
            transport: Transport performing the multipart posts
            connections: Shared connection pool (created from config if omitted)
            default_options: Client-wide request options (ks, partner id...)
            request_builder: Endpoint builder
        """
        self._config = config
        self._transport = transport
        self._default_options = default_options
        self._builder = request_builder or RequestBuilder(config)
        self._connections: Optional[UploadConnectionsManager] = None

        if not config.parallel_uploads_disabled:
            self._connections = connections or UploadConnectionsManager(
                config.max_concurrent_upload_connections or UploadConnectionsManager.DEFAULT_CONNECTIONS
            )

    @property
    def connections(self) -> Optional[UploadConnectionsManager]:
        return self._connections

    @property
    def default_options(self) -> Optional['KalturaRequestOptions']:
        return self._default_options

    @default_options.setter
    def default_options(self, value: Optional['KalturaRequestOptions']):
        self._default_options = value

    def transmit(self, request: 'KalturaUploadRequest') -> CancelableAction:
        """
        Start an upload.

        Returns:
            CancelableAction resolving to the parsed result of the final response
        """
        if self._config.parallel_uploads_disabled:
            return CancelableAction(self.transmit_sequential(request), name='upload-sequential')
        return CancelableAction(self.transmit_parallel(request), name='upload-parallel')

    def _chunk_upload_supported(self, request: 'KalturaUploadRequest', file: UploadFile) -> bool:
        enabled_in_client = not self._config.chunk_file_disabled
        return enabled_in_client and file.supports_slicing and request.supports_chunk_upload()

    def _get_chunking(self) -> FixedSizeChunkingStrategy:
        return FixedSizeChunkingStrategy.from_config(self._config.chunk_file_size)

    @staticmethod
    def _resume_offset(request: 'KalturaUploadRequest') -> int:
        uploaded = request.uploaded_file_size
        if is_numeric(uploaded) and to_number(uploaded) > 0:
            return int(to_number(uploaded))
        return 0

    async def transmit_sequential(self, request: 'KalturaUploadRequest') -> Any:
        """
        Upload chunk after chunk, resuming from the offset the server reports.

        Raises:
            ProtocolError: If a non-final chunk response lacks 'uploadedFileSize'
            TransferFailureError: If a chunk transfer fails
        """
        property_name, file = request.get_file_info()
        chunking = self._get_chunking()
        resume_at = self._resume_offset(request)

        state = SequentialUploadState(
            enabled=self._chunk_upload_supported(request, file),
            resume=resume_at > 0,
            resume_at=resume_at
        )

        size_mb = file.size / (1024 * 1024)
        logger.info(
            f"Starting sequential upload: {file.name} ({size_mb:.2f} MB, "
            f"chunking {'enabled' if state.enabled else 'disabled'}, resume at {state.resume_at})"
        )

        while True:
            result = await self._upload_sequential_chunk(request, state, chunking, property_name, file)

            if not state.enabled or state.final_chunk:
                logger.info(f"Upload of {file.name} complete")
                return self._handle_final_chunk_response(request, result)

    async def _upload_sequential_chunk(
        self,
        request: 'KalturaUploadRequest',
        state: SequentialUploadState,
        chunking: FixedSizeChunkingStrategy,
        property_name: str,
        file: UploadFile
    ) -> Any:
        parameters = self._prepare_parameters(request)

        if state.enabled:
            chunk = chunking.chunk_at(state.resume_at, file.size)
            state.final_chunk = chunk.final
            parameters['resume'] = state.resume
            parameters['resumeAt'] = state.resume_at
            parameters['finalChunk'] = state.final_chunk
        else:
            logger.debug("Chunk upload not supported by file or request, uploading the file as-is")
            chunk = ChunkInfo(index=0, start=0, end=file.size, final=True)

        data = await file.read(chunk.start, chunk.end)
        response = await self._send(request, parameters, property_name, file.name, data)

        if state.enabled and not state.final_chunk:
            uploaded = self._uploaded_file_size(response)
            if uploaded <= state.resume_at:
                raise ProtocolError(
                    f"uploaded chunk of file failed, server reported 'uploadedFileSize' {uploaded} "
                    f"which does not advance past {state.resume_at}"
                )
            state.resume_at = uploaded
            state.resume = True

        self._report_progress(request, chunk.end, file.size)
        return response

    async def transmit_parallel(self, request: 'KalturaUploadRequest') -> Any:
        """
        Upload chunks concurrently, bounded by the connection pool.

        Every in-flight chunk is tracked; a failure or a cancellation of the
        upload cancels all of them.

        Raises:
            ProtocolError: If a non-final chunk response lacks 'uploadedFileSize'
            TransferFailureError: If a chunk transfer fails
        """
        property_name, file = request.get_file_info()
        chunking = self._get_chunking()
        enabled = self._chunk_upload_supported(request, file)
        connections = self._connections

        state = ParallelUploadState(
            chunk_upload_enabled=enabled,
            total_chunks=chunking.total_chunks(file.size) if enabled else 1,
            chunk_size=chunking.chunk_size
        )

        size_mb = file.size / (1024 * 1024)
        logger.info(
            f"Starting parallel upload: {file.name} ({size_mb:.2f} MB, {state.total_chunks} chunks, "
            f"max {connections.total} connections)"
        )

        finished: asyncio.Future = asyncio.get_running_loop().create_future()
        in_flight: Set[asyncio.Future] = set()

        def start_next_chunk():
            index = state.next_chunk_index
            state.next_chunk_index += 1
            task = asyncio.ensure_future(
                self._upload_parallel_chunk(request, state, chunking, index, property_name, file)
            )
            in_flight.add(task)
            task.add_done_callback(handle_chunk_done)

        def try_upload(wait_if_no_connections: bool = True) -> bool:
            if finished.done() or not state.has_pending_chunks:
                return False
            # acquire and dispatch happen in one synchronous step
            if connections.acquire():
                start_next_chunk()
                return True
            if wait_if_no_connections:
                connections.register_waiter(wait_for_connection)
            return False

        def wait_for_connection():
            try_upload()

        def handle_chunk_done(task: asyncio.Future):
            in_flight.discard(task)
            error = None if task.cancelled() else task.exception()

            try:
                if finished.done():
                    return
                if task.cancelled():
                    finished.cancel()
                    return
                if error is not None:
                    logger.error(f"Chunk upload of {file.name} failed: {error}")
                    finished.set_exception(error)
                    return

                chunk, response = task.result()
                state.chunks_uploaded += 1
                state.loaded += chunk.size
                logger.debug(f"Chunk {chunk.index} done ({state.chunks_uploaded}/{state.total_chunks})")
                self._report_progress(request, state.loaded, file.size)

                if not state.chunk_upload_enabled or state.is_complete:
                    finished.set_result(response)
            finally:
                connections.release()

            try_upload()

        while try_upload(wait_if_no_connections=False):
            pass

        if not in_flight:
            connections.register_waiter(wait_for_connection)

        try:
            result = await finished
        finally:
            connections.remove_waiter(wait_for_connection)
            for task in list(in_flight):
                task.cancel()

        logger.info(f"Upload of {file.name} complete")
        return self._handle_final_chunk_response(request, result)

    async def _upload_parallel_chunk(
        self,
        request: 'KalturaUploadRequest',
        state: ParallelUploadState,
        chunking: FixedSizeChunkingStrategy,
        index: int,
        property_name: str,
        file: UploadFile
    ) -> Tuple[ChunkInfo, Any]:
        parameters = self._prepare_parameters(request)

        if state.chunk_upload_enabled:
            chunk = chunking.chunk_for_index(index, file.size)
            parameters['resume'] = index > 0
            parameters['resumeAt'] = chunk.start
            parameters['finalChunk'] = chunk.final
        else:
            logger.debug("Chunk upload not supported by file or request, uploading the file as-is")
            chunk = ChunkInfo(index=0, start=0, end=file.size, final=True)

        data = await file.read(chunk.start, chunk.end)
        response = await self._send(request, parameters, property_name, file.name, data)

        if state.chunk_upload_enabled and not chunk.final:
            self._uploaded_file_size(response)

        return chunk, response

    def _prepare_parameters(self, request: 'KalturaUploadRequest') -> dict:
        return self._builder.prepare_parameters(request.build_request(self._default_options))

    async def _send(
        self,
        request: 'KalturaUploadRequest',
        parameters: dict,
        property_name: str,
        file_name: str,
        data: bytes
    ) -> Any:
        query = {key: value for key, value in parameters.items() if key not in ('service', 'action')}
        url = self._builder.build_url(request.service_name, request.action_name, query)
        return await self._transport.post_multipart(url, property_name, file_name, data)

    def _uploaded_file_size(self, response: Any) -> int:
        """
        Read 'uploadedFileSize' from a chunk response.

        Raises:
            KalturaAPIException: If the server answered with an API error
            ProtocolError: If the field is missing or not a number
        """
        body = ResponseHandler.unwrap(response, self._config.nested_response)

        if KalturaAPIException.is_error_payload(body):
            raise KalturaAPIException.from_response(body)

        uploaded = body.get('uploadedFileSize') if isinstance(body, dict) else None
        if uploaded is None:
            raise ProtocolError(
                "uploaded chunk of file failed, expected response with property 'uploadedFileSize'"
            )
        if not is_numeric(uploaded):
            raise ProtocolError(
                f"uploaded chunk of file failed, invalid 'uploadedFileSize' value {uploaded!r}"
            )
        return int(to_number(uploaded))

    def _handle_final_chunk_response(self, request: 'KalturaUploadRequest', result: Any) -> Any:
        """
        Parse the response that completes an upload.

        Raises:
            KalturaAPIException: If the server reported an error
            KalturaClientException: If the response could not be handled
        """
        try:
            response = request.handle_response(
                ResponseHandler.unwrap(result, self._config.nested_response)
            )
        except (KalturaClientException, KalturaAPIException):
            raise
        except Exception as e:
            raise ResponseParseError(str(e) or 'Failed to parse response')

        if response.error is not None:
            raise response.error
        return response.result

    @staticmethod
    def _report_progress(request: 'KalturaUploadRequest', loaded: int, total: int) -> None:
        callback = request.get_progress_callback()
        if callback is None:
            return
        try:
            callback(loaded, total)
        except Exception as e:
            logger.warning(f"Upload progress callback failed: {e}")
