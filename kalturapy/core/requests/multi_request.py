"""
Multi-request composer.

Batches independent requests into one API call and splits the batched
response back into one KalturaResponse per request.
"""
from typing import Any, Callable, Dict, List, Optional

from .options import KalturaRequestOptions
from .request import KalturaRequest, KalturaRequestBase
from .response import KalturaMultiResponse, KalturaResponse
from ..api.request.response_handler import ResponseHandler
from ..exceptions import InvalidBatchResponseError
from ..logging import get_logger
from ..objects import PropertyType, prop

logger = get_logger('kalturapy.requests.multi')


class KalturaMultiRequest(KalturaRequestBase):
    """
    Ordered batch of requests sent as a single call.

    Example:
        >>> batch = KalturaMultiRequest(
        ...     MediaAddAction(entry=KalturaMediaEntry(name='clip')),
        ...     MediaGetAction().set_dependency(('entryId', 0, 'id'))
        ... )
        >>> responses = await client.multi_request(batch)
    """

    _properties = (
        prop('service', PropertyType.CONSTANT, default='multirequest'),
    )

    def __init__(self, *requests: KalturaRequest):
        super().__init__()
        self.requests: List[KalturaRequest] = list(requests)
        self._callback: Optional[Callable[[KalturaMultiResponse], None]] = None

    def __len__(self) -> int:
        return len(self.requests)

    def add(self, *requests: KalturaRequest) -> 'KalturaMultiRequest':
        """Appends requests to the batch."""
        self.requests.extend(requests)
        return self

    def set_completion(self, callback: Callable[[KalturaMultiResponse], None]) -> 'KalturaMultiRequest':
        """Registers a callback invoked with the aggregated responses."""
        self._callback = callback
        return self

    def build_request(
        self,
        default_options: Optional[KalturaRequestOptions] = None,
        client_tag: Optional[str] = None,
        avoid_query_string: bool = False
    ) -> Dict[str, Any]:
        """
        Builds the batch wire record.

        Each request is serialized under its position ('0', '1', ...). The
        client tag goes into the body when the query string is avoided.
        """
        result = super().build_request(default_options, client_tag)

        if avoid_query_string and client_tag:
            result['clientTag'] = client_tag

        for index, request in enumerate(self.requests):
            result[str(index)] = request.build_request(default_options, client_tag)

        return result

    def handle_response(
        self,
        data: Any,
        nested_response: bool = False,
        execution_time: Optional[float] = None
    ) -> KalturaMultiResponse:
        """
        Splits a batch response into per-request responses.

        A response that is not a list of exactly one entry per request fails
        every request with InvalidBatchResponseError. Otherwise each entry is
        handled by its own request, independently of its siblings.
        """
        debug_info = {'beExecutionTime': execution_time} if execution_time is not None else {}
        responses: List[KalturaResponse] = []

        unwrapped = ResponseHandler.unwrap(data, nested_response)

        if not isinstance(unwrapped, list) or len(unwrapped) != len(self.requests):
            logger.error(
                f"Invalid multi-request response, expected array of {len(self.requests)}"
            )
            for request in self.requests:
                error = InvalidBatchResponseError(
                    f"server response is invalid, expected array of {len(self.requests)}",
                    expected=len(self.requests)
                )
                responses.append(request.handle_response(error))
            return KalturaMultiResponse(responses, debug_info)

        for request, server_response in zip(self.requests, unwrapped):
            responses.append(request.handle_response(server_response))

        result = KalturaMultiResponse(responses, debug_info)

        if self._callback is not None:
            try:
                self._callback(result)
            except Exception as e:
                logger.warning(f"Multi-request completion callback failed: {e}")

        return result
