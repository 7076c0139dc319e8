"""
Single API requests.

A request is itself a typed object: its `service` and `action` are constant
properties and its parameters are regular properties, so building the wire
record reuses the object serialization engine.
"""
from typing import Any, Callable, Dict, Optional, Union

from .options import KalturaRequestOptions
from .response import KalturaResponse, ParsedResponse
from ..api.errors import KalturaAPIException
from ..exceptions import KalturaClientException, ResponseParseError
from ..logging import get_logger
from ..objects import KalturaObjectBase, PropertyMetadata, UNSET, parse_response_value

logger = get_logger('kalturapy.requests')

OptionsArg = Union[KalturaRequestOptions, Callable[[KalturaRequestOptions], None], None]


class KalturaRequestBase(KalturaObjectBase):
    """Common behaviour of single and multi requests."""

    def __init__(self, **kwargs):
        self._request_options: Optional[KalturaRequestOptions] = None
        super().__init__(**kwargs)

    def set_request_options(self, options: OptionsArg) -> 'KalturaRequestBase':
        """
        Sets per-request options.

        Accepts an options object, or a callback that edits a fresh one.
        """
        if callable(options) and not isinstance(options, KalturaRequestOptions):
            created = KalturaRequestOptions()
            options(created)
            options = created
        self._request_options = options
        return self

    def get_request_options(self) -> Optional[KalturaRequestOptions]:
        return self._request_options

    def build_request(
        self,
        default_options: Optional[KalturaRequestOptions] = None,
        client_tag: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Builds the wire record of this request.

        Client-wide default options are applied first, then the request's own
        options, then the request parameters.
        """
        result: Dict[str, Any] = {}
        if default_options is not None:
            result.update(default_options.to_request_object())
        if self._request_options is not None:
            result.update(self._request_options.to_request_object())
        result.update(self.to_request_object())
        return result

    @property
    def service_name(self) -> Optional[str]:
        meta = self._metadata.get('service')
        return meta.default if meta else None

    @property
    def action_name(self) -> Optional[str]:
        meta = self._metadata.get('action')
        return meta.default if meta else None


class KalturaRequest(KalturaRequestBase):
    """
    Base class of generated service actions.

    Subclasses declare constant `service`/`action` properties, their
    parameters, and `response_type` (None for void actions).
    """

    response_type: Optional[PropertyMetadata] = None

    def __init__(self, **kwargs):
        self._completion: Optional[Callable[[KalturaResponse], None]] = None
        super().__init__(**kwargs)

    def set_completion(self, callback: Callable[[KalturaResponse], None]) -> 'KalturaRequest':
        """Registers a callback invoked with the response of this request."""
        self._completion = callback
        return self

    def parse_server_response(self, data: Any) -> ParsedResponse:
        """
        Parses one server response value.

        API exception payloads become a failed ParsedResponse. Parsing errors
        are returned as the error of a failed ParsedResponse as well, so one
        broken response never raises out of a batch.
        """
        if KalturaAPIException.is_error_payload(data):
            return ParsedResponse(False, KalturaAPIException.from_response(data))

        try:
            return ParsedResponse(True, self._parse_result(data))
        except KalturaClientException as e:
            return ParsedResponse(False, e)
        except Exception as e:
            logger.debug(f"Failed to parse response of {type(self).__name__}: {e}")
            return ParsedResponse(
                False,
                ResponseParseError(str(e) or 'Failed to parse response', 'client::response_type_error')
            )

    def _parse_result(self, data: Any) -> Any:
        if self.response_type is None or data is None:
            return None
        result = parse_response_value(self.response_type, data, 'result')
        return None if result is UNSET else result

    def handle_response(self, response: Any) -> KalturaResponse:
        """
        Converts a raw server response (or a transport error) to a KalturaResponse.

        The completion callback, if any, is invoked afterwards; its exceptions
        are logged and discarded.
        """
        if isinstance(response, (KalturaClientException, KalturaAPIException)):
            result = KalturaResponse(error=response)
        else:
            parsed = self.parse_server_response(response)
            if parsed.status:
                result = KalturaResponse(result=parsed.response)
            else:
                result = KalturaResponse(error=parsed.response)

        if self._completion is not None:
            try:
                self._completion(result)
            except Exception as e:
                logger.warning(f"Completion callback of {type(self).__name__} failed: {e}")

        return result
