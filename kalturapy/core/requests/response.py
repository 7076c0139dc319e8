"""Response containers."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional


class ParsedResponse(NamedTuple):
    """Result of parsing one server response: status True carries a result, False an error."""
    status: bool
    response: Any


@dataclass
class KalturaResponse:
    """
    Outcome of a single request.

    Attributes:
        result: Parsed result (None on error or for void actions)
        error: Exception describing the failure, if any
        debug_info: Extra information reported by the server
    """
    result: Any = None
    error: Optional[Exception] = None
    debug_info: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None


class KalturaMultiResponse(list):
    """Responses of a multi-request, positionally aligned with its requests."""

    def __init__(self, responses=(), debug_info: Optional[Dict[str, Any]] = None):
        super().__init__(responses)
        self.debug_info = debug_info or {}

    def has_errors(self) -> bool:
        """Returns True if any request failed."""
        return any(response.error is not None for response in self)

    def get_first_error(self) -> Optional[Exception]:
        """Returns the error of the first failed request."""
        for response in self:
            if response.error is not None:
                return response.error
        return None

    @property
    def results(self) -> List[Any]:
        return [response.result for response in self]
