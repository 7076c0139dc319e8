"""Response handler for API responses."""
import json
from typing import Any, Optional

from ...exceptions import ResponseParseError


class ResponseHandler:
    """Handles raw API responses."""
    
    @staticmethod
    def parse_json(response_text: str) -> Any:
        """Parses a JSON response body."""
        try:
            return json.loads(response_text)
        except (TypeError, ValueError):
            raise ResponseParseError(
                f"Empty or invalid response: {(response_text or '')[:200]}",
                'client::response_type_error'
            )
    
    @staticmethod
    def unwrap(data: Any, nested_response: bool = False) -> Any:
        """Removes the result/error envelope used by nested-response deployments."""
        if nested_response and isinstance(data, dict):
            if 'result' in data:
                return data['result']
            if 'error' in data:
                return data['error']
        return data
    
    @staticmethod
    def execution_time(data: Any) -> Optional[float]:
        """Returns the server execution time reported in an envelope, if any."""
        if isinstance(data, dict) and 'executionTime' in data:
            try:
                return float(data['executionTime'])
            except (TypeError, ValueError):
                return None
        return None
