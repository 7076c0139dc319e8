"""Endpoint and parameter builder for API requests."""
from urllib.parse import urlencode
from typing import Any, Dict, Optional

from ..config import ClientConfig


class RequestBuilder:
    """Builds endpoint URLs and request parameters."""
    
    def __init__(self, config: ClientConfig):
        """Initializes request builder."""
        self.config = config
    
    def build_url(
        self,
        service: str,
        action: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Builds request URL.
        
        Example:
            >>> builder.build_url('media', 'get')
            'https://www.kaltura.com/api_v3/service/media/action/get?format=1&clientTag=kalturapy%3A1.0.0'
        """
        url = f"{self.config.endpoint_url.rstrip('/')}/api_v3/service/{service}"
        if action:
            url += f"/action/{action}"
        
        query: Dict[str, Any] = {'format': self.config.format}
        if not self.config.avoid_query_string:
            query['clientTag'] = self.config.client_tag
        if params:
            query.update({
                key: self._format_query_value(value)
                for key, value in self.flatten_parameters(params).items()
            })
        
        return f"{url}?{urlencode(query)}"
    
    @classmethod
    def flatten_parameters(cls, params: Dict[str, Any], prefix: str = '') -> Dict[str, Any]:
        """
        Flattens nested records to colon-separated query keys.

        Example:
            >>> RequestBuilder.flatten_parameters({'pager': {'pageSize': 10}})
            {'pager:pageSize': 10}
        """
        flat: Dict[str, Any] = {}
        for key, value in params.items():
            name = f"{prefix}:{key}" if prefix else str(key)
            if isinstance(value, dict):
                flat.update(cls.flatten_parameters(value, name))
            elif isinstance(value, (list, tuple)):
                flat.update(cls.flatten_parameters(dict(enumerate(value)), name))
            else:
                flat[name] = value
        return flat

    @staticmethod
    def _format_query_value(value: Any) -> Any:
        if isinstance(value, bool):
            return 'true' if value else 'false'
        return value
    
    def build_headers(self) -> Dict[str, str]:
        """Builds JSON request headers."""
        return {'Content-Type': 'application/json'}
    
    def prepare_parameters(self, request_data: Dict[str, Any]) -> Dict[str, Any]:
        """Adds the format, API version and (body) client tag to a wire record."""
        parameters: Dict[str, Any] = {
            'format': self.config.format,
            'apiVersion': self.config.api_version,
        }
        if self.config.avoid_query_string:
            parameters['clientTag'] = self.config.client_tag
        parameters.update(request_data)
        return parameters
