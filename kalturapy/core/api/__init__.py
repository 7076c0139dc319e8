"""Kaltura API transport module."""
from .config import ClientConfig, ProxyConfig, SSLConfig, TimeoutConfig
from .errors import KalturaAPIException, APIErrorCodes
from .async_client import AsyncAPIClient
from .request import RequestBuilder, ResponseHandler

__all__ = [
    # Async transport
    'AsyncAPIClient',

    # Configuration
    'ClientConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',

    # Errors
    'KalturaAPIException',
    'APIErrorCodes',

    # Request helpers
    'RequestBuilder',
    'ResponseHandler',
]
