"""Endpoint building and response handling."""
from .request_builder import RequestBuilder
from .response_handler import ResponseHandler

__all__ = [
    'RequestBuilder',
    'ResponseHandler',
]
