"""Kaltura API errors and exceptions."""
from .api_errors import KalturaAPIException, APIErrorCodes

__all__ = [
    'KalturaAPIException',
    'APIErrorCodes',
]
