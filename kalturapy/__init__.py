"""
kalturapy - Async Python client for the Kaltura API.

Usage:
    >>> from kalturapy import KalturaClient
    >>> from kalturapy.types import MediaGetAction
    >>>
    >>> async with KalturaClient(ks="djJ8...") as client:
    ...     entry = await client.request(MediaGetAction(entry_id="0_abc123"))
    ...     print(entry.name)
"""
import logging
from .client import KalturaClient

# Configuration
from .core.api import (
    ClientConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    AsyncAPIClient,
    KalturaAPIException
)

# Requests
from .core.requests import (
    KalturaRequest,
    KalturaMultiRequest,
    KalturaUploadRequest,
    KalturaRequestOptions,
    KalturaResponse,
    KalturaMultiResponse
)
from .core.objects import KalturaObjectBase, KalturaTypesFactory, DependentProperty, UNSET
from .core.upload import CancelableAction, UploadFile
from .core.exceptions import (
    KalturaClientException,
    TypeMismatchError,
    UnknownTypeError,
    InvalidBatchResponseError,
    ProtocolError,
    TransferFailureError,
    ResponseParseError
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for kalturapy modules.

    This ensures that all kalturapy loggers are properly configured
    to show log messages at the specified level.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'kalturapy',
        'kalturapy.api',
        'kalturapy.client',
        'kalturapy.objects',
        'kalturapy.objects.factory',
        'kalturapy.requests',
        'kalturapy.requests.multi',
        'kalturapy.upload.coordinator',
        'kalturapy.upload.connections',
        'kalturapy.upload.chunking',
        'kalturapy.upload.chunk',
        'kalturapy.upload.file',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'KalturaClient',
    'ClientConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'AsyncAPIClient',
    'KalturaAPIException',
    'KalturaRequest',
    'KalturaMultiRequest',
    'KalturaUploadRequest',
    'KalturaRequestOptions',
    'KalturaResponse',
    'KalturaMultiResponse',
    'KalturaObjectBase',
    'KalturaTypesFactory',
    'DependentProperty',
    'UNSET',
    'CancelableAction',
    'UploadFile',
    'KalturaClientException',
    'TypeMismatchError',
    'UnknownTypeError',
    'InvalidBatchResponseError',
    'ProtocolError',
    'TransferFailureError',
    'ResponseParseError',
    'setup_logging',
]
