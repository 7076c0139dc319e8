"""
Upload module for Kaltura file uploads.

Chunked, resumable uploads with a sequential or a parallel strategy; the
parallel strategy shares one connection pool across all uploads of a client.
"""
from .coordinator import UploadCoordinator
from .cancelable import CancelableAction
from .connections import UploadConnectionsManager
from .models import ChunkInfo, SequentialUploadState, ParallelUploadState, UploadProgress
from .protocols import UploadTransport, ProgressCallback
from .services import UploadFile, ChunkUploader
from .strategies import FixedSizeChunkingStrategy, resolve_chunk_size

__all__ = [
    # Main classes
    'UploadCoordinator',
    'CancelableAction',
    'UploadConnectionsManager',

    # Models
    'ChunkInfo',
    'SequentialUploadState',
    'ParallelUploadState',
    'UploadProgress',

    # Protocols
    'UploadTransport',
    'ProgressCallback',

    # Services
    'UploadFile',
    'ChunkUploader',

    # Strategies
    'FixedSizeChunkingStrategy',
    'resolve_chunk_size',
]
