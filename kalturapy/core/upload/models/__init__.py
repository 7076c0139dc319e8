"""Upload models."""
from .upload_models import (
    ChunkInfo,
    SequentialUploadState,
    ParallelUploadState,
    UploadProgress
)

__all__ = [
    'ChunkInfo',
    'SequentialUploadState',
    'ParallelUploadState',
    'UploadProgress'
]
