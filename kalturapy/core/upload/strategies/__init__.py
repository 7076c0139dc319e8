"""Upload strategies module."""
from .chunking import (
    FixedSizeChunkingStrategy,
    resolve_chunk_size,
    MIN_CHUNK_SIZE,
    DEFAULT_CHUNK_SIZE
)

__all__ = [
    'FixedSizeChunkingStrategy',
    'resolve_chunk_size',
    'MIN_CHUNK_SIZE',
    'DEFAULT_CHUNK_SIZE',
]
