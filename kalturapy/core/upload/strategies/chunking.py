"""
Chunking strategy for file uploads.

Fixed-size chunks; the chunk size comes from the client configuration,
bounded below by MIN_CHUNK_SIZE.
"""
import math
from typing import List, Optional

from ..models import ChunkInfo
from ...logging import get_logger

logger = get_logger('kalturapy.upload.chunking')

MIN_CHUNK_SIZE = 100_000
DEFAULT_CHUNK_SIZE = 5_000_000


def resolve_chunk_size(requested: Optional[float]) -> int:
    """
    Resolve the effective chunk size.

    A finite requested size is used as-is, except that values below
    MIN_CHUNK_SIZE are raised to it (with a warning). Anything else
    (None, 0, NaN, infinity) selects DEFAULT_CHUNK_SIZE.

    Example:
        >>> resolve_chunk_size(50_000)
        100000
    """
    if requested and isinstance(requested, (int, float)) and math.isfinite(requested):
        if requested < MIN_CHUNK_SIZE:
            logger.warning(
                f"Requested upload chunk size '{requested}' is invalid, "
                f"minimal value is {MIN_CHUNK_SIZE}. Using {MIN_CHUNK_SIZE} instead"
            )
            return MIN_CHUNK_SIZE
        logger.debug(f"Using requested chunk size '{requested}'")
        return int(requested)

    logger.debug(f"Using default chunk size {DEFAULT_CHUNK_SIZE}")
    return DEFAULT_CHUNK_SIZE


class FixedSizeChunkingStrategy:
    """
    Simple fixed-size chunking strategy.

    Chunk boundaries depend only on the chunk index, so any chunk can be
    computed (and sent) independently of the others.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize with chunk size.

        Args:
            chunk_size: Size of each chunk in bytes
        """
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.chunk_size = chunk_size

    @classmethod
    def from_config(cls, requested: Optional[float]) -> 'FixedSizeChunkingStrategy':
        return cls(resolve_chunk_size(requested))

    def total_chunks(self, file_size: int) -> int:
        """Number of chunks of a file (an empty file is one empty chunk)."""
        return max(1, math.ceil(file_size / self.chunk_size))

    def chunk_at(self, offset: int, file_size: int, index: int = 0) -> ChunkInfo:
        """Chunk starting at a byte offset."""
        final = (file_size - offset) <= self.chunk_size
        end = file_size if final else offset + self.chunk_size
        return ChunkInfo(index=index, start=offset, end=end, final=final)

    def chunk_for_index(self, index: int, file_size: int) -> ChunkInfo:
        """Chunk at a given index."""
        return self.chunk_at(index * self.chunk_size, file_size, index)

    def calculate_chunks(self, file_size: int) -> List[ChunkInfo]:
        """
        Calculate all chunks of a file.

        Args:
            file_size: Total file size in bytes

        Returns:
            List of ChunkInfo, in file order
        """
        return [
            self.chunk_for_index(index, file_size)
            for index in range(self.total_chunks(file_size))
        ]
