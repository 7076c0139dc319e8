"""
Data models for upload module.

Uses dataclasses for the per-upload state of both chunking strategies.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ChunkInfo:
    """
    Information about a file chunk.

    Attributes:
        index: Chunk index
        start: Start position in bytes
        end: End position in bytes (exclusive)
        final: True if the chunk reaches end of file
    """
    index: int
    start: int
    end: int
    final: bool = False

    @property
    def size(self) -> int:
        """Returns chunk size."""
        return self.end - self.start


@dataclass
class SequentialUploadState:
    """
    State of a sequential chunked upload.

    Attributes:
        enabled: Chunking is active for this upload
        resume: The server already holds part of the file
        resume_at: Offset of the next chunk (never decreases)
        final_chunk: The chunk being sent reaches end of file
    """
    enabled: bool
    resume: bool = False
    resume_at: int = 0
    final_chunk: bool = False


@dataclass
class ParallelUploadState:
    """
    State of a parallel chunked upload.

    Attributes:
        chunk_upload_enabled: Chunking is active for this upload
        total_chunks: Number of chunks in the file
        chunk_size: Bytes per chunk
        loaded: Bytes uploaded so far
        chunks_uploaded: Number of chunks done uploading
        next_chunk_index: Index of the next chunk to start (monotonic)
    """
    chunk_upload_enabled: bool
    total_chunks: int
    chunk_size: int
    loaded: int = 0
    chunks_uploaded: int = 0
    next_chunk_index: int = 0

    @property
    def has_pending_chunks(self) -> bool:
        return self.next_chunk_index < self.total_chunks

    @property
    def is_complete(self) -> bool:
        return self.chunks_uploaded >= self.total_chunks


@dataclass
class UploadProgress:
    """
    Upload progress information.

    Attributes:
        total_bytes: Total file size
        uploaded_bytes: Bytes uploaded so far
        total_chunks: Total number of chunks
        uploaded_chunks: Number of uploaded chunks
    """
    total_bytes: int
    uploaded_bytes: int = 0
    total_chunks: int = 1
    uploaded_chunks: int = 0

    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if self.total_bytes == 0:
            return 100.0 if self.uploaded_chunks >= self.total_chunks else 0.0
        return (self.uploaded_bytes / self.total_bytes) * 100

    @property
    def is_complete(self) -> bool:
        """Returns True if upload is complete."""
        return self.uploaded_chunks >= self.total_chunks
