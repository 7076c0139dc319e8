"""Upload services module."""
from .file_service import FileValidator, AsyncFileReader, UploadFile
from .chunk_service import ChunkUploader

__all__ = [
    'FileValidator',
    'AsyncFileReader',
    'UploadFile',
    'ChunkUploader',
]
