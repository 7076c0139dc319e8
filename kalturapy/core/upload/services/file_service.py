"""
File validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
import io
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union
import logging
import aiofiles


class FileValidator:
    """
    Validates files before upload.

    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (validated Path, file size in bytes)

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        if not path.is_file():
            raise ValueError(f"Path is not a file: {path}")

        return path, path.stat().st_size


class AsyncFileReader:
    """
    Asynchronous file reader for range reads.

    Uses aiofiles for non-blocking I/O operations.
    """

    def __init__(self):
        """Initialize file reader."""
        self._logger = logging.getLogger('kalturapy.upload.file')

    async def read_chunk(self, file_path: Path, start: int, end: int) -> bytes:
        """
        Read the byte range [start, end) of a file.

        Raises:
            OSError: If the file cannot be read
        """
        async with aiofiles.open(file_path, 'rb') as f:
            await f.seek(start)
            data = await f.read(end - start)

        self._logger.debug(f"Read chunk: {start}-{end} ({len(data)} bytes)")
        return data


class UploadFile:
    """
    File source of an upload.

    Wraps a path, in-memory bytes or a binary stream. Slicing is available
    for paths, bytes and seekable streams; a non-seekable stream can only be
    sent whole.

    Example:
        >>> file = UploadFile.from_path('video.mp4')
        >>> first = await file.read(0, 100_000)
    """

    def __init__(
        self,
        source: Union[str, Path, bytes, bytearray, BinaryIO],
        name: Optional[str] = None,
        reader: Optional[AsyncFileReader] = None
    ):
        self._reader = reader or AsyncFileReader()
        self._path: Optional[Path] = None
        self._data: Optional[bytes] = None
        self._stream: Optional[BinaryIO] = None

        if isinstance(source, (str, Path)):
            self._path, self._size = FileValidator().validate(source)
            self.name = name or self._path.name
            self._seekable = True
        elif isinstance(source, (bytes, bytearray)):
            self._data = bytes(source)
            self._size = len(self._data)
            self.name = name or 'file'
            self._seekable = True
        else:
            self._stream = source
            self._seekable = bool(getattr(source, 'seekable', lambda: False)())
            if self._seekable:
                position = source.tell()
                self._size = source.seek(0, io.SEEK_END)
                source.seek(position)
            else:
                # non-seekable streams are buffered once and sent whole
                self._data = source.read()
                self._size = len(self._data)
            self.name = name or Path(getattr(source, 'name', 'file') or 'file').name

    @classmethod
    def from_path(cls, path: Union[str, Path], name: Optional[str] = None) -> 'UploadFile':
        return cls(path, name)

    @classmethod
    def from_bytes(cls, data: bytes, name: str) -> 'UploadFile':
        return cls(data, name)

    @property
    def size(self) -> int:
        return self._size

    @property
    def supports_slicing(self) -> bool:
        """True if byte ranges of the file can be read independently."""
        return self._seekable

    async def read(self, start: int = 0, end: Optional[int] = None) -> bytes:
        """Reads the byte range [start, end) (the whole file by default)."""
        end = self._size if end is None else min(end, self._size)
        if start >= end:
            return b''

        if self._path is not None:
            return await self._reader.read_chunk(self._path, start, end)

        if self._data is not None:
            return self._data[start:end]

        return self._read_stream(start, end)

    def _read_stream(self, start: int, end: int) -> bytes:
        self._stream.seek(start)
        return self._stream.read(end - start)

    def __repr__(self) -> str:
        return f"UploadFile(name={self.name!r}, size={self._size})"
