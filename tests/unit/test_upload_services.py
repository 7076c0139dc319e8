"""Tests for upload services."""
import io
import json
import pytest
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, Mock
import tempfile

import aiohttp

from kalturapy.core.exceptions import TransferFailureError
from kalturapy.core.upload.services import (
    AsyncFileReader,
    ChunkUploader,
    FileValidator,
    UploadFile
)


def make_session(status=200, text='{"objectType": "KalturaUploadToken", "id": "1_t"}'):
    """Session double whose post() is an async context manager."""
    response = Mock()
    response.status = status
    response.text = AsyncMock(return_value=text)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)

    session = Mock()
    session.closed = False
    session.post = Mock(return_value=context)
    return session


class TestFileValidator:
    """Test suite for FileValidator."""

    @pytest.fixture
    def validator(self):
        """Create validator instance."""
        return FileValidator()

    def test_validate_existing_file(self, validator, temp_file):
        """Test validating existing file."""
        path, size = validator.validate(temp_file)

        assert path == temp_file
        assert size == 20

    def test_validate_string_path(self, validator, temp_file):
        """Test validating string path."""
        path, size = validator.validate(str(temp_file))

        assert path == temp_file

    def test_validate_nonexistent_file(self, validator):
        """Test validating non-existent file."""
        with pytest.raises(FileNotFoundError):
            validator.validate(Path("/nonexistent/file.txt"))

    def test_validate_directory(self, validator):
        """Test validating directory raises error."""
        with pytest.raises(ValueError):
            validator.validate(Path(tempfile.gettempdir()))


class TestAsyncFileReader:
    """Test suite for AsyncFileReader."""

    @pytest.fixture
    def reader(self):
        """Create reader instance."""
        return AsyncFileReader()

    @pytest.mark.asyncio
    async def test_read_chunk(self, reader, temp_file):
        """Test reading a chunk."""
        chunk = await reader.read_chunk(temp_file, 0, 10)

        assert chunk == b"0123456789"

    @pytest.mark.asyncio
    async def test_read_chunk_middle(self, reader, temp_file):
        """Test reading chunk from middle."""
        chunk = await reader.read_chunk(temp_file, 5, 15)

        assert chunk == b"56789ABCDE"

    @pytest.mark.asyncio
    async def test_read_nonexistent_file(self, reader):
        """Test reading non-existent file raises."""
        with pytest.raises(OSError):
            await reader.read_chunk(Path("/nonexistent/file.txt"), 0, 100)


class TestUploadFile:
    """Test suite for UploadFile."""

    @pytest.mark.asyncio
    async def test_from_path(self, temp_file):
        """Test file on disk."""
        file = UploadFile.from_path(temp_file)

        assert file.size == 20
        assert file.name == temp_file.name
        assert file.supports_slicing
        assert await file.read(10, 15) == b"ABCDE"

    @pytest.mark.asyncio
    async def test_from_bytes(self):
        """Test in-memory data."""
        file = UploadFile.from_bytes(b"hello world", "greeting.txt")

        assert file.size == 11
        assert file.name == "greeting.txt"
        assert await file.read() == b"hello world"
        assert await file.read(6) == b"world"

    @pytest.mark.asyncio
    async def test_read_past_end_is_clamped(self):
        """Test range beyond the file."""
        file = UploadFile(b"abc")

        assert await file.read(1, 100) == b"bc"
        assert await file.read(5, 10) == b""

    @pytest.mark.asyncio
    async def test_seekable_stream(self):
        """Test seekable stream keeps its position and can be sliced."""
        stream = io.BytesIO(b"0123456789")
        stream.seek(4)

        file = UploadFile(stream, "digits.bin")

        assert file.size == 10
        assert stream.tell() == 4
        assert file.supports_slicing
        assert await file.read(2, 5) == b"234"

    def test_non_seekable_stream(self):
        """Test stream without seek support."""
        stream = Mock()
        stream.seekable.return_value = False
        stream.read.return_value = b"payload"
        stream.name = "/tmp/clip.mp4"

        file = UploadFile(stream)

        assert file.size == 7
        assert file.name == "clip.mp4"
        assert not file.supports_slicing

    def test_missing_path(self):
        """Test path that does not exist."""
        with pytest.raises(FileNotFoundError):
            UploadFile("/nonexistent/file.txt")

    def test_default_name(self):
        """Test name of anonymous data."""
        assert UploadFile(b"x").name == "file"


class TestChunkUploader:
    """Test suite for ChunkUploader."""

    def test_build_form(self):
        """Test multipart body."""
        form = ChunkUploader.build_form('fileData', 'clip.mp4', b'data')

        assert isinstance(form, aiohttp.FormData)

    @pytest.mark.asyncio
    async def test_post_multipart(self):
        """Test successful post."""
        session = make_session()
        uploader = ChunkUploader(session=session, timeout=30, proxy="http://proxy:8080")

        result = await uploader.post_multipart("https://k/api_v3/service/uploadtoken", 'fileData', 'a.bin', b'xyz')

        assert result == {"objectType": "KalturaUploadToken", "id": "1_t"}
        args, kwargs = session.post.call_args
        assert args[0] == "https://k/api_v3/service/uploadtoken"
        assert isinstance(kwargs['data'], aiohttp.FormData)
        assert kwargs['proxy'] == "http://proxy:8080"

    @pytest.mark.asyncio
    async def test_http_error(self):
        """Test non-200 status."""
        uploader = ChunkUploader(session=make_session(status=502, text='bad gateway'))

        with pytest.raises(TransferFailureError) as exc_info:
            await uploader.post_multipart("https://k", 'fileData', 'a.bin', b'xyz')

        assert exc_info.value.status == 502
        assert exc_info.value.code == 'client::upload-failure'

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        """Test body that is not JSON."""
        uploader = ChunkUploader(session=make_session(text='<html>'))

        with pytest.raises(TransferFailureError):
            await uploader.post_multipart("https://k", 'fileData', 'a.bin', b'xyz')

    @pytest.mark.asyncio
    async def test_network_error(self):
        """Test connection failure."""
        session = make_session()
        session.post.side_effect = aiohttp.ClientConnectionError("reset")
        uploader = ChunkUploader(session=session)

        with pytest.raises(TransferFailureError, match="reset"):
            await uploader.post_multipart("https://k", 'fileData', 'a.bin', b'xyz')

    def test_process_response(self):
        """Test JSON parsing of the response body."""
        uploader = ChunkUploader(session=make_session())

        assert uploader._process_response(json.dumps([1, 2])) == [1, 2]

