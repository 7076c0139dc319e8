"""Pytest fixtures for kalturapy tests."""
import asyncio
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import parse_qs, urlsplit

import pytest

import kalturapy.types  # noqa: F401  registers the bundled object types
from kalturapy.core.api.config import ClientConfig


def query_of(url: str) -> Dict[str, str]:
    """Returns the query string of a URL as a flat dict."""
    return {key: values[-1] for key, values in parse_qs(urlsplit(url).query).items()}


class FakeTransport:
    """
    Upload transport double.

    Records every post and answers like the upload token service: non-final
    chunks echo 'uploadedFileSize', the final chunk returns a full token.
    """

    def __init__(
        self,
        responder: Optional[Callable[[Dict[str, str], bytes], Any]] = None,
        delay: float = 0
    ):
        self.calls: List[Dict[str, Any]] = []
        self.active = 0
        self.max_active = 0
        self._responder = responder or self.token_responder
        self._delay = delay

    @staticmethod
    def token_responder(query: Dict[str, str], data: bytes) -> Any:
        resume_at = int(query.get('resumeAt', 0))
        if query.get('finalChunk', 'true') == 'true':
            return {
                'objectType': 'KalturaUploadToken',
                'id': query.get('uploadTokenId', 'token'),
                'status': 2,
                'uploadedFileSize': resume_at + len(data),
            }
        return {
            'objectType': 'KalturaUploadToken',
            'id': query.get('uploadTokenId', 'token'),
            'status': 1,
            'uploadedFileSize': resume_at + len(data),
        }

    async def post_multipart(self, url: str, file_field: str, file_name: str, data: bytes) -> Any:
        query = query_of(url)
        self.calls.append({
            'url': url,
            'query': query,
            'file_field': file_field,
            'file_name': file_name,
            'size': len(data),
        })
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self._delay)
            result = self._responder(query, data)
            if asyncio.iscoroutine(result):
                result = await result
            return result
        finally:
            self.active -= 1


@pytest.fixture
def config():
    """Client configuration with small chunks."""
    return ClientConfig(chunk_file_size=100_000)


@pytest.fixture
def transport():
    """Fake upload transport."""
    return FakeTransport()


@pytest.fixture
def temp_file():
    """Creates a temporary file with known content."""
    fd, path = tempfile.mkstemp()
    os.write(fd, b"0123456789ABCDEFGHIJ")
    os.close(fd)
    yield Path(path)
    os.unlink(path)


@pytest.fixture
def sample_entry_data():
    """Returns a media entry as sent by the server."""
    return {
        'objectType': 'KalturaMediaEntry',
        'id': '0_abc123',
        'name': 'clip',
        'partnerId': 102,
        'status': '2',
        'mediaType': 1,
        'createdAt': 1700000000,
        'operationAttributes': [
            {'objectType': 'KalturaClipAttributes', 'offset': 1000, 'duration': 5000},
        ],
        'metas': {
            'lang': {'objectType': 'KalturaStringValue', 'value': 'en'},
        },
    }


@pytest.fixture
def transport_factory():
    """Returns the fake transport class for tests that need custom responders."""
    return FakeTransport
