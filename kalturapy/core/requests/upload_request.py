"""Requests that carry a file part."""
from pathlib import Path
from typing import Callable, NamedTuple, Optional

from .request import KalturaRequest
from ..exceptions import TypeMismatchError
from ..objects import PropertyType, UNSET
from ..upload.services.file_service import UploadFile

ProgressCallback = Callable[[int, int], None]


class FileInfo(NamedTuple):
    """File property of an upload request."""
    property_name: str
    file: UploadFile


class KalturaUploadRequest(KalturaRequest):
    """
    Base class of actions that upload a file.

    The file travels as a multipart part named after the request's FILE
    property. Actions whose server side accepts resumable chunks override
    supports_chunk_upload().
    """

    def __init__(self, **kwargs):
        self.uploaded_file_size: Optional[float] = None
        self._progress: Optional[ProgressCallback] = None
        super().__init__(**kwargs)

    def supports_chunk_upload(self) -> bool:
        return False

    def get_file_info(self) -> FileInfo:
        """
        Returns the FILE property of the request.

        Paths, bytes and streams assigned to the property are wrapped in an
        UploadFile on first access.

        Raises:
            TypeMismatchError: If the request declares no file property or it is unset
        """
        for meta in self._metadata.values():
            if meta.type is not PropertyType.FILE:
                continue

            value = getattr(self, meta.attribute, UNSET)
            if value is UNSET or value is None:
                raise TypeMismatchError(
                    f"Missing file for property '{meta.name}' of {type(self).__name__}",
                    property_name=meta.name
                )
            if not isinstance(value, UploadFile):
                value = UploadFile(value if not isinstance(value, Path) else str(value))
                setattr(self, meta.attribute, value)
            return FileInfo(meta.name, value)

        raise TypeMismatchError(f"{type(self).__name__} does not declare a file property")

    def set_progress(self, callback: Optional[ProgressCallback]) -> 'KalturaUploadRequest':
        """Registers a callback invoked with (uploaded_bytes, total_bytes)."""
        self._progress = callback
        return self

    def get_progress_callback(self) -> Optional[ProgressCallback]:
        return self._progress
