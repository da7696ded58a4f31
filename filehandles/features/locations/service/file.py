# File: filehandles/features/locations/service/file.py

import logging
from typing import Optional, Union
from filehandles.core.config.settings import settings
from filehandles.core.common.enums import LocationKind
from filehandles.core.common.errors import MutationError, MutationReason
from .location import Location

logger = logging.getLogger(__name__)


class File(Location):
    """
    A file on disk. Reference an existing one with File(path), or create
    new files through Folder.create_file / create_file_if_needed.
    """
    kind = LocationKind.FILE

    def _encode(self, data: Union[bytes, str], encoding: Optional[str]) -> bytes:
        if isinstance(data, bytes):
            return data
        try:
            return data.encode(encoding or settings.DEFAULT_ENCODING)
        except UnicodeEncodeError as e:
            raise MutationError(self.path, MutationReason.STRING_ENCODING_FAILED, e) from e

    # --- Writing ---

    def write(self, data: Union[bytes, str], encoding: Optional[str] = None) -> None:
        """Replaces the file's contents. Strings are encoded with encoding (default: settings)."""
        payload = self._encode(data, encoding)
        try:
            self.storage.fs.write_bytes(self.path, payload)
        except OSError as e:
            logger.error(f"Write to {self.path} failed: {e}")
            raise MutationError(self.path, MutationReason.WRITE_FAILED, e) from e

    def append(self, data: Union[bytes, str], encoding: Optional[str] = None) -> None:
        payload = self._encode(data, encoding)
        try:
            self.storage.fs.append_bytes(self.path, payload)
        except OSError as e:
            logger.error(f"Append to {self.path} failed: {e}")
            raise MutationError(self.path, MutationReason.WRITE_FAILED, e) from e

    # --- Reading ---

    def read(self) -> bytes:
        try:
            return self.storage.fs.read_bytes(self.path)
        except OSError as e:
            raise MutationError(self.path, MutationReason.READ_FAILED, e) from e

    def read_as_string(self, encoding: Optional[str] = None) -> str:
        data = self.read()
        try:
            return data.decode(encoding or settings.DEFAULT_ENCODING)
        except UnicodeDecodeError as e:
            raise MutationError(self.path, MutationReason.STRING_DECODING_FAILED, e) from e

    def read_as_int(self) -> int:
        text = self.read_as_string()
        try:
            return int(text)
        except ValueError as e:
            raise MutationError(self.path, MutationReason.NOT_AN_INTEGER, e) from e

    def open(self) -> None:
        """Opens the file in the desktop's default application."""
        self.storage.fs.open_item(self.path)
