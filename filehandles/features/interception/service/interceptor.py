# File: filehandles/features/interception/service/interceptor.py

import logging
from threading import Lock
from typing import TYPE_CHECKING, Dict, List, Union

if TYPE_CHECKING:
    from filehandles.features.locations.service.file import File
    from filehandles.features.locations.service.folder import Folder

logger = logging.getLogger(__name__)

FolderKey = Union[str, "Folder"]


def _key(folder: FolderKey) -> str:
    return folder if isinstance(folder, str) else folder.path


class FileInterceptor:
    """
    Debug-only registry that substitutes a fixed file list for a folder.

    Folder.files asks this before reading the disk (only when
    settings.DEBUG is on). Subfolder listings are never intercepted.
    Keys are canonical folder paths; a Folder handle may be passed instead.
    """

    def __init__(self):
        self._lock = Lock()
        self._intercepting: Dict[str, List["File"]] = {}

    def intercept_files(self, folder: FolderKey, files: List["File"]) -> None:
        with self._lock:
            self._intercepting[_key(folder)] = list(files)
        logger.debug(f"Intercepting {len(files)} files for {_key(folder)}")

    def get_files(self, folder: FolderKey) -> List["File"]:
        """The substitute list for folder, or an empty list when none is registered."""
        with self._lock:
            return list(self._intercepting.get(_key(folder), []))

    def remove_interceptor(self, folder: FolderKey) -> None:
        with self._lock:
            self._intercepting.pop(_key(folder), None)

    def clear_interceptors(self) -> None:
        with self._lock:
            self._intercepting.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._intercepting)


# Default instance shared by handles that aren't given their own.
file_interceptor = FileInterceptor()
