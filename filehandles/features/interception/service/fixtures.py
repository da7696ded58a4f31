# File: filehandles/features/interception/service/fixtures.py

import logging
from typing import List, Optional
from uuid import uuid4
from filehandles.core.config.settings import settings
from filehandles.features.locations.service.file import File
from filehandles.features.locations.service.folder import Folder
from filehandles.features.storage.domain.interfaces import IFileSystem
from .interceptor import FileInterceptor

logger = logging.getLogger(__name__)


def _require_debug() -> None:
    if not settings.DEBUG:
        raise RuntimeError("Debug fixtures are only available when FILEHANDLES_DEBUG is enabled.")


def debug_file(extension: str = "jpeg", fs: Optional[IFileSystem] = None) -> File:
    """
    A File handle with a unique fabricated path that doesn't exist on disk.
    Only usable as a placeholder (e.g. in an interceptor list); reading it fails.
    """
    _require_debug()
    return File(f"{settings.DEBUG_FILE_PREFIX}-{uuid4()}.{extension}", fs=fs)


def debug_folder(files: List[File],
                 interceptor: Optional[FileInterceptor] = None,
                 fs: Optional[IFileSystem] = None) -> Folder:
    """
    A Folder handle with a unique fabricated path whose `files` are files.
    The files are registered on interceptor (default: the shared instance).
    """
    _require_debug()
    folder = Folder(f"{settings.DEBUG_FOLDER_PREFIX}-{uuid4()}/", fs=fs, interceptor=interceptor)
    folder.storage.interceptor.intercept_files(folder, files)
    logger.debug(f"Built debug folder {folder.path} with {len(files)} files")
    return folder
