# File: filehandles/features/locations/service/folder.py

import logging
import tempfile
from typing import Callable, List, Optional, Union
from filehandles.core.config.settings import settings
from filehandles.core.common.enums import LocationKind, SearchPathDirectory
from filehandles.core.common.errors import MutationError, MutationReason, ResolutionError, ResolutionReason
from filehandles.features.interception.service.interceptor import FileInterceptor
from filehandles.features.storage.domain.interfaces import IFileSystem
from filehandles.features.storage.data.local_fs import local_fs
from filehandles.features.traversal.service.sequence import ChildSequence
from .file import File
from .location import Location

logger = logging.getLogger(__name__)

Contents = Union[bytes, str, Callable[[], Union[bytes, str, None]], None]


class Folder(Location):
    """
    A folder on disk. Reference an existing one with Folder(path) (an empty
    path means the working directory), or create subfolders through the
    create_subfolder helpers.
    """
    kind = LocationKind.FOLDER

    def __init__(self,
                 path: str = "",
                 fs: Optional[IFileSystem] = None,
                 interceptor: Optional[FileInterceptor] = None):
        super().__init__(path, fs=fs, interceptor=interceptor)

    # --- Well-known folders ---

    @classmethod
    def current(cls, fs: Optional[IFileSystem] = None) -> "Folder":
        return cls("", fs=fs)

    @classmethod
    def root(cls, fs: Optional[IFileSystem] = None) -> "Folder":
        return cls("/", fs=fs)

    @classmethod
    def home(cls, fs: Optional[IFileSystem] = None) -> "Folder":
        return cls("~", fs=fs)

    @classmethod
    def temporary(cls, fs: Optional[IFileSystem] = None) -> "Folder":
        return cls(tempfile.gettempdir(), fs=fs)

    @classmethod
    def matching(cls,
                 search_path: SearchPathDirectory,
                 fs: Optional[IFileSystem] = None,
                 interceptor: Optional[FileInterceptor] = None) -> "Folder":
        """
        Resolves a well-known user folder (Documents, Library ...).
        Raises ResolutionError if the host filesystem has no candidate for it.
        """
        fs = fs if fs is not None else local_fs
        candidates = fs.search_paths(search_path)
        if not candidates:
            raise ResolutionError("", ResolutionReason.UNRESOLVED_SEARCH_PATH)
        return cls(candidates[0], fs=fs, interceptor=interceptor)

    @classmethod
    def documents(cls) -> Optional["Folder"]:
        try:
            return cls.matching(SearchPathDirectory.DOCUMENTS)
        except ResolutionError:
            return None

    @classmethod
    def library(cls) -> Optional["Folder"]:
        try:
            return cls.matching(SearchPathDirectory.LIBRARY)
        except ResolutionError:
            return None

    # --- Children ---

    @property
    def subfolders(self) -> ChildSequence["Folder"]:
        """Direct subfolders; chain .recursive / .including_hidden as needed."""
        return ChildSequence(self, Folder)

    @property
    def files_sequence(self) -> ChildSequence[File]:
        """Direct files; chain .recursive / .including_hidden as needed."""
        return ChildSequence(self, File)

    @property
    def files(self) -> List[File]:
        """
        The folder's direct files as a list.
        In debug mode a non-empty interceptor entry for this folder wins
        and the disk is not read at all.
        """
        if settings.DEBUG:
            intercepted = self.storage.interceptor.get_files(self.path)
            if intercepted:
                logger.debug(f"Returning {len(intercepted)} intercepted files for {self.path}")
                return intercepted
        return list(self.files_sequence)

    def _child_path(self, path: str) -> str:
        return self.path + (path[1:] if path.startswith("/") else path)

    def subfolder(self, path: str) -> "Folder":
        """Subfolder at a relative path (or name). Raises ResolutionError if missing."""
        return Folder._from_storage(self.storage.derive(self._child_path(path), LocationKind.FOLDER))

    def find_subfolder(self, path: str) -> Optional["Folder"]:
        storage = self.storage.find(self._child_path(path), LocationKind.FOLDER)
        return Folder._from_storage(storage) if storage is not None else None

    def contains_subfolder(self, path: str) -> bool:
        return self.find_subfolder(path) is not None

    def file(self, path: str) -> File:
        """File at a relative path (or name). Raises ResolutionError if missing."""
        return File._from_storage(self.storage.derive(self._child_path(path), LocationKind.FILE))

    def find_file(self, path: str) -> Optional[File]:
        storage = self.storage.find(self._child_path(path), LocationKind.FILE)
        return File._from_storage(storage) if storage is not None else None

    def contains_file(self, path: str) -> bool:
        return self.find_file(path) is not None

    def contains(self, location: Location) -> bool:
        """Whether location's name exists here as a direct child of the same kind."""
        if location.kind == LocationKind.FILE:
            return self.contains_file(location.name)
        return self.contains_subfolder(location.name)

    # --- Creation ---

    def create_subfolder(self, path: str) -> "Folder":
        """
        Creates a subfolder (and any intermediate folders).
        Raises MutationError if something already exists there.
        """
        return self._create_subfolder(path, exist_ok=False)

    def create_subfolder_if_needed(self, path: str) -> "Folder":
        """
        Returns the subfolder at path, creating it first if needed.
        "Already exists" counts as success, so concurrent callers all get a handle.
        """
        return self._create_subfolder(path, exist_ok=True)

    def _create_subfolder(self, path: str, exist_ok: bool) -> "Folder":
        folder_path = self._child_path(path)
        if folder_path.rstrip("/") == self.path.rstrip("/"):
            raise MutationError(folder_path, MutationReason.EMPTY_PATH)

        # Fold "../" first so no stray intermediate folder gets created
        try:
            folder_path = self.storage.normalize(folder_path, LocationKind.FOLDER)
        except ResolutionError as e:
            raise MutationError(folder_path, MutationReason.FOLDER_CREATION_FAILED, e) from e

        try:
            self.storage.fs.create_directory(folder_path, exist_ok=exist_ok)
        except OSError as e:
            logger.error(f"Creating folder {folder_path} failed: {e}")
            raise MutationError(folder_path, MutationReason.FOLDER_CREATION_FAILED, e) from e

        try:
            return Folder._from_storage(self.storage.derive(folder_path, LocationKind.FOLDER))
        except ResolutionError as e:
            raise MutationError(folder_path, MutationReason.FOLDER_CREATION_FAILED, e) from e

    def create_file(self, path: str, contents: Contents = None) -> File:
        """
        Creates a file (and any intermediate folders) with optional initial contents.
        Raises MutationError if a file already exists there.
        """
        file_path = self._prepare_file_path(path)
        try:
            self.storage.fs.create_file(file_path, self._encode_contents(contents))
        except OSError as e:
            logger.error(f"Creating file {file_path} failed: {e}")
            raise MutationError(file_path, MutationReason.FILE_CREATION_FAILED, e) from e

        return self._created_file(file_path)

    def create_file_if_needed(self, path: str, contents: Contents = None) -> File:
        """
        Returns the file at path, creating it first if needed.
        An existing file is left untouched and contents is never evaluated for it.
        A concurrent creation by someone else counts as success.
        """
        existing = self.find_file(path)
        if existing is not None:
            return existing

        file_path = self._prepare_file_path(path)
        try:
            self.storage.fs.create_file(file_path, self._encode_contents(contents))
        except FileExistsError:
            logger.debug(f"{file_path} appeared concurrently, reusing it")
        except OSError as e:
            logger.error(f"Creating file {file_path} failed: {e}")
            raise MutationError(file_path, MutationReason.FILE_CREATION_FAILED, e) from e

        return self._created_file(file_path)

    def _prepare_file_path(self, path: str) -> str:
        """Joins path onto this folder and makes sure its parent folder exists."""
        file_path = self._child_path(path)
        if file_path.rsplit("/", 1)[-1] in ("", ".", ".."):
            raise MutationError(file_path, MutationReason.EMPTY_PATH)

        try:
            file_path = self.storage.normalize(file_path, LocationKind.FILE)
        except ResolutionError as e:
            raise MutationError(file_path, MutationReason.FILE_CREATION_FAILED, e) from e

        parent_path = self.storage.make_parent_path(file_path)
        if parent_path is None:
            raise MutationError(file_path, MutationReason.EMPTY_PATH)

        if parent_path != self.path:
            try:
                self.storage.fs.create_directory(parent_path, exist_ok=True)
            except OSError as e:
                raise MutationError(parent_path, MutationReason.FOLDER_CREATION_FAILED, e) from e

        return file_path

    def _created_file(self, file_path: str) -> File:
        try:
            return File._from_storage(self.storage.derive(file_path, LocationKind.FILE))
        except ResolutionError as e:
            raise MutationError(file_path, MutationReason.FILE_CREATION_FAILED, e) from e

    def _encode_contents(self, contents: Contents) -> Optional[bytes]:
        if callable(contents):
            contents = contents()
        if isinstance(contents, str):
            return contents.encode(settings.DEFAULT_ENCODING)
        return contents

    # --- Bulk operations ---

    def move_contents(self, folder: "Folder", include_hidden: bool = False) -> None:
        """Moves every direct file, then every direct subfolder, into folder."""
        files = self.files_sequence
        folders = self.subfolders
        if include_hidden:
            files = files.including_hidden
            folders = folders.including_hidden

        files.move(folder)
        folders.move(folder)

    def empty(self, including_hidden: bool = False) -> None:
        """Permanently deletes the folder's contents. Use with caution."""
        files = self.files_sequence
        folders = self.subfolders
        if including_hidden:
            files = files.including_hidden
            folders = folders.including_hidden

        files.delete()
        folders.delete()

    def is_empty(self, including_hidden: bool = False) -> bool:
        files = self.files_sequence
        folders = self.subfolders
        if including_hidden:
            files = files.including_hidden
            folders = folders.including_hidden

        if files.first is not None:
            return False
        return folders.first is None
