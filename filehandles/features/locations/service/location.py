# File: filehandles/features/locations/service/location.py

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Optional, Type, TypeVar
from filehandles.core.common.enums import LocationKind
from filehandles.core.common.errors import MutationReason, ResolutionError, ResolutionReason
from filehandles.features.interception.service.interceptor import FileInterceptor
from filehandles.features.storage.domain.interfaces import IFileSystem
from filehandles.features.storage.service.api import Storage

if TYPE_CHECKING:
    from .folder import Folder

L = TypeVar("L", bound="Location")


class Location:
    """
    Base class for File and Folder handles.

    A handle owns a Storage (the canonical path plus the filesystem it lives on).
    Creating or dropping a handle never touches the entry on disk; only the
    explicit rename/move/copy/delete calls do.
    """
    kind: ClassVar[LocationKind]

    def __init__(self,
                 path: str,
                 fs: Optional[IFileSystem] = None,
                 interceptor: Optional[FileInterceptor] = None):
        self.storage = Storage(path, self.kind, fs=fs, interceptor=interceptor)

    @classmethod
    def _from_storage(cls: Type[L], storage: Storage) -> L:
        """Wraps an already validated Storage without re-checking the disk."""
        location = cls.__new__(cls)
        location.storage = storage
        return location

    # --- Identity ---

    def __eq__(self, other) -> bool:
        if not isinstance(other, Location):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name: {self.name}, path: {self.path})"

    __str__ = __repr__

    # --- Derived properties ---

    @property
    def path(self) -> str:
        return self.storage.path

    @property
    def fs_path(self) -> Path:
        return Path(self.path)

    @property
    def name(self) -> str:
        """Last path component, including any extension."""
        stripped = self.path.rstrip("/")
        if not stripped:
            return "/"
        return stripped.rsplit("/", 1)[-1]

    @property
    def extension(self) -> Optional[str]:
        """Text after the last "." of the name; None for "README" or ".gitignore"."""
        components = [c for c in self.name.split(".") if c]
        if len(components) < 2:
            return None
        return components[-1]

    @property
    def name_excluding_extension(self) -> str:
        extension = self.extension
        if extension is None:
            return self.name
        return self.name[:-(len(extension) + 1)]

    @property
    def parent(self) -> Optional["Folder"]:
        """The containing folder; None for the root or if it can't be validated anymore."""
        # Lazy import to prevent the circular dependency with folder.py
        from .folder import Folder

        parent_path = self.storage.make_parent_path()
        if parent_path is None:
            return None

        storage = self.storage.find(parent_path, LocationKind.FOLDER)
        return Folder._from_storage(storage) if storage is not None else None

    @property
    def creation_date(self) -> Optional[datetime]:
        """None only if the entry has been deleted since."""
        attributes = self.storage.attributes
        return attributes.creation_date if attributes else None

    @property
    def modification_date(self) -> Optional[datetime]:
        """None only if the entry has been deleted since."""
        attributes = self.storage.attributes
        return attributes.modification_date if attributes else None

    def relative_path(self, folder: "Folder") -> str:
        """
        Path of this location relative to folder.
        e.g. "/users/john/documents/" relative to "/users/john/" is "documents".
        The absolute path is returned when folder isn't an ancestor.
        """
        if not self.path.startswith(folder.path):
            return self.path

        relative = self.path[len(folder.path):]
        return relative[:-1] if relative.endswith("/") else relative

    # --- Mutations ---

    def rename(self, new_name: str, keep_extension: bool = True) -> None:
        """
        Renames in place, keeping the current extension unless told otherwise.
        Raises ResolutionError for the root, MutationError if the OS refuses.
        """
        parent = self.parent
        if parent is None:
            raise ResolutionError(self.path, ResolutionReason.CANNOT_RENAME_ROOT)

        extension = self.extension
        if keep_extension and extension is not None:
            suffix = f".{extension}"
            if not new_name.endswith(suffix):
                new_name += suffix

        self.storage.move(parent.path + new_name, MutationReason.RENAME_FAILED)

    def move(self, new_parent: "Folder") -> None:
        self.storage.move(new_parent.path + self.name, MutationReason.MOVE_FAILED)

    def copy(self: L, folder: "Folder") -> L:
        """Copies into folder and returns a handle to the copy. This handle is unchanged."""
        new_path = folder.path + self.name
        self.storage.copy(new_path)
        return type(self)._from_storage(self.storage.derive(new_path, self.kind))

    def delete(self) -> None:
        """Permanently deletes the entry. There is no trash."""
        self.storage.delete()

    def managed_by(self: L, fs: IFileSystem) -> L:
        """
        A new handle for the same path on another filesystem.
        Typically only used for testing. This handle is not modified.
        """
        return type(self)(self.path, fs=fs, interceptor=self.storage.interceptor)
