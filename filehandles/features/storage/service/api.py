import logging
from typing import Optional
from filehandles.core.common.enums import LocationKind
from filehandles.core.common.errors import MutationError, MutationReason, ResolutionError
from filehandles.features.interception.service.interceptor import FileInterceptor, file_interceptor
from ..domain.interfaces import IFileSystem
from ..domain.models import LocationAttributes
from ..data.local_fs import local_fs
from ..data.path_resolver import PathResolver

logger = logging.getLogger(__name__)

class Storage:
    """
    The mutable path reference behind a File or Folder handle.
    Orchestrates path validation and the filesystem calls that change the path.

    A Storage also carries the collaborators the handle was built with
    (host filesystem and file interceptor) so that every handle derived from
    it, such as children, parents and copies, shares them.
    """
    def __init__(self,
                 path: str,
                 kind: LocationKind,
                 fs: Optional[IFileSystem] = None,
                 interceptor: Optional[FileInterceptor] = None):
        self.kind = kind
        self.fs = fs if fs is not None else local_fs
        self.interceptor = interceptor if interceptor is not None else file_interceptor
        self.resolver = PathResolver(self.fs)
        self.path = self.resolver.validate(path, kind)

    def __repr__(self) -> str:
        return f"Storage(kind={self.kind.value}, path={self.path!r})"

    def derive(self, path: str, kind: LocationKind) -> "Storage":
        """Validates path as a new Storage sharing this one's collaborators."""
        return Storage(path, kind, fs=self.fs, interceptor=self.interceptor)

    def find(self, path: str, kind: LocationKind) -> Optional["Storage"]:
        """Probe form of derive."""
        try:
            return self.derive(path, kind)
        except ResolutionError:
            return None

    @property
    def attributes(self) -> Optional[LocationAttributes]:
        return self.fs.attributes(self.path)

    def normalize(self, path: str, kind: LocationKind) -> str:
        """Canonical spelling of a path that may not exist yet. Raises ResolutionError."""
        return self.resolver.normalize(path, kind)

    def make_parent_path(self, path: Optional[str] = None) -> Optional[str]:
        return self.resolver.make_parent_path(self.path if path is None else path)

    def move(self, new_path: str, reason: MutationReason) -> None:
        """
        Moves the entry and, only on success, points this Storage at new_path.
        Used for both rename and move; reason says which one failed.
        """
        try:
            self.fs.move_item(self.path, new_path)
        except OSError as e:
            logger.error(f"Moving {self.path} to {new_path} failed: {e}")
            raise MutationError(self.path, reason, e) from e

        logger.debug(f"Moved {self.path} -> {new_path}")
        if self.kind == LocationKind.FOLDER:
            self.path = new_path.rstrip("/") + "/"
        else:
            self.path = new_path

    def copy(self, new_path: str) -> None:
        try:
            self.fs.copy_item(self.path, new_path)
        except OSError as e:
            logger.error(f"Copying {self.path} to {new_path} failed: {e}")
            raise MutationError(self.path, MutationReason.COPY_FAILED, e) from e

    def delete(self) -> None:
        try:
            self.fs.remove_item(self.path)
        except OSError as e:
            logger.error(f"Deleting {self.path} failed: {e}")
            raise MutationError(self.path, MutationReason.DELETE_FAILED, e) from e

        logger.debug(f"Deleted {self.path}")
