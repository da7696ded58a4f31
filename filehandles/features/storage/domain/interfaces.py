from abc import ABC, abstractmethod
from typing import List, Optional

from filehandles.core.common.enums import LocationKind, SearchPathDirectory
from .models import LocationAttributes

class IFileSystem(ABC):
    """
    Contract for the host filesystem.
    Every handle talks to disk through one of these, so tests can swap it out.
    """

    @abstractmethod
    def current_directory(self) -> str:
        """Absolute path of the process's working directory."""
        pass

    @abstractmethod
    def home_directory(self) -> str:
        """
        Absolute path of the user's home directory.
        Raises RuntimeError if it cannot be resolved (configuration error).
        """
        pass

    @abstractmethod
    def location_exists(self, path: str, kind: LocationKind) -> bool:
        """True if an entry of the given kind exists at path."""
        pass

    @abstractmethod
    def list_directory(self, path: str) -> List[str]:
        """Names of the entries directly inside path, in no particular order."""
        pass

    @abstractmethod
    def create_directory(self, path: str, exist_ok: bool) -> None:
        """Creates path and any missing intermediate folders."""
        pass

    @abstractmethod
    def create_file(self, path: str, contents: Optional[bytes]) -> None:
        """
        Exclusively creates a file at path.
        Raises FileExistsError if something already lives there.
        """
        pass

    @abstractmethod
    def move_item(self, source: str, destination: str) -> None:
        pass

    @abstractmethod
    def copy_item(self, source: str, destination: str) -> None:
        pass

    @abstractmethod
    def remove_item(self, path: str) -> None:
        """Permanently deletes a file or a whole folder tree."""
        pass

    @abstractmethod
    def attributes(self, path: str) -> Optional[LocationAttributes]:
        """Live timestamps for path, or None if it no longer exists."""
        pass

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        pass

    @abstractmethod
    def write_bytes(self, path: str, data: bytes) -> None:
        pass

    @abstractmethod
    def append_bytes(self, path: str, data: bytes) -> None:
        pass

    @abstractmethod
    def search_paths(self, directory: SearchPathDirectory) -> List[str]:
        """Candidate absolute paths for a well-known user folder, best match first."""
        pass

    @abstractmethod
    def open_item(self, path: str) -> None:
        """Hands path to the desktop's default viewer."""
        pass
