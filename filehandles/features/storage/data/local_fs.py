import os
import shutil
import logging
import subprocess
from datetime import datetime
from typing import List, Optional
from filehandles.core.config.settings import settings
from filehandles.core.common.enums import LocationKind, SearchPathDirectory
from ..domain.interfaces import IFileSystem
from ..domain.models import LocationAttributes

logger = logging.getLogger(__name__)


def _native(path: str) -> str:
    # shutil treats "a/" and "a" differently for moves; never strip the root itself.
    if len(path) > 1 and path.endswith("/"):
        return path.rstrip("/") or "/"
    return path


class LocalFileSystem(IFileSystem):
    """
    Concrete implementation backed by os/shutil on the real disk.
    """

    def current_directory(self) -> str:
        return os.getcwd()

    def home_directory(self) -> str:
        home = os.environ.get("HOME") or os.path.expanduser("~")
        if not home or home == "~":
            raise RuntimeError("Unable to resolve the home directory (HOME is not set).")
        return home

    def location_exists(self, path: str, kind: LocationKind) -> bool:
        if kind == LocationKind.FOLDER:
            return os.path.isdir(path)
        return os.path.isfile(path)

    def list_directory(self, path: str) -> List[str]:
        return os.listdir(path)

    def create_directory(self, path: str, exist_ok: bool) -> None:
        os.makedirs(_native(path), exist_ok=exist_ok)

    def create_file(self, path: str, contents: Optional[bytes]) -> None:
        # "x" mode fails atomically if the entry already exists
        with open(path, "xb") as f:
            if contents:
                f.write(contents)

    def move_item(self, source: str, destination: str) -> None:
        destination = _native(destination)
        # shutil.move would nest the source inside an existing folder
        if os.path.lexists(destination):
            raise FileExistsError(f"Destination already exists: {destination}")
        shutil.move(_native(source), destination)

    def copy_item(self, source: str, destination: str) -> None:
        source, destination = _native(source), _native(destination)
        if os.path.isdir(source):
            shutil.copytree(source, destination)
            return

        if os.path.lexists(destination):
            raise FileExistsError(f"Destination already exists: {destination}")
        shutil.copy2(source, destination)

    def remove_item(self, path: str) -> None:
        path = _native(path)
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)

    def attributes(self, path: str) -> Optional[LocationAttributes]:
        try:
            stat = os.stat(path)
        except OSError:
            return None

        # st_birthtime only exists on macOS/BSD; ctime is the closest Linux has.
        created = getattr(stat, "st_birthtime", stat.st_ctime)
        return LocationAttributes(
            creation_date=datetime.fromtimestamp(created),
            modification_date=datetime.fromtimestamp(stat.st_mtime),
        )

    def read_bytes(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def write_bytes(self, path: str, data: bytes) -> None:
        with open(path, "wb") as f:
            f.write(data)

    def append_bytes(self, path: str, data: bytes) -> None:
        with open(path, "ab") as f:
            f.write(data)

    def search_paths(self, directory: SearchPathDirectory) -> List[str]:
        try:
            home = self.home_directory()
        except RuntimeError:
            return []

        candidates = []
        for name in settings.SEARCH_PATH_NAMES.get(directory, ()):
            candidate = os.path.join(home, name)
            if os.path.isdir(candidate):
                candidates.append(candidate)
        return candidates

    def open_item(self, path: str) -> None:
        cmd = [settings.OPEN_COMMAND, path]
        logger.info(f"Opening with desktop viewer: {' '.join(cmd)}")

        try:
            subprocess.run(
                cmd,
                check=True,
                capture_output=True,
                text=True
            )
        except subprocess.CalledProcessError as e:
            error_message = e.stderr if e.stderr else "Unknown opener error"
            logger.error(f"Open failed. STDERR: {error_message}")
            raise RuntimeError(f"Opening {path} failed: {error_message}") from e


# Singleton Instance for easy import
local_fs = LocalFileSystem()
