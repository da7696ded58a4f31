import logging
from typing import Optional
from filehandles.core.config.settings import settings
from filehandles.core.common.enums import LocationKind
from filehandles.core.common.errors import ResolutionError, ResolutionReason
from ..domain.interfaces import IFileSystem

logger = logging.getLogger(__name__)

PARENT_REFERENCE = "../"


class PathResolver:
    """
    Turns a user supplied path into a canonical one for a given LocationKind.

    Canonical folder paths end with exactly one "/", file paths never do.
    Both are absolute, have "~" expanded, "//" and "./" collapsed and every
    "../" folded away, and point at an existing entry of the requested kind.
    """

    def __init__(self, fs: IFileSystem):
        self.fs = fs

    def validate(self, raw_path: str, kind: LocationKind) -> str:
        """
        Returns the canonical path or raises ResolutionError.
        """
        if settings.is_debug_path(raw_path):
            logger.debug(f"Skipping validation for debug fixture path: {raw_path}")
            return raw_path

        path = self.normalize(raw_path, kind)

        # Existence of the entry itself
        if not self.fs.location_exists(path, kind):
            raise ResolutionError(path, ResolutionReason.MISSING_LOCATION)

        return path

    def normalize(self, raw_path: str, kind: LocationKind) -> str:
        """
        Canonical spelling of raw_path without checking that the entry itself exists.
        Folding "../" still requires each computed parent folder to exist.
        """
        if settings.is_debug_path(raw_path):
            return raw_path

        path = raw_path

        # 1. Kind specific normalization
        if kind == LocationKind.FOLDER:
            if not path:
                path = self.fs.current_directory()
            path = path.rstrip("/") + "/"
        elif not path:
            raise ResolutionError(path, ResolutionReason.EMPTY_PATH)

        # 2. Home directory
        if path.startswith("~"):
            path = self.fs.home_directory().rstrip("/") + path[1:]

        # 3. Anchor relative paths at the working directory
        if not path.startswith("/"):
            path = self.fs.current_directory().rstrip("/") + "/" + path

        # 4. "//" and "/./" spell the same folder
        path = self._collapse_separators(path)

        # 5. Fold "../" segments, left-most first
        return self._fold_parent_references(path)

    def _collapse_separators(self, path: str) -> str:
        components = [c for c in path.split("/") if c and c != "."]
        collapsed = "/" + "/".join(components)
        if components and path.endswith("/"):
            collapsed += "/"
        return collapsed

    def _fold_parent_references(self, path: str) -> str:
        start = 0
        while True:
            index = path.find(PARENT_REFERENCE, start)
            if index == -1:
                return path

            # Only a whole ".." component counts, "v1../" is a name
            if index > 0 and path[index - 1] != "/":
                start = index + 1
                continue

            parent_path = self.make_parent_path(path[:index]) or "/"
            if not self.fs.location_exists(parent_path, LocationKind.FOLDER):
                raise ResolutionError(parent_path, ResolutionReason.MISSING_LOCATION)

            path = parent_path + path[index + len(PARENT_REFERENCE):]
            start = 0

    def resolve(self, raw_path: str, kind: LocationKind) -> Optional[str]:
        """Probe form of validate: None instead of an error when nothing usable is there."""
        try:
            return self.validate(raw_path, kind)
        except ResolutionError:
            return None

    def make_parent_path(self, path: str) -> Optional[str]:
        """
        Folder path containing path, e.g. "/a/b/c.txt" -> "/a/b/".
        None for the root itself.
        """
        if path == "/":
            return None

        if not path.startswith("/"):
            path = self.fs.current_directory().rstrip("/") + "/" + path

        components = [c for c in path.split("/") if c][:-1]
        if not components:
            return "/"
        return "/" + "/".join(components) + "/"
