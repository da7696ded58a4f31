# File: filehandles/core/config/settings.py

import os
import shutil
from typing import Dict, Tuple

from filehandles.core.common.enums import SearchPathDirectory


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings:
    # --- Debug ---
    # Interception and unvalidated fixture paths only work when this is on.
    DEBUG: bool = _env_flag("FILEHANDLES_DEBUG")
    DEBUG_FOLDER_PREFIX: str = "debug-folder"
    DEBUG_FILE_PREFIX: str = "debug-file"

    # --- Text I/O ---
    DEFAULT_ENCODING: str = os.getenv("FILEHANDLES_ENCODING", "utf-8")

    # --- External Tools ---
    # Auto-detect the desktop opener or use env var
    OPEN_COMMAND: str = os.getenv(
        "FILEHANDLES_OPEN_COMMAND",
        shutil.which("xdg-open") or shutil.which("open") or "xdg-open",
    )

    # --- Well-known folders ---
    # Candidate folder names probed under the home directory, in order.
    SEARCH_PATH_NAMES: Dict[SearchPathDirectory, Tuple[str, ...]] = {
        SearchPathDirectory.DOCUMENTS: ("Documents",),
        SearchPathDirectory.DESKTOP: ("Desktop",),
        SearchPathDirectory.DOWNLOADS: ("Downloads",),
        SearchPathDirectory.LIBRARY: ("Library", ".local/share"),
    }

    def is_debug_path(self, path: str) -> bool:
        """True when the path carries one of the reserved fixture prefixes and debug mode is on."""
        if not self.DEBUG:
            return False
        return path.startswith(self.DEBUG_FOLDER_PREFIX) or path.startswith(self.DEBUG_FILE_PREFIX)


settings = Settings()
