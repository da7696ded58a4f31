# File: filehandles/core/common/enums.py

from enum import Enum, unique

@unique
class LocationKind(str, Enum):
    FILE = "file"
    FOLDER = "folder"

@unique
class SearchPathDirectory(str, Enum):
    DOCUMENTS = "documents"
    DESKTOP = "desktop"
    DOWNLOADS = "downloads"
    LIBRARY = "library"
