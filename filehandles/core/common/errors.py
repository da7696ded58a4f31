# File: filehandles/core/common/errors.py

from enum import Enum, unique
from typing import Optional

@unique
class ResolutionReason(str, Enum):
    EMPTY_PATH = "empty_path"
    MISSING_LOCATION = "missing_location"
    CANNOT_RENAME_ROOT = "cannot_rename_root"
    UNRESOLVED_SEARCH_PATH = "unresolved_search_path"

@unique
class MutationReason(str, Enum):
    EMPTY_PATH = "empty_path"
    FOLDER_CREATION_FAILED = "folder_creation_failed"
    FILE_CREATION_FAILED = "file_creation_failed"
    RENAME_FAILED = "rename_failed"
    MOVE_FAILED = "move_failed"
    COPY_FAILED = "copy_failed"
    DELETE_FAILED = "delete_failed"
    WRITE_FAILED = "write_failed"
    STRING_ENCODING_FAILED = "string_encoding_failed"
    READ_FAILED = "read_failed"
    STRING_DECODING_FAILED = "string_decoding_failed"
    NOT_AN_INTEGER = "not_an_integer"


class FilesError(Exception):
    """
    Base error raised by every fallible handle operation.
    Carries the absolute path the error occurred at and a typed reason.
    """

    def __init__(self, path: str, reason: Enum, cause: Optional[BaseException] = None):
        self.path = path
        self.reason = reason
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        message = f"Files encountered an error at '{self.path}'. Reason: {self.reason.value}"
        if self.cause is not None:
            message += f" ({self.cause})"
        return message


class ResolutionError(FilesError):
    """A path could not be turned into a handle (missing, empty, root, search path)."""

    reason: ResolutionReason


class MutationError(FilesError):
    """The host filesystem refused a create/rename/move/copy/delete/read/write."""

    reason: MutationReason
