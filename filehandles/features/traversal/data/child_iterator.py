import logging
from collections import deque
from typing import TYPE_CHECKING, Deque, Generic, Iterator, List, Optional, Type, TypeVar
from filehandles.core.common.enums import LocationKind
from .visibility_rules import VisibilityRules

if TYPE_CHECKING:
    from filehandles.features.locations.service.folder import Folder
    from filehandles.features.locations.service.location import Location

logger = logging.getLogger(__name__)

Child = TypeVar("Child", bound="Location")


class _Frame:
    """
    One folder being listed: its name snapshot, a cursor into it,
    and the subfolders found so far that still have to be drained (FIFO).
    """
    __slots__ = ("folder", "reverse", "names", "index", "queued")

    def __init__(self, folder: "Folder", reverse: bool = False):
        self.folder = folder
        self.reverse = reverse
        self.names: Optional[List[str]] = None
        self.index = 0
        self.queued: Deque["Folder"] = deque()


class ChildIterator(Generic[Child], Iterator[Child]):
    """
    Lazy walk over the children of one kind inside a folder.

    Names are read once per folder, on first visit, and sorted; entries that
    appear or vanish afterwards are not reflected. In recursive mode a folder's
    direct children come first, then each queued subfolder is drained fully
    (its own children, then its own queue) before the next one is started.
    The pending work is an explicit stack of frames, no nested iterators.

    Not restartable: once exhausted it stays exhausted.
    """

    def __init__(self,
                 folder: "Folder",
                 child_type: Type[Child],
                 is_recursive: bool,
                 include_hidden: bool,
                 reverse_top_level_traversal: bool = False):
        self.child_type = child_type
        self.is_recursive = is_recursive
        self.include_hidden = include_hidden
        self._frames: List[_Frame] = [_Frame(folder, reverse_top_level_traversal)]

    def __iter__(self) -> "ChildIterator[Child]":
        return self

    def __next__(self) -> Child:
        while self._frames:
            frame = self._frames[-1]
            if frame.names is None:
                frame.names = self._load_item_names(frame)

            if frame.index < len(frame.names):
                name = frame.names[frame.index]
                frame.index += 1

                if VisibilityRules.should_skip(name, self.include_hidden):
                    continue

                child = self._visit(frame, name)
                if child is not None:
                    return child
                continue

            if frame.queued:
                # Nested frames always list in forward order
                self._frames.append(_Frame(frame.queued.popleft()))
                continue

            self._frames.pop()

        raise StopIteration

    def _visit(self, frame: _Frame, name: str) -> Optional[Child]:
        """
        Builds the child handle for name (None if it doesn't validate as the
        requested kind) and queues it for descent when it is a folder.
        """
        child_path = frame.folder.path + name
        storage = frame.folder.storage.find(child_path, self.child_type.kind)
        child = self.child_type._from_storage(storage) if storage is not None else None

        if self.is_recursive:
            if child is not None and self.child_type.kind == LocationKind.FOLDER:
                child_folder = child
            else:
                folder_storage = frame.folder.storage.find(child_path, LocationKind.FOLDER)
                child_folder = type(frame.folder)._from_storage(folder_storage) if folder_storage is not None else None

            if child_folder is not None:
                frame.queued.append(child_folder)

        return child

    def _load_item_names(self, frame: _Frame) -> List[str]:
        try:
            names = sorted(frame.folder.storage.fs.list_directory(frame.folder.path))
        except OSError as e:
            # Unreadable or vanished folders simply have no children
            logger.debug(f"Could not list {frame.folder.path}: {e}")
            names = []

        if frame.reverse:
            names.reverse()
        return names
