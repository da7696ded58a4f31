from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Generic, List, Optional, Type, TypeVar
from ..data.child_iterator import ChildIterator

if TYPE_CHECKING:
    from filehandles.features.locations.service.folder import Folder
    from filehandles.features.locations.service.location import Location

Child = TypeVar("Child", bound="Location")

@dataclass(frozen=True)
class ChildSequence(Generic[Child]):
    """
    A sequence of child locations contained within a given folder.
    Obtained through Folder.files_sequence or Folder.subfolders.

    Every iter() builds a fresh ChildIterator, i.e. re-reads the disk.
    Starts non-recursive and without hidden entries; chain .recursive
    and/or .including_hidden to change that (no I/O happens until iteration).
    """
    folder: "Folder"
    child_type: Type[Child]
    is_recursive: bool = False
    include_hidden: bool = False

    def __iter__(self) -> ChildIterator[Child]:
        return self._make_iterator()

    def __str__(self) -> str:
        return "\n".join(str(child) for child in self)

    def _make_iterator(self, reverse_top_level_traversal: bool = False) -> ChildIterator[Child]:
        return ChildIterator(
            folder=self.folder,
            child_type=self.child_type,
            is_recursive=self.is_recursive,
            include_hidden=self.include_hidden,
            reverse_top_level_traversal=reverse_top_level_traversal,
        )

    @property
    def recursive(self) -> "ChildSequence[Child]":
        """Same sequence, walking subfolders too (breadth-first by level)."""
        return replace(self, is_recursive=True)

    @property
    def including_hidden(self) -> "ChildSequence[Child]":
        """Same sequence, including dot-prefixed entries."""
        return replace(self, include_hidden=True)

    @property
    def first(self) -> Optional[Child]:
        return next(self._make_iterator(), None)

    def last(self) -> Optional[Child]:
        # Non-recursive: the sorted listing reversed yields the last child first.
        if not self.is_recursive:
            return next(self._make_iterator(reverse_top_level_traversal=True), None)

        child = None
        for child in self:
            pass
        return child

    def count(self) -> int:
        return sum(1 for _ in self)

    def names(self) -> List[str]:
        return [child.name for child in self]

    def move(self, folder: "Folder") -> None:
        """
        Moves every location to folder, in iteration order.
        Stops at the first failure; locations already moved stay moved.
        """
        for child in self:
            child.move(folder)

    def delete(self) -> None:
        """
        Permanently deletes every location, in iteration order.
        Stops at the first failure; anything deleted up to then is gone.
        """
        for child in self:
            child.delete()
