import os
import tempfile
import threading
import pytest
from filehandles.core.common.enums import SearchPathDirectory
from filehandles.core.common.errors import MutationError, MutationReason, ResolutionError, ResolutionReason
from filehandles.features.locations.service.file import File
from filehandles.features.locations.service.folder import Folder
from filehandles.features.storage.data.local_fs import LocalFileSystem


class FixedSearchPathFileSystem(LocalFileSystem):
    def __init__(self, candidates):
        self.candidates = candidates

    def search_paths(self, directory):
        return list(self.candidates)


class RacingFileSystem(LocalFileSystem):
    """Another writer creates the file right before our exclusive create runs."""

    def __init__(self, their_contents: bytes):
        self.their_contents = their_contents

    def create_file(self, path, contents):
        super().create_file(path, self.their_contents)
        raise FileExistsError(f"{path} was created by someone else")


# --- Well-known folders ---

def test_current_folder(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert Folder.current().path == f"{tmp_path}/"
    assert Folder().path == f"{tmp_path}/"

def test_home_folder(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert Folder.home().path == f"{tmp_path}/"

def test_root_and_temporary():
    assert Folder.root().path == "/"
    assert Folder.temporary().path == tempfile.gettempdir().rstrip("/") + "/"

def test_matching_wraps_first_candidate(tmp_path):
    (tmp_path / "one").mkdir()
    (tmp_path / "two").mkdir()
    fs = FixedSearchPathFileSystem([str(tmp_path / "one"), str(tmp_path / "two")])

    folder = Folder.matching(SearchPathDirectory.DOCUMENTS, fs=fs)

    assert folder.path == f"{tmp_path}/one/"
    assert folder.storage.fs is fs

def test_matching_without_candidates_fails():
    with pytest.raises(ResolutionError) as exc:
        Folder.matching(SearchPathDirectory.LIBRARY, fs=FixedSearchPathFileSystem([]))
    assert exc.value.reason == ResolutionReason.UNRESOLVED_SEARCH_PATH

def test_documents_is_optional(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert Folder.documents() is None

    (tmp_path / "Documents").mkdir()
    assert Folder.documents().path == f"{tmp_path}/Documents/"


# --- Lookup ---

def test_subfolder_and_file_lookup(workspace):
    workspace.create_file("a/b/c.txt")

    assert workspace.subfolder("a").subfolder("b") == workspace.subfolder("a/b")
    assert workspace.file("a/b/c.txt") == workspace.subfolder("a/b").file("c.txt")
    # A single leading separator is treated as relative
    assert workspace.subfolder("/a") == workspace.subfolder("a")

def test_missing_lookup_raises(workspace):
    with pytest.raises(ResolutionError) as exc:
        workspace.subfolder("ghost")
    assert exc.value.reason == ResolutionReason.MISSING_LOCATION

    with pytest.raises(ResolutionError):
        workspace.file("ghost.txt")

def test_probes_return_none_instead_of_raising(workspace):
    workspace.create_file("x.txt")

    assert workspace.find_file("x.txt") is not None
    assert workspace.find_file("ghost.txt") is None
    assert workspace.find_subfolder("x.txt") is None
    assert workspace.contains_file("x.txt")
    assert not workspace.contains_subfolder("x.txt")

def test_contains_location(workspace):
    other = workspace.create_subfolder("other")
    file = other.create_file("shared.txt")
    folder = other.create_subfolder("nested")

    assert not workspace.contains(file)
    assert not workspace.contains(folder)

    workspace.create_file("shared.txt")
    workspace.create_subfolder("nested")

    assert workspace.contains(file)
    assert workspace.contains(folder)


# --- Folder creation ---

def test_create_subfolder_round_trip(workspace):
    created = workspace.create_subfolder("x/y/z")

    assert workspace.subfolder("x/y/z") == created
    assert created.path == f"{workspace.path}x/y/z/"

def test_create_subfolder_refuses_existing(workspace):
    workspace.create_subfolder("taken")

    with pytest.raises(MutationError) as exc:
        workspace.create_subfolder("taken")
    assert exc.value.reason == MutationReason.FOLDER_CREATION_FAILED
    assert isinstance(exc.value.cause, FileExistsError)

def test_create_subfolder_with_empty_path(workspace):
    with pytest.raises(MutationError) as exc:
        workspace.create_subfolder("")
    assert exc.value.reason == MutationReason.EMPTY_PATH

def test_create_subfolder_if_needed_is_idempotent(workspace):
    first = workspace.create_subfolder_if_needed("cache")
    second = workspace.create_subfolder_if_needed("cache")
    assert first == second

def test_create_subfolder_if_needed_over_a_file(workspace):
    workspace.create_file("clash")

    with pytest.raises(MutationError) as exc:
        workspace.create_subfolder_if_needed("clash")
    assert exc.value.reason == MutationReason.FOLDER_CREATION_FAILED

def test_concurrent_create_subfolder_if_needed(workspace):
    """
    Two callers both find the folder missing and both create it.
    Neither sees an error and both get equal handles.
    """
    results, errors = [], []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        try:
            results.append(workspace.create_subfolder_if_needed("shared/deep"))
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(set(results)) == 1


# --- File creation ---

def test_create_file_with_intermediate_folders(workspace):
    file = workspace.create_file("deep/er/data.bin", b"\x00\x01")

    assert file.path == f"{workspace.path}deep/er/data.bin"
    assert file.read() == b"\x00\x01"
    assert workspace.contains_subfolder("deep/er")

def test_create_file_refuses_existing(workspace):
    workspace.create_file("x.txt", "original")

    with pytest.raises(MutationError) as exc:
        workspace.create_file("x.txt", "replacement")

    assert exc.value.reason == MutationReason.FILE_CREATION_FAILED
    assert workspace.file("x.txt").read_as_string() == "original"

def test_create_file_with_empty_path(workspace):
    with pytest.raises(MutationError) as exc:
        workspace.create_file("")
    assert exc.value.reason == MutationReason.EMPTY_PATH

def test_create_file_if_needed_is_idempotent_and_lazy(workspace):
    calls = []

    def contents():
        calls.append(1)
        return "generated"

    first = workspace.create_file_if_needed("x.txt", contents)
    second = workspace.create_file_if_needed("x.txt", contents)

    assert first == second
    assert calls == [1]
    assert second.read_as_string() == "generated"

def test_create_file_if_needed_over_a_folder(workspace):
    workspace.create_subfolder("clash")

    with pytest.raises(MutationError) as exc:
        workspace.create_file_if_needed("clash/")
    assert exc.value.reason == MutationReason.EMPTY_PATH

    with pytest.raises(MutationError) as exc:
        workspace.create_file_if_needed("clash")
    assert exc.value.reason == MutationReason.FILE_CREATION_FAILED

def test_create_file_if_needed_loses_race_gracefully(tmp_path):
    """
    Verifies the window between the existence check and the create:
    1. The competing writer's file is reused, no error surfaces.
    2. Its contents are kept, ours are dropped.
    """
    folder = Folder(str(tmp_path), fs=RacingFileSystem(b"theirs"))

    file = folder.create_file_if_needed("x.txt", "ours")

    assert file.path == f"{tmp_path}/x.txt"
    assert file.read_as_string() == "theirs"

def test_create_file_folds_parent_references_first(workspace):
    file = workspace.create_file("ghost/../y.txt")

    assert file.path == f"{workspace.path}y.txt"
    assert os.listdir(workspace.path) == ["y.txt"]

def test_create_subfolder_folds_parent_references_first(workspace):
    folder = workspace.create_subfolder("ghost/../real")

    assert folder.path == f"{workspace.path}real/"
    assert os.listdir(workspace.path) == ["real"]

@pytest.mark.parametrize("path", ["x/..", "x/.", "x/"])
def test_create_file_needs_a_file_name(workspace, path):
    with pytest.raises(MutationError) as exc:
        workspace.create_file(path)

    assert exc.value.reason == MutationReason.EMPTY_PATH
    assert os.listdir(workspace.path) == []

def test_create_file_with_missing_computed_parent(workspace):
    with pytest.raises(MutationError) as exc:
        workspace.create_file("nope/deeper/../../y.txt")

    assert exc.value.reason == MutationReason.FILE_CREATION_FAILED
    assert os.listdir(workspace.path) == []

def test_created_file_is_a_typed_handle(workspace):
    assert isinstance(workspace.create_file("x"), File)


# --- Bulk operations ---

def test_move_contents(workspace):
    source = workspace.create_subfolder("source")
    source.create_file("a.txt")
    source.create_file(".hidden")
    source.create_file("sub/b.txt")
    destination = workspace.create_subfolder("destination")

    source.move_contents(destination)

    assert destination.files_sequence.names() == ["a.txt"]
    assert destination.subfolder("sub").files_sequence.names() == ["b.txt"]
    assert source.files_sequence.including_hidden.names() == [".hidden"]

def test_move_contents_including_hidden(workspace):
    source = workspace.create_subfolder("source")
    source.create_file(".hidden")
    destination = workspace.create_subfolder("destination")

    source.move_contents(destination, include_hidden=True)

    assert destination.files_sequence.including_hidden.names() == [".hidden"]
    assert source.is_empty(including_hidden=True)

def test_empty(workspace):
    workspace.create_file("a.txt")
    workspace.create_file("sub/b.txt")
    workspace.create_file(".keep")

    workspace.empty()

    assert workspace.is_empty()
    assert not workspace.is_empty(including_hidden=True)

    workspace.empty(including_hidden=True)

    assert os.listdir(workspace.path) == []

def test_is_empty_with_only_hidden_file(workspace):
    workspace.create_file(".gitignore")

    assert workspace.is_empty() is True
    assert workspace.is_empty(including_hidden=True) is False

def test_is_empty_with_only_subfolder(workspace):
    workspace.create_subfolder("child")
    assert workspace.is_empty() is False
