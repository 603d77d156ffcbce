"""Tests for repository layout and the staging index."""

import hashlib

import pytest

from cub.errors import AlreadyInitialized, CorruptRecord, NotARepository, SourceFileNotFound
from cub.models import StagingEntry
from cub.objects import get_object
from cub.repo_utils import Repository, find_repo_root
from cub.staging import add_file, snapshot_and_clear, stage


class TestInit:
    def test_creates_layout(self, tmp_path):
        repo = Repository(tmp_path)
        repo.init()
        assert repo.objects_path.is_dir()
        assert list(repo.objects_path.iterdir()) == []
        assert repo.head_path.read_text() == ""
        assert repo.index_path.read_text() == "[]"

    def test_second_init_is_reported(self, repo):
        repo.save_head("abc")
        with pytest.raises(AlreadyInitialized):
            repo.init()
        assert repo.head_path.read_text() == "abc"

    def test_head_starts_empty(self, repo):
        assert repo.load_head() is None

    def test_undecodable_head(self, repo):
        repo.head_path.write_bytes(b"\xff\xfe")
        with pytest.raises(CorruptRecord):
            repo.load_head()

    def test_uninitialized_head(self, tmp_path):
        with pytest.raises(NotARepository):
            Repository(tmp_path).load_head()


class TestDiscovery:
    def test_finds_root_from_subdirectory(self, repo):
        sub = repo.root / "a" / "b"
        sub.mkdir(parents=True)
        assert find_repo_root(sub) == repo.root.resolve()

    def test_discover_outside_repository(self, tmp_path):
        with pytest.raises(NotARepository):
            Repository.discover(tmp_path)


class TestStage:
    def test_stage_appends(self, repo):
        stage(repo, "a.txt", "1" * 40)
        stage(repo, "b.txt", "2" * 40)
        assert [e.path for e in repo.load_index()] == ["a.txt", "b.txt"]

    def test_repeated_path_keeps_both_entries(self, repo):
        stage(repo, "a.txt", "1" * 40)
        stage(repo, "a.txt", "2" * 40)
        assert repo.load_index() == [
            StagingEntry(path="a.txt", hash="1" * 40),
            StagingEntry(path="a.txt", hash="2" * 40),
        ]

    def test_snapshot_and_clear(self, repo):
        stage(repo, "a.txt", "1" * 40)
        snapshot = snapshot_and_clear(repo)
        assert snapshot == [StagingEntry(path="a.txt", hash="1" * 40)]
        assert repo.load_index() == []
        assert repo.index_path.read_text() == "[]"

    def test_corrupt_index(self, repo):
        repo.index_path.write_text("{not json")
        with pytest.raises(CorruptRecord):
            repo.load_index()

    def test_wrong_shape_index(self, repo):
        repo.index_path.write_text('[{"path": "a.txt"}]')
        with pytest.raises(CorruptRecord):
            repo.load_index()

    def test_undecodable_index(self, repo):
        repo.index_path.write_bytes(b"\xff\xfe[]")
        with pytest.raises(CorruptRecord):
            repo.load_index()


class TestAddFile:
    def test_add_stores_blob_and_stages(self, repo, write_file):
        path = write_file("hello.txt", "hello")
        entry = add_file(repo, path)
        digest = hashlib.sha1(b"hello").hexdigest()
        assert entry == StagingEntry(path="hello.txt", hash=digest)
        assert get_object(repo, digest) == b"hello"
        assert repo.index_path.read_text() == (
            f'[{{"path": "hello.txt", "hash": "{digest}"}}]'
        )

    def test_nested_path_is_relative_to_root(self, repo, write_file):
        path = write_file("docs/readme.md", "# hi\n")
        assert add_file(repo, path).path == "docs/readme.md"

    def test_missing_file(self, repo):
        with pytest.raises(SourceFileNotFound):
            add_file(repo, repo.root / "nope.txt")
        assert repo.load_index() == []

    def test_directory_is_not_a_file(self, repo):
        (repo.root / "dir").mkdir()
        with pytest.raises(SourceFileNotFound):
            add_file(repo, repo.root / "dir")
