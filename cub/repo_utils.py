import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from .config import HEAD_FILE_NAME, INDEX_FILE_NAME, OBJECTS_DIR_NAME, REPO_DIR_NAME
from .errors import AlreadyInitialized, CorruptRecord, IOFailure, NotARepository
from .models import StagingEntry, StagingInfo

logger = logging.getLogger(__name__)

staging_adapter = TypeAdapter(list[StagingEntry])

def find_repo_root(start: Path | None = None) -> Path | None:
    start = (start or Path.cwd()).resolve()
    for directory in [start] + list(start.parents):
        if (directory / REPO_DIR_NAME).is_dir():
            return directory
        if directory == Path.home():    # won't look past home directory
            return None
    return None

class Repository:
    """Handle on one repository: the worktree root plus its `.cub` layout.

    HEAD and the staging index are the only mutable files. Every
    operation takes a handle rather than reaching for ambient paths.
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self.repo_path = self.root / REPO_DIR_NAME
        self.objects_path = self.repo_path / OBJECTS_DIR_NAME
        self.head_path = self.repo_path / HEAD_FILE_NAME
        self.index_path = self.repo_path / INDEX_FILE_NAME

    @classmethod
    def discover(cls, start: Path | None = None) -> "Repository":
        root = find_repo_root(start)
        if root is None:
            raise NotARepository("not in a cub repository")
        return cls(root)

    def is_initialized(self) -> bool:
        return (
            self.objects_path.is_dir()
            and self.head_path.is_file()
            and self.index_path.is_file()
        )

    def init(self) -> None:
        if self.is_initialized():
            raise AlreadyInitialized("Repository is already initialized.")
        try:
            self.objects_path.mkdir(parents=True, exist_ok=True)
            if not self.head_path.exists():
                self.head_path.write_text("")
            if not self.index_path.exists():
                self.save_index([])
        except OSError as e:
            raise IOFailure(f"failed to create {self.repo_path}: {e}") from e
        logger.debug("initialized repository at %s", self.repo_path)

    def load_head(self) -> str | None:
        try:
            raw = self.head_path.read_bytes()
        except FileNotFoundError as e:
            raise NotARepository(f"HEAD file does not exist in {self.repo_path}") from e
        except OSError as e:
            raise IOFailure(f"failed to read HEAD: {e}") from e
        try:
            content = raw.decode("utf-8").strip()
        except UnicodeDecodeError as e:
            raise CorruptRecord(f"HEAD is corrupt: {e}") from e
        return content or None

    def save_head(self, commit_hash: str) -> None:
        try:
            self.head_path.write_text(commit_hash)
        except OSError as e:
            raise IOFailure(f"failed to write HEAD: {e}") from e
        logger.debug("HEAD -> %s", commit_hash)

    def load_index(self) -> StagingInfo:
        try:
            raw = self.index_path.read_bytes()
        except FileNotFoundError as e:
            raise NotARepository(f"index file does not exist in {self.repo_path}") from e
        except OSError as e:
            raise IOFailure(f"failed to read index: {e}") from e
        try:
            return staging_adapter.validate_json(raw)
        except ValidationError as e:
            raise CorruptRecord(f"staging index is corrupt: {e}") from e

    def save_index(self, entries: StagingInfo) -> None:
        data = [entry.model_dump() for entry in entries]
        try:
            self.index_path.write_text(json.dumps(data))
        except OSError as e:
            raise IOFailure(f"failed to write index: {e}") from e
