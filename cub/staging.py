import logging
from pathlib import Path

from .errors import IOFailure, SourceFileNotFound
from .models import StagingEntry, StagingInfo
from .objects import put_object
from .repo_utils import Repository

logger = logging.getLogger(__name__)

def stage(repo: Repository, path: str, file_hash: str) -> StagingEntry:
    staging_info = repo.load_index()
    entry = StagingEntry(path=path, hash=file_hash)
    staging_info.append(entry)
    repo.save_index(staging_info)
    logger.debug("staged %s as %s (%d entries)", path, file_hash, len(staging_info))
    return entry

def clear_index(repo: Repository) -> None:
    repo.save_index([])

def snapshot_and_clear(repo: Repository) -> StagingInfo:
    staging_info = repo.load_index()
    clear_index(repo)
    return staging_info

def staged_path(repo: Repository, filepath: Path) -> str:
    try:
        return filepath.resolve().relative_to(repo.root.resolve()).as_posix()
    except ValueError:
        return filepath.as_posix()

def add_file(repo: Repository, filepath: Path | str) -> StagingEntry:
    filepath = Path(filepath)
    if not filepath.is_file():
        raise SourceFileNotFound(f"file {filepath} does not exist")
    try:
        content = filepath.read_bytes()
    except OSError as e:
        raise IOFailure(f"failed to read {filepath}: {e}") from e
    file_hash = put_object(repo, content)
    return stage(repo, staged_path(repo, filepath), file_hash)
