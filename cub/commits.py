import logging
from datetime import datetime, timezone
from typing import Iterator

from pydantic import ValidationError

from .config import get_author
from .errors import CorruptRecord
from .models import Commit
from .objects import get_object, put_object
from .repo_utils import Repository
from .staging import clear_index

logger = logging.getLogger(__name__)

def format_timestamp(when: datetime) -> str:
    # 2024-05-01T12:00:00.000Z
    when = when.astimezone(timezone.utc)
    return when.isoformat(timespec="milliseconds").replace("+00:00", "Z")

def serialize_commit(commit_info: Commit) -> bytes:
    return commit_info.model_dump_json().encode("utf-8")

def get_commit(repo: Repository, commit_hash: str) -> Commit:
    raw = get_object(repo, commit_hash)
    try:
        return Commit.model_validate_json(raw)
    except ValidationError as e:
        raise CorruptRecord(f"object {commit_hash} is not a valid commit: {e}") from e

def commit(
    repo: Repository,
    message: str,
    *,
    author: str | None = None,
    now: datetime | None = None,
) -> str:
    """Record the staged files as a new commit on top of HEAD.

    The index is read as-is, so an empty index yields a commit with no
    files. HEAD moves to the new commit before the index is cleared.
    Returns the new commit's digest.
    """
    staging_info = repo.load_index()
    parent = repo.load_head()
    commit_info = Commit(
        timestamp=format_timestamp(now or datetime.now(timezone.utc)),
        message=message,
        files=staging_info,
        parent=parent,
        author=author or get_author(),
    )
    commit_hash = put_object(repo, serialize_commit(commit_info))
    repo.save_head(commit_hash)
    clear_index(repo)
    logger.debug(
        "committed %s (parent=%s, %d files)", commit_hash, parent, len(staging_info)
    )
    return commit_hash

def iter_log(repo: Repository) -> Iterator[tuple[str, Commit]]:
    """Walk the chain from HEAD through parent pointers, newest first.

    A missing or corrupt commit stops the walk with an error.
    """
    commit_hash = repo.load_head()
    while commit_hash:
        commit_info = get_commit(repo, commit_hash)
        logger.debug("log visiting %s", commit_hash)
        yield commit_hash, commit_info
        commit_hash = commit_info.parent

def log(repo: Repository) -> list[tuple[str, Commit]]:
    return list(iter_log(repo))
