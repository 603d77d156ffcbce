import hashlib
import logging

from .errors import IOFailure, ObjectNotFound
from .repo_utils import Repository

logger = logging.getLogger(__name__)

def hash_content(content: bytes) -> str:
    return hashlib.sha1(content).hexdigest()

def has_object(repo: Repository, digest: str) -> bool:
    return (repo.objects_path / digest).is_file()

def put_object(repo: Repository, content: bytes) -> str:
    if not isinstance(content, bytes):
        raise TypeError(f"Expected bytes, got {type(content).__name__}")
    digest = hash_content(content)
    if has_object(repo, digest):
        logger.debug("object %s already stored", digest)
        return digest
    try:
        (repo.objects_path / digest).write_bytes(content)
    except OSError as e:
        raise IOFailure(f"failed to write object {digest}: {e}") from e
    logger.debug("stored object %s (%d bytes)", digest, len(content))
    return digest

def get_object(repo: Repository, digest: str) -> bytes:
    object_path = repo.objects_path / digest
    # a digest with a separator would escape the flat objects directory
    if not digest or "/" in digest or "\\" in digest or not object_path.is_file():
        raise ObjectNotFound(digest)
    try:
        return object_path.read_bytes()
    except OSError as e:
        raise IOFailure(f"failed to read object {digest}: {e}") from e

def read_text_object(repo: Repository, digest: str) -> str:
    return get_object(repo, digest).decode("utf-8", errors="replace")
