import logging

from .commits import get_commit
from .models import DiffKind, DiffSegment, FileChange, StagingEntry
from .objects import read_text_object
from .repo_utils import Repository

logger = logging.getLogger(__name__)

def split_lines(text: str) -> list[str]:
    return text.splitlines(keepends=True)

def lcs_table(old_lines: list[str], new_lines: list[str]) -> list[list[int]]:
    # lengths[i][j] is the LCS length of old_lines[i:] and new_lines[j:]
    lengths = [[0] * (len(new_lines) + 1) for _ in range(len(old_lines) + 1)]
    for i in range(len(old_lines) - 1, -1, -1):
        for j in range(len(new_lines) - 1, -1, -1):
            if old_lines[i] == new_lines[j]:
                lengths[i][j] = lengths[i + 1][j + 1] + 1
            else:
                lengths[i][j] = max(lengths[i + 1][j], lengths[i][j + 1])
    return lengths

def line_opcodes(old_lines: list[str], new_lines: list[str]) -> list[tuple[DiffKind, str]]:
    """Per-line edit script along one longest common subsequence.

    Within each gap between matched lines, removals are listed before
    additions. Shared leading and trailing lines are matched up front so
    the LCS table only spans the region that actually changed.
    """
    prefix = 0
    while (
        prefix < len(old_lines)
        and prefix < len(new_lines)
        and old_lines[prefix] == new_lines[prefix]
    ):
        prefix += 1
    suffix = 0
    while (
        suffix < len(old_lines) - prefix
        and suffix < len(new_lines) - prefix
        and old_lines[-1 - suffix] == new_lines[-1 - suffix]
    ):
        suffix += 1

    head = [(DiffKind.UNCHANGED, line) for line in old_lines[:prefix]]
    tail = [(DiffKind.UNCHANGED, line) for line in old_lines[len(old_lines) - suffix:]]
    middle = middle_opcodes(
        old_lines[prefix:len(old_lines) - suffix],
        new_lines[prefix:len(new_lines) - suffix],
    )
    return head + middle + tail

def middle_opcodes(old_lines: list[str], new_lines: list[str]) -> list[tuple[DiffKind, str]]:
    lengths = lcs_table(old_lines, new_lines)
    ops: list[tuple[DiffKind, str]] = []
    removed: list[str] = []
    added: list[str] = []

    def flush_gap():
        ops.extend((DiffKind.REMOVED, line) for line in removed)
        ops.extend((DiffKind.ADDED, line) for line in added)
        removed.clear()
        added.clear()

    i = j = 0
    while i < len(old_lines) and j < len(new_lines):
        if old_lines[i] == new_lines[j]:
            flush_gap()
            ops.append((DiffKind.UNCHANGED, old_lines[i]))
            i += 1
            j += 1
        elif lengths[i + 1][j] >= lengths[i][j + 1]:
            removed.append(old_lines[i])
            i += 1
        else:
            added.append(new_lines[j])
            j += 1
    removed.extend(old_lines[i:])
    added.extend(new_lines[j:])
    flush_gap()
    return ops

def diff_lines(old_text: str, new_text: str) -> list[DiffSegment]:
    segments: list[DiffSegment] = []
    for kind, line in line_opcodes(split_lines(old_text), split_lines(new_text)):
        if segments and segments[-1].kind == kind:
            segments[-1].text += line
        else:
            segments.append(DiffSegment(kind=kind, text=line))
    return segments

def last_entries_by_path(files: list[StagingEntry]) -> dict[str, StagingEntry]:
    # later entries for the same path win
    return {entry.path: entry for entry in files}

def show_commit(repo: Repository, commit_hash: str) -> list[FileChange]:
    commit_info = get_commit(repo, commit_hash)
    parent_files = None
    if commit_info.parent is not None:
        parent_files = last_entries_by_path(get_commit(repo, commit_info.parent).files)

    changes = []
    for entry in commit_info.files:
        content = read_text_object(repo, entry.hash)
        change = FileChange(path=entry.path, hash=entry.hash, content=content, status="first-commit")
        if parent_files is not None:
            parent_entry = parent_files.get(entry.path)
            if parent_entry is None:
                change.status = "new-file"
            else:
                change.status = "modified"
                parent_content = read_text_object(repo, parent_entry.hash)
                change.segments = diff_lines(parent_content, content)
        changes.append(change)
    logger.debug("show %s: %d files", commit_hash, len(changes))
    return changes
