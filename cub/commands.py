from pathlib import Path
from typing import Callable

from .commits import commit as create_commit, iter_log
from .diffing import show_commit
from .errors import AlreadyInitialized, CubError
from .models import DiffKind
from .repo_utils import Repository, find_repo_root
from .staging import add_file

SEGMENT_PREFIXES = {
    DiffKind.ADDED: "++ ",
    DiffKind.REMOVED: "-- ",
    DiffKind.UNCHANGED: "  ",
}

def map_command(command: str) -> Callable:
    commandsMap = {
        "init": init,
        "add": add,
        "commit": commit,
        "log": log,
        "show": show,
        "status": status,
    }
    if command not in commandsMap:
        raise CubError(f"Unknown command: {command}")
    return commandsMap[command]

def init(args):
    existing_root = find_repo_root()
    if existing_root is not None:
        print(f"Repository is already initialized in {existing_root}.")
        return
    repo = Repository(Path.cwd())
    try:
        repo.init()
    except AlreadyInitialized as e:
        print(e)
        return
    print("Initialized empty cub repository in " + str(repo.repo_path))

def add(args):
    repo = Repository.discover()
    entry = add_file(repo, args.path)
    print(f"Added {entry.path}")

def commit(args):
    repo = Repository.discover()
    commit_hash = create_commit(repo, args.message)
    print(f"Commit successfully created: {commit_hash}")

def log(args):
    repo = Repository.discover()
    for commit_hash, commit_info in iter_log(repo):
        print("*" * 72)
        print(f"Commit: {commit_hash}")
        print(f"Date: {commit_info.timestamp}")
        print(f"Author: {commit_info.author}")
        print(f"\n    {commit_info.message}\n")

def render_segment(kind: DiffKind, text: str) -> str:
    prefix = SEGMENT_PREFIXES[kind]
    return "".join(prefix + line for line in text.splitlines(keepends=True)).rstrip("\n")

def show(args):
    repo = Repository.discover()
    changes = show_commit(repo, args.commit_hash)
    print(f"Changes in commit {args.commit_hash}:")
    for change in changes:
        print(f"\nFile: {change.path}")
        print(change.content)
        if change.status == "first-commit":
            print("First commit.")
        elif change.status == "new-file":
            print("New file in this commit.")
        else:
            print("\nDiff:")
            for segment in change.segments:
                print(render_segment(segment.kind, segment.text))

def status(args):
    repo = Repository.discover()
    head = repo.load_head()
    print(f"HEAD: {head}" if head else "No commits yet.")
    staging_info = repo.load_index()
    if not staging_info:
        print("No files staged.")
        return
    print("Staged files:")
    for entry in staging_info:
        print(f" - {entry.path} ({entry.hash})")
