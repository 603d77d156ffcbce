from enum import Enum
from typing import Literal, TypeAlias

from pydantic import BaseModel, ConfigDict

class StagingEntry(BaseModel):
    path: str
    hash: str

class Commit(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: str
    message: str
    files: list[StagingEntry]
    parent: str | None
    author: str

class DiffKind(str, Enum):
    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"

class DiffSegment(BaseModel):
    kind: DiffKind
    text: str

class FileChange(BaseModel):
    path: str
    hash: str
    content: str
    status: Literal["first-commit", "new-file", "modified"]
    segments: list[DiffSegment] = []

StagingInfo: TypeAlias = list[StagingEntry]
