"""Pydantic models for branch and working-tree status summaries."""

from __future__ import annotations

import enum
from typing import Mapping

from pydantic import BaseModel, ConfigDict, NonNegativeInt


class EntryFlag(enum.Flag):
    """Per-entry status bits reported by a status scan."""

    NONE = 0
    INDEX_NEW = enum.auto()
    INDEX_MODIFIED = enum.auto()
    INDEX_DELETED = enum.auto()
    INDEX_RENAMED = enum.auto()
    INDEX_TYPECHANGE = enum.auto()
    WT_NEW = enum.auto()
    WT_MODIFIED = enum.auto()
    WT_DELETED = enum.auto()
    WT_RENAMED = enum.auto()
    WT_TYPECHANGE = enum.auto()
    CONFLICTED = enum.auto()


class StatusCategory(str, enum.Enum):
    """Bucket an entry is counted under. Values are RepoStatus field names."""

    NEW_STAGED = "new_staged"
    MODIFIED_STAGED = "modified_staged"
    RENAMED_STAGED = "renamed_staged"
    DELETED_STAGED = "deleted_staged"
    MODIFIED = "modified"
    RENAMED = "renamed"
    DELETED = "deleted"
    UNTRACKED = "untracked"


class Divergence(BaseModel):
    """Commits reachable from HEAD only (ahead) and from the comparator only (behind)."""

    model_config = ConfigDict(frozen=True)

    ahead: NonNegativeInt
    behind: NonNegativeInt


class BranchStatus(BaseModel):
    """Current branch and its divergence from the mainline and upstream."""

    name: str
    local: Divergence | None = None  # None when no mainline to compare against
    upstream: Divergence | None = None  # None when no upstream is configured


class RepoStatus(BaseModel):
    """Count of changed entries per category. Zero renders as nothing."""

    new_staged: NonNegativeInt = 0
    modified_staged: NonNegativeInt = 0
    renamed_staged: NonNegativeInt = 0
    deleted_staged: NonNegativeInt = 0
    modified: NonNegativeInt = 0
    renamed: NonNegativeInt = 0
    deleted: NonNegativeInt = 0
    untracked: NonNegativeInt = 0

    @classmethod
    def from_counts(cls, counts: Mapping[StatusCategory, int]) -> RepoStatus:
        return cls(**{category.value: n for category, n in counts.items()})

    def count(self, category: StatusCategory) -> int:
        return getattr(self, category.value)

    @property
    def is_clean(self) -> bool:
        return all(self.count(category) == 0 for category in StatusCategory)
