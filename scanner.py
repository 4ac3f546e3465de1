"""Git repo scanner — collects branch divergence and working-tree status for the prompt."""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Iterator

from config import PromptConfig, run_git, run_git_checked
from models import BranchStatus, Divergence, EntryFlag, RepoStatus, StatusCategory

logger = logging.getLogger(__name__)

DETACHED = "detached"

_INDEX_FLAGS = {
    "A": EntryFlag.INDEX_NEW,
    "C": EntryFlag.INDEX_NEW,
    "M": EntryFlag.INDEX_MODIFIED,
    "D": EntryFlag.INDEX_DELETED,
    "R": EntryFlag.INDEX_RENAMED,
    "T": EntryFlag.INDEX_TYPECHANGE,
}

_WORKTREE_FLAGS = {
    "A": EntryFlag.WT_NEW,  # intent-to-add
    "M": EntryFlag.WT_MODIFIED,
    "D": EntryFlag.WT_DELETED,
    "R": EntryFlag.WT_RENAMED,
    "T": EntryFlag.WT_TYPECHANGE,
}

# First match wins. An entry modified in both index and worktree counts as staged only.
_PRECEDENCE: tuple[tuple[EntryFlag, StatusCategory], ...] = (
    (EntryFlag.INDEX_MODIFIED, StatusCategory.MODIFIED_STAGED),
    (EntryFlag.WT_MODIFIED, StatusCategory.MODIFIED),
    (EntryFlag.INDEX_NEW, StatusCategory.NEW_STAGED),
    (EntryFlag.WT_NEW, StatusCategory.UNTRACKED),
    (EntryFlag.INDEX_RENAMED, StatusCategory.RENAMED_STAGED),
    (EntryFlag.WT_RENAMED, StatusCategory.RENAMED),
    (EntryFlag.INDEX_DELETED, StatusCategory.DELETED_STAGED),
    (EntryFlag.WT_DELETED, StatusCategory.DELETED),
)


def parse_status_flags(xy: str) -> EntryFlag:
    """Convert a porcelain XY pair (index side, worktree side) into entry flags."""
    flags = EntryFlag.NONE
    if len(xy) != 2:
        return flags
    flags |= _INDEX_FLAGS.get(xy[0], EntryFlag.NONE)
    flags |= _WORKTREE_FLAGS.get(xy[1], EntryFlag.NONE)
    return flags


def parse_porcelain(output: str) -> Iterator[EntryFlag]:
    """Yield the flags of each entry in ``git status --porcelain=v2 -z`` output.

    Records are NUL-separated. Rename/copy records ("2") are followed by an
    extra record holding the original path, which is skipped.
    """
    records = iter(output.split("\0"))
    for record in records:
        if not record:
            continue
        kind = record[0]
        if kind == "1":
            yield parse_status_flags(record[2:4])
        elif kind == "2":
            next(records, None)
            yield parse_status_flags(record[2:4])
        elif kind == "u":
            yield EntryFlag.CONFLICTED
        elif kind == "?":
            yield EntryFlag.WT_NEW
        # "#" headers and "!" ignored entries carry no status


def classify_entry(flags: EntryFlag) -> StatusCategory | None:
    """Pick the single category an entry is counted under, or None."""
    for flag, category in _PRECEDENCE:
        if flag in flags:
            return category
    return None


def analyze_status(path: Path) -> RepoStatus:
    """Scan index and working tree (untracked included) and count entries per category."""
    # --no-optional-locks keeps status from refreshing and rewriting the index
    result = run_git_checked(
        path,
        ["--no-optional-locks", "status", "--porcelain=v2", "-z", "--untracked-files=normal", "--ignored=no"],
    )

    counts: Counter[StatusCategory] = Counter()
    for flags in parse_porcelain(result.stdout):
        category = classify_entry(flags)
        if category is not None:
            counts[category] += 1

    return RepoStatus.from_counts(counts)


def ahead_behind(path: Path, local: str, other: str) -> Divergence | None:
    """Count commits reachable only from ``local`` and only from ``other``."""
    output = run_git(path, ["rev-list", "--left-right", "--count", f"{local}...{other}"])
    if not output:
        return None
    parts = output.split()
    if len(parts) == 2:
        try:
            return Divergence(ahead=int(parts[0]), behind=int(parts[1]))
        except ValueError:
            pass
    return None


def _resolve_commit(path: Path, ref: str) -> str | None:
    return run_git(path, ["rev-parse", "-q", "--verify", f"{ref}^{{commit}}"]) or None


def _upstream_ref(path: Path, branch_ref: str) -> str | None:
    """Name of the upstream tracking ref configured for ``branch_ref``."""
    return run_git(path, ["for-each-ref", "--format=%(upstream)", branch_ref]) or None


def _display_name(ref: str, config: PromptConfig) -> str:
    if ref == config.mainline_ref:
        return config.mainline_glyph
    if config.short_names and ref.startswith("refs/heads/"):
        return ref[len("refs/heads/") :]
    return ref


def analyze_branch(path: Path, config: PromptConfig) -> BranchStatus:
    """Derive the current branch and its divergence from mainline and upstream.

    An unborn or detached HEAD is a normal outcome reported as "detached"
    with no comparators. Comparator failures leave the field as None.
    Raises GitCommandError when HEAD itself cannot be queried.
    """
    head = run_git_checked(path, ["rev-parse", "-q", "--verify", "HEAD"], allowed=(1,))
    if head.returncode != 0 or not head.stdout:
        logger.debug("HEAD has no commit yet")
        return BranchStatus(name=DETACHED)
    head_sha = head.stdout.strip()

    symbolic = run_git_checked(path, ["symbolic-ref", "-q", "HEAD"], allowed=(1,))
    if symbolic.returncode != 0 or not symbolic.stdout:
        logger.debug("HEAD is detached at %s", head_sha)
        return BranchStatus(name=DETACHED)
    branch_ref = symbolic.stdout.strip()

    local = None
    mainline_sha = _resolve_commit(path, config.mainline_ref)
    if mainline_sha:
        local = ahead_behind(path, head_sha, mainline_sha)
    if local is None:
        logger.debug("No local comparison against %s", config.mainline_ref)

    upstream = None
    upstream_ref = _upstream_ref(path, branch_ref)
    if upstream_ref:
        upstream_sha = _resolve_commit(path, upstream_ref)
        if upstream_sha:
            upstream = ahead_behind(path, head_sha, upstream_sha)
    if upstream is None:
        logger.debug("No upstream comparison for %s", branch_ref)

    return BranchStatus(name=_display_name(branch_ref, config), local=local, upstream=upstream)
