"""Prompt configuration and repository discovery — walks upward for a git repository."""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)

DEFAULT_MAINLINE = "master"
DEFAULT_MAINLINE_GLYPH = "🅼"
GIT_TIMEOUT_SECONDS = 5

_TRUTHY = {"1", "true", "yes", "on"}


class GitCommandError(Exception):
    """A git query against the repository failed."""

    def __init__(self, args: list[str], returncode: int | None, stderr: str = "") -> None:
        self.git_args = args
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr or f"exit status {returncode}"
        super().__init__(f"git {' '.join(args)}: {detail}")


@dataclass(frozen=True)
class GitResult:
    """Exit status and stripped stdout of a git invocation."""

    returncode: int
    stdout: str


@dataclass(frozen=True)
class PromptConfig:
    """Settings for one prompt rendering."""

    mainline_branch: str = DEFAULT_MAINLINE
    mainline_glyph: str = DEFAULT_MAINLINE_GLYPH
    short_names: bool = False
    fail_silent: bool = False
    color: bool = True
    log_level: str = "WARNING"

    @property
    def mainline_ref(self) -> str:
        return f"refs/heads/{self.mainline_branch}"


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in _TRUTHY


def get_mainline_branch(override: str | None = None) -> str:
    """Get the branch used as the local comparison baseline.

    Priority: override > PROMPT_STATUS_MAINLINE env var > master
    """
    if override:
        return override
    env_mainline = os.getenv("PROMPT_STATUS_MAINLINE")
    if env_mainline:
        return env_mainline
    return DEFAULT_MAINLINE


def load_config(environ: Mapping[str, str] | None = None) -> PromptConfig:
    """Build a PromptConfig from PROMPT_STATUS_* environment variables."""
    env = os.environ if environ is None else environ

    no_color = bool(env.get("NO_COLOR")) or _flag(env.get("PROMPT_STATUS_NO_COLOR"))
    return PromptConfig(
        mainline_branch=get_mainline_branch(env.get("PROMPT_STATUS_MAINLINE")),
        mainline_glyph=env.get("PROMPT_STATUS_MAINLINE_GLYPH") or DEFAULT_MAINLINE_GLYPH,
        short_names=_flag(env.get("PROMPT_STATUS_SHORT_NAMES")),
        fail_silent=_flag(env.get("PROMPT_STATUS_FAIL_SILENT")),
        color=not no_color,
        log_level=(env.get("PROMPT_STATUS_LOG_LEVEL") or "WARNING").upper(),
    )


def run_git(repo_path: Path, args: list[str]) -> str | None:
    """Run a git command in a repo directory, returning stdout or None on error."""
    try:
        result = subprocess.run(
            ["git", "-C", str(repo_path)] + args,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT_SECONDS,
        )
        if result.returncode == 0:
            return result.stdout.strip()
        return None
    except (subprocess.TimeoutExpired, FileNotFoundError):
        return None


def run_git_checked(
    repo_path: Path, args: list[str], allowed: tuple[int, ...] = ()
) -> GitResult:
    """Run a git command whose failure is fatal.

    Exit codes listed in ``allowed`` are expected outcomes and are returned
    to the caller; any other non-zero exit raises GitCommandError.
    """
    try:
        result = subprocess.run(
            ["git", "-C", str(repo_path)] + args,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT_SECONDS,
        )
    except subprocess.TimeoutExpired as e:
        raise GitCommandError(args, None, f"timed out after {GIT_TIMEOUT_SECONDS}s") from e
    except FileNotFoundError as e:
        raise GitCommandError(args, None, "git executable not found") from e

    if result.returncode != 0 and result.returncode not in allowed:
        raise GitCommandError(args, result.returncode, result.stderr.strip())
    return GitResult(returncode=result.returncode, stdout=result.stdout.strip("\n"))


def find_repo_root(start: Path) -> Path | None:
    """Find the working tree of the repository containing ``start``.

    Discovery is left to git, so a stray or stale .git entry that git does
    not accept as a repository counts as no repository at all.
    """
    toplevel = run_git(start, ["rev-parse", "--show-toplevel"])
    if not toplevel:
        logger.debug("No repository found above %s", start)
        return None
    root = Path(toplevel)
    logger.debug("Found repository root at %s", root)
    return root
