"""Fixtures for building throwaway git repositories."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable

import pytest

GitRunner = Callable[..., str]


@pytest.fixture
def git_env(monkeypatch, tmp_path: Path) -> None:
    """Isolate git from the user's configuration."""
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")


@pytest.fixture
def repo(tmp_path: Path, git_env) -> Path:
    """An empty repository whose unborn branch is master."""
    path = tmp_path / "repo"
    path.mkdir()
    subprocess.run(["git", "init", "-q", str(path)], check=True)
    subprocess.run(["git", "-C", str(path), "symbolic-ref", "HEAD", "refs/heads/master"], check=True)
    return path


@pytest.fixture
def git(repo: Path) -> GitRunner:
    """Run git in the test repository and return its stdout."""

    def run(*args: str) -> str:
        result = subprocess.run(
            ["git", "-C", str(repo), "-c", "commit.gpgsign=false", *args],
            check=True,
            capture_output=True,
            text=True,
        )
        return result.stdout.strip()

    return run


@pytest.fixture
def commit(git: GitRunner) -> Callable[[str], None]:
    def make(message: str) -> None:
        git("commit", "-q", "--allow-empty", "-m", message)

    return make
