"""Prompt token rendering — pure formatting of branch and status summaries."""

from __future__ import annotations

import enum
from typing import Callable

import click

from models import BranchStatus, Divergence, RepoStatus, StatusCategory


class Color(str, enum.Enum):
    """Semantic colors a token can carry."""

    GREEN = "green"
    RED = "red"
    BLUE = "blue"
    YELLOW = "yellow"
    MAGENTA = "magenta"


Styler = Callable[[str, Color], str]

# (category, letter, color) in output order
STATUS_TOKENS: tuple[tuple[StatusCategory, str, Color], ...] = (
    (StatusCategory.NEW_STAGED, "N", Color.GREEN),
    (StatusCategory.MODIFIED_STAGED, "M", Color.GREEN),
    (StatusCategory.RENAMED_STAGED, "R", Color.GREEN),
    (StatusCategory.DELETED_STAGED, "D", Color.GREEN),
    (StatusCategory.MODIFIED, "M", Color.RED),
    (StatusCategory.RENAMED, "R", Color.RED),
    (StatusCategory.DELETED, "D", Color.RED),
    (StatusCategory.UNTRACKED, "U", Color.BLUE),
)


def ansi_style(text: str, color: Color) -> str:
    """Wrap text in ANSI color codes."""
    return click.style(text, fg=color.value)


def plain_style(text: str, color: Color) -> str:
    return text


def render_local(local: Divergence | None, style: Styler) -> str:
    """Render divergence from the local mainline.

    No comparator and an in-sync comparator both render as the empty marker.
    """
    if local is not None:
        ahead, behind = local.ahead, local.behind
        if ahead > 0 and behind > 0:
            return f"{style('↔', Color.MAGENTA)}{ahead}{behind}"
        if ahead > 0:
            return f"{style('←', Color.MAGENTA)}{ahead}"
        if behind > 0:
            return f"{style('→', Color.MAGENTA)}{behind}"
    return style("⦰", Color.RED)


def render_upstream(upstream: Divergence | None, style: Styler) -> str:
    """Render divergence from the upstream tracking ref."""
    if upstream is None:
        return style("⚡", Color.RED)
    ahead, behind = upstream.ahead, upstream.behind
    if ahead > 0 and behind > 0:
        return f"{style('⇵', Color.YELLOW)}{ahead}{behind}"
    if ahead > 0:
        return f"{style('↓', Color.RED)}{ahead}"
    if behind > 0:
        return f"{style('↑', Color.GREEN)}{behind}"
    return "≡"


def render_branch(branch: BranchStatus, style: Styler) -> str:
    return branch.name + render_local(branch.local, style) + render_upstream(branch.upstream, style)


def render_status(status: RepoStatus, style: Styler) -> str:
    """Render non-zero counters as ``{count}{letter}`` tokens, no separators."""
    tokens = []
    for category, letter, color in STATUS_TOKENS:
        count = status.count(category)
        if count:
            tokens.append(f"{count}{style(letter, color)}")
    return "".join(tokens)


def render_prompt(branch: BranchStatus, status: RepoStatus, style: Styler) -> str:
    """Branch segment followed by status segment."""
    return render_branch(branch, style) + render_status(status, style)
