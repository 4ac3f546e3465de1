"""Unit tests for prompt token rendering."""

import pytest

from models import BranchStatus, Divergence, RepoStatus
from render import (
    Color,
    ansi_style,
    plain_style,
    render_branch,
    render_local,
    render_prompt,
    render_status,
    render_upstream,
)


def tagged_style(text: str, color: Color) -> str:
    """Make the color of each styled fragment visible in the output."""
    return f"<{color.value}>{text}</{color.value}>"


class TestRenderLocal:
    def test_diverged(self) -> None:
        assert render_local(Divergence(ahead=2, behind=5), plain_style) == "↔25"

    def test_ahead_only(self) -> None:
        assert render_local(Divergence(ahead=3, behind=0), plain_style) == "←3"

    def test_behind_only(self) -> None:
        assert render_local(Divergence(ahead=0, behind=4), plain_style) == "→4"

    def test_in_sync_and_absent_render_the_same(self) -> None:
        in_sync = render_local(Divergence(ahead=0, behind=0), tagged_style)
        assert in_sync == render_local(None, tagged_style) == "<red>⦰</red>"

    def test_only_glyph_is_styled(self) -> None:
        assert render_local(Divergence(ahead=1, behind=2), tagged_style) == "<magenta>↔</magenta>12"


class TestRenderUpstream:
    def test_diverged_keeps_ahead_then_behind(self) -> None:
        assert render_upstream(Divergence(ahead=3, behind=1), tagged_style) == "<yellow>⇵</yellow>31"

    def test_ahead_only(self) -> None:
        assert render_upstream(Divergence(ahead=2, behind=0), tagged_style) == "<red>↓</red>2"

    def test_behind_only(self) -> None:
        assert render_upstream(Divergence(ahead=0, behind=7), tagged_style) == "<green>↑</green>7"

    def test_in_sync_is_unstyled(self) -> None:
        assert render_upstream(Divergence(ahead=0, behind=0), tagged_style) == "≡"

    def test_absent_warns(self) -> None:
        assert render_upstream(None, tagged_style) == "<red>⚡</red>"


def test_render_branch_concatenates_name_local_upstream() -> None:
    branch = BranchStatus(
        name="refs/heads/feature",
        local=None,
        upstream=Divergence(ahead=3, behind=1),
    )
    assert render_branch(branch, plain_style) == "refs/heads/feature⦰⇵31"


def test_render_branch_detached() -> None:
    assert render_branch(BranchStatus(name="detached"), plain_style) == "detached⦰⚡"


def test_render_status_clean_is_empty() -> None:
    assert render_status(RepoStatus(), plain_style) == ""


def test_render_status_fixed_order_and_colors() -> None:
    status = RepoStatus(
        untracked=1,
        deleted=2,
        renamed=3,
        modified=4,
        deleted_staged=5,
        renamed_staged=6,
        modified_staged=7,
        new_staged=8,
    )
    assert render_status(status, tagged_style) == (
        "8<green>N</green>"
        "7<green>M</green>"
        "6<green>R</green>"
        "5<green>D</green>"
        "4<red>M</red>"
        "3<red>R</red>"
        "2<red>D</red>"
        "1<blue>U</blue>"
    )


def test_render_status_skips_zero_counters() -> None:
    assert render_status(RepoStatus(new_staged=2, untracked=1), plain_style) == "2N1U"


def test_render_prompt_branch_then_status() -> None:
    branch = BranchStatus(name="🅼", local=Divergence(ahead=0, behind=0), upstream=Divergence(ahead=0, behind=0))
    assert render_prompt(branch, RepoStatus(modified=1), plain_style) == "🅼⦰≡1M"


def test_render_is_idempotent() -> None:
    branch = BranchStatus(name="main", local=Divergence(ahead=1, behind=0))
    status = RepoStatus(modified_staged=2)
    assert render_prompt(branch, status, ansi_style) == render_prompt(branch, status, ansi_style)


@pytest.mark.parametrize("color", list(Color))
def test_ansi_style_wraps_text(color: Color) -> None:
    styled = ansi_style("x", color)
    assert styled.startswith("\x1b[")
    assert "x" in styled
    assert styled.endswith("\x1b[0m")


def test_plain_style_is_identity() -> None:
    assert plain_style("⚡", Color.RED) == "⚡"
