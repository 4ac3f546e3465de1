"""prompt-status — one-line git branch and working-tree summary for shell prompts."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from config import GitCommandError, PromptConfig, find_repo_root, load_config
from render import Styler, ansi_style, plain_style, render_prompt
from scanner import analyze_branch, analyze_status

logger = logging.getLogger(__name__)


class PromptError(Exception):
    """A repository query needed for the prompt failed."""

    def __init__(self, operation: str, cause: GitCommandError) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation}: {cause}")


def build_prompt(cwd: Path, config: PromptConfig, style: Styler) -> str:
    """Render the prompt token for the repository containing ``cwd``.

    Returns an empty string outside a repository. Raises PromptError when the
    branch or status query fails.
    """
    root = find_repo_root(cwd)
    if root is None:
        return ""

    try:
        branch = analyze_branch(root, config)
    except GitCommandError as e:
        raise PromptError("failed to analyze branch", e) from e

    try:
        status = analyze_status(root)
    except GitCommandError as e:
        raise PromptError("failed to get status", e) from e

    # Output is built in full before anything is written
    return render_prompt(branch, status, style)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


@click.command()
def main() -> None:
    """Print the git prompt token for the current directory."""
    config = load_config()
    _configure_logging(config.log_level)
    style = ansi_style if config.color else plain_style

    try:
        prompt = build_prompt(Path.cwd(), config, style)
    except PromptError as e:
        if config.fail_silent:
            logger.warning("Suppressed prompt failure: %s", e)
            return
        raise click.ClickException(str(e)) from e

    click.echo(prompt, nl=False, color=config.color)


if __name__ == "__main__":
    main()
