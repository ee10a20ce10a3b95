#!/usr/bin/env python3
from pathlib import Path
from typing import Optional

import click
from git import Repo
from git.exc import InvalidGitRepositoryError, NoSuchPathError
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import Config
from .errors import CommitLintError, ValidationFailure
from .graph import GitCommitGraph
from .observers import ConsoleLogObserver, FileLogObserver
from .orchestrator import ValidationOrchestrator, parse_push_input
from .reporter import format_report
from .resolver import parse_range

console = Console(stderr=True)


@click.command()
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file to use instead of .commit-msg-lint.yml in the repository root",
)
@click.option("--base-ref", help="Base ref or SHA to compare from")
@click.option("--head-ref", help="Head ref or SHA to compare to")
@click.option(
    "--range",
    "range_spec",
    metavar="BASE..HEAD",
    help="Commit range to check, as an alternative to --base-ref/--head-ref",
)
@click.option(
    "--main-ref",
    help="Ref new branches are compared against (overrides config setting)",
)
@click.option(
    "--fail-fast/--no-fail-fast",
    default=None,
    help="Stop at the first violating commit (overrides config setting)",
)
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log the validation run (overrides config setting)",
)
@click.option("-v", "--verbose", is_flag=True, help="Show every checked commit")
@click.version_option(__version__, prog_name="commit-msg-lint")
@click.pass_context
def main(
    ctx: click.Context,
    path: Path,
    config_file: Optional[Path],
    base_ref: Optional[str],
    head_ref: Optional[str],
    range_spec: Optional[str],
    main_ref: Optional[str],
    fail_fast: Optional[bool],
    log_file: Optional[Path],
    verbose: bool,
):
    """
    Validate commit messages against the rules in .commit-msg-lint.yml.

    Without --base-ref/--head-ref/--range the ref updates of a git pre-push
    hook are read from stdin. With --head-ref alone the base defaults to the
    configured main ref.

    Prints nothing and exits with status 0 when every commit passes.
    """
    if range_spec and (base_ref or head_ref):
        raise click.UsageError("--range cannot be combined with --base-ref/--head-ref")
    if base_ref and not head_ref:
        raise click.UsageError("--head-ref is required when using --base-ref")

    try:
        repo_path = path.absolute()

        # Load configuration
        config = Config.load(repo_path, config_file)

        # Command line options override config
        if main_ref is not None:
            config.settings.main_ref = main_ref
        if fail_fast is not None:
            config.settings.fail_fast = fail_fast
        if log_file is not None:
            config.settings.log_file = str(log_file.absolute())

        ruleset = config.compile()

        repo = Repo(repo_path)
        validator = ValidationOrchestrator(GitCommitGraph(repo), ruleset)

        if verbose:
            validator.add_observer(ConsoleLogObserver(console))
        if ruleset.log_file:
            # relative paths from the config are relative to the repository
            validator.add_observer(FileLogObserver(str(repo_path / ruleset.log_file)))

        if range_spec:
            validator.validate_range(*parse_range(range_spec))
        elif head_ref:
            validator.validate_range(base_ref or ruleset.main_ref, head_ref)
        else:
            validator.validate_push(parse_push_input(click.get_text_stream("stdin")))
    except ValidationFailure as e:
        console.print(
            format_report(e), markup=False, emoji=False, highlight=False, soft_wrap=True
        )
        ctx.exit(1)
    except CommitLintError as e:
        console.print(
            f"[red]Error: {escape(str(e))}[/red]",
            emoji=False,
            highlight=False,
            soft_wrap=True,
        )
        ctx.exit(1)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        console.print(
            f"[red]Error: failed to open git repository: {escape(str(e))}[/red]",
            soft_wrap=True,
        )
        ctx.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        ctx.exit(130)


if __name__ == "__main__":
    main()
