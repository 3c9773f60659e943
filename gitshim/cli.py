"""Click CLI entry point."""

import json
import logging
import os
import sys
from dataclasses import dataclass, field

import click

from .config import GitshimConfig, load_config
from .git import GitError
from .output import (
    dim,
    error,
    file_path_style,
    info,
    state_style,
    status_code,
    success,
    warning,
)
from .repo import Repo
from .status import StatusParseError, format_status_entry

# Exit codes following common conventions:
# 0 = success
# 1 = user input error (bad args, invalid ref, not a repository)
# 2 = operational error (conflict, malformed git output)
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1
EXIT_OPERATIONAL_ERROR = 2


@dataclass
class CliContext:
    """Options shared by all commands, with the repo opened lazily."""

    repo_path: str
    config: GitshimConfig

    _repo: Repo | None = field(default=None, repr=False)

    @property
    def repo(self) -> Repo:
        if self._repo is None:
            try:
                self._repo = Repo.open(
                    self.repo_path, echo_stderr=not self.config.quiet
                )
            except GitError as e:
                fail(e, EXIT_USER_ERROR)
        return self._repo


def fail(e: Exception, code: int) -> None:
    """Report an error and exit."""
    click.echo(f"{error('Error:')} {e}", err=True)
    sys.exit(code)


def _get_version() -> str:
    """Get version from package metadata."""
    from importlib.metadata import version

    return version("gitshim")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=_get_version(), prog_name="gitshim")
@click.option(
    "-C",
    "--repo",
    "repo_path",
    default="",
    help="Run as if started in this directory (default: current directory)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log git invocations")
@click.option("-q", "--quiet", is_flag=True, help="Don't echo git's error output")
@click.pass_context
def cli(ctx: click.Context, repo_path: str, verbose: bool, quiet: bool) -> None:
    """Inspect a git repository through the git command line."""
    # https://no-color.org/ - disable if NO_COLOR is set (any non-empty value)
    if os.environ.get("NO_COLOR"):
        ctx.color = False

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config = load_config()
    if quiet:
        config = config.model_copy(update={"quiet": True})
    ctx.obj = CliContext(repo_path=repo_path, config=config)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def status(obj: CliContext, as_json: bool) -> None:
    """Show changed tracked files."""
    try:
        entries = obj.repo.status()
    except GitError as e:
        fail(e, EXIT_USER_ERROR)
    except StatusParseError as e:
        fail(e, EXIT_OPERATIONAL_ERROR)

    if as_json:
        click.echo(json.dumps([entry.model_dump(mode="json") for entry in entries]))
        return

    if not entries:
        click.echo(dim("Nothing to commit."))
        return

    for entry in entries:
        line = format_status_entry(entry)
        index = status_code(entry.index_status, line[0], index=True)
        work_tree = status_code(entry.work_tree_status, line[1], index=False)
        click.echo(f"{index}{work_tree} {file_path_style(line[3:])}")


@cli.command()
@click.pass_obj
def state(obj: CliContext) -> None:
    """Show the operation in progress (rebase, merge, cherry-pick, ...)."""
    try:
        current = obj.repo.state()
    except OSError as e:
        fail(e, EXIT_OPERATIONAL_ERROR)
    click.echo(state_style(current))


@cli.command("rev-parse")
@click.argument("ref")
@click.option("--abbrev", is_flag=True, help="Show the short symbolic name")
@click.pass_obj
def rev_parse(obj: CliContext, ref: str, abbrev: bool) -> None:
    """Resolve REF to an object id."""
    try:
        if abbrev:
            click.echo(obj.repo.rev_parse_abbrev(ref))
        else:
            click.echo(obj.repo.rev_parse(ref))
    except GitError as e:
        fail(e, EXIT_USER_ERROR)


@cli.command()
@click.argument("commit", default="HEAD")
@click.pass_obj
def parents(obj: CliContext, commit: str) -> None:
    """List the parents of COMMIT (default: HEAD)."""
    try:
        for parent in obj.repo.parents(commit):
            click.echo(parent)
    except GitError as e:
        fail(e, EXIT_USER_ERROR)


@cli.command("cherry-pick")
@click.argument("commit")
@click.pass_obj
def cherry_pick(obj: CliContext, commit: str) -> None:
    """Cherry-pick COMMIT onto the current branch."""
    repo = obj.repo
    try:
        oid = repo.rev_parse(commit)
        picked = repo.cherry_pick(oid)
    except GitError as e:
        fail(e, EXIT_USER_ERROR)

    if not picked:
        click.echo(
            f"{warning('Conflict:')} cherry-pick of {info(oid)} stopped", err=True
        )
        click.echo(
            dim("→ Resolve the conflicts, then run 'git cherry-pick --continue'"),
            err=True,
        )
        sys.exit(EXIT_OPERATIONAL_ERROR)

    click.echo(f"{success('✓')} Picked {info(oid)}")


@cli.command("cherry-pick-head")
@click.pass_obj
def cherry_pick_head(obj: CliContext) -> None:
    """Show the commit of the cherry-pick in progress."""
    try:
        click.echo(obj.repo.cherry_pick_head())
    except FileNotFoundError:
        click.echo(f"{error('Error:')} no cherry-pick in progress", err=True)
        sys.exit(EXIT_OPERATIONAL_ERROR)
    except OSError as e:
        fail(e, EXIT_OPERATIONAL_ERROR)


def main() -> None:
    cli()
