"""CLI entry point: asmcheck.

Usage:
    asmcheck /path/to/bin                 # check one folder
    asmcheck -r /path/to/bin              # include subfolders
    asmcheck -r -x /path/to/bin           # also report cross-references
    asmcheck -r /path/to/bin --json       # machine-readable report
"""

from __future__ import annotations

from pathlib import Path

import click
import structlog

from asmcheck.core.config import SCRIPT_FORMATS, CheckerConfig
from asmcheck.core.logging import setup_logging
from asmcheck.engines.assembly_checker.checker import check
from asmcheck.engines.assembly_checker.models import ExitStatus
from asmcheck.engines.assembly_checker.report import render_json, render_text
from asmcheck.exceptions import EnumerationError, MissingRootError

log = structlog.get_logger("asmcheck.cli")

EXIT_CODES_HELP = (
    "\b\n"
    "Exit status:\n"
    "  0 = no problems found\n"
    "  1 = no root folder specified or invalid usage\n"
    "  2 = file search error\n"
    "  3 = multiple version references found\n"
    "  4 = recoverable errors found\n"
    "  5 = unrecoverable errors found"
)


def _split_tokens(tokens: tuple[str, ...]) -> tuple[Path, list[str], list[str]]:
    """Pick the root folder out of the leftover tokens.

    Tokens starting with ``-`` are unknown flags; the first other token is
    the root folder and anything after it is surplus.
    """
    flags: list[str] = []
    root: str | None = None
    surplus: list[str] = []
    for token in tokens:
        if token.startswith("-") and token != "-":
            flags.append(token)
        elif root is None:
            root = token
        else:
            surplus.append(token)
    if root is None:
        raise MissingRootError("No root folder specified.")
    return Path(root), flags, surplus


class CheckerCommand(click.Command):
    """Command whose usage errors exit with the usage status (1), not click's 2."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = int(ExitStatus.MISSING_ROOT)
            raise


@click.command(
    cls=CheckerCommand,
    context_settings={
        "ignore_unknown_options": True,
        "help_option_names": ["-h", "--help"],
    },
    epilog=EXIT_CODES_HELP,
)
@click.option("-r", "--recursive", is_flag=True, help="Check subfolders too")
@click.option(
    "-x",
    "--cross-check",
    is_flag=True,
    help="Report modules referenced with different versions by their siblings",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option(
    "--script",
    "script_path",
    envvar="ASMCHECK_SCRIPT",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Remediation script path (default: fix.bat / fix.sh in the current folder)",
)
@click.option(
    "--script-format",
    envvar="ASMCHECK_SCRIPT_FORMAT",
    default=None,
    type=click.Choice(SCRIPT_FORMATS),
    help="Remediation script dialect (default: bat on Windows, sh elsewhere)",
)
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def main(
    ctx: click.Context,
    recursive: bool,
    cross_check: bool,
    verbose: bool,
    as_json: bool,
    script_path: Path | None,
    script_format: str | None,
    tokens: tuple[str, ...],
) -> None:
    """Check that the assemblies under ROOT satisfy the versions their
    siblings and .config files ask for."""
    setup_logging(verbose)

    try:
        root, flags, surplus = _split_tokens(tokens)
    except MissingRootError as e:
        click.echo(str(e), err=True)
        click.echo(ctx.get_help(), err=True)
        ctx.exit(int(ExitStatus.MISSING_ROOT))

    if flags:
        log.warning("cli.unknown_flags_ignored", flags=flags)
    if surplus:
        log.warning("cli.extra_arguments_ignored", arguments=surplus)

    config = CheckerConfig(
        root=root,
        recursive=recursive,
        cross_check=cross_check,
        verbose=verbose,
        script_path=script_path,
        script_format=script_format or "",
    )

    try:
        outcome = check(config)
    except EnumerationError as e:
        click.echo(f"File search exception: {e}", err=True)
        click.echo("Possibly a file system link found.", err=True)
        ctx.exit(int(ExitStatus.FILE_SEARCH_ERROR))

    click.echo(render_json(outcome) if as_json else render_text(outcome))
    ctx.exit(int(outcome.status))


if __name__ == "__main__":
    main()
