"""
Command line entry point printing composed commands.
"""

import json
import sys
from typing import Optional, Tuple

import click
from dotenv import load_dotenv

from .bins import get_bin, run_bin
from .compose import concurrent, concurrent_by_name, series, series_by_name
from .config import get_context
from .core.exceptions import NpsUtilsError
from .environment import ci_vendor, is_ci, is_windows
from .packages import find_scripts_file, include_package
from .shell import shell_escape
from .utils.logger import get_logger, set_logger

logger = get_logger(__name__)


def _fail(error: Exception) -> None:
    click.secho(f"✗ {str(error)}", fg="red", err=True)
    raise click.Abort() from error


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Load NPS_UTILS_* settings from this .env file",
)
def cli(debug: bool = False, env_file: Optional[str] = None):
    """Compose package-script commands.

    Every command prints a single command line on stdout.
    """
    set_logger(debug=debug)
    load_dotenv(env_file, override=False)
    try:
        get_context(force_refresh=True)
    except NpsUtilsError as e:
        _fail(e)
    logger.debug("CLI initialized")


@cli.command("series")
@click.option("--by-name", is_flag=True, help="Treat arguments as task names")
@click.argument("scripts", nargs=-1)
def series_command(by_name: bool, scripts: Tuple[str]):
    """Run SCRIPTS one after another."""
    click.echo(series_by_name(*scripts) if by_name else series(*scripts))


@cli.command("concurrent")
@click.option("--by-name", is_flag=True, help="Treat arguments as task names")
@click.argument("tasks", nargs=-1)
def concurrent_command(by_name: bool, tasks: Tuple[str]):
    """Run TASKS in parallel.

    Tasks are given as NAME=SCRIPT pairs, or as task names with --by-name.
    """
    try:
        if by_name:
            click.echo(concurrent_by_name(*tasks))
            return
        scripts = {}
        for task in tasks:
            name, sep, script = task.partition("=")
            if not sep:
                raise click.BadParameter(
                    f"expected NAME=SCRIPT, got '{task}'", param_hint="TASKS"
                )
            scripts[name] = script
        click.echo(concurrent(scripts))
    except NpsUtilsError as e:
        _fail(e)


@cli.command("bin")
@click.option("--run", "run", is_flag=True, help="Prefix the interpreter")
@click.argument("package")
@click.argument("alias", required=False)
def bin_command(run: bool, package: str, alias: Optional[str]):
    """Print the path of PACKAGE's binary relative to the working directory."""
    try:
        click.echo(run_bin(package, alias) if run else get_bin(package, alias))
    except NpsUtilsError as e:
        _fail(e)


@cli.command("escape")
@click.argument("args", nargs=-1)
def escape_command(args: Tuple[str]):
    """Escape ARGS for the shell."""
    click.echo(shell_escape(list(args)))


@cli.command("include")
@click.argument("name", required=False)
@click.option("--path", "path", type=str, help="Path of the package-scripts file")
def include_command(name: Optional[str], path: Optional[str]):
    """Print the scripts of a sub-package, rewritten to run from here.

    NAME resolves to packages/NAME/package-scripts.json or .py.
    """
    if not name and not path:
        raise click.UsageError("Provide a package NAME or --path")
    try:
        scripts = include_package({"path": path or find_scripts_file(name)})
    except (NpsUtilsError, OSError, ValueError) as e:
        _fail(e)
    click.echo(json.dumps(scripts, indent=2))


@cli.command("env")
def env_command():
    """Show the platform and CI facts used by conditional scripts."""
    click.echo(f"platform: {sys.platform}")
    click.echo(f"windows: {str(is_windows()).lower()}")
    click.echo(f"ci: {str(is_ci()).lower()}")
    vendor = ci_vendor()
    if vendor:
        click.echo(f"ci_vendor: {vendor}")


def main():
    """Entry point for the nps-utils command."""
    try:
        cli(prog_name="nps-utils")
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
