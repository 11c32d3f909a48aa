"""
toolpin — CLI entrypoint.

Usage:
    python -m toolpin.main --help
    python -m toolpin.main detect node
    python -m toolpin.main verify SHASUMS256.txt node-v20.11.0.tar.gz
"""

from __future__ import annotations

from pathlib import Path

import click

from toolpin import __version__
from toolpin.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="toolpin")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--cwd",
    "working_dir",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory to resolve from (default: current directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    working_dir: str | None,
) -> None:
    """toolpin — pin tool versions per directory and verify downloads."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    from toolpin.core.context import set_working_dir

    set_working_dir(Path(working_dir).resolve() if working_dir else Path.cwd())

    setup_logging(debug=debug, verbose=verbose, quiet=quiet)


from toolpin.ui.cli.checksum import hash_file, verify  # noqa: E402
from toolpin.ui.cli.detect import detect  # noqa: E402

cli.add_command(detect)
cli.add_command(verify)
cli.add_command(hash_file)


if __name__ == "__main__":
    cli()
