"""CLI entry point. Registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="ngarch",
    help="ngarch - Frontend module architecture conformance checker",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"ngarch {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Check module layering, dependency cycles, and coupling."""


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
