# Copyright (c) Syntropy Systems
"""Main CLI entry point for ladderlens."""

import typer

from ladderlens.cli.dashboard import dashboard
from ladderlens.cli.decode import decode
from ladderlens.cli.share import share
from ladderlens.cli.show import show
from ladderlens.config import load_config
from ladderlens.log import configure_logging

app = typer.Typer(
    name="ladderlens",
    help=(
        "Codec ladder pipeline viewer. Step through records, see what each "
        "filter removed, share one view."
    ),
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log parse details to stderr"
    ),
) -> None:
    """Configure logging before any command runs."""
    configure_logging("DEBUG" if verbose else load_config().log_level)


# Register commands
_ = app.command()(show)
_ = app.command()(share)
_ = app.command()(decode)
_ = app.command()(dashboard)


if __name__ == "__main__":
    app()
