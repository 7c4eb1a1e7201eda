import logging
from typing import Annotated

import typer

from admin_display.cli.queries import queries_app
from admin_display.cli.serve import serve_app

app = typer.Typer(
    name="admin-display",
    help="Admin display CLI — compose and validate query editors.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(queries_app, name="queries")
app.add_typer(serve_app, name="serve")


@app.callback()
def configure(
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            envvar="ADMIN_DISPLAY_LOG_LEVEL",
            help="Logging level (DEBUG, INFO, WARNING, ...).",
        ),
    ] = "WARNING",
) -> None:
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    app()
