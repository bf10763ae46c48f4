import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from cssbridge.cli.build import build
from cssbridge.cli.compile import compile_files
from cssbridge.cli.resolve import resolve

app = typer.Typer(
    name="cssbridge",
    help="cssbridge: compile LESS and Sass stylesheets against a virtual file tree.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


app.command(
    "compile",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)(compile_files)
app.command("build")(build)
app.command("resolve")(resolve)


def main() -> None:
    app()
