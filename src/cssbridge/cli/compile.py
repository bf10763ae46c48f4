from typing import Annotated

import typer
from rich.console import Console

from cssbridge.backends import default_backends
from cssbridge.cli.common import build_host
from cssbridge.config import load_settings
from cssbridge.core.batch import run

console = Console()


def compile_files(
    ctx: typer.Context,
    source_root: Annotated[str | None, typer.Option(help="Directory mounted at /virtual.")] = None,
    output_root: Annotated[str | None, typer.Option(help="Directory mounted at /target.")] = None,
    encoding: Annotated[str | None, typer.Option(help="Source encoding.")] = None,
    show_extracts: Annotated[
        bool | None, typer.Option("--show-extracts/--no-show-extracts", help="Show source lines around errors.")
    ] = None,
) -> None:
    """Compile stylesheets named relative to the source root.

    A bare -x token enables compression for every file after it.
    """
    settings = load_settings()
    tokens = list(ctx.args)

    host = build_host(
        source_root or settings.source_root,
        output_root or settings.output_root,
        encoding or settings.encoding,
    )
    exit_code = run(
        host,
        default_backends(),
        tokens,
        show_extracts=settings.show_error_extracts if show_extracts is None else show_extracts,
    )
    if exit_code != 0:
        console.print(f"[red]Compilation failed[/red] ({len(host.warnings)} warning(s))")
        raise typer.Exit(exit_code)
    console.print("[green]Compiled[/green] all stylesheets")
