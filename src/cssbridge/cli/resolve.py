from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from cssbridge.cli.common import build_host
from cssbridge.config import load_settings
from cssbridge.core.resolver import DelegatingImporter
from cssbridge.core.syntax import extensions_for_family

console = Console()


def resolve(
    uri: Annotated[str, typer.Argument(help="Import reference as written in the stylesheet.")],
    from_file: Annotated[
        str | None, typer.Option("--from", help="Virtual path of the importing file, e.g. /virtual/site.scss.")
    ] = None,
    family: Annotated[str, typer.Option(help="Stylesheet family: sass or less.")] = "sass",
    source_root: Annotated[str | None, typer.Option(help="Directory mounted at /virtual.")] = None,
) -> None:
    """Show which file an import reference resolves to."""
    settings = load_settings()
    host = build_host(source_root or settings.source_root, settings.output_root, settings.encoding)
    try:
        extensions = extensions_for_family(family)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2) from None

    resolved = DelegatingImporter(host.store, extensions).resolve(uri, from_file)
    if resolved is None:
        console.print(f"[red]Unresolved[/red] {uri}")
        raise typer.Exit(1)

    table = Table(show_lines=False)
    for h in ("backing_path", "syntax", "bytes"):
        table.add_column(h)
    table.add_row(resolved.backing_path, resolved.syntax.value, str(len(resolved.content)))
    console.print(table)
