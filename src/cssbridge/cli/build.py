from typing import Annotated

import typer
from rich.console import Console

from cssbridge.backends import default_backends
from cssbridge.cli.common import build_host
from cssbridge.config import load_settings
from cssbridge.core.batch import COMPRESS_FLAG, VIRTUAL_ROOT, run_batch
from cssbridge.core.scan import default_patterns, scan_sources
from cssbridge.models import CompileSuccess

console = Console()

_FAMILIES = ("less", "sass")


def build(
    source_root: Annotated[str | None, typer.Option(help="Directory mounted at /virtual.")] = None,
    output_root: Annotated[str | None, typer.Option(help="Directory mounted at /target.")] = None,
    family: Annotated[str | None, typer.Option(help="Only build one family: less or sass.")] = None,
    include: Annotated[list[str] | None, typer.Option(help="Glob of files to compile (repeatable).")] = None,
    exclude: Annotated[list[str] | None, typer.Option(help="Glob of files to skip (repeatable).")] = None,
    compress: Annotated[bool | None, typer.Option("--compress/--no-compress", help="Compress CSS.")] = None,
    fail_on_error: Annotated[
        bool | None, typer.Option("--fail-on-error/--no-fail-on-error", help="Exit non-zero on failures.")
    ] = None,
    show_extracts: Annotated[
        bool | None, typer.Option("--show-extracts/--no-show-extracts", help="Show source lines around errors.")
    ] = None,
    skip: Annotated[bool, typer.Option(help="Skip compilation entirely.")] = False,
) -> None:
    """Scan the source root and compile every stylesheet found."""
    if skip:
        console.print("Stylesheet compilation skipped.")
        return

    settings = load_settings()
    host = build_host(
        source_root or settings.source_root,
        output_root or settings.output_root,
        settings.encoding,
    )

    families = _FAMILIES if family is None else (family,)
    includes: list[str] = list(include or [])
    excludes: list[str] = list(exclude or [])
    for name in families:
        default_includes, default_excludes = default_patterns(name)
        if not include:
            includes.extend(default_includes)
        if not exclude:
            excludes.extend(default_excludes)

    available = [p.removeprefix(VIRTUAL_ROOT) for p in host.store.list_paths(VIRTUAL_ROOT)]
    files = scan_sources(available, includes, excludes)
    if not files:
        console.print("Nothing to compile.")
        return

    use_compress = settings.compress if compress is None else compress
    tokens = [COMPRESS_FLAG, *files] if use_compress else files
    result = run_batch(
        host,
        default_backends(),
        tokens,
        show_extracts=settings.show_error_extracts if show_extracts is None else show_extracts,
    )

    compiled = sum(1 for _, outcome in result.per_file if isinstance(outcome, CompileSuccess))
    console.print(f"[green]Compiled[/green] {compiled} of {len(files)} stylesheet(s)")
    should_fail = settings.fail_on_error if fail_on_error is None else fail_on_error
    if result.any_failure and should_fail:
        raise typer.Exit(1)
