"""Sass/SCSS backend on top of libsass.

Every stylesheet ``@import`` libsass meets is routed through the resolver
callback, so imports only ever see the virtual file store. Plain CSS imports
are left to libsass, which emits them as written.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

import sass

from cssbridge.backends.extract import source_extract
from cssbridge.core.ports.backend import ResolveCallback
from cssbridge.core.syntax import is_plain_css_import
from cssbridge.exceptions import BackendParseError, UnresolvedImportError
from cssbridge.models import Syntax

logger = logging.getLogger(__name__)

# libsass names the string passed to ``sass.compile`` "stdin"
_ENTRY_MARKER = "stdin"

_LOCATION_RE = re.compile(r"on line (?P<line>\d+):(?P<column>\d+) of (?P<file>.+?)\s*$", re.MULTILINE)
_SOURCE_LINE_RE = re.compile(r"^>> ?(?P<text>.*)$", re.MULTILINE)


@dataclass
class SassTree:
    """Deferred libsass compilation unit.

    libsass parses and renders in one call, so the tree only carries what
    ``render`` needs.
    """

    source: str
    base_path: str
    syntax: Syntax
    resolve: ResolveCallback
    encoding: str = "utf-8"
    imported: list[str] = field(default_factory=list)
    sources: dict[str, str] = field(default_factory=dict)
    unresolved: UnresolvedImportError | None = None

    def requesting_path(self, prev: str) -> str:
        if prev == _ENTRY_MARKER:
            return self.base_path
        for path in reversed(self.imported):
            if prev == path or prev.endswith(path):
                return path
        return prev

    def import_callback(self, path: str, prev: str) -> list[tuple[str, str]] | None:
        # None hands the import back to libsass, which emits it unchanged
        if is_plain_css_import(path):
            return None
        requesting = self.requesting_path(prev)
        resolved = self.resolve(path, requesting)
        if resolved is None:
            self.unresolved = UnresolvedImportError(path, requesting)
            raise self.unresolved
        text = resolved.content.decode(self.encoding)
        self.imported.append(resolved.backing_path)
        self.sources[resolved.backing_path] = text
        logger.debug("Resolved %s from %s to %s", path, requesting, resolved.backing_path)
        return [(resolved.backing_path, text)]


def _parse_compile_error(message: str, tree: SassTree) -> BackendParseError:
    first_line = message.strip().splitlines()[0] if message.strip() else "Sass compilation failed"
    text = first_line.removeprefix("Error: ").strip()

    location = _LOCATION_RE.search(message)
    if location is None:
        return BackendParseError(text, line=0, column=0)

    origin = location.group("file")
    origin_file = None if origin == _ENTRY_MARKER else tree.requesting_path(origin)
    line = int(location.group("line"))
    extract = source_extract(tree.source if origin_file is None else tree.sources.get(origin_file), line)
    if extract is None:
        source_line = _SOURCE_LINE_RE.search(message)
        extract = (None, source_line.group("text"), None) if source_line else None
    return BackendParseError(
        text,
        line=line,
        column=max(int(location.group("column")) - 1, 0),
        extract=extract,
        origin_file=origin_file,
    )


class LibsassBackend:
    """Implements the ``StylesheetBackend`` protocol for ``.sass`` and ``.scss``."""

    def __init__(self, syntax: Syntax = Syntax.SCSS) -> None:
        self.syntax = syntax

    def parse(self, source: str, base_path: str, resolve: ResolveCallback, encoding: str = "utf-8") -> SassTree:
        return SassTree(source=source, base_path=base_path, syntax=self.syntax, resolve=resolve, encoding=encoding)

    def render(self, tree: SassTree, compress: bool = False) -> str | None:
        try:
            return sass.compile(
                string=tree.source,
                indented=tree.syntax is Syntax.INDENTED_SASS,
                output_style="compressed" if compress else "nested",
                importers=[(0, tree.import_callback)],
            )
        except sass.CompileError as e:
            if tree.unresolved is not None:
                raise tree.unresolved from e
            raise _parse_compile_error(str(e), tree) from e
