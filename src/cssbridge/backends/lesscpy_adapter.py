"""LESS backend on top of lesscpy.

lesscpy resolves ``@import`` against the real filesystem, so imports are
expanded through the resolver before the source is handed over. The
expansion keeps a map from each flattened line back to the file and line it
came from, which is how parse errors are reported against the right file.
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass, field
from typing import NamedTuple

from lesscpy.exceptions import CompilationError as LesscpyCompilationError
from lesscpy.lessc import formatter, parser

from cssbridge.backends.extract import source_extract
from cssbridge.core.ports.backend import ResolveCallback
from cssbridge.core.syntax import is_plain_css_import
from cssbridge.exceptions import BackendParseError, CssBridgeError, UnresolvedImportError

logger = logging.getLogger(__name__)

MAX_IMPORT_DEPTH = 16

# Comments and strings are matched first so an @import inside them is left alone.
_TOKEN_RE = re.compile(
    r"(?P<comment>//[^\n]*|/\*.*?\*/)"
    r"|(?P<string>\"(?:\\.|[^\"\\\n])*\"|'(?:\\.|[^'\\\n])*')"
    r"|(?P<import>@import\s*(?:\((?P<options>[^)]*)\)\s*)?"
    r"(?P<quote>[\"'])(?P<uri>[^\"']+)(?P=quote)\s*(?P<media>[^;]*);)",
    re.DOTALL,
)
# lesscpy reports "E: (stream) line: N, ..." for syntax errors and "E: line: N: ..." otherwise
_ERROR_RE = re.compile(r"^[EW]:\s*(?:\(stream\)\s*)?line:\s*(?P<line>\d+)\s*[,:]\s*(?P<text>.*)$")


class _Chunk(NamedTuple):
    text: str
    path: str
    first_line: int


@dataclass
class LessTree:
    source: str
    base_path: str
    imported: list[str] = field(default_factory=list)
    sources: dict[str, str] = field(default_factory=dict)
    line_map: list[tuple[str, int]] = field(default_factory=list)
    parsed: parser.LessParser | None = None

    def locate(self, line: int) -> tuple[str, int]:
        """Map a 1-based line of the flattened source to (file, line)."""
        if 0 < line <= len(self.line_map):
            return self.line_map[line - 1]
        return self.base_path, line


@dataclass
class _FormatOptions:
    minify: bool = False
    xminify: bool = False
    tabs: bool = False
    spaces: bool = True


def _is_passthrough(uri: str, options: set[str], media: str) -> bool:
    if "css" in options or media:
        return True
    return is_plain_css_import(uri)


def _line_map(chunks: list[_Chunk]) -> list[tuple[str, int]]:
    # a flattened line belongs to whichever chunk supplies its first character
    line_map: list[tuple[str, int]] = []
    at_line_start = True
    for chunk in chunks:
        segments = chunk.text.split("\n")
        for index, segment in enumerate(segments):
            if index > 0:
                at_line_start = True
            if at_line_start and (segment or index < len(segments) - 1):
                line_map.append((chunk.path, chunk.first_line + index))
                at_line_start = False
    return line_map


class LesscpyBackend:
    """Implements the ``StylesheetBackend`` protocol for ``.less``."""

    def parse(self, source: str, base_path: str, resolve: ResolveCallback, encoding: str = "utf-8") -> LessTree:
        tree = LessTree(source="", base_path=base_path, sources={base_path: source})
        chunks = self._expand(source, base_path, resolve, encoding, tree, depth=0)
        tree.source = "".join(chunk.text for chunk in chunks)
        tree.line_map = _line_map(chunks)

        # unoptimized tables are checked against the grammar instead of trusted from the temp dir
        less = parser.LessParser(fail_with_exc=True, lex_optimize=False, yacc_optimize=False)
        try:
            less.parse(file=io.StringIO(tree.source))
        except LesscpyCompilationError as e:
            raise _parse_error(str(e), tree) from e
        tree.parsed = less
        return tree

    def render(self, tree: LessTree, compress: bool = False) -> str | None:
        if tree.parsed is None:
            raise CssBridgeError(f"{tree.base_path} has not been parsed")
        return formatter.Formatter(_FormatOptions(minify=compress)).format(tree.parsed)

    def _expand(
        self,
        source: str,
        current_path: str,
        resolve: ResolveCallback,
        encoding: str,
        tree: LessTree,
        depth: int,
    ) -> list[_Chunk]:
        if depth > MAX_IMPORT_DEPTH:
            raise BackendParseError(f"Import depth exceeds {MAX_IMPORT_DEPTH}", line=0, origin_file=current_path)

        chunks: list[_Chunk] = []
        position = 0
        line = 1
        for match in _TOKEN_RE.finditer(source):
            if match.group("import") is None:
                continue
            uri = match.group("uri")
            options = {o.strip() for o in (match.group("options") or "").split(",") if o.strip()}
            if _is_passthrough(uri, options, match.group("media").strip()):
                continue

            chunks.append(_Chunk(source[position : match.start()], current_path, line))
            line += source.count("\n", position, match.end())
            position = match.end()
            chunks.extend(self._import(uri, options, current_path, resolve, encoding, tree, depth))

        chunks.append(_Chunk(source[position:], current_path, line))
        return chunks

    def _import(
        self,
        uri: str,
        options: set[str],
        current_path: str,
        resolve: ResolveCallback,
        encoding: str,
        tree: LessTree,
        depth: int,
    ) -> list[_Chunk]:
        resolved = resolve(uri, current_path)
        if resolved is None:
            if "optional" in options:
                return []
            raise UnresolvedImportError(uri, current_path)

        if resolved.backing_path in tree.imported and "multiple" not in options:
            logger.debug("Skipping repeated import of %s", resolved.backing_path)
            return []
        tree.imported.append(resolved.backing_path)

        text = resolved.content.decode(encoding)
        tree.sources[resolved.backing_path] = text
        if "inline" in options:
            return [_Chunk(text, resolved.backing_path, 1)]
        return self._expand(text, resolved.backing_path, resolve, encoding, tree, depth + 1)


def _parse_error(message: str, tree: LessTree) -> BackendParseError:
    first_line = message.strip().splitlines()[0] if message.strip() else ""
    match = _ERROR_RE.match(first_line)
    if match is None:
        return BackendParseError(first_line or "LESS compilation failed", line=0, column=0)

    path, line = tree.locate(int(match.group("line")))
    return BackendParseError(
        match.group("text").strip(),
        line=line,
        column=0,
        extract=source_extract(tree.sources.get(path), line),
        origin_file=None if path == tree.base_path else path,
    )
