import logging
from collections.abc import Mapping
from dataclasses import dataclass

from cssbridge.core.ports.backend import StylesheetBackend
from cssbridge.core.ports.host import HostEnvironment
from cssbridge.core.resolver import DelegatingImporter
from cssbridge.core.syntax import detect_syntax_from_path, extensions_for_syntax
from cssbridge.exceptions import BackendParseError, CompilationError, UnresolvedImportError
from cssbridge.models import (
    CompileFailure,
    CompileOutcome,
    CompileSuccess,
    EmptyOutputFailure,
    FileNotFoundFailure,
    ParseFailure,
    ResolvedSource,
    Syntax,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompileOptions:
    compress: bool = False


class CompileSession:
    """Drive one entry file through read, parse and render."""

    def __init__(
        self,
        host: HostEnvironment,
        backends: Mapping[Syntax, StylesheetBackend],
        encoding: str | None = None,
    ) -> None:
        self.host = host
        self.backends = backends
        self.encoding = encoding or host.encoding

    def compile(self, entry_path: str, options: CompileOptions | None = None) -> CompileOutcome:
        options = options or CompileOptions()
        syntax = detect_syntax_from_path(entry_path)
        backend = self.backends[syntax]

        source = self.host.read_file(entry_path, self.encoding)
        if source is None:
            return CompileFailure(error=FileNotFoundFailure(path=entry_path))

        importer = DelegatingImporter(self.host.store, extensions_for_syntax(syntax))

        def _resolve(uri: str, requesting_file_path: str | None) -> ResolvedSource | None:
            return importer.find_relative(uri, requesting_file_path or entry_path)

        try:
            tree = backend.parse(source, entry_path, _resolve, self.encoding)
            css = backend.render(tree, compress=options.compress)
        except UnresolvedImportError as e:
            return CompileFailure(
                error=FileNotFoundFailure(path=e.uri, message=str(e), origin_file=e.requesting_file_path)
            )
        except BackendParseError as e:
            return CompileFailure(
                error=ParseFailure(
                    message=e.message,
                    line=e.line,
                    column=e.column,
                    extract=e.extract,
                    origin_file=e.origin_file,
                )
            )

        if not css:
            return CompileFailure(error=EmptyOutputFailure(path=entry_path))
        return CompileSuccess(css=css)


def compile_one(
    host: HostEnvironment,
    backends: Mapping[Syntax, StylesheetBackend],
    path: str,
    encoding: str | None = None,
    compress: bool = False,
) -> str:
    """Compile a single stylesheet and return its CSS.

    Raises ``CompilationError`` carrying the failure on any error.
    """
    host.debug(f"Compiling {path} ...")
    outcome = CompileSession(host, backends, encoding).compile(path, CompileOptions(compress=compress))
    if isinstance(outcome, CompileFailure):
        raise CompilationError(path, outcome.error)
    return outcome.css
