from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cssbridge.models import Failure


class CssBridgeError(Exception):
    """Base class for errors raised by cssbridge."""


class UnsupportedSyntaxError(CssBridgeError, ValueError):
    pass


class UnresolvedImportError(CssBridgeError):
    """An import reference matched no candidate in the virtual file store."""

    def __init__(self, uri: str, requesting_file_path: str | None = None) -> None:
        self.uri = uri
        self.requesting_file_path = requesting_file_path
        where = f" (imported from {requesting_file_path})" if requesting_file_path else ""
        super().__init__(f"File to import not found or unreadable: {uri}{where}")


class BackendParseError(CssBridgeError):
    """Structured syntax-level failure reported by a preprocessor backend.

    ``column`` is 0-based.
    """

    def __init__(
        self,
        message: str,
        line: int,
        column: int = 0,
        extract: tuple[str | None, str | None, str | None] | None = None,
        origin_file: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.extract = extract
        self.origin_file = origin_file


class CompilationError(CssBridgeError):
    """Raised by the single-compile embed contract when a stylesheet fails."""

    def __init__(self, path: str, failure: Failure) -> None:
        self.path = path
        self.failure = failure
        super().__init__(f"{path}: {failure.message}")
