"""Import resolution against a virtual file store.

A reference is tried in three passes, first hit wins:

1. the path as written, when it already carries a recognised extension;
2. ``<path>.<ext>`` for every recognised extension, in priority order;
3. ``<dir>/_<base>.<ext>``, the partial-fragment convention, same order.

Nothing is cached: each lookup reads the store again.
"""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Protocol

from cssbridge.core.ports.store import VirtualFileStore
from cssbridge.core.syntax import SASS_EXTENSIONS, split_extension
from cssbridge.models import ResolvedSource, Syntax

logger = logging.getLogger(__name__)


class ImportResolver(Protocol):
    def find(self, uri: str) -> ResolvedSource | None: ...

    def find_relative(self, uri: str, requesting_file_path: str) -> ResolvedSource | None: ...

    def mtime(self, uri: str) -> datetime | None: ...

    def key(self, uri: str) -> tuple[str, str]: ...


def lookup_root(uri: str, requesting_file_path: str | None = None) -> str:
    """Return the path a reference is looked up under.

    Only the file name of ``requesting_file_path`` is dropped; ``..`` and ``.``
    segments are kept as written.
    """
    if requesting_file_path is None:
        return uri
    parent = requesting_file_path.split("/")[:-1]
    return "/".join(parent) + "/" + uri


class DelegatingImporter:
    """Resolve stylesheet references through an injected file store.

    Implements the ``ImportResolver`` protocol.
    """

    def __init__(
        self,
        store: VirtualFileStore,
        extensions: Mapping[str, Syntax] = SASS_EXTENSIONS,
    ) -> None:
        self._store = store
        self._extensions = dict(extensions)

    @property
    def extensions(self) -> dict[str, Syntax]:
        return dict(self._extensions)

    def resolve(self, uri: str, requesting_file_path: str | None = None) -> ResolvedSource | None:
        if requesting_file_path is None:
            return self.find(uri)
        return self.find_relative(uri, requesting_file_path)

    def find_relative(self, uri: str, requesting_file_path: str) -> ResolvedSource | None:
        return self.find(lookup_root(uri, requesting_file_path))

    def find(self, uri: str) -> ResolvedSource | None:
        directory, _, ext = split_extension(uri)
        name = uri[len(directory) :]

        if ext is not None and ext in self._extensions:
            hit = self._read(uri, self._extensions[ext])
            if hit is not None:
                return hit

        for candidate_ext, syntax in self._extensions.items():
            hit = self._read(f"{uri}.{candidate_ext}", syntax)
            if hit is not None:
                return hit

        for candidate_ext, syntax in self._extensions.items():
            hit = self._read(f"{directory}_{name}.{candidate_ext}", syntax)
            if hit is not None:
                return hit

        logger.debug("No candidate found for %s", uri)
        return None

    def mtime(self, uri: str) -> datetime | None:
        return self._store.mtime(uri)

    def key(self, uri: str) -> tuple[str, str]:
        return ("proxy", uri)

    def __str__(self) -> str:
        return "Proxy"

    def _read(self, path: str, syntax: Syntax) -> ResolvedSource | None:
        logger.debug("Trying %s", path)
        content = self._store.find(path)
        if content is None:
            return None
        return ResolvedSource(backing_path=path, syntax=syntax, content=content)
