from typing import Protocol

from cssbridge.core.ports.store import VirtualFileStore


class HostEnvironment(Protocol):
    """Capabilities the embedding build tool hands to a compile run."""

    encoding: str
    store: VirtualFileStore

    def read_file(self, path: str, encoding: str | None = None) -> str | None: ...

    def write_file(self, path: str, content: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...
