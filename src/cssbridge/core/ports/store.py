from datetime import datetime
from typing import Protocol


class VirtualFileStore(Protocol):
    def find(self, path: str) -> bytes | None: ...

    def mtime(self, path: str) -> datetime | None: ...


class WritableFileStore(VirtualFileStore, Protocol):
    def write(self, path: str, content: bytes) -> None: ...
