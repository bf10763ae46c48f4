from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class InMemoryFileRecord:
    path: str
    content: bytes
    last_modified: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class InMemoryFileStore:
    """Dict-backed virtual file tree.

    Implements the ``VirtualFileStore`` protocol. ``reads`` records every
    ``find`` call in order, hit or miss.
    """

    def __init__(self, files: dict[str, bytes | str] | None = None) -> None:
        self.files: dict[str, InMemoryFileRecord] = {}
        self.reads: list[str] = []
        for path, content in (files or {}).items():
            self.add(path, content)

    def add(self, path: str, content: bytes | str, last_modified: datetime | None = None) -> InMemoryFileRecord:
        data = content.encode("utf-8") if isinstance(content, str) else content
        if last_modified is None:
            record = InMemoryFileRecord(path=path, content=data)
        else:
            record = InMemoryFileRecord(path=path, content=data, last_modified=last_modified)
        self.files[path] = record
        return record

    def find(self, path: str) -> bytes | None:
        self.reads.append(path)
        record = self.files.get(path)
        if record is None:
            return None
        return record.content

    def mtime(self, path: str) -> datetime | None:
        record = self.files.get(path)
        if record is None:
            return None
        return record.last_modified

    def write(self, path: str, content: bytes) -> None:
        self.add(path, content)

    def list_paths(self, prefix: str = "") -> list[str]:
        return sorted(p for p in self.files if p.startswith(prefix))
