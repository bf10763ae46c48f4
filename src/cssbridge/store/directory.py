import logging
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)


class DirectoryFileStore:
    """Present real directories under virtual mount points.

    ``mounts`` maps a virtual prefix such as ``/virtual`` to a directory on
    disk. The longest matching prefix wins. Paths outside every mount do not
    exist.
    """

    def __init__(self, mounts: dict[str, str | Path]) -> None:
        self._mounts = sorted(
            ((prefix.rstrip("/"), Path(directory)) for prefix, directory in mounts.items()),
            key=lambda item: len(item[0]),
            reverse=True,
        )

    def to_disk_path(self, path: str) -> Path | None:
        for prefix, directory in self._mounts:
            if path == prefix or path.startswith(prefix + "/"):
                relative = path[len(prefix) :].lstrip("/")
                candidate = (directory / relative).resolve()
                root = directory.resolve()
                if candidate != root and root not in candidate.parents:
                    return None
                return candidate
        return None

    def find(self, path: str) -> bytes | None:
        disk_path = self.to_disk_path(path)
        if disk_path is None or not disk_path.is_file():
            return None
        return disk_path.read_bytes()

    def mtime(self, path: str) -> datetime | None:
        disk_path = self.to_disk_path(path)
        if disk_path is None or not disk_path.is_file():
            return None
        return datetime.fromtimestamp(disk_path.stat().st_mtime, tz=timezone.utc)

    def write(self, path: str, content: bytes) -> None:
        disk_path = self.to_disk_path(path)
        if disk_path is None:
            raise FileNotFoundError(f"No mount for virtual path: {path}")
        disk_path.parent.mkdir(parents=True, exist_ok=True)
        disk_path.write_bytes(content)
        logger.debug("Wrote %d bytes to %s", len(content), disk_path)

    def list_paths(self, prefix: str) -> list[str]:
        disk_root = self.to_disk_path(prefix)
        if disk_root is None or not disk_root.is_dir():
            return []
        base = prefix.rstrip("/")
        return sorted(f"{base}/{p.relative_to(disk_root).as_posix()}" for p in disk_root.rglob("*") if p.is_file())
