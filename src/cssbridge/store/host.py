import logging

from cssbridge.core.ports.store import WritableFileStore

logger = logging.getLogger(__name__)


class StoreHost:
    """Host environment backed by a writable virtual file store.

    Implements the ``HostEnvironment`` protocol; the debug and warning
    channels go to ``logging``.
    """

    def __init__(self, store: WritableFileStore, encoding: str = "utf-8") -> None:
        self.store = store
        self.encoding = encoding
        self.warnings: list[str] = []

    def read_file(self, path: str, encoding: str | None = None) -> str | None:
        content = self.store.find(path)
        if content is None:
            return None
        return content.decode(encoding or self.encoding)

    def write_file(self, path: str, content: str) -> None:
        self.store.write(path, content.encode(self.encoding))

    def debug(self, message: str) -> None:
        logger.debug(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)
        logger.warning(message)
