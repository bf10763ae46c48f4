from cssbridge.store.directory import DirectoryFileStore
from cssbridge.store.host import StoreHost
from cssbridge.store.memory import InMemoryFileRecord, InMemoryFileStore

__all__ = [
    "DirectoryFileStore",
    "InMemoryFileRecord",
    "InMemoryFileStore",
    "StoreHost",
]
