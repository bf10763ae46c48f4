from pathlib import Path

from cssbridge.core.batch import TARGET_ROOT, VIRTUAL_ROOT
from cssbridge.store import DirectoryFileStore, StoreHost


def build_host(source_root: str | Path, output_root: str | Path, encoding: str) -> StoreHost:
    store = DirectoryFileStore(
        {
            VIRTUAL_ROOT: source_root,
            TARGET_ROOT: output_root,
        }
    )
    return StoreHost(store, encoding=encoding)
