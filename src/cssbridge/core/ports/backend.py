from collections.abc import Callable
from typing import Any, Protocol

from cssbridge.models import ResolvedSource

ResolveCallback = Callable[[str, str | None], ResolvedSource | None]


class StylesheetBackend(Protocol):
    def parse(self, source: str, base_path: str, resolve: ResolveCallback, encoding: str = "utf-8") -> Any: ...

    def render(self, tree: Any, compress: bool = False) -> str | None: ...
