"""Shared fixtures and helpers for tests."""

import re
from pathlib import Path

import pytest

from cssbridge.core.ports.backend import ResolveCallback
from cssbridge.exceptions import BackendParseError, UnresolvedImportError
from cssbridge.models import Syntax
from cssbridge.store import InMemoryFileStore, StoreHost

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: everything under tests/unit is a unit test
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# FakeBackend: a line-oriented stand-in for a preprocessor engine
# ---------------------------------------------------------------------------

_IMPORT_RE = re.compile(r'^@import\s+"([^"]+)";$')
_ERROR_TOKEN = "!syntax-error"


class FakeBackend:
    """Understands ``@import "x";`` lines and fails on ``!syntax-error``.

    Rendering joins the remaining lines; compression strips all whitespace.
    """

    def __init__(self, empty_output: bool = False) -> None:
        self.empty_output = empty_output
        self.render_calls: list[bool] = []
        self.resolved: list[str] = []

    def parse(self, source: str, base_path: str, resolve: ResolveCallback, encoding: str = "utf-8") -> list[str]:
        return self._parse(source, base_path, resolve, encoding, nested=False)

    def _parse(
        self, source: str, path: str, resolve: ResolveCallback, encoding: str, nested: bool
    ) -> list[str]:
        lines = source.splitlines()
        out: list[str] = []
        for index, line in enumerate(lines):
            match = _IMPORT_RE.match(line.strip())
            if match:
                resolved = resolve(match.group(1), path)
                if resolved is None:
                    raise UnresolvedImportError(match.group(1), path)
                self.resolved.append(resolved.backing_path)
                text = resolved.content.decode(encoding)
                out.extend(self._parse(text, resolved.backing_path, resolve, encoding, True))
            elif _ERROR_TOKEN in line:
                raise BackendParseError(
                    "Unrecognised input",
                    line=index + 1,
                    column=line.index(_ERROR_TOKEN),
                    extract=(
                        lines[index - 1] if index > 0 else None,
                        line,
                        lines[index + 1] if index + 1 < len(lines) else None,
                    ),
                    origin_file=path if nested else None,
                )
            else:
                out.append(line)
        return out

    def render(self, tree: list[str], compress: bool = False) -> str | None:
        self.render_calls.append(compress)
        if self.empty_output:
            return ""
        if compress:
            return "".join("".join(line.split()) for line in tree)
        return "\n".join(tree) + "\n"


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def memory_store() -> InMemoryFileStore:
    return InMemoryFileStore()


@pytest.fixture
def host(memory_store: InMemoryFileStore) -> StoreHost:
    return StoreHost(memory_store)


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def fake_backends(fake_backend: FakeBackend) -> dict[Syntax, FakeBackend]:
    return {
        Syntax.INDENTED_SASS: fake_backend,
        Syntax.SCSS: fake_backend,
        Syntax.LESS: fake_backend,
    }
