"""Smoke tests for the libsass backend through the compile session."""

from __future__ import annotations

import pytest

from cssbridge.backends import LibsassBackend, default_backends
from cssbridge.backends.libsass_adapter import SassTree, _parse_compile_error
from cssbridge.core.session import CompileOptions, CompileSession
from cssbridge.models import CompileFailure, CompileSuccess, FileNotFoundFailure, ParseFailure, Syntax
from cssbridge.store import InMemoryFileStore, StoreHost


@pytest.fixture
def sass_host() -> StoreHost:
    store = InMemoryFileStore(
        {
            "/virtual/foo.scss": '@import "bar";\n.foo { margin: $size * 2; }\n',
            "/virtual/_bar.scss": "$size: 4px;\n",
            "/virtual/nested/main.scss": '@import "lib/a";\n',
            "/virtual/nested/lib/a.scss": '@import "b";\n.a { width: $w; }\n',
            "/virtual/nested/lib/_b.scss": "$w: 10px;\n",
            "/virtual/indented.sass": ".box\n  color: red\n",
        }
    )
    return StoreHost(store)


def test_scss_with_partial_import(sass_host: StoreHost) -> None:
    outcome = CompileSession(sass_host, default_backends()).compile("/virtual/foo.scss")

    assert isinstance(outcome, CompileSuccess)
    assert "8px" in outcome.css


def test_nested_import_resolves_next_to_importing_file(sass_host: StoreHost) -> None:
    outcome = CompileSession(sass_host, default_backends()).compile("/virtual/nested/main.scss")

    assert isinstance(outcome, CompileSuccess)
    assert "10px" in outcome.css


def test_indented_entry(sass_host: StoreHost) -> None:
    outcome = CompileSession(sass_host, default_backends()).compile("/virtual/indented.sass")

    assert isinstance(outcome, CompileSuccess)
    assert "color: red" in outcome.css


def test_compression_only_changes_formatting(sass_host: StoreHost) -> None:
    session = CompileSession(sass_host, default_backends())

    plain = session.compile("/virtual/foo.scss", CompileOptions(compress=False))
    packed = session.compile("/virtual/foo.scss", CompileOptions(compress=True))

    assert isinstance(plain, CompileSuccess) and isinstance(packed, CompileSuccess)
    assert "".join(plain.css.split()).replace(";}", "}") == "".join(packed.css.split())


def test_unresolved_import(sass_host: StoreHost) -> None:
    sass_host.store.add("/virtual/ghost.scss", '@import "nowhere";\n')

    outcome = CompileSession(sass_host, default_backends()).compile("/virtual/ghost.scss")

    assert isinstance(outcome, CompileFailure)
    assert isinstance(outcome.error, FileNotFoundFailure)
    assert outcome.error.path == "nowhere"
    assert outcome.error.origin_file == "/virtual/ghost.scss"


def test_syntax_error(sass_host: StoreHost) -> None:
    sass_host.store.add("/virtual/broken.scss", ".a { color: red;\n")

    outcome = CompileSession(sass_host, default_backends()).compile("/virtual/broken.scss")

    assert isinstance(outcome, CompileFailure)
    assert isinstance(outcome.error, ParseFailure)
    assert outcome.error.line >= 1


def test_parse_compile_error_reads_location() -> None:
    tree = SassTree(source="", base_path="/virtual/site.scss", syntax=Syntax.SCSS, resolve=lambda uri, prev: None)
    tree.imported.append("/virtual/_mixins.scss")
    message = (
        'Error: Invalid CSS after "a {": expected "}", was ""\n'
        "        on line 3:5 of /virtual/_mixins.scss\n"
        ">> a {\n"
        "   ----^\n"
    )

    error = _parse_compile_error(message, tree)

    assert error.message == 'Invalid CSS after "a {": expected "}", was ""'
    assert error.line == 3
    assert error.column == 4
    assert error.origin_file == "/virtual/_mixins.scss"
    assert error.extract == (None, "a {", None)


def test_parse_compile_error_for_entry() -> None:
    tree = SassTree(source="", base_path="/virtual/site.scss", syntax=Syntax.SCSS, resolve=lambda uri, prev: None)

    error = _parse_compile_error("Error: bad\n        on line 1:1 of stdin\n", tree)

    assert error.origin_file is None
    assert (error.line, error.column) == (1, 0)


def test_default_syntax_is_scss() -> None:
    assert LibsassBackend().syntax is Syntax.SCSS


def test_plain_css_imports_are_left_to_libsass(sass_host: StoreHost) -> None:
    store = sass_host.store
    store.add("/virtual/main.scss", '@import "print.css";\n@import "http://x.org/a.css";\na { color: red; }\n')

    outcome = CompileSession(sass_host, default_backends()).compile("/virtual/main.scss")

    assert isinstance(outcome, CompileSuccess)
    assert "print.css" in outcome.css
    assert "http://x.org/a.css" in outcome.css
    assert not any("print" in path or "x.org" in path for path in store.reads)


def test_plain_css_import_callback_returns_none() -> None:
    def _never(uri: str, requesting: str | None) -> None:
        raise AssertionError(f"{uri} should not be resolved")

    tree = SassTree(source="", base_path="/virtual/site.scss", syntax=Syntax.SCSS, resolve=_never)

    for uri in ("reset.css", "http://cdn/x.scss", "https://cdn/x", "//cdn/x"):
        assert tree.import_callback(uri, "stdin") is None
    assert tree.imported == []


def test_error_in_partial_has_three_line_extract(sass_host: StoreHost) -> None:
    sass_host.store.add("/virtual/main.scss", '@import "p";\n')
    sass_host.store.add("/virtual/_p.scss", ".a {\n  color: red;\n  }}\n.b { color: blue; }\n")

    outcome = CompileSession(sass_host, default_backends()).compile("/virtual/main.scss")

    assert isinstance(outcome, CompileFailure)
    assert isinstance(outcome.error, ParseFailure)
    assert outcome.error.origin_file == "/virtual/_p.scss"
    assert outcome.error.line == 3
    assert outcome.error.extract == ("  color: red;", "  }}", ".b { color: blue; }")


def test_parse_compile_error_reads_extract_from_imported_source() -> None:
    tree = SassTree(source="", base_path="/virtual/site.scss", syntax=Syntax.SCSS, resolve=lambda uri, prev: None)
    tree.imported.append("/virtual/_mixins.scss")
    tree.sources["/virtual/_mixins.scss"] = "// mixins\n@mixin m {\na {\n}\n"
    message = "Error: Invalid CSS\n        on line 3:3 of /virtual/_mixins.scss\n>> a {\n"

    error = _parse_compile_error(message, tree)

    assert error.extract == ("@mixin m {", "a {", "}")


def test_parse_compile_error_for_entry_uses_entry_source() -> None:
    tree = SassTree(
        source="a {\n  b: c\n", base_path="/virtual/site.scss", syntax=Syntax.SCSS, resolve=lambda u, p: None
    )

    error = _parse_compile_error("Error: bad\n        on line 2:5 of stdin\n>>   b: c\n", tree)

    assert error.origin_file is None
    assert error.extract == ("a {", "  b: c", None)
