import re
from collections.abc import Iterable, Sequence

from cssbridge.core.syntax import normalize_family

_DEFAULT_INCLUDES = {
    "less": ("**/*.less",),
    "sass": ("**/*.sass", "**/*.scss"),
}

_DEFAULT_EXCLUDES = {
    "less": (),
    "sass": ("**/_*.sass", "**/_*.scss"),
}


def default_patterns(family: str) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Return the (includes, excludes) used when none are configured."""
    resolved = normalize_family(family)
    return _DEFAULT_INCLUDES[resolved], _DEFAULT_EXCLUDES[resolved]


def _compile_pattern(pattern: str) -> re.Pattern[str]:
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(parts) + r"\Z")


def matches(path: str, pattern: str) -> bool:
    """Ant-style glob match: ``**/`` spans directories, ``*`` stays in one."""
    return _compile_pattern(pattern).match(path) is not None


def scan_sources(paths: Iterable[str], includes: Sequence[str], excludes: Sequence[str] = ()) -> list[str]:
    """Select entry files among ``paths`` (relative, ``/``-separated)."""
    selected = [
        p
        for p in paths
        if any(matches(p, inc) for inc in includes) and not any(matches(p, exc) for exc in excludes)
    ]
    return sorted(selected)
