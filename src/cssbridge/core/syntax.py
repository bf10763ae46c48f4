from pathlib import PurePosixPath

from cssbridge.exceptions import UnsupportedSyntaxError
from cssbridge.models import Syntax

# Insertion order is lookup priority.
SASS_EXTENSIONS: dict[str, Syntax] = {
    "sass": Syntax.INDENTED_SASS,
    "scss": Syntax.SCSS,
}

LESS_EXTENSIONS: dict[str, Syntax] = {
    "less": Syntax.LESS,
}

_FAMILY_EXTENSIONS: dict[str, dict[str, Syntax]] = {
    "sass": SASS_EXTENSIONS,
    "less": LESS_EXTENSIONS,
}

_FAMILY_ALIASES = {
    "less": "less",
    "sass": "sass",
    "scss": "sass",
}

_EXTENSION_SYNTAX_MAP: dict[str, Syntax] = {**SASS_EXTENSIONS, **LESS_EXTENSIONS}


def normalize_family(family: str) -> str:
    normalized = family.strip().lower()
    resolved = _FAMILY_ALIASES.get(normalized)
    if resolved is None:
        raise UnsupportedSyntaxError(
            f"Unsupported stylesheet family '{family}'. Supported: {sorted(_FAMILY_EXTENSIONS)}"
        )
    return resolved


def extensions_for_family(family: str) -> dict[str, Syntax]:
    return _FAMILY_EXTENSIONS[normalize_family(family)]


def extensions_for_syntax(syntax: Syntax) -> dict[str, Syntax]:
    """Return the lookup table of the family ``syntax`` belongs to."""
    if syntax is Syntax.LESS:
        return LESS_EXTENSIONS
    return SASS_EXTENSIONS


def split_extension(path: str) -> tuple[str, str, str | None]:
    """Split ``path`` into (dir, base, ext).

    ``dir`` keeps its trailing ``/``. Only a dot inside the final segment
    counts as an extension separator.
    """
    last_sep = path.rfind("/")
    directory = path[: last_sep + 1]
    base = path[last_sep + 1 :]
    last_dot = base.rfind(".")
    if last_dot == -1:
        return directory, base, None
    return directory, base[:last_dot], base[last_dot + 1 :]


def detect_syntax_from_path(path: str) -> Syntax:
    _, _, ext = split_extension(path)
    if ext is not None and ext.lower() in _EXTENSION_SYNTAX_MAP:
        return _EXTENSION_SYNTAX_MAP[ext.lower()]
    raise UnsupportedSyntaxError(f"Unsupported stylesheet extension: {'.' + ext if ext else '(none)'}")


def is_partial(path: str) -> bool:
    return PurePosixPath(path).name.startswith("_")


def css_output_name(input_name: str) -> str:
    """Strip the final extension of ``input_name`` and append ``.css``."""
    directory, base, ext = split_extension(input_name)
    if ext is None:
        return input_name + ".css"
    return f"{directory}{base}.css"


_REMOTE_PREFIXES = ("http://", "https://", "//")


def is_plain_css_import(uri: str) -> bool:
    """True for imports both dialects leave in the output as CSS ``@import``."""
    return uri.endswith(".css") or uri.startswith(_REMOTE_PREFIXES)
