from cssbridge.backends.lesscpy_adapter import LessTree, LesscpyBackend
from cssbridge.backends.libsass_adapter import LibsassBackend, SassTree
from cssbridge.core.ports.backend import StylesheetBackend
from cssbridge.models import Syntax


def default_backends() -> dict[Syntax, StylesheetBackend]:
    return {
        Syntax.INDENTED_SASS: LibsassBackend(Syntax.INDENTED_SASS),
        Syntax.SCSS: LibsassBackend(Syntax.SCSS),
        Syntax.LESS: LesscpyBackend(),
    }


__all__ = [
    "LessTree",
    "LesscpyBackend",
    "LibsassBackend",
    "SassTree",
    "default_backends",
]
