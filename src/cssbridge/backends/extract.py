SourceExtract = tuple[str | None, str | None, str | None]


def source_extract(text: str | None, line: int) -> SourceExtract | None:
    """Return the lines before, at and after 1-based ``line`` of ``text``."""
    if text is None:
        return None
    lines = text.splitlines()
    if not 0 < line <= len(lines):
        return None
    before = lines[line - 2] if line > 1 else None
    after = lines[line] if line < len(lines) else None
    return before, lines[line - 1], after
