from cssbridge.core.ports.host import HostEnvironment
from cssbridge.models import Failure, FileNotFoundFailure, ParseFailure, RawFailure


def _diagnostic_filename(error: Failure, fallback_filename: str) -> str:
    if isinstance(error, ParseFailure | FileNotFoundFailure) and error.origin_file:
        return error.origin_file
    return fallback_filename


def format_diagnostic(error: Failure, fallback_filename: str, show_extracts: bool = False) -> list[str]:
    """Render a failure as the lines shown to the user.

    Columns are stored 0-based and displayed 1-based.
    """
    filename = _diagnostic_filename(error, fallback_filename)

    if isinstance(error, RawFailure):
        return [f"{filename}: {error.message}\n{error.trace}"]

    if not isinstance(error, ParseFailure):
        return [f"{filename}: {error.message}"]

    lines = [f"{filename}:[{error.line},{error.column + 1}] {error.message}"]
    if show_extracts and error.extract is not None:
        previous, current, following = error.extract
        if previous:
            lines.append(f"  {error.line - 1}:{previous}")
        if current:
            lines.append(f"  {error.line}:{current}")
        if following:
            lines.append(f"  {error.line + 1}:{following}")
    return lines


def report(host: HostEnvironment, error: Failure, fallback_filename: str, show_extracts: bool = False) -> list[str]:
    lines = format_diagnostic(error, fallback_filename, show_extracts)
    for line in lines:
        host.warn(line)
    return lines
