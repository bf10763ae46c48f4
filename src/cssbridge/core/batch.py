"""Batch compilation over a list of command-line style tokens.

``-x`` turns compression on for every input that follows it. Every other
token names an input under ``/virtual/``; its CSS goes to ``/target/``.
One failing input never stops the run.
"""

import logging
import traceback
from collections.abc import Mapping, Sequence
from dataclasses import replace

from cssbridge.core.ports.backend import StylesheetBackend
from cssbridge.core.ports.host import HostEnvironment
from cssbridge.core.reporter import report
from cssbridge.core.session import CompileOptions, CompileSession
from cssbridge.core.syntax import css_output_name
from cssbridge.models import (
    BatchResult,
    CompileFailure,
    CompileOutcome,
    CompileSuccess,
    FileNotFoundFailure,
    RawFailure,
    Syntax,
)

logger = logging.getLogger(__name__)

COMPRESS_FLAG = "-x"
VIRTUAL_ROOT = "/virtual/"
TARGET_ROOT = "/target/"


def _is_missing_entry(outcome: CompileFailure, input_path: str) -> bool:
    error = outcome.error
    return isinstance(error, FileNotFoundFailure) and error.origin_file is None and error.path == input_path


def _compile_input(
    session: CompileSession,
    host: HostEnvironment,
    input_name: str,
    options: CompileOptions,
    show_extracts: bool,
) -> CompileOutcome:
    output_name = css_output_name(input_name)
    input_path = VIRTUAL_ROOT + input_name
    output_path = TARGET_ROOT + output_name

    try:
        host.debug(f"Compiling {input_name} to {output_name} ...")
        outcome = session.compile(input_path, options)
        if isinstance(outcome, CompileSuccess):
            host.write_file(output_path, outcome.css)
            host.debug(f"Compiled {input_name} to {output_name}.")
            return outcome
        if _is_missing_entry(outcome, input_path):
            host.warn(f"{input_name}: File not found")
            return outcome
    except Exception as e:
        logger.debug("Unhandled error compiling %s", input_name, exc_info=True)
        outcome = CompileFailure(error=RawFailure(message=str(e), trace=traceback.format_exc()))

    report(host, outcome.error, input_name, show_extracts)
    return outcome


def run_batch(
    host: HostEnvironment,
    backends: Mapping[Syntax, StylesheetBackend],
    argv: Sequence[str],
    show_extracts: bool = False,
    options: CompileOptions | None = None,
) -> BatchResult:
    options = options or CompileOptions()
    session = CompileSession(host, backends)
    result = BatchResult()

    for token in argv:
        if token == COMPRESS_FLAG:
            host.debug("Compression enabled")
            options = replace(options, compress=True)
            continue

        outcome = _compile_input(session, host, token, options, show_extracts)
        result.per_file.append((token, outcome))
        if not isinstance(outcome, CompileSuccess):
            result.any_failure = True

    return result


def run(
    host: HostEnvironment,
    backends: Mapping[Syntax, StylesheetBackend],
    argv: Sequence[str],
    show_extracts: bool = False,
    options: CompileOptions | None = None,
) -> int:
    """Run a batch and return the process exit status (0 or 1)."""
    result = run_batch(host, backends, argv, show_extracts=show_extracts, options=options)
    host.debug("Finished")
    return 1 if result.any_failure else 0
