import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class BridgeSettings:
    encoding: str = "utf-8"
    show_error_extracts: bool = False
    compress: bool = False
    fail_on_error: bool = True
    source_root: str = "."
    output_root: str = "target"


def load_settings() -> BridgeSettings:
    return BridgeSettings(
        encoding=os.getenv("CSSBRIDGE_ENCODING", "utf-8"),
        show_error_extracts=_env_flag("CSSBRIDGE_SHOW_ERROR_EXTRACTS", False),
        compress=_env_flag("CSSBRIDGE_COMPRESS", False),
        fail_on_error=_env_flag("CSSBRIDGE_FAIL_ON_ERROR", True),
        source_root=os.getenv("CSSBRIDGE_SOURCE_ROOT", "."),
        output_root=os.getenv("CSSBRIDGE_OUTPUT_ROOT", "target"),
    )
