from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Syntax(str, Enum):
    INDENTED_SASS = "sass"
    SCSS = "scss"
    LESS = "less"


class StylesheetReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    uri: str
    requesting_file_path: str | None = None


class ResolvedSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    backing_path: str
    syntax: Syntax
    content: bytes


class FileNotFoundFailure(BaseModel):
    kind: Literal["file_not_found"] = "file_not_found"
    path: str
    message: str = "File not found"
    origin_file: str | None = None


class ParseFailure(BaseModel):
    kind: Literal["parse"] = "parse"
    message: str
    line: int
    column: int = 0  # 0-based; shown 1-based
    extract: tuple[str | None, str | None, str | None] | None = None
    origin_file: str | None = None


class EmptyOutputFailure(BaseModel):
    kind: Literal["empty_output"] = "empty_output"
    path: str
    message: str = "Could not parse included file"


class RawFailure(BaseModel):
    kind: Literal["raw"] = "raw"
    message: str
    trace: str = ""


Failure = Annotated[
    FileNotFoundFailure | ParseFailure | EmptyOutputFailure | RawFailure,
    Field(discriminator="kind"),
]


class CompileSuccess(BaseModel):
    status: Literal["success"] = "success"
    css: str


class CompileFailure(BaseModel):
    status: Literal["failure"] = "failure"
    error: Failure


CompileOutcome = Annotated[CompileSuccess | CompileFailure, Field(discriminator="status")]


class BatchResult(BaseModel):
    per_file: list[tuple[str, CompileOutcome]] = Field(default_factory=list)
    any_failure: bool = False
