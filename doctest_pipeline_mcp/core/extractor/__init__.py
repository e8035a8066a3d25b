"""Extractor - find iex> examples in documentation and classify their expectations."""

from .classifier import (
    ExpectedClassification,
    NoExpectation,
    OpaqueComparison,
    PlainComparison,
    RaisedException,
    classify,
    is_inspectable,
)
from .errors import (
    DocTestError,
    IndentationMismatchError,
    MalformedSourceError,
    MultipleExceptionSpecsError,
    UndefinedSelectorError,
    UnknownPromptFormatError,
)
from .indentation import normalize
from .models import (
    MODULEDOC,
    DocContext,
    DocMarker,
    ExampleGroup,
    ExamplePair,
    FunArity,
    Identifier,
    SourceLine,
    format_identifier,
    parse_identifier,
)
from .prompts import strip_prompt_number
from .scanner import extract, scan_examples

__all__ = [
    # Entry points
    "normalize",
    "strip_prompt_number",
    "extract",
    "scan_examples",
    "classify",
    "is_inspectable",
    # Models
    "MODULEDOC",
    "DocMarker",
    "FunArity",
    "Identifier",
    "DocContext",
    "SourceLine",
    "ExamplePair",
    "ExampleGroup",
    "parse_identifier",
    "format_identifier",
    # Classifications
    "ExpectedClassification",
    "NoExpectation",
    "RaisedException",
    "OpaqueComparison",
    "PlainComparison",
    # Errors
    "DocTestError",
    "IndentationMismatchError",
    "UnknownPromptFormatError",
    "MultipleExceptionSpecsError",
    "UndefinedSelectorError",
    "MalformedSourceError",
]
