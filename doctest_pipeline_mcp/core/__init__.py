"""Core domain logic for the doctest pipeline."""


from .collector import DocTest, DocUnit, collect_doctests, collect_file_doctests
from .evaluator import DoctestFailure, PythonEvaluator, run_group, run_pair
from .extractor import (
    MODULEDOC,
    DocContext,
    DocTestError,
    ExampleGroup,
    ExamplePair,
    FunArity,
    classify,
    extract,
    normalize,
    parse_identifier,
)
from .selection import select

__all__ = [
    # Extractor
    "normalize",
    "extract",
    "classify",
    "parse_identifier",
    "MODULEDOC",
    "FunArity",
    "DocContext",
    "ExampleGroup",
    "ExamplePair",
    "DocTestError",
    # Selection
    "select",
    # Collector
    "collect_doctests",
    "collect_file_doctests",
    "DocUnit",
    "DocTest",
    # Evaluator
    "run_pair",
    "run_group",
    "PythonEvaluator",
    "DoctestFailure",
]
