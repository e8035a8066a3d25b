"""
Doctest Pipeline MCP Server

Extract iex> examples from documentation, classify their expected
results and run them.
"""

__version__ = "0.1.0"

# Public API
from .core import (
    MODULEDOC,
    DocTest,
    DocUnit,
    FunArity,
    classify,
    collect_doctests,
    collect_file_doctests,
    extract,
    normalize,
    select,
)

__all__ = [
    "__version__",
    # Extraction
    "normalize",
    "extract",
    "classify",
    "select",
    "MODULEDOC",
    "FunArity",
    # Collection
    "collect_doctests",
    "collect_file_doctests",
    "DocUnit",
    "DocTest",
]
