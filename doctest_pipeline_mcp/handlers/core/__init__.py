"""Registry for core MCP tool definitions and handlers."""

# Tool definitions and handlers
from .classify_expected import (
    TOOL_DEFINITION as CLASSIFY_EXPECTED_TOOL,
    handle as handle_classify_expected,
)

from .extract_doctests import (
    TOOL_DEFINITION as EXTRACT_DOCTESTS_TOOL,
    handle as handle_extract_doctests,
)

from .run_doctests import (
    TOOL_DEFINITION as RUN_DOCTESTS_TOOL,
    handle as handle_run_doctests,
)


# All Core tool definitions
TOOLS = [
    EXTRACT_DOCTESTS_TOOL,
    CLASSIFY_EXPECTED_TOOL,
    RUN_DOCTESTS_TOOL,
]

# Tool name to handler mapping
HANDLERS = {
    "extract_doctests": handle_extract_doctests,
    "classify_expected": handle_classify_expected,
    "run_doctests": handle_run_doctests,
}


__all__ = [
    # Tool definitions
    "TOOLS",
    "EXTRACT_DOCTESTS_TOOL",
    "CLASSIFY_EXPECTED_TOOL",
    "RUN_DOCTESTS_TOOL",
    # Handlers
    "HANDLERS",
    "handle_extract_doctests",
    "handle_classify_expected",
    "handle_run_doctests",
]
