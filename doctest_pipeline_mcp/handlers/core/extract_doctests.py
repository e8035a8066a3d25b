"""MCP handler for the extract_doctests tool (delegates to ExtractionService)."""

from __future__ import annotations

import json

from mcp.types import TextContent, Tool

from ...services import ExtractionService, ServiceResult

# =============================================================================
# Tool Definition
# =============================================================================

UNIT_SCHEMA = {
    "type": "object",
    "properties": {
        "identifier": {
            "type": "string",
            "description": "'moduledoc' or 'name/arity' of the documented callable"
        },
        "line": {
            "type": "integer",
            "description": "Line of the documentation attribute in the source file"
        },
        "text": {
            "type": "string",
            "description": "Raw documentation text"
        }
    },
    "required": ["text"]
}

TOOL_DEFINITION = Tool(
    name="extract_doctests",
    description=(
        "Extract iex> doctest examples from documentation. Accepts a "
        "documentation file, raw text, or per-function documentation units. "
        "Returns each doctest with its examples and the classification of "
        "their expected results (value, inspect, exception or none)."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "file_path": {
                "type": "string",
                "description": "Path to a documentation file (.md, .txt, ...)"
            },
            "text": {
                "type": "string",
                "description": "Documentation text (alternative to file_path)"
            },
            "module": {
                "type": "string",
                "description": "Module name, required when 'units' is given"
            },
            "units": {
                "type": "array",
                "items": UNIT_SCHEMA,
                "description": "Per-function documentation units"
            },
            "only": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Only extract these identifiers (units mode)"
            },
            "except": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Skip these identifiers (units mode)"
            }
        }
    }
)


# =============================================================================
# Handler
# =============================================================================

async def handle(arguments: dict) -> list[TextContent]:
    """Extract doctests from 'units', 'file_path' or 'text' and return JSON."""
    service = ExtractionService()

    if arguments.get("units") is not None:
        result = service.extract_units(
            module=arguments.get("module", ""),
            units=arguments["units"],
            only=arguments.get("only"),
            exclude=arguments.get("except"),
            file=arguments.get("file_path")
        )
    else:
        result = service.extract_document(
            text=arguments.get("text"),
            file_path=arguments.get("file_path")
        )

    response = result.map(lambda extracted: json.dumps(extracted.to_dict(), indent=2))
    if not response.success:
        return _error_response(response)

    return [TextContent(type="text", text=response.data)]


# =============================================================================
# Helpers
# =============================================================================

def _error_response(result: ServiceResult) -> list[TextContent]:
    """Create error response from failed ServiceResult."""
    return [TextContent(type="text", text=f"Error: {result.error.message}")]
