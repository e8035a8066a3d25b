"""MCP handler for the classify_expected tool."""

from __future__ import annotations

import json

from mcp.types import TextContent, Tool

from ...services import ExtractionService, ServiceResult
from ...services.extraction import classification_to_dict

TOOL_DEFINITION = Tool(
    name="classify_expected",
    description=(
        "Classify the expected result text of a doctest example: no "
        "expectation, raised exception (** (Name) message), inspected "
        "value (#Name<...>) or plain value compared by equality."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "expected": {
                "type": "string",
                "description": "Expected result text as written after the iex> lines"
            }
        },
        "required": ["expected"]
    }
)


async def handle(arguments: dict) -> list[TextContent]:
    """Classify 'expected' and return the classification as JSON."""
    result = ExtractionService().classify(arguments.get("expected"))

    response = result.map(classification_to_dict)
    if not response.success:
        return _error_response(response)

    return [TextContent(type="text", text=json.dumps(response.data, indent=2))]


def _error_response(result: ServiceResult) -> list[TextContent]:
    """Create error response from failed ServiceResult."""
    return [TextContent(type="text", text=f"Error: {result.error.message}")]
