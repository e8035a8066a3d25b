"""MCP handler for run_doctests (delegates to EvaluationService)."""

from __future__ import annotations

from mcp.types import TextContent, Tool

from ...services import EvaluationReport, EvaluationService, ServiceResult
from .extract_doctests import UNIT_SCHEMA

# =============================================================================
# Tool Definition
# =============================================================================

TOOL_DEFINITION = Tool(
    name="run_doctests",
    description=(
        "Extract iex> doctest examples and run them as Python. "
        "Each doctest runs in its own namespace; examples in the same "
        "doctest share variables. Reports passed and failed doctests "
        "with the failing example's transcript."
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
                "items": {"type": "string"}
            },
            "except": {
                "type": "array",
                "items": {"type": "string"}
            }
        }
    }
)


# =============================================================================
# Handler
# =============================================================================

async def handle(arguments: dict) -> list[TextContent]:
    """Run doctests from 'units', 'file_path' or 'text' and return a report."""
    service = EvaluationService()

    if arguments.get("units") is not None:
        result = await service.run_units(
            module=arguments.get("module", ""),
            units=arguments["units"],
            only=arguments.get("only"),
            exclude=arguments.get("except"),
            file=arguments.get("file_path")
        )
    else:
        result = await service.run_document(
            text=arguments.get("text"),
            file_path=arguments.get("file_path")
        )

    report = result.map(format_report)
    if not report.success:
        return _error_response(report)

    return [TextContent(type="text", text=report.data)]


# =============================================================================
# Response Formatting
# =============================================================================

def format_report(report: EvaluationReport) -> str:
    """Format an evaluation report as readable text."""
    status = "PASSED" if report.success else "FAILED"
    lines = [
        f"{status}: {report.passed} passed, {report.failed} failed "
        f"({len(report.outcomes)} doctest(s) from {report.source_name})",
    ]

    failures = [o for o in report.outcomes if not o.passed]
    if failures:
        lines.append("")
        lines.append("Failures:")
        for outcome in failures:
            lines.append(f"  - {outcome.name} (line {outcome.line})")
            for message_line in (outcome.message or "").splitlines():
                lines.append(f"      {message_line}")

    return "\n".join(lines)


# =============================================================================
# Helpers
# =============================================================================

def _error_response(result: ServiceResult) -> list[TextContent]:
    """Create error response from failed ServiceResult."""
    return [TextContent(type="text", text=f"Error: {result.error.message}")]
