"""Run example groups in a child Python process with a time limit.

The parent sends the group as JSON on stdin and reads the outcome back from
stdout (see worker.py). Examples that never finish are killed when the
timeout expires, so one bad doctest cannot block the caller.
"""

from __future__ import annotations

import asyncio
import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from ...constants import EVALUATION_TIMEOUT, EVALUATION_WORKER
from ..extractor.models import (
    DocContext,
    ExampleGroup,
    ExamplePair,
    format_identifier,
    parse_identifier,
)

# Directory holding the doctest_pipeline_mcp package
PACKAGE_ROOT = Path(__file__).resolve().parents[3]


@dataclass(frozen=True)
class GroupRun:
    """Outcome of running one example group in a child process."""
    passed: bool
    line: int | None = None
    message: str | None = None
    timed_out: bool = False
    crashed: bool = False       # The child died without reporting an outcome


def group_to_payload(group: ExampleGroup, context: DocContext | None = None) -> dict:
    """Serialize a group and its context for the worker."""
    return {
        "name": context.name if context else None,
        "file": context.file if context else None,
        "start_line": group.start_line,
        "identifier": format_identifier(group.identifier),
        "pairs": [
            {
                "source_lines": list(pair.source_lines),
                "expected_raw": pair.expected_raw,
                "display_text": pair.display_text,
            }
            for pair in group.expressions
        ],
    }


def group_from_payload(payload: dict) -> tuple[ExampleGroup, DocContext]:
    """Rebuild the group and context sent by group_to_payload."""
    group = ExampleGroup(
        start_line=payload["start_line"],
        identifier=parse_identifier(payload["identifier"]),
        expressions=tuple(
            ExamplePair(
                source_lines=tuple(pair["source_lines"]),
                expected_raw=pair["expected_raw"],
                display_text=pair["display_text"]
            )
            for pair in payload["pairs"]
        )
    )
    return group, DocContext(name=payload["name"], file=payload["file"])


async def run_in_subprocess(
    group: ExampleGroup,
    context: DocContext | None = None,
    timeout: float = EVALUATION_TIMEOUT
) -> GroupRun:
    """
    Run one example group with a fresh PythonEvaluator in a child process.

    Args:
        group: The example group to run
        context: Where the documentation came from
        timeout: Seconds before the child is killed

    Returns:
        GroupRun with the outcome (never raises for failing examples)
    """
    payload = json.dumps(group_to_payload(group, context)).encode("utf-8")
    cmd = [sys.executable, "-m", EVALUATION_WORKER]

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env={**os.environ, "PYTHONPATH": _pythonpath()}
        )
    except OSError as e:
        return GroupRun(passed=False, message=f"Execution error: {e}", crashed=True)

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(payload),
            timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return GroupRun(
            passed=False,
            message=f"Doctest timed out ({timeout}s limit)",
            timed_out=True
        )

    try:
        outcome = json.loads(stdout_bytes.decode("utf-8"))
    except ValueError:
        stderr = stderr_bytes.decode("utf-8", errors="replace").strip()
        return GroupRun(
            passed=False,
            message=f"Doctest process exited with code {process.returncode}: {stderr}",
            crashed=True
        )

    return GroupRun(
        passed=outcome["passed"],
        line=outcome["line"],
        message=outcome["message"]
    )


def _pythonpath() -> str:
    existing = os.environ.get("PYTHONPATH")
    return f"{PACKAGE_ROOT}{os.pathsep}{existing}" if existing else str(PACKAGE_ROOT)
