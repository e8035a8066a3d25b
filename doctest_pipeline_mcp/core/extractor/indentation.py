"""Strip the prompt-relative indentation of documentation lines.

Examples are usually indented inside documentation. The column where the
first ``iex`` prompt of a block starts becomes the block's margin: every
following prompt and continuation line must start exactly there, and output
lines are stripped by the same amount. Plain text between blocks is dropped.

States:
    TEXT          looking for the next prompt
    PROMPT        on a prompt line (always followed by AFTER_PROMPT)
    AFTER_PROMPT  on the lines directly following a prompt
    CODE          on output lines, until a blank line or a new prompt
"""

from __future__ import annotations

from enum import Enum

from ...constants import ALL_PROMPTS, IEX_PROMPTS
from .errors import IndentationMismatchError
from .models import DocContext, SourceLine


class _State(Enum):
    TEXT = "text"
    PROMPT = "prompt"
    AFTER_PROMPT = "after_prompt"
    CODE = "code"


def normalize(
    lines: list[str],
    start_line: int,
    context: DocContext | None = None
) -> list[SourceLine]:
    """
    Normalize raw documentation lines into SourceLines.

    Args:
        lines: Raw lines, without line terminators
        start_line: Line number of the first line
        context: Where the lines came from (for error messages)

    Returns:
        SourceLines for every line from the first prompt onwards

    Raises:
        IndentationMismatchError: If a prompt line does not start at the margin
    """
    adjusted: list[SourceLine] = []
    state = _State.TEXT
    indent = 0
    i = 0

    while i < len(lines):
        line = lines[i]
        line_no = start_line + i

        if state is _State.TEXT:
            if _starts_with_iex_prompt(line):
                indent = _get_indent(line, indent)
                state = _State.PROMPT
                continue
            i += 1
            continue

        stripped = _strip_indent(line, indent)

        if state is _State.CODE:
            if stripped == "":
                adjusted.append(SourceLine(stripped, line_no))
                state = _State.TEXT
                indent = 0
                i += 1
            elif _starts_with_iex_prompt(line):
                # Re-validate the new prompt against the current margin
                state = _State.PROMPT
            else:
                adjusted.append(SourceLine(stripped, line_no))
                i += 1
            continue

        # PROMPT / AFTER_PROMPT
        trimmed = line.lstrip()
        if trimmed and trimmed != stripped:
            raise IndentationMismatchError(
                _mismatch_message(line, indent),
                line=line_no,
                context=context
            )

        adjusted.append(SourceLine(stripped, line_no))

        if state is _State.PROMPT or stripped.startswith(ALL_PROMPTS):
            state = _State.AFTER_PROMPT
        else:
            state = _State.CODE
        i += 1

    return adjusted


def _starts_with_iex_prompt(line: str) -> bool:
    return line.lstrip().startswith(IEX_PROMPTS)


def _get_indent(line: str, current_indent: int) -> int:
    pos = line.find("iex")
    return pos if pos >= 0 else current_indent


def _strip_indent(line: str, indent: int) -> str:
    """Drop the first `indent` characters; shorter lines become empty."""
    if len(line) - indent > 0:
        return line[indent:]
    return ""


def _mismatch_message(line: str, indent: int) -> str:
    n_spaces = f"{indent} space" if indent == 1 else f"{indent} spaces"
    return (
        f"indentation level mismatch on doctest line: {line!r}\n"
        "\n"
        "If you are planning to assert on the result of an `iex>` expression, "
        "make sure the result is indented at the beginning of `iex>`, which "
        f"in this case is exactly {n_spaces}.\n"
        "\n"
        "If instead you have an `iex>` expression that spans over multiple lines, "
        "please make sure that each line after the first one begins with `...>`.\n"
    )
