"""Canonicalize numbered prompts copied from an interactive session.

    iex(1)> 1 + 2      ->  iex> 1 + 2
    ...(1)>  3         ->  ...>  3
"""

from __future__ import annotations

from .errors import UnknownPromptFormatError
from .models import DocContext

_NUMBERED_PREFIXES = ("iex(", "...(")

ACCEPTED_FORMATS = "iex>, iex(1)>, ...>, ...(1)>"


def is_numbered_prompt(text: str) -> bool:
    """Check if the line opens with a numbered prompt such as iex(3)>."""
    return text.startswith(_NUMBERED_PREFIXES) and len(text) > 4


def strip_prompt_number(
    text: str,
    line_no: int,
    context: DocContext | None = None
) -> str:
    """
    Rewrite "iex(N)>" / "...(N)>" into "iex>" / "...>".

    The character after the opening parenthesis is always skipped, then the
    line is scanned for the closing ")>".

    Raises:
        UnknownPromptFormatError: If the closing ")>" is missing
    """
    prefix = text[:3]
    end = text.find(")>", 5)

    if not text.startswith(_NUMBERED_PREFIXES) or end < 0:
        raise UnknownPromptFormatError(
            f"unknown IEx prompt: {text!r}.\nAccepted formats are: {ACCEPTED_FORMATS}",
            line=line_no,
            context=context
        )

    return f"{prefix}>{text[end + 2:]}"
