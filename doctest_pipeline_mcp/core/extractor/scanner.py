"""Group normalized documentation lines into doctest examples.

A new group starts at the first ``iex>`` prompt after a blank line, a fence
or the start of the document. Inside a group, each prompt (plus its
``...>`` continuations) and the non-blank lines after it form one
ExamplePair. A prompt directly following expected output starts a new
pair in the same group:

    iex> a = 1        <- group 1, pair 1
    1
    iex> a + 1        <- group 1, pair 2
    2

    iex> a + 1        <- group 2 (blank line above)
    2
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ...constants import FENCES
from .classifier import RaisedException
from .errors import MultipleExceptionSpecsError
from .indentation import normalize
from .models import (
    MODULEDOC,
    DocContext,
    ExampleGroup,
    ExamplePair,
    Identifier,
    SourceLine,
)
from .prompts import is_numbered_prompt, strip_prompt_number

_MULTIPLE_EXCEPTIONS_MESSAGE = (
    "multiple exceptions in the same doctest example are not supported, "
    "please separate your iex> prompts by multiple newlines to start new examples"
)


@dataclass
class _PendingGroup:
    start_line: int
    pairs: list[ExamplePair] = field(default_factory=list)


@dataclass
class _Scan:
    """Mutable state of one extraction call."""
    expr: list[str] = field(default_factory=list)
    expected: list[str] = field(default_factory=list)
    formatted: list[str] = field(default_factory=list)
    new_test: bool = True
    groups: list[_PendingGroup] = field(default_factory=list)

    def start_expression(self, text: str, line_no: int) -> None:
        if self.new_test:
            self.groups.append(_PendingGroup(start_line=line_no))
            self.new_test = False
        self.expr = [_fragment(text)]
        self.formatted = [text]

    def continue_expression(self, text: str) -> None:
        self.expr.append(_fragment(text))
        self.formatted.append(text)

    def add_pair(self) -> None:
        """Move the pending expression and its output into the current group."""
        expected = "\n".join(self.expected)
        display = "\n" + "\n".join(self.formatted) + "\n" + expected
        self.groups[-1].pairs.append(ExamplePair(
            source_lines=tuple(self.expr),
            expected_raw=expected,
            display_text=display
        ))
        self.expr = []
        self.expected = []
        self.formatted = []


def extract(
    doc: str,
    start_line: int,
    identifier: Identifier = MODULEDOC,
    context: DocContext | None = None
) -> list[ExampleGroup]:
    """
    Extract example groups from raw documentation text.

    Args:
        doc: The documentation text
        start_line: Line of the documentation attribute; the text starts
            on the following line
        identifier: What the documentation is attached to
        context: Where the documentation came from (for error messages)

    Returns:
        Example groups in document order

    Raises:
        DocTestError: On indentation, prompt or exception-spec errors
    """
    lines = doc.replace("\r\n", "\n").split("\n")
    normalized = normalize(lines, start_line + 1, context)
    return scan_examples(normalized, identifier, context)


def scan_examples(
    lines: list[SourceLine],
    identifier: Identifier = MODULEDOC,
    context: DocContext | None = None
) -> list[ExampleGroup]:
    """Run the example scanner over already normalized lines."""
    lines = list(lines)
    scan = _Scan()
    i = 0

    while i < len(lines):
        text, line_no = lines[i].text, lines[i].line_number

        if text.startswith("iex>"):
            if scan.expr and scan.expected:
                # Adjacent example: close the pair, then handle this line again
                scan.add_pair()
            elif scan.expr:
                scan.continue_expression(text)
                i += 1
            else:
                scan.start_expression(text, line_no)
                i += 1
            continue

        if text.startswith("...>") and scan.expr:
            scan.continue_expression(text)
            i += 1
            continue

        if is_numbered_prompt(text):
            lines[i] = SourceLine(strip_prompt_number(text, line_no, context), line_no)
            continue

        if not scan.expr and not scan.expected:
            # Documentation or blank line between examples
            scan.new_test = True
            scan.formatted = []
        elif text[:3] in FENCES or text == "":
            scan.add_pair()
            scan.new_test = True
        elif not scan.expected:
            scan.expected = [text]
        else:
            scan.expected.append(text)
        i += 1

    if scan.expr:
        scan.add_pair()

    return [_finalize(group, identifier, context) for group in scan.groups]


def _finalize(
    group: _PendingGroup,
    identifier: Identifier,
    context: DocContext | None
) -> ExampleGroup:
    exceptions = [
        pair for pair in group.pairs
        if isinstance(pair.expected, RaisedException)
    ]
    if len(exceptions) > 1:
        raise MultipleExceptionSpecsError(
            _MULTIPLE_EXCEPTIONS_MESSAGE,
            line=group.start_line,
            context=context
        )

    return ExampleGroup(
        start_line=group.start_line,
        identifier=identifier,
        expressions=tuple(group.pairs)
    )


def _fragment(text: str) -> str:
    """Drop the 4-character prompt and the single space after it."""
    rest = text[4:]
    return rest[1:] if rest.startswith(" ") else rest
