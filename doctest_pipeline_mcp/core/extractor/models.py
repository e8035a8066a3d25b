"""Data models for doctest extraction."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Union

from .classifier import ExpectedClassification, classify


class DocMarker(str, Enum):
    """Marker for documentation attached to the enclosing unit as a whole."""
    MODULEDOC = "moduledoc"


MODULEDOC = DocMarker.MODULEDOC


class FunArity(NamedTuple):
    """Identifies the documentation block of one callable."""
    name: str
    arity: int

    def __str__(self) -> str:
        return f"{self.name}/{self.arity}"


Identifier = Union[DocMarker, FunArity]


def parse_identifier(text: str) -> Identifier:
    """
    Parse "moduledoc" or "name/arity" into an Identifier.

    Raises:
        ValueError: If the text is neither form
    """
    text = text.strip()
    if text == MODULEDOC.value:
        return MODULEDOC

    name, sep, arity = text.rpartition("/")
    if not sep or not name or not arity.isdigit():
        raise ValueError(
            f"invalid doctest identifier {text!r}, expected 'moduledoc' or 'name/arity'"
        )
    return FunArity(name, int(arity))


def format_identifier(identifier: Identifier, module: str | None = None) -> str:
    """Render an identifier for messages and test names."""
    if identifier == MODULEDOC:
        return f"module {module}" if module else MODULEDOC.value

    # Plain (name, arity) tuples are accepted wherever a FunArity is
    name, arity = identifier
    if module:
        return f"{module}.{name}/{arity}"
    return f"{name}/{arity}"


@dataclass(frozen=True)
class DocContext:
    """Where a piece of documentation came from (used for error messages)."""
    name: str | None = None     # "MyModule" or "README.md"
    file: str | None = None     # "lib/my_module.ex"


@dataclass(frozen=True)
class SourceLine:
    """A documentation line with its prompt-relative indentation stripped."""
    text: str
    line_number: int


@dataclass(frozen=True)
class ExamplePair:
    """One expression and the output it is expected to produce."""
    source_lines: tuple[str, ...]   # ("a = 1", "a + 1")
    expected_raw: str               # "2" (empty if no expectation)
    display_text: str               # Verbatim transcript, for failure reports

    @property
    def source(self) -> str:
        return "\n".join(self.source_lines)

    @property
    def expected(self) -> ExpectedClassification:
        return classify(self.expected_raw)


@dataclass(frozen=True)
class ExampleGroup:
    """A cluster of example pairs that run together as one test."""
    start_line: int
    identifier: Identifier
    expressions: tuple[ExamplePair, ...]
