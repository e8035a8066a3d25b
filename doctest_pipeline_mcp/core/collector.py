"""
Turn documentation units into named, tagged doctests.

This is the hand-off point to whatever compiles and runs the tests: each
DocTest carries its example group, a stable name and the tags needed to
report failures against the original file and line.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from .extractor import (
    MODULEDOC,
    DocContext,
    ExampleGroup,
    Identifier,
    extract,
    format_identifier,
)
from .selection import select


@dataclass(frozen=True)
class DocUnit:
    """One piece of documentation, as supplied by a documentation source."""
    identifier: Identifier      # MODULEDOC or FunArity("add", 2)
    line: int                   # Line of the documentation attribute
    text: str


@dataclass(frozen=True)
class DocTest:
    """A single test to be compiled and run."""
    name: str                   # "MyModule.add/2 (3)"
    group: ExampleGroup
    tags: dict[str, Any] = field(default_factory=dict)

    @property
    def line(self) -> int:
        return self.group.start_line


def collect_doctests(
    module: str,
    units: Iterable[DocUnit],
    only: Sequence[Identifier] | None = None,
    exclude: Sequence[Identifier] = (),
    tags: dict[str, Any] | None = None,
    file: str | None = None
) -> list[DocTest]:
    """
    Extract, select and name the doctests of one module.

    Args:
        module: Module name used in test names and error messages
        units: Documentation units (whole-module doc and per-callable docs)
        only: Run only these identifiers
        exclude: Skip these identifiers
        tags: Extra tags applied to every test
        file: Source file, for error messages

    Returns:
        DocTests numbered from 1 in line order

    Raises:
        DocTestError: If any unit fails to extract or a selector is undefined
    """
    context = DocContext(name=module, file=file)
    base_tags = {"doctest": module, **(tags or {})}

    groups: list[ExampleGroup] = []
    for unit in units:
        groups.extend(extract(unit.text, unit.line, unit.identifier, context))

    selected = select(groups, only=only, exclude=exclude, context=context)

    return [
        DocTest(
            name=doctest_name(group.identifier, module, n),
            group=group,
            tags={"doctest_line": group.start_line, **base_tags}
        )
        for n, group in enumerate(selected, start=1)
    ]


def collect_file_doctests(
    path: str,
    text: str,
    tags: dict[str, Any] | None = None
) -> list[DocTest]:
    """Extract the doctests of a standalone file (README.md and friends)."""
    context = DocContext(name=path, file=path)
    base_tags = {"doctest": path, **(tags or {})}

    # start_line 0: the first line of the file is line 1
    groups = extract(text, 0, MODULEDOC, context)

    return [
        DocTest(
            name=f"{path} ({n})",
            group=group,
            tags={"doctest_line": group.start_line, **base_tags}
        )
        for n, group in enumerate(groups, start=1)
    ]


def doctest_name(identifier: Identifier, module: str, n: int) -> str:
    """Name of the n-th doctest of a module."""
    return f"{format_identifier(identifier, module)} ({n})"

