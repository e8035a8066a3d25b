"""Select which example groups to run from only/except identifier lists."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..extractor.errors import UndefinedSelectorError
from ..extractor.models import (
    MODULEDOC,
    DocContext,
    ExampleGroup,
    Identifier,
    format_identifier,
)


def select(
    groups: Iterable[ExampleGroup],
    only: Sequence[Identifier] | None = None,
    exclude: Sequence[Identifier] = (),
    context: DocContext | None = None
) -> list[ExampleGroup]:
    """
    Filter example groups by identifier.

    Args:
        groups: Extracted example groups
        only: Keep only these identifiers (None keeps everything)
        exclude: Drop these identifiers
        context: Used to name the module in error messages

    Returns:
        Selected groups, ordered by start line

    Raises:
        UndefinedSelectorError: If an `only` entry matches no group
    """
    if only is None:
        selected = [g for g in groups if g.identifier not in exclude]
    elif not only:
        return []
    else:
        selected = _filter_only(list(groups), only, exclude, context)

    return sorted(selected, key=lambda g: g.start_line)


def _filter_only(
    groups: list[ExampleGroup],
    only: Sequence[Identifier],
    exclude: Sequence[Identifier],
    context: DocContext | None
) -> list[ExampleGroup]:
    selected = [
        g for g in groups
        if g.identifier not in exclude and g.identifier in only
    ]
    matched = {g.identifier for g in selected}

    # The whole-document marker never counts as undefined
    undefined = [
        identifier for identifier in only
        if identifier != MODULEDOC and identifier not in matched
    ]
    if undefined:
        module = context.name if context else None
        pluralized = "function" if len(undefined) == 1 else "functions"
        functions = "\n    ".join(format_identifier(i, module) for i in undefined)
        raise UndefinedSelectorError(
            f"undefined or private {pluralized} given to doctest:\n\n    {functions}\n\n",
            context=context
        )

    return selected
