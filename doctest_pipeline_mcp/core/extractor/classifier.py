"""Classify the expected output of a doctest example.

The expected text that follows an expression is one of:

    (nothing)                  -> NoExpectation, the value is discarded
    ** (RuntimeError) boom     -> RaisedException
    #MapSet<[:a, :b]>          -> OpaqueComparison, compared as a rendered string
    anything else              -> PlainComparison, evaluated and compared by equality
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from ...constants import EXCEPTION_MARKER

# "#" + uppercase letter, then word characters or ".Upper" segments, up to "<"
_INSPECTABLE_RE = re.compile(r"#[A-Z](?:[A-Za-z0-9_]|\.[A-Z])*<")


@dataclass(frozen=True)
class NoExpectation:
    """The example has no expected output."""
    kind: str = "none"


@dataclass(frozen=True)
class RaisedException:
    """The example is expected to raise."""
    exception_name: str     # "RuntimeError"
    message: str            # "boom"
    kind: str = "exception"


@dataclass(frozen=True)
class OpaqueComparison:
    """The value renders as a tag that is not valid source; compare rendered text."""
    expected_display: str   # "#MapSet<[:a, :b]>"
    kind: str = "inspect"


@dataclass(frozen=True)
class PlainComparison:
    """The expected text is itself source, evaluated and compared by equality."""
    expected_source: str    # "[2, 4, 6]"
    kind: str = "value"


ExpectedClassification = Union[
    NoExpectation, RaisedException, OpaqueComparison, PlainComparison
]


def classify(expected: str) -> ExpectedClassification:
    """Tag the raw expected text of an example."""
    if expected == "":
        return NoExpectation()

    if expected.startswith(EXCEPTION_MARKER):
        error = expected[len(EXCEPTION_MARKER):]
        name, _, message = error.partition(")")
        return RaisedException(exception_name=name, message=message.lstrip())

    if is_inspectable(expected):
        return OpaqueComparison(expected_display=expected)

    return PlainComparison(expected_source=expected)


def is_inspectable(expected: str) -> bool:
    """Check if the text starts with an inspected value such as #Name<...>."""
    return _INSPECTABLE_RE.match(expected) is not None
