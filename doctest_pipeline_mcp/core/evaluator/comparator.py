"""Check evaluated doctest examples against their classified expectations.

Each classification imposes one obligation on whoever runs the example:

    NoExpectation     evaluate the expression, discard the value
    PlainComparison   evaluate both sides, values must be strictly equal
    OpaqueComparison  render the value, text must equal the expected display
    RaisedException   evaluating must raise the named exception with the message

Failures are reported as DoctestFailure, carrying the example's verbatim
transcript so the report can point back at the documentation.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any, Protocol

from ..extractor.classifier import (
    NoExpectation,
    OpaqueComparison,
    RaisedException,
)
from ..extractor.errors import MalformedSourceError
from ..extractor.models import ExampleGroup, ExamplePair

_OPAQUE_TYPE_RE = re.compile(r"#[\w.]+<")

_OPAQUE_HINT = (
    "\nIf you are planning to assert on the result of an iex> expression "
    "which contains a value inspected as #Name<...>, please make sure "
    "the inspected value is placed at the beginning of the expression; "
    "otherwise it will be treated as a comment due to the leading sign #."
)


class SourceEvaluator(Protocol):
    """What the contract needs from the code that actually runs examples."""

    def evaluate(self, source: str, line: int) -> Any:
        """Evaluate source and return its value. Raises MalformedSourceError."""
        ...

    def render(self, value: Any) -> str:
        """Render a value the way it is shown in documentation."""
        ...

    def last_expression(self, source: str) -> str:
        """Return the text of the last expression in source."""
        ...


class DoctestFailure(AssertionError):
    """A doctest example did not produce what its documentation promised."""

    def __init__(
        self,
        message: str,
        doctest: str | None = None,
        expr: str | None = None,
        left: Any = None,
        right: Any = None,
        line: int | None = None
    ):
        self.message = message
        self.doctest = doctest
        self.expr = expr
        self.left = left
        self.right = right
        self.line = line
        super().__init__(self.report())

    def report(self) -> str:
        """Human readable failure report."""
        parts = [self.message]
        if self.expr is not None:
            parts.append(f"code:  {self.expr}")
        if self.left is not None or self.right is not None:
            parts.append(f"left:  {self.left!r}")
            parts.append(f"right: {self.right!r}")
        if self.doctest:
            parts.append(f"doctest:{_indent(self.doctest)}")
        return "\n".join(parts)


def check_value(
    value: Any,
    expected: Any,
    doctest: str,
    last_expr: str,
    expected_expr: str
) -> Any:
    """Require value and expected to be equal and of the same type."""
    if type(value) is type(expected) and value == expected:
        return value

    raise DoctestFailure(
        "Doctest failed",
        doctest=doctest,
        expr=f"{last_expr} === {expected_expr.strip()}",
        left=value,
        right=expected
    )


def check_inspect(
    value: Any,
    expected: str,
    doctest: str,
    last_expr: str,
    render: Callable[[Any], str]
) -> Any:
    """Require the rendered value to equal the expected display text."""
    expr = f"inspect({last_expr}) === {expected.strip()!r}"

    try:
        actual = render(value)
    except Exception as e:
        raise DoctestFailure(str(e), doctest=doctest, expr=expr) from e

    if actual != expected:
        raise DoctestFailure(
            "Doctest failed",
            doctest=doctest,
            expr=expr,
            left=actual,
            right=expected
        )
    return value


def check_raises(
    fun: Callable[[], Any],
    exception: str,
    message: str,
    doctest: str
) -> None:
    """Require fun to raise the named exception with exactly the given message."""
    try:
        fun()
    except MalformedSourceError:
        raise
    except Exception as error:
        actual_exception = _exception_name(error)
        actual_message = str(error)

        if not exception_matches(error, exception):
            raise DoctestFailure(
                f"Doctest failed: expected exception {exception} but got "
                f"{actual_exception} with message {actual_message!r}",
                doctest=doctest
            ) from error

        if actual_message != message:
            raise DoctestFailure(
                f"Doctest failed: wrong message for {actual_exception}\n"
                "expected:\n"
                f"  {message!r}\n"
                "actual:\n"
                f"  {actual_message!r}",
                doctest=doctest
            ) from error
        return

    raise DoctestFailure(
        f"Doctest failed: expected exception {exception} but nothing was raised",
        doctest=doctest
    )


def exception_matches(error: BaseException, name: str) -> bool:
    """Match by class name or by module-qualified class name."""
    cls = type(error)
    return name in (cls.__qualname__, f"{cls.__module__}.{cls.__qualname__}")


def compile_failure(error: MalformedSourceError, source: str, doctest: str) -> DoctestFailure:
    """Build the failure reported when example source does not parse."""
    cause = error.__cause__ or error
    message = f"Doctest did not compile, got: ({type(cause).__name__}) {error.message}"

    if isinstance(cause, SyntaxError) and _OPAQUE_TYPE_RE.search(source):
        message += _OPAQUE_HINT

    return DoctestFailure(message, doctest=doctest, line=error.line)


def run_pair(pair: ExamplePair, evaluator: SourceEvaluator, line: int) -> Any:
    """
    Evaluate one example pair and check it against its expectation.

    Args:
        pair: The example to run
        evaluator: Runs source text
        line: Line number of the pair's first source line

    Returns:
        The value of the expression (None when an exception was expected)

    Raises:
        DoctestFailure: If the example fails or does not compile
    """
    expected = pair.expected
    doctest = pair.display_text
    current = pair.source

    try:
        if isinstance(expected, RaisedException):
            check_raises(
                lambda: evaluator.evaluate(pair.source, line),
                expected.exception_name,
                expected.message,
                doctest
            )
            return None

        value = evaluator.evaluate(pair.source, line)

        if isinstance(expected, NoExpectation):
            return value

        last_expr = evaluator.last_expression(pair.source)

        if isinstance(expected, OpaqueComparison):
            return check_inspect(
                value, expected.expected_display, doctest, last_expr, evaluator.render
            )

        # PlainComparison: the expected text is evaluated too
        current = expected.expected_source
        expected_value = evaluator.evaluate(current, line + len(pair.source_lines))
        return check_value(value, expected_value, doctest, last_expr, current)

    except MalformedSourceError as e:
        raise compile_failure(e, current, doctest) from e


def run_group(group: ExampleGroup, evaluator: SourceEvaluator) -> list[Any]:
    """Run every pair of a group in order, sharing one evaluator."""
    values = []
    line = group.start_line
    for pair in group.expressions:
        try:
            values.append(run_pair(pair, evaluator, line))
        except DoctestFailure as failure:
            if failure.line is None:
                failure.line = line
            raise
        # Expected output lines follow the source lines
        line += len(pair.source_lines) + len(pair.expected_raw.splitlines())
    return values


def _exception_name(error: BaseException) -> str:
    return type(error).__qualname__


def _indent(text: str) -> str:
    return "\n".join(f"  {line}" if line else line for line in text.split("\n"))
