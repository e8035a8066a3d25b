"""Structural errors raised while extracting doctests.

Every error is fatal to the documentation unit being processed and carries
enough context (file and line) to point the author at the offending text.
"""

from __future__ import annotations

from .models import DocContext


class DocTestError(Exception):
    """Base class for all doctest extraction errors."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        context: DocContext | None = None
    ):
        self.message = message
        self.line = line
        self.context = context
        super().__init__(self._format())

    def _format(self) -> str:
        file = self.context.file if self.context else None
        if file and self.line is not None:
            return f"{file}:{self.line}: {self.message}"
        if file:
            return f"{file}: {self.message}"
        if self.line is not None:
            return f"line {self.line}: {self.message}"
        return self.message


class IndentationMismatchError(DocTestError):
    """A prompt or output line does not match the example's indentation."""


class UnknownPromptFormatError(DocTestError):
    """A numbered prompt is missing its closing ")>"."""


class MultipleExceptionSpecsError(DocTestError):
    """More than one expected exception inside a single example group."""


class UndefinedSelectorError(DocTestError):
    """An only/except selector names documentation that does not exist."""


class MalformedSourceError(DocTestError):
    """Expression or expected text is not valid source for the evaluator."""
