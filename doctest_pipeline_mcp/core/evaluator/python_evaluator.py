"""Reference evaluator that runs example source as Python."""

from __future__ import annotations

import ast
from typing import Any

from ..extractor.errors import MalformedSourceError
from ..extractor.models import DocContext


class PythonEvaluator:
    """
    Evaluate doctest source with Python semantics.

    One evaluator is meant to run one example group: names bound by an
    earlier pair stay visible to later pairs of the same group.

    The value of a source block is the value of its last statement when
    that statement is an expression or a plain ``name = ...`` assignment,
    and None otherwise.
    """

    def __init__(
        self,
        namespace: dict[str, Any] | None = None,
        context: DocContext | None = None
    ):
        self.namespace: dict[str, Any] = dict(namespace or {})
        self.context = context
        self._filename = (context.file if context else None) or "<doctest>"

    def evaluate(self, source: str, line: int = 1) -> Any:
        tree = self._parse(source, line)
        if not tree.body:
            return None

        last = tree.body[-1]

        if isinstance(last, ast.Expr):
            tree.body.pop()
            self._exec(tree)
            expression = ast.Expression(body=last.value)
            return eval(compile(expression, self._filename, "eval"), self.namespace)

        self._exec(tree)

        if (
            isinstance(last, ast.Assign)
            and len(last.targets) == 1
            and isinstance(last.targets[0], ast.Name)
        ):
            return self.namespace[last.targets[0].id]
        return None

    def render(self, value: Any) -> str:
        return repr(value)

    def last_expression(self, source: str) -> str:
        try:
            tree = ast.parse(source)
        except SyntaxError:
            tree = None

        if tree and tree.body:
            return ast.unparse(tree.body[-1])

        lines = [line.strip() for line in source.splitlines() if line.strip()]
        return lines[-1] if lines else ""

    def _parse(self, source: str, line: int) -> ast.Module:
        try:
            tree = ast.parse(source, filename=self._filename, mode="exec")
        except SyntaxError as e:
            error_line = line + (e.lineno or 1) - 1
            raise MalformedSourceError(
                e.msg,
                line=error_line,
                context=self.context
            ) from e

        ast.increment_lineno(tree, line - 1)
        return tree

    def _exec(self, tree: ast.Module) -> None:
        if tree.body:
            exec(compile(tree, self._filename, "exec"), self.namespace)
