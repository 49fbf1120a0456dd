from __future__ import annotations

import ast
from typing import Protocol, runtime_checkable

import libcst as cst


@runtime_checkable
class ExpressionRenderer(Protocol):
    def render(self, node: cst.BaseExpression) -> str: ...


class CSTExpressionRenderer:
    """
    Print an expression with LibCST's own code generator.

    Source formatting inside the expression is kept as written, except that an
    expression spanning several lines is collapsed onto one so every emitted
    declaration stays a single line.
    """

    def __init__(self, module: cst.Module | None = None) -> None:
        self._module = module if module is not None else cst.Module(body=[])

    def render(self, node: cst.BaseExpression) -> str:
        code = self._module.code_for_node(node)
        if "\n" in code or "\r" in code:
            return self._collapse(node, code)
        return code

    def _collapse(self, node: cst.BaseExpression, code: str) -> str:
        # A bare generator argument or walrus only parses inside brackets.
        collapsed = ast.unparse(ast.parse(f"({code.strip()})", mode="eval"))
        if isinstance(node, cst.GeneratorExp) and not node.lpar:
            # ast always parenthesizes generators; the call's own parens suffice.
            return collapsed[1:-1]
        return collapsed
