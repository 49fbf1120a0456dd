"""Emit a type stub for a parsed Python module.

The writer walks the LibCST tree once and keeps only the declaration
surface of the module: public classes, public top-level functions and
methods, and module-level imports. Bodies collapse to ``...`` and
parameter defaults are redacted to ``...`` as well.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

import libcst as cst

from .codegen import CodeBuilder
from .cst_utils import ModuleName, ParameterCategory, ParameterNode, alias_name, iter_parameters
from .expressions import CSTExpressionRenderer, ExpressionRenderer
from .naming import ConventionNameClassifier, NameClassifier
from .preferences import DEFAULT_HEADER, FormattingPreferences

logger = logging.getLogger(__name__)

_DECLARATIONS = (cst.ClassDef, cst.FunctionDef, cst.Import, cst.ImportFrom)
# Nodes that only hold statements; the walk passes through them.
_CONTAINERS = (cst.Module, cst.IndentedBlock, cst.SimpleStatementLine, cst.SimpleStatementSuite)


class TypeStubWriter(cst.CSTVisitor):
    def __init__(
        self,
        typings_path: str | Path | None,
        module: cst.Module,
        *,
        preferences: FormattingPreferences | None = None,
        classifier: NameClassifier | None = None,
        renderer: ExpressionRenderer | None = None,
        header: str = DEFAULT_HEADER,
    ) -> None:
        super().__init__()
        self._typings_path = Path(typings_path) if typings_path is not None else None
        self._module = module
        self._preferences = preferences or FormattingPreferences.from_module(module)
        self._classifier = classifier or ConventionNameClassifier()
        self._renderer = renderer or CSTExpressionRenderer(module)
        self._header = header
        self._reset()

    def _reset(self) -> None:
        self._builder = CodeBuilder(indent=self._preferences.indent, line_end=self._preferences.line_end)
        self._class_nest_count = 0
        self._function_nest_count = 0
        # One flag per open suite; the bottom entry stands for module scope.
        self._emitted_suite: list[bool] = [False]

    def render(self) -> str:
        """Return the stub text. Every call starts from fresh state."""
        self._reset()
        self._emit_header_docstring()
        self._module.visit(self)
        return self._builder.render()

    def write(self) -> str:
        """Render the stub, write it to the typings path and return the text."""
        if self._typings_path is None:
            raise ValueError("No typings path to write the stub to")
        text = self.render()
        self._write_file(text)
        return text

    # ---------- Dispatch ----------

    def on_visit(self, node: cst.CSTNode) -> bool:
        if isinstance(node, _DECLARATIONS):
            return super().on_visit(node)
        # Everything else is executable logic and never emitted.
        return isinstance(node, _CONTAINERS)

    # ---------- Declarations ----------

    def visit_ClassDef(self, node: cst.ClassDef) -> bool:
        class_name = node.name.value

        if self._is_hidden(class_name):
            logger.debug("Skipping non-public class %s", class_name)
            return False

        self._mark_emitted()
        self._emit_decorators(node.decorators)
        line = f"class {class_name}{self._print_type_parameters(node.type_parameters)}"
        arguments = [*node.bases, *node.keywords]
        if arguments:
            line += f"({', '.join(self._print_argument(arg) for arg in arguments)})"
        self._emit_line(line + ":")

        with self._suite():
            self._class_nest_count += 1
            try:
                node.body.visit(self)
            finally:
                self._class_nest_count -= 1

        self._emit_line()
        self._emit_line()
        return False

    def visit_FunctionDef(self, node: cst.FunctionDef) -> bool:
        function_name = node.name.value

        if self._function_nest_count > 0:
            logger.debug("Skipping nested function %s", function_name)
            return False
        if self._is_hidden(function_name):
            logger.debug("Skipping non-public function %s", function_name)
            return False

        self._mark_emitted()
        self._emit_decorators(node.decorators)
        line = "async " if node.asynchronous is not None else ""
        line += f"def {function_name}{self._print_type_parameters(node.type_parameters)}"
        line += f"({', '.join(self._print_parameter(c, p) for c, p in iter_parameters(node.params))})"
        if node.returns is not None:
            line += " -> " + self._print_expression(node.returns.annotation)
        self._emit_line(line + ":")

        with self._suite():
            # Nothing nested in a function body is a function we emit.
            self._function_nest_count += 1
            try:
                node.body.visit(self)
            finally:
                self._function_nest_count -= 1

        self._emit_line()
        return False

    def visit_Import(self, node: cst.Import) -> bool:
        if self._function_nest_count > 0 or self._class_nest_count > 0:
            return False

        names = []
        for alias in node.names:
            text = ModuleName.from_import_alias(alias).to_code()
            asname = alias_name(alias)
            if asname is not None:
                text += f" as {asname}"
            names.append(text)

        self._emit_line("import " + ", ".join(names))
        return False

    def visit_ImportFrom(self, node: cst.ImportFrom) -> bool:
        if self._function_nest_count > 0 or self._class_nest_count > 0:
            return False

        line = f"from {ModuleName.from_import_from(node).to_code()} import "
        if isinstance(node.names, cst.ImportStar):
            line += "*"
        else:
            names = []
            for alias in node.names:
                text = ModuleName.from_import_alias(alias).to_code()
                asname = alias_name(alias)
                if asname is not None:
                    text += f" as {asname}"
                names.append(text)
            line += ", ".join(names)

        self._emit_line(line)
        return False

    # ---------- Emission ----------

    def _is_hidden(self, name: str) -> bool:
        return self._classifier.is_protected_name(name) or self._classifier.is_private_name(name)

    def _mark_emitted(self) -> None:
        self._emitted_suite[-1] = True

    @contextmanager
    def _suite(self) -> Iterator[None]:
        with self._builder.block():
            self._emitted_suite.append(False)
            try:
                yield
                if not self._emitted_suite[-1]:
                    self._emit_line("...")
            finally:
                self._emitted_suite.pop()

    def _emit_decorators(self, decorators: Sequence[cst.Decorator]) -> None:
        for decorator in decorators:
            target = decorator.decorator
            if isinstance(target, cst.Call):
                args = ", ".join(self._print_argument(arg) for arg in target.args)
                line = f"@{self._print_expression(target.func)}({args})"
            else:
                line = "@" + self._print_expression(target)
            self._emit_line(line)

    def _emit_header_docstring(self) -> None:
        self._emit_line('"""')
        self._emit_line(self._header)
        self._emit_line('"""')
        self._emit_line()

    def _emit_line(self, line: str = "") -> None:
        self._builder.write(line)

    # ---------- Printing ----------

    def _print_parameter(self, category: ParameterCategory, node: ParameterNode) -> str:
        if isinstance(node, cst.ParamSlash):
            return "/"

        line = ""
        if category is ParameterCategory.VAR_ARG_LIST:
            line += "*"
        elif category is ParameterCategory.VAR_ARG_DICTIONARY:
            line += "**"

        if isinstance(node, cst.Param):
            line += node.name.value
            if node.annotation is not None:
                line += ": " + self._print_expression(node.annotation.annotation)
            if node.default is not None:
                line += " = ..." if node.annotation is not None else "=..."

        return line

    def _print_type_parameters(self, node: cst.TypeParameters | None) -> str:
        if node is None:
            return ""
        params = []
        for type_param in node.params:
            param = type_param.param
            if isinstance(param, cst.TypeVarTuple):
                line = "*" + param.name.value
            elif isinstance(param, cst.ParamSpec):
                line = "**" + param.name.value
            else:
                line = param.name.value
                if param.bound is not None:
                    line += ": " + self._print_expression(param.bound)
            if type_param.default is not None:
                line += " = " + type_param.star + self._print_expression(type_param.default)
            params.append(line)
        return f"[{', '.join(params)}]"

    def _print_argument(self, node: cst.Arg) -> str:
        line = node.star
        if node.keyword is not None:
            line += node.keyword.value + "="
        return line + self._print_expression(node.value)

    def _print_expression(self, node: cst.BaseExpression) -> str:
        return self._renderer.render(node)

    def _write_file(self, text: str) -> None:
        # newline="" keeps the source file's line terminators untouched.
        self._typings_path.write_text(text, encoding="utf-8", newline="")
        logger.info("Wrote stub %s", self._typings_path)
