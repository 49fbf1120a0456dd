from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass, field

import libcst as cst


def name_parts(node: cst.BaseExpression) -> list[str]:
    """Return the segments of a dotted Name/Attribute, e.g. ['os', 'path']."""
    if isinstance(node, cst.Name):
        return [node.value]
    if isinstance(node, cst.Attribute):
        return [*name_parts(node.value), node.attr.value]
    raise TypeError(f"Not a dotted name: {type(node).__name__}")


@dataclass(frozen=True)
class ModuleName:
    """A possibly relative module reference as it appears in an import."""

    leading_dots: int = 0
    parts: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_import_alias(cls, alias: cst.ImportAlias) -> ModuleName:
        return cls(parts=tuple(name_parts(alias.name)))

    @classmethod
    def from_import_from(cls, node: cst.ImportFrom) -> ModuleName:
        # `from . import x` has no module; the dots alone name the package.
        parts = tuple(name_parts(node.module)) if node.module is not None else ()
        return cls(leading_dots=len(node.relative), parts=parts)

    def to_code(self) -> str:
        return "." * self.leading_dots + ".".join(self.parts)


def alias_name(alias: cst.ImportAlias) -> str | None:
    if alias.asname is None:
        return None
    target = alias.asname.name
    if not isinstance(target, cst.Name):
        raise TypeError(f"Unexpected import alias target: {type(target).__name__}")
    return target.value


class ParameterCategory(enum.Enum):
    SIMPLE = "simple"
    VAR_ARG_LIST = "var_arg_list"
    VAR_ARG_DICTIONARY = "var_arg_dictionary"


ParameterNode = cst.Param | cst.ParamStar | cst.ParamSlash


def iter_parameters(params: cst.Parameters) -> Iterator[tuple[ParameterCategory, ParameterNode]]:
    """Yield the parameters of a signature in source order.

    The positional-only marker `/` and a bare keyword-only marker `*` are
    yielded as their own nodes so callers can keep the signature's shape.
    """
    for p in params.posonly_params:
        yield ParameterCategory.SIMPLE, p
    if params.posonly_params or isinstance(params.posonly_ind, cst.ParamSlash):
        slash = params.posonly_ind if isinstance(params.posonly_ind, cst.ParamSlash) else cst.ParamSlash()
        yield ParameterCategory.SIMPLE, slash
    for p in params.params:
        yield ParameterCategory.SIMPLE, p
    if isinstance(params.star_arg, (cst.Param, cst.ParamStar)):
        yield ParameterCategory.VAR_ARG_LIST, params.star_arg
    for p in params.kwonly_params:
        yield ParameterCategory.SIMPLE, p
    if params.star_kwarg is not None:
        yield ParameterCategory.VAR_ARG_DICTIONARY, params.star_kwarg
