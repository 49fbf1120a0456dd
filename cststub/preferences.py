from __future__ import annotations

from dataclasses import dataclass, replace

import libcst as cst

DEFAULT_HEADER = "This type stub file was generated by cststub."

# Names accepted by the CLI for --line-end.
LINE_ENDINGS: dict[str, str] = {"lf": "\n", "crlf": "\r\n", "cr": "\r"}


@dataclass(frozen=True)
class FormattingPreferences:
    """Line terminator and indentation unit used when emitting a stub."""

    line_end: str = "\n"
    indent: str = "    "

    @classmethod
    def from_module(cls, module: cst.Module) -> FormattingPreferences:
        """Inherit the style LibCST detected while parsing the source file."""
        return cls(line_end=module.default_newline, indent=module.default_indent)

    def with_overrides(
        self, *, line_end: str | None = None, indent: str | None = None
    ) -> FormattingPreferences:
        changes: dict[str, str] = {}
        if line_end is not None:
            changes["line_end"] = line_end
        if indent is not None:
            changes["indent"] = indent
        return replace(self, **changes) if changes else self


@dataclass(frozen=True)
class StubOptions:
    header: str = DEFAULT_HEADER
    # Applied on top of whatever each source file's own style is.
    line_end: str | None = None
    indent: str | None = None

    def preferences_for(self, module: cst.Module) -> FormattingPreferences:
        return FormattingPreferences.from_module(module).with_overrides(
            line_end=self.line_end, indent=self.indent
        )
