from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class CodeBuilder:
    """
    Minimal, explicit indentation-aware line buffer.
    Lines are stored without terminators; ``render`` appends ``line_end`` to each.
    """
    indent: str = "    "
    line_end: str = "\n"
    lines: list[str] = field(default_factory=list)
    _level: int = 0

    def write(self, line: str = "") -> None:
        # Blank lines carry no indentation.
        self.lines.append(f"{self.indent * self._level}{line}" if line else "")

    def block(self) -> "_Block":
        return _Block(self)

    def render(self) -> str:
        return "".join(f"{ln}{self.line_end}" for ln in self.lines)


class _Block:
    def __init__(self, cb: CodeBuilder) -> None:
        self.cb = cb

    def __enter__(self) -> None:
        self.cb._level += 1

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cb._level -= 1
