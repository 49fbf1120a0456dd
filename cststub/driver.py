from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import libcst as cst

from .preferences import StubOptions
from .writer import TypeStubWriter

logger = logging.getLogger(__name__)

_SKIP_DIRS = {".git", ".venv", "venv", "__pycache__"}


@dataclass
class StubResult:
    source: str
    destination: str | None = None
    ok: bool = True
    error: str | None = None

    def to_dict(self) -> dict[str, str | bool | None]:
        return {
            "source": self.source,
            "destination": self.destination,
            "ok": self.ok,
            "error": self.error,
        }


def iter_source_files(root: Path) -> Iterator[Path]:
    """Yield `*.py` files below root in a stable order."""
    for p in sorted(root.rglob("*.py")):
        if any(part in _SKIP_DIRS for part in p.relative_to(root).parts):
            continue
        yield p


def stub_path_for(source: Path, root: Path, out_dir: Path) -> Path:
    """Map `root/pkg/mod.py` to `out_dir/pkg/mod.pyi`."""
    relative = source.relative_to(root) if root.is_dir() else Path(source.name)
    return (out_dir / relative).with_suffix(".pyi")


def generate_stub(code: str | bytes, options: StubOptions | None = None) -> str:
    """Return the stub text for a module's source. Parse errors propagate.

    Bytes are decoded the way Python decodes source files (coding cookie, BOM)
    and keep their line terminators.
    """
    options = options or StubOptions()
    module = cst.parse_module(code)
    writer = TypeStubWriter(
        None, module, preferences=options.preferences_for(module), header=options.header
    )
    return writer.render()


def stub_file(source: Path, destination: Path, options: StubOptions | None = None) -> StubResult:
    """Parse one source file and write its stub to destination.

    Every failure is reported in the returned result instead of raised.
    """
    options = options or StubOptions()
    result = StubResult(str(source), str(destination))
    try:
        module = cst.parse_module(source.read_bytes())
    except cst.ParserSyntaxError as e:
        logger.error("Could not parse %s: %s", source, e)
        result.ok, result.error = False, f"Parse error: {e}"
        return result
    except (SyntaxError, UnicodeDecodeError) as e:
        # Bad coding cookie or bytes that do not match it.
        logger.error("Could not decode %s: %s", source, e)
        result.ok, result.error = False, f"Decode error: {e}"
        return result
    except OSError as e:
        logger.error("Could not read %s: %s", source, e)
        result.ok, result.error = False, str(e)
        return result

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        TypeStubWriter(
            destination, module, preferences=options.preferences_for(module), header=options.header
        ).write()
    except OSError as e:
        logger.error("Could not write %s: %s", destination, e)
        result.ok, result.error = False, str(e)
    except Exception as e:
        logger.error("Could not render a stub for %s: %s", source, e)
        result.ok, result.error = False, f"Render error: {e}"
    return result


def stub_tree(root: Path, out_dir: Path, options: StubOptions | None = None) -> list[StubResult]:
    """Write a stub for root (a file or a directory) into out_dir."""
    sources = [root] if root.is_file() else list(iter_source_files(root))
    results = []
    for source in sources:
        results.append(stub_file(source, stub_path_for(source, root, out_dir), options))
    failed = sum(not r.ok for r in results)
    if failed:
        logger.warning("%d of %d files could not be stubbed", failed, len(results))
    return results
