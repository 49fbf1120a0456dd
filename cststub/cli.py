import argparse
import logging
import sys
from pathlib import Path

import libcst as cst

from .driver import generate_stub, stub_tree
from .preferences import LINE_ENDINGS, StubOptions


def _options(args: argparse.Namespace) -> StubOptions:
    return StubOptions(
        line_end=LINE_ENDINGS[args.line_end] if args.line_end else None,
        indent=" " * args.indent if args.indent is not None else None,
    )


def cmd_create(args: argparse.Namespace) -> int:
    root = Path(args.path)
    if not root.exists():
        print(f"No such file or directory: {root}", file=sys.stderr)
        return 1

    results = stub_tree(root, Path(args.out_dir), _options(args))
    for res in results:
        if res.ok:
            print(f"Wrote {res.destination}")
    return 0 if all(res.ok for res in results) else 1


def cmd_show(args: argparse.Namespace) -> int:
    try:
        src: bytes = Path(args.file).read_bytes()
        text = generate_stub(src, _options(args))
    except OSError as e:
        print(f"Could not read {args.file}: {e}", file=sys.stderr)
        return 1
    except cst.ParserSyntaxError as e:
        print(f"Parse error in {args.file}: {e}", file=sys.stderr)
        return 1
    except (SyntaxError, UnicodeDecodeError) as e:
        print(f"Could not decode {args.file}: {e}", file=sys.stderr)
        return 1
    # Bytes, so the stub's line terminators reach stdout untranslated.
    sys.stdout.flush()
    sys.stdout.buffer.write(text.encode("utf-8"))
    sys.stdout.buffer.flush()
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser("cststub")
    p.add_argument("-v", "--verbose", action="store_true", help="Log skipped declarations")
    p.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    p.add_argument("--indent", type=int, help="Indent with this many spaces instead of the source's own")
    p.add_argument("--line-end", choices=sorted(LINE_ENDINGS), help="Line terminator for emitted stubs")
    sub = p.add_subparsers(required=True)

    s = sub.add_parser("create", help="Write .pyi stubs for a file or package")
    s.add_argument("path", help="Source file or directory")
    s.add_argument("-o", "--out-dir", default="typings", help="Directory receiving the stubs")
    s.set_defaults(func=cmd_create)

    s = sub.add_parser("show", help="Print the stub of a single file")
    s.add_argument("file", help="Source file")
    s.set_defaults(func=cmd_show)

    return p


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.WARNING
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
