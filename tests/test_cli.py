from pathlib import Path

import pytest

from cststub.cli import build_parser, main

SRC = "class Greeter:\n    def hello(self, name: str = 'world') -> str:\n        return name\n"


def test_show_prints_stub(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "greet.py"
    source.write_text(SRC, encoding="utf-8")
    assert main(["show", str(source)]) == 0
    out = capsys.readouterr().out
    assert "class Greeter:" in out
    assert "    def hello(self, name: str = ...) -> str:" in out
    assert "world" not in out


def test_show_with_indent_override(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "greet.py"
    source.write_text(SRC, encoding="utf-8")
    assert main(["--indent", "2", "show", str(source)]) == 0
    assert "\n  def hello(" in capsys.readouterr().out


def test_show_parse_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "bad.py"
    source.write_text("def (:\n", encoding="utf-8")
    assert main(["show", str(source)]) == 1
    assert "Parse error" in capsys.readouterr().err


def test_create_writes_tree(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = tmp_path / "src"
    (src / "pkg").mkdir(parents=True)
    (src / "pkg" / "greet.py").write_text(SRC, encoding="utf-8")
    out = tmp_path / "typings"

    assert main(["--line-end", "crlf", "create", str(src), "-o", str(out)]) == 0

    stub = out / "pkg" / "greet.pyi"
    assert f"Wrote {stub}" in capsys.readouterr().out
    data = stub.read_bytes()
    assert b"class Greeter:\r\n" in data
    assert b"\n" not in data.replace(b"\r\n", b"")


def test_create_reports_failures(tmp_path: Path) -> None:
    src = tmp_path / "src"
    src.mkdir()
    (src / "good.py").write_text(SRC, encoding="utf-8")
    (src / "bad.py").write_text("def (:\n", encoding="utf-8")
    out = tmp_path / "typings"
    assert main(["-q", "create", str(src), "-o", str(out)]) == 1
    assert (out / "good.pyi").exists()


def test_create_missing_path(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["create", str(tmp_path / "nope")]) == 1
    assert "No such file or directory" in capsys.readouterr().err


def test_parser_requires_subcommand() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_show_keeps_crlf(tmp_path: Path, capsysbinary: pytest.CaptureFixture[bytes]) -> None:
    source = tmp_path / "m.py"
    source.write_bytes(b"class A:\r\n    pass\r\n")
    assert main(["show", str(source)]) == 0
    out = capsysbinary.readouterr().out
    assert b"class A:\r\n    ...\r\n" in out
    assert b"\n" not in out.replace(b"\r\n", b"")


def test_show_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["show", str(tmp_path / "nope.py")]) == 1
    assert "Could not read" in capsys.readouterr().err


def test_show_undecodable_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "latin.py"
    source.write_bytes(b"\xff\xfe")
    assert main(["show", str(source)]) == 1
    assert "Could not decode" in capsys.readouterr().err
