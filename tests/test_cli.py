"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from gojagen.cli import _build_parser, main
from tests._fixtures.package_builder import GoPackageBuilder


def test_cli_parses_short_flags() -> None:
    parser = _build_parser()
    args = parser.parse_args(["-b", "src", "-i", "pkg/widget", "-o", "out", "-p", "js_", "-t", "t.j2"])
    assert args.base == "src"
    assert args.input == "pkg/widget"
    assert args.output == "out"
    assert args.prefix == "js_"
    assert args.template == "t.j2"
    assert args.dry_run is False
    assert args.verbose is False


def test_cli_requires_input() -> None:
    with pytest.raises(SystemExit) as excinfo:
        _build_parser().parse_args(["-o", "out"])
    assert excinfo.value.code == 2


def test_cli_writes_bridge_and_prints_path(
    package_builder: GoPackageBuilder, tmp_path: Path, capsys
) -> None:
    package_builder.write("widget", {"widget.go": "package widget\n\nfunc Ping() {}\n"})
    output = tmp_path / "out"

    main(["-b", str(package_builder.base), "-i", "widget", "-o", str(output)])

    target = output / "goja_go_widget" / "goja_go_widget.go"
    assert target.exists()
    assert capsys.readouterr().out.strip().endswith("goja_go_widget.go")


def test_cli_dry_run_prints_source(package_builder: GoPackageBuilder, capsys) -> None:
    package_builder.write("widget", {"widget.go": "package widget\n\nfunc Ping() {}\n"})

    main(["-b", str(package_builder.base), "-i", "widget", "--dry-run"])

    out = capsys.readouterr().out
    assert "package goja_go_widget" in out
    assert "func (*Goja_go_widget) Ping() {" in out


def test_cli_reports_fault_with_exit_status(
    package_builder: GoPackageBuilder, tmp_path: Path, capsys
) -> None:
    package_builder.write("widget", {"widget.go": "package widget\n\nfunc Feed(c chan int) {}\n"})
    output = tmp_path / "out"

    with pytest.raises(SystemExit) as excinfo:
        main(["-b", str(package_builder.base), "-i", "widget", "-o", str(output)])

    assert excinfo.value.code == 1
    assert "unsupported channel type" in capsys.readouterr().err
    assert not output.exists()
