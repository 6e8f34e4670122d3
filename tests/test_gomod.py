"""Tests for go.mod parsing and import path resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from gojagen.errors import SourceParseError
from gojagen.gomod import find_go_mod, parse_go_mod, resolve_import_path


def test_parse_go_mod_reads_directives(tmp_path: Path) -> None:
    go_mod = tmp_path / "go.mod"
    go_mod.write_text(
        """
// comment line
module example.com/lib

go 1.22

require github.com/dop251/goja v0.0.0-20240220182346-e401ed450204

require (
	github.com/google/uuid v1.6.0 // indirect
	golang.org/x/text v0.14.0
)
""",
        encoding="utf-8",
    )

    parsed = parse_go_mod(go_mod)

    assert parsed.module == "example.com/lib"
    assert parsed.go_version == "1.22"
    assert parsed.version_of("github.com/dop251/goja") == "v0.0.0-20240220182346-e401ed450204"
    assert parsed.version_of("github.com/google/uuid") == "v1.6.0"
    assert parsed.version_of("golang.org/x/text") == "v0.14.0"
    assert parsed.version_of("missing") is None
    assert parsed.root == tmp_path


def test_parse_go_mod_requires_module(tmp_path: Path) -> None:
    go_mod = tmp_path / "go.mod"
    go_mod.write_text("go 1.21\n", encoding="utf-8")
    with pytest.raises(SourceParseError):
        parse_go_mod(go_mod)


def test_resolve_import_path_uses_nearest_go_mod(tmp_path: Path) -> None:
    (tmp_path / "go.mod").write_text('module "example.com/lib"\n', encoding="utf-8")
    package_dir = tmp_path / "pkg" / "widget"
    package_dir.mkdir(parents=True)

    assert find_go_mod(package_dir) == tmp_path / "go.mod"
    import_path, go_mod = resolve_import_path(package_dir, "pkg/widget")
    assert import_path == "example.com/lib/pkg/widget"
    assert go_mod is not None and go_mod.module == "example.com/lib"

    root_path, _ = resolve_import_path(tmp_path, ".")
    assert root_path == "example.com/lib"


def test_resolve_import_path_falls_back_to_input(tmp_path: Path, monkeypatch) -> None:
    import gojagen.gomod as gomod_module

    monkeypatch.setattr(gomod_module, "find_go_mod", lambda start: None)
    import_path, go_mod = resolve_import_path(tmp_path, "github.com\\acme\\widget/")
    assert import_path == "github.com/acme/widget"
    assert go_mod is None
