"""Module path and dependency version lookup from ``go.mod`` files."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .errors import SourceParseError

_DIRECTIVE_RE = re.compile(r"^(module|go|require)\s+(.*)$")
_REQUIRE_RE = re.compile(r"^(\S+)\s+(\S+)")


@dataclass
class GoModFile:
    """Directives read from a ``go.mod`` file."""

    path: Path
    module: str
    go_version: Optional[str] = None
    requires: Dict[str, str] = field(default_factory=dict)

    @property
    def root(self) -> Path:
        return self.path.parent

    def version_of(self, module_path: str) -> Optional[str]:
        return self.requires.get(module_path)


def parse_go_mod(path: Path) -> GoModFile:
    """Parse the ``module``, ``go`` and ``require`` directives of ``path``."""
    module = ""
    go_version: Optional[str] = None
    requires: Dict[str, str] = {}
    in_require_block = False

    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.split("//", 1)[0].strip()
        if not line:
            continue
        if in_require_block:
            if line == ")":
                in_require_block = False
                continue
            _add_requirement(requires, line)
            continue

        match = _DIRECTIVE_RE.match(line)
        if not match:
            continue
        directive, value = match.group(1), match.group(2).strip()
        if directive == "module":
            module = _unquote(value)
        elif directive == "go":
            go_version = value
        elif value == "(":
            in_require_block = True
        else:
            _add_requirement(requires, value)

    if not module:
        raise SourceParseError(f"{path} does not declare a module path")
    return GoModFile(path=path, module=module, go_version=go_version, requires=requires)


def find_go_mod(start: Path) -> Optional[Path]:
    """Return the nearest ``go.mod`` at or above ``start``."""
    current = start.resolve()
    for candidate in (current, *current.parents):
        go_mod = candidate / "go.mod"
        if go_mod.is_file():
            return go_mod
    return None


def resolve_import_path(package_dir: Path, fallback: str) -> tuple[str, Optional[GoModFile]]:
    """Return the import path of ``package_dir`` and the ``go.mod`` it belongs to.

    Without a ``go.mod`` the ``fallback`` directory name (as passed on the
    command line, relative to the base path) is taken as the import path.
    """
    go_mod_path = find_go_mod(package_dir)
    if go_mod_path is None:
        return _normalise(fallback), None

    go_mod = parse_go_mod(go_mod_path)
    relative = package_dir.resolve().relative_to(go_mod.root.resolve()).as_posix()
    if relative in ("", "."):
        return go_mod.module, go_mod
    return f"{go_mod.module}/{relative}", go_mod


def _add_requirement(requires: Dict[str, str], line: str) -> None:
    match = _REQUIRE_RE.match(line)
    if match:
        requires[_unquote(match.group(1))] = match.group(2)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "`"}:
        return value[1:-1]
    return value


def _normalise(value: str) -> str:
    return value.replace("\\", "/").strip("/")


__all__ = ["GoModFile", "find_go_mod", "parse_go_mod", "resolve_import_path"]
