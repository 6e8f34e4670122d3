"""Resolution of type qualifiers to Go import paths."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from .logging import get_logger

_RESERVED_ROOT = "internal"


class ImportResolver:
    """Collects the import paths a generated bridge needs.

    Qualifiers found in rendered type text (``json`` in ``json.Decoder``) are
    matched against the import paths known so far: a known path ending in
    ``/<qualifier>`` replaces the bare qualifier. Paths rooted at ``internal``
    are never imported, and every path is recorded at most once. Qualifiers
    that match nothing are kept verbatim as a best effort.

    Explicit import names (``stdio "io"``) learned from source files resolve
    to their path, and the name is kept so the bridge can import the path
    under the same name.

    One resolver belongs to one generation run.
    """

    def __init__(
        self,
        known_paths: Iterable[str] = (),
        *,
        package_name: str | None = None,
        package_path: str | None = None,
    ) -> None:
        self._known: List[str] = []
        self._imports: List[str] = []
        self._aliases: Dict[str, str] = {}
        self._import_names: Dict[str, str] = {}
        self._package_name = package_name
        self._package_path = package_path
        self.logger = get_logger("imports")
        self.learn(known_paths)

    @property
    def known_paths(self) -> Tuple[str, ...]:
        return tuple(self._known)

    @property
    def imports(self) -> Tuple[str, ...]:
        """Registered paths in insertion order."""
        return tuple(self._imports)

    @property
    def aliases(self) -> Tuple[Tuple[str, str], ...]:
        """``(path, alias)`` pairs for registered paths reached through an alias."""
        return tuple(sorted(self._import_names.items()))

    def learn(self, paths: Iterable[str], aliases: Iterable[Tuple[str, str]] = ()) -> None:
        """Add import paths (and ``(alias, path)`` names) later qualifiers may resolve against."""
        for path in paths:
            if path and path not in self._known:
                self._known.append(path)
        for alias, path in aliases:
            existing = self._aliases.setdefault(alias, path)
            if existing != path:
                self.logger.debug("Alias %s already bound to %s, ignoring %s", alias, existing, path)

    def resolve(self, qualifier: str) -> str:
        """Return the import path a qualifier stands for, without registering it."""
        name = _strip_markers(qualifier)

        if name in self._aliases:
            return self._aliases[name]
        if self._package_name and self._package_path and name == self._package_name:
            return self._package_path

        suffix = f"/{name}"
        for path in self._known:
            if path.endswith(suffix):
                return path
        return name

    def register(self, qualifier: str) -> Optional[str]:
        """Record the import for ``qualifier``; return its path, or None when excluded."""
        path = self.resolve(qualifier)
        if not path:
            return None
        if path.split("/", 1)[0] == _RESERVED_ROOT:
            self.logger.debug("Skipping internal import %s", path)
            return None

        name = _strip_markers(qualifier)
        if name in self._aliases and path not in self._import_names:
            self._import_names[path] = name
        if path in self._imports:
            return path
        if path != qualifier:
            self.logger.debug("Resolved qualifier %s to %s", qualifier, path)
        self._imports.append(path)
        return path

    def finalize(self) -> Tuple[str, ...]:
        """Return the collected imports in lexical order."""
        return tuple(sorted(self._imports))


def _strip_markers(qualifier: str) -> str:
    name = qualifier
    if name.startswith("*"):
        name = name[1:]
    if name.startswith("[]"):
        name = name[2:]
    return name


__all__ = ["ImportResolver"]
