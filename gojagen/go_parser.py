"""Tree-sitter powered parser for Go package directories."""

from __future__ import annotations

from collections import Counter
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from .errors import SourceParseError
from .logging import get_logger
from .models import (
    Field,
    FuncDecl,
    FuncType,
    Literal,
    MapType,
    Named,
    Pointer,
    Slice,
    SourceFile,
    SourceModule,
    TypeExpression,
    Unsupported,
    Variadic,
)

GO_LANGUAGE = Language(tree_sitter_go.language())

_EMPTY_COMPOSITES = {"interface_type": "interface{}", "struct_type": "struct{}"}


def is_source_file(path: Path, exclude: Sequence[str] = ()) -> bool:
    """Return True for non-test ``.go`` files that are not excluded by name."""
    name = path.name
    if not path.is_file():
        return False
    if path.suffix != ".go" or name.endswith("_test.go"):
        return False
    return not any(fnmatchcase(name, pattern) for pattern in exclude)


class GoPackageParser:
    """Parses the Go files of one package directory into a ``SourceModule``."""

    def __init__(self) -> None:
        self._parser = Parser(GO_LANGUAGE)
        self.logger = get_logger("go_parser")

    def parse_dir(
        self, directory: Path, *, import_path: str, exclude: Sequence[str] = ()
    ) -> SourceModule:
        directory = Path(directory)
        if not directory.is_dir():
            raise SourceParseError(f"not a directory: {directory}")

        paths = sorted(path for path in directory.iterdir() if is_source_file(path, exclude))
        if not paths:
            raise SourceParseError(f"no Go source files in {directory}")

        files = [self.parse_file(path) for path in paths]
        package = self._select_package(files, directory.name)
        selected = tuple(item for item in files if item.package == package)
        for item in files:
            if item.package != package:
                self.logger.warning("Ignoring %s (package %s)", item.path, item.package)

        self.logger.debug("Parsed %d files of package %s", len(selected), package)
        return SourceModule(
            name=package,
            import_path=import_path,
            directory=str(directory),
            files=selected,
        )

    def parse_file(self, path: Path) -> SourceFile:
        try:
            source = path.read_bytes()
        except OSError as exc:
            raise SourceParseError(f"cannot read {path}: {exc}") from exc
        return self.parse_source(source, path.name)

    def parse_source(self, source: bytes, name: str = "<source>") -> SourceFile:
        tree = self._parser.parse(source)
        root = tree.root_node
        if root.has_error:
            raise SourceParseError(f"syntax error in {name}")

        package = ""
        imports: List[str] = []
        aliases: List[Tuple[str, str]] = []
        functions: List[FuncDecl] = []
        for child in root.named_children:
            if child.type == "package_clause":
                package = _text(child.named_children[0]) if child.named_children else ""
            elif child.type == "import_declaration":
                for alias, path in _import_specs(child):
                    imports.append(path)
                    # blank and dot imports introduce no qualifier
                    if alias and alias not in ("_", "."):
                        aliases.append((alias, path))
            elif child.type == "function_declaration":
                functions.append(_function(child))
            elif child.type == "method_declaration":
                functions.append(_method(child))

        if not package:
            raise SourceParseError(f"missing package clause in {name}")
        return SourceFile(
            path=name,
            package=package,
            imports=tuple(imports),
            aliases=tuple(aliases),
            functions=tuple(functions),
        )

    def parse_type(self, text: str) -> TypeExpression:
        """Parse a single type reference such as ``map[string]*json.Decoder``."""
        source = f"package p\n\nvar _ {text}\n".encode("utf-8")
        tree = self._parser.parse(source)
        if tree.root_node.has_error:
            raise SourceParseError(f"invalid type expression {text!r}")
        spec = _find_first(tree.root_node, "var_spec")
        type_node = spec.child_by_field_name("type") if spec is not None else None
        if type_node is None:
            raise SourceParseError(f"invalid type expression {text!r}")
        return convert_type(type_node)

    @staticmethod
    def _select_package(files: Sequence[SourceFile], directory_name: str) -> str:
        counts = Counter(item.package for item in files)
        if directory_name in counts:
            return directory_name
        return counts.most_common(1)[0][0]


def convert_type(node: Node) -> TypeExpression:
    """Map a tree-sitter type node onto the closed ``TypeExpression`` set."""
    kind = node.type
    if kind == "type_identifier":
        return Named(_text(node))
    if kind == "qualified_type":
        return Named(_field_text(node, "name"), qualifier=_field_text(node, "package"))
    if kind == "pointer_type":
        return Pointer(convert_type(_named(node)[0]))
    if kind == "slice_type":
        return Slice(convert_type(_field(node, "element")))
    if kind == "array_type":
        return Slice(convert_type(_field(node, "element")), _array_length(_field(node, "length")))
    if kind == "implicit_length_array_type":
        return Slice(convert_type(_field(node, "element")), Literal("..."))
    if kind == "map_type":
        return MapType(convert_type(_field(node, "key")), convert_type(_field(node, "value")))
    if kind == "function_type":
        return FuncType(
            _fields(node.child_by_field_name("parameters")),
            _results(node.child_by_field_name("result")),
        )
    if kind == "parenthesized_type":
        return convert_type(_named(node)[0])
    if kind in _EMPTY_COMPOSITES and not _has_members(node):
        return Literal(_EMPTY_COMPOSITES[kind])
    if kind == "channel_type":
        return Unsupported("channel", _text(node))
    return Unsupported(kind, _text(node))


def _array_length(node: Node) -> TypeExpression:
    # Constant names follow the same qualification rules as type names.
    if node.type == "identifier":
        return Named(_text(node))
    if node.type == "selector_expression":
        return Named(_field_text(node, "field"), qualifier=_field_text(node, "operand"))
    return Literal(_text(node))


def _function(node: Node) -> FuncDecl:
    type_params = node.child_by_field_name("type_parameters")
    return FuncDecl(
        name=_field_text(node, "name"),
        params=_fields(node.child_by_field_name("parameters")),
        results=_results(node.child_by_field_name("result")),
        type_params=_type_param_names(type_params),
    )


def _method(node: Node) -> FuncDecl:
    return FuncDecl(
        name=_field_text(node, "name"),
        params=_fields(node.child_by_field_name("parameters")),
        results=_results(node.child_by_field_name("result")),
        receiver=_fields(node.child_by_field_name("receiver")),
    )


def _fields(parameter_list: Optional[Node]) -> Tuple[Field, ...]:
    if parameter_list is None:
        return ()
    groups: List[Field] = []
    for child in _named(parameter_list):
        names = tuple(_text(name) for name in child.children_by_field_name("name"))
        type_node = _field(child, "type")
        if child.type == "variadic_parameter_declaration":
            groups.append(Field(names, Variadic(convert_type(type_node))))
        elif child.type == "parameter_declaration":
            groups.append(Field(names, convert_type(type_node)))
    return tuple(groups)


def _results(node: Optional[Node]) -> Tuple[Field, ...]:
    if node is None:
        return ()
    if node.type == "parameter_list":
        return _fields(node)
    return (Field((), convert_type(node)),)


def _type_param_names(node: Optional[Node]) -> Tuple[str, ...]:
    if node is None:
        return ()
    names: List[str] = []
    for child in _named(node):
        names.extend(_text(name) for name in child.children_by_field_name("name"))
    return tuple(names)


def _import_specs(node: Node) -> Iterable[Tuple[Optional[str], str]]:
    """Yield ``(alias, path)`` per import spec; alias is None when absent."""
    for spec in _iter_nodes(node, "import_spec"):
        path_node = spec.child_by_field_name("path")
        if path_node is None:
            continue
        path = _text(path_node)[1:-1]
        if not path:
            continue
        name_node = spec.child_by_field_name("name")
        yield (_text(name_node) if name_node is not None else None), path


def _has_members(node: Node) -> bool:
    return any(
        child.type not in {"comment", "field_declaration_list"}
        for child in _iter_descendants(node)
    )


def _iter_descendants(node: Node) -> Iterable[Node]:
    for child in node.named_children:
        yield child
        yield from _iter_descendants(child)


def _iter_nodes(node: Node, kind: str) -> Iterable[Node]:
    for child in _iter_descendants(node):
        if child.type == kind:
            yield child


def _find_first(node: Node, kind: str) -> Optional[Node]:
    return next(iter(_iter_nodes(node, kind)), None)


def _named(node: Node) -> List[Node]:
    return [child for child in node.named_children if child.type != "comment"]


def _field(node: Node, name: str) -> Node:
    child = node.child_by_field_name(name)
    if child is None:
        raise SourceParseError(f"{node.type} without {name} at line {node.start_point[0] + 1}")
    return child


def _field_text(node: Node, name: str) -> str:
    return _text(_field(node, name))


def _text(node: Node) -> str:
    return (node.text or b"").decode("utf-8", errors="replace")


__all__ = ["GO_LANGUAGE", "GoPackageParser", "convert_type", "is_source_file"]
