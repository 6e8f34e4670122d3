"""Core data models shared across gojagen components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class Named:
    """A type name, optionally qualified with a package (``json.Decoder``)."""

    identifier: str
    qualifier: Optional[str] = None


@dataclass(frozen=True)
class Pointer:
    inner: "TypeExpression"


@dataclass(frozen=True)
class Slice:
    """Slice or array type; ``length`` is present for fixed-size arrays.

    The length is a ``Literal`` for numbers and a ``Named`` for constants.
    """

    inner: "TypeExpression"
    length: Optional["TypeExpression"] = None


@dataclass(frozen=True)
class Variadic:
    """Element type of a trailing ``...T`` parameter."""

    inner: "TypeExpression"


@dataclass(frozen=True)
class FuncType:
    params: Tuple["Field", ...] = ()
    results: Tuple["Field", ...] = ()


@dataclass(frozen=True)
class MapType:
    key: "TypeExpression"
    value: "TypeExpression"


@dataclass(frozen=True)
class Literal:
    """Source text emitted verbatim (array lengths, ``interface{}``)."""

    text: str


@dataclass(frozen=True)
class Unsupported:
    """A type node without a bridge representation (channels, generics)."""

    kind: str
    text: str = ""


TypeExpression = Union[Named, Pointer, Slice, Variadic, FuncType, MapType, Literal, Unsupported]


@dataclass(frozen=True)
class Field:
    """One field group as written in source: ``a, b int`` or a bare ``error``."""

    names: Tuple[str, ...]
    type: TypeExpression


@dataclass(frozen=True)
class FuncDecl:
    """A top-level function or method declaration as parsed from a file."""

    name: str
    params: Tuple[Field, ...] = ()
    results: Tuple[Field, ...] = ()
    receiver: Optional[Tuple[Field, ...]] = None
    type_params: Tuple[str, ...] = ()

    @property
    def is_method(self) -> bool:
        return self.receiver is not None

    @property
    def is_exported(self) -> bool:
        return is_exported(self.name)


@dataclass(frozen=True)
class SourceFile:
    """Parsed view of a single Go file."""

    path: str
    package: str
    imports: Tuple[str, ...] = ()
    aliases: Tuple[Tuple[str, str], ...] = ()
    functions: Tuple[FuncDecl, ...] = ()


@dataclass(frozen=True)
class SourceModule:
    """All parsed files of one Go package directory."""

    name: str
    import_path: str
    directory: str = ""
    files: Tuple[SourceFile, ...] = ()


@dataclass(frozen=True)
class Declaration:
    """An exported function or method rendered for the bridge template.

    ``params`` prints a variadic tail as its element type; ``declared_params``
    keeps the ``...`` so a wrapper can accept the same arguments.
    """

    name: str
    params: str
    declared_params: str
    param_names: str
    results: str
    receiver: str = ""
    receiver_name: Optional[str] = None
    receiver_type: Optional[str] = None
    signature: str = ""
    variadic: bool = False
    source_file: Optional[str] = None

    @property
    def is_method(self) -> bool:
        return self.receiver_name is not None


@dataclass(frozen=True)
class SignatureModel:
    """Render-ready aggregate handed to the bridge template."""

    input_pkg: str
    input_path: str
    output_pkg: str
    package_name: str
    struct_name: str
    instance_name: str
    bridge_import: str
    bridge_version: Optional[str] = None
    import_paths: Tuple[str, ...] = ()
    imports: Tuple[str, ...] = ()
    # (path, alias) for imports the bridged sources name explicitly
    import_aliases: Tuple[Tuple[str, str], ...] = ()
    funcs: Tuple[Declaration, ...] = ()

    @property
    def functions(self) -> Tuple[Declaration, ...]:
        return tuple(decl for decl in self.funcs if not decl.is_method)

    @property
    def methods(self) -> Tuple[Declaration, ...]:
        return tuple(decl for decl in self.funcs if decl.is_method)


def is_exported(name: str) -> bool:
    """Go exports identifiers whose first character is an uppercase letter."""
    return bool(name) and name[0].isupper()


def iter_type_nodes(expr: TypeExpression) -> Iterator[TypeExpression]:
    """Yield ``expr`` and every type node nested inside it, depth first."""
    yield expr
    if isinstance(expr, (Pointer, Variadic)):
        yield from iter_type_nodes(expr.inner)
    elif isinstance(expr, Slice):
        if expr.length is not None:
            yield from iter_type_nodes(expr.length)
        yield from iter_type_nodes(expr.inner)
    elif isinstance(expr, MapType):
        yield from iter_type_nodes(expr.key)
        yield from iter_type_nodes(expr.value)
    elif isinstance(expr, FuncType):
        for group in expr.params + expr.results:
            yield from iter_type_nodes(group.type)


__all__ = [
    "Declaration",
    "Field",
    "FuncDecl",
    "FuncType",
    "Literal",
    "MapType",
    "Named",
    "Pointer",
    "SignatureModel",
    "Slice",
    "SourceFile",
    "SourceModule",
    "TypeExpression",
    "Unsupported",
    "Variadic",
    "is_exported",
    "iter_type_nodes",
]
