"""Assembly of the render-ready signature model."""

from __future__ import annotations

import re
from typing import Iterable, Sequence, Tuple

from .models import Declaration, SignatureModel, SourceModule

_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9_]")


def derive_output_package(input_dir: str, prefix: str) -> str:
    """Return the generated package name for ``input_dir`` (``goja_go_encoding_json``)."""
    normalised = input_dir.replace("\\", "/").strip("/")
    return f"{prefix}{normalised.replace('/', '_')}".lower()


def package_identifier(output_pkg: str) -> str:
    """Return ``output_pkg`` as a Go identifier for the package clause.

    ``goja_go_github.com_acme_go-widget`` becomes ``goja_go_github_com_acme_go_widget``.
    """
    name = _NON_IDENTIFIER.sub("_", output_pkg)
    if name[:1].isdigit():
        name = f"_{name}"
    return name


def type_identifier(name: str) -> str:
    return name[:1].upper() + name[1:]


def instance_identifier(name: str) -> str:
    return name[:1].lower() + name[1:]


def assemble(
    module: SourceModule,
    declarations: Sequence[Declaration],
    imports: Iterable[str],
    *,
    output_pkg: str,
    bridge_import: str,
    bridge_version: str | None = None,
    known_paths: Iterable[str] = (),
    import_aliases: Iterable[Tuple[str, str]] = (),
) -> SignatureModel:
    """Sort declarations and imports and derive the bridge identifiers."""
    funcs = tuple(sorted(declarations, key=lambda decl: decl.name))
    final_imports = tuple(sorted(set(imports)))
    package_name = package_identifier(output_pkg)
    return SignatureModel(
        input_pkg=module.name,
        input_path=module.import_path,
        output_pkg=output_pkg,
        package_name=package_name,
        struct_name=type_identifier(package_name),
        instance_name=instance_identifier(package_name),
        bridge_import=bridge_import,
        bridge_version=bridge_version,
        import_paths=tuple(known_paths),
        imports=final_imports,
        import_aliases=tuple(
            sorted((path, alias) for path, alias in import_aliases if path in final_imports)
        ),
        funcs=funcs,
    )


__all__ = [
    "assemble",
    "derive_output_package",
    "instance_identifier",
    "package_identifier",
    "type_identifier",
]
