"""Extraction of exported declarations from a parsed Go package."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .errors import StructuralError, UnsupportedFeatureError
from .imports import ImportResolver
from .logging import get_logger
from .models import Declaration, Field, FuncDecl, Pointer, SourceModule, Unsupported, Variadic
from .types import TypeFormatter, check_supported


class DeclarationScanner:
    """Turns the exported functions and methods of a package into declarations.

    When two files declare the same name, the first one seen wins. Files are
    visited in the order the parser produced them and declarations in source
    order, so the outcome is deterministic.
    """

    def __init__(self, resolver: ImportResolver) -> None:
        self.resolver = resolver
        self.logger = get_logger("scanner")

    def scan(self, module: SourceModule) -> List[Declaration]:
        formatter = TypeFormatter(module.name, self.resolver)
        recorded: Dict[str, Declaration] = {}

        for source_file in module.files:
            self.resolver.learn(source_file.imports, source_file.aliases)

            for decl in source_file.functions:
                if not decl.is_exported:
                    continue
                receiver = self._receiver_field(decl, source_file.path)
                if decl.receiver is not None and receiver is None:
                    self.logger.debug("Skipping %s: receiver has no name", decl.name)
                    continue
                if decl.type_params or _is_generic_receiver(receiver):
                    self.logger.debug("Skipping generic declaration %s", decl.name)
                    continue

                self._check_supported(decl, receiver)

                if decl.name in recorded:
                    self.logger.debug(
                        "Ignoring duplicate %s in %s (kept %s)",
                        decl.name,
                        source_file.path,
                        recorded[decl.name].source_file,
                    )
                    continue
                recorded[decl.name] = self._build(formatter, decl, receiver, source_file.path)

        self.logger.debug("Recorded %d declarations from %s", len(recorded), module.name)
        return list(recorded.values())

    @staticmethod
    def _receiver_field(decl: FuncDecl, path: str) -> Optional[Field]:
        if decl.receiver is None:
            return None
        if len(decl.receiver) != 1:
            raise StructuralError("malformed receiver", declaration=decl.name, file=path)
        group = decl.receiver[0]
        if not group.names:
            return None
        if len(group.names) != 1:
            raise StructuralError("malformed receiver field", declaration=decl.name, file=path)
        return group

    @staticmethod
    def _check_supported(decl: FuncDecl, receiver: Optional[Field]) -> None:
        groups: Tuple[Field, ...] = decl.params + decl.results
        if receiver is not None:
            groups = (receiver,) + groups
        try:
            check_supported(groups)
        except UnsupportedFeatureError as exc:
            raise UnsupportedFeatureError(exc.kind, exc.text, declaration=decl.name) from exc

    @staticmethod
    def _build(
        formatter: TypeFormatter, decl: FuncDecl, receiver: Optional[Field], path: str
    ) -> Declaration:
        receiver_text = ""
        receiver_name = receiver_type = None
        if receiver is not None:
            receiver_name = receiver.names[0]
            receiver_type = formatter.format(receiver.type)
            receiver_text = f"({receiver_name} {receiver_type}) "

        params = f"({formatter.format_fields(decl.params)})"
        declared = f"({formatter.format_fields(decl.params, keep_variadic=True)})"
        param_names = f"({formatter.format_fields(decl.params, include_types=False)})"
        results = formatter.format_results(decl.results)
        signature = f"{decl.name}{params} {results}".rstrip()

        return Declaration(
            name=decl.name,
            params=params,
            declared_params=declared,
            param_names=param_names,
            results=results,
            receiver=receiver_text,
            receiver_name=receiver_name,
            receiver_type=receiver_type,
            signature=signature,
            variadic=bool(decl.params) and isinstance(decl.params[-1].type, Variadic),
            source_file=path,
        )


def _is_generic_receiver(receiver: Optional[Field]) -> bool:
    if receiver is None:
        return False
    base = receiver.type
    if isinstance(base, Pointer):
        base = base.inner
    return isinstance(base, Unsupported) and base.kind == "generic_type"


__all__ = ["DeclarationScanner"]
