"""Pipeline orchestration for a single bridge generation run."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .assembler import assemble, derive_output_package
from .config import CONFIG_FILENAME, GojagenConfig, load_config
from .errors import GenerationError, SourceParseError
from .go_parser import GoPackageParser
from .gomod import resolve_import_path
from .imports import ImportResolver
from .logging import get_logger
from .models import SignatureModel
from .render import BridgeRenderer, output_path, write_text_atomic
from .scanner import DeclarationScanner


@dataclass
class GenerateOptions:
    """Inputs of one run; unset values fall back to the configuration file."""

    input_dir: str
    base: Path = Path(".")
    output: Optional[Path] = None
    prefix: Optional[str] = None
    template: Optional[Path] = None
    config_path: Optional[Path] = None
    dry_run: bool = False


@dataclass
class GenerationResult:
    """Outcome of a generation run."""

    model: SignatureModel
    text: str
    path: Optional[Path]
    written: bool


class BridgeGenerator:
    """Coordinates parsing, scanning, assembly, rendering and writing.

    A run either produces one rendered bridge or raises the first fault it
    meets; nothing is written before rendering has succeeded.
    """

    def __init__(self, parser: GoPackageParser | None = None) -> None:
        self.parser = parser or GoPackageParser()
        self.logger = get_logger("pipeline")

    def run(self, options: GenerateOptions) -> GenerationResult:
        base = Path(options.base).expanduser()
        config = self._load_config(base, options.config_path)

        input_dir = options.input_dir.replace("\\", "/")
        package_dir = (base / input_dir).resolve()
        if not package_dir.exists():
            raise SourceParseError(f"package directory not found: {package_dir}")
        if not package_dir.is_dir():
            raise SourceParseError(f"not a directory: {package_dir}")

        output_dir = options.output or config.output
        if output_dir is None and not options.dry_run:
            raise GenerationError("no output directory given (use -o or set output in the config)")

        prefix = options.prefix if options.prefix is not None else config.prefix
        name_source = input_dir if input_dir.strip("/") not in ("", ".") else package_dir.name
        output_pkg = derive_output_package(name_source, prefix)
        import_path, go_mod = resolve_import_path(package_dir, name_source)
        bridge_import = config.bridge.import_path
        bridge_version = go_mod.version_of(bridge_import) if go_mod else None
        self.logger.info("Generating %s for %s", output_pkg, import_path)

        exclude: List[str] = [f"{output_pkg.lower()}.go", *config.exclude_paths]
        module = self.parser.parse_dir(package_dir, import_path=import_path, exclude=exclude)

        resolver = ImportResolver(
            [import_path, bridge_import],
            package_name=module.name,
            package_path=import_path,
        )
        for path in (bridge_import, import_path):
            resolver.register(path)

        declarations = DeclarationScanner(resolver).scan(module)
        model = assemble(
            module,
            declarations,
            resolver.finalize(),
            output_pkg=output_pkg,
            bridge_import=bridge_import,
            bridge_version=bridge_version,
            known_paths=resolver.known_paths,
            import_aliases=resolver.aliases,
        )
        self.logger.info(
            "Collected %d declarations and %d imports", len(model.funcs), len(model.imports)
        )

        template = options.template or config.template
        text = BridgeRenderer(template).render(model)

        if options.dry_run or output_dir is None:
            return GenerationResult(model=model, text=text, path=None, written=False)

        target = output_path(Path(output_dir), output_pkg).resolve()
        write_text_atomic(target, text)
        self.logger.info("Wrote %s", target)
        return GenerationResult(model=model, text=text, path=target, written=True)

    def _load_config(self, base: Path, config_path: Optional[Path]) -> GojagenConfig:
        path = config_path if config_path is not None else base / CONFIG_FILENAME
        config = load_config(path)
        self.logger.debug("Loaded configuration from %s", config.root)
        return config


__all__ = ["BridgeGenerator", "GenerateOptions", "GenerationResult"]
