"""Template rendering and output writing for bridge packages."""

from __future__ import annotations

import contextlib
import os
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from .errors import GenerationError
from .logging import get_logger
from .models import SignatureModel

DEFAULT_TEMPLATE = "goja_go.j2"


class RenderError(GenerationError):
    """Raised when the bridge template cannot be loaded or rendered."""


class BridgeRenderer:
    """Renders a ``SignatureModel`` through a Jinja template."""

    def __init__(self, template: Path | None = None) -> None:
        self.template_name = template.name if template else DEFAULT_TEMPLATE
        self.logger = get_logger("render")
        self._env = self._create_env(template.parent if template else None)

    def render(self, model: SignatureModel) -> str:
        self.logger.debug("Rendering %s with %d declarations", self.template_name, len(model.funcs))
        try:
            template = self._env.get_template(self.template_name)
            text = template.render(**self._context(model))
        except TemplateError as exc:
            raise RenderError(f"failed to render {self.template_name}: {exc}") from exc
        return text.rstrip() + "\n"

    @staticmethod
    def _context(model: SignatureModel) -> Dict[str, Any]:
        context: Dict[str, Any] = {item.name: getattr(model, item.name) for item in fields(model)}
        context.update(
            model=model,
            funcs=model.funcs,
            functions=model.functions,
            methods=model.methods,
            import_names=dict(model.import_aliases),
        )
        return context

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in directories:
            directories.append(default_dir)
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )


def output_path(output_dir: Path, output_pkg: str) -> Path:
    """Return ``<output>/<pkg>/<pkg lowercased>.go``."""
    return output_dir / output_pkg / f"{output_pkg.lower()}.go"


def write_text_atomic(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """Write ``text`` to ``path`` via a temporary file and atomic replace."""
    tmp = path.with_name(path.name + ".tmp")
    tmp.parent.mkdir(parents=True, exist_ok=True)
    try:
        with open(tmp, "wb") as handle:
            handle.write(text.encode(encoding))
            handle.flush()
            with contextlib.suppress(OSError):
                os.fsync(handle.fileno())
        os.replace(tmp, path)
    except Exception:
        with contextlib.suppress(OSError):
            tmp.unlink()
        raise


__all__ = ["BridgeRenderer", "DEFAULT_TEMPLATE", "RenderError", "output_path", "write_text_atomic"]
