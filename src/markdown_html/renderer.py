from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

import markdown

from .config import DEFAULT_EXTENSIONS
from .errors import RenderError


class Renderer(Protocol):
    def render(self, source: Path, encoding: str) -> str:  # pragma: no cover - interface
        ...


class MarkdownRenderer:
    """Render Markdown sources with Python-Markdown."""

    def __init__(self, extensions: Sequence[str] = DEFAULT_EXTENSIONS) -> None:
        self._extensions = list(extensions)

    def render(self, source: Path, encoding: str) -> str:
        try:
            text = source.read_bytes().decode(encoding)
        except (OSError, UnicodeDecodeError, LookupError) as exc:
            raise RenderError(f'Cannot read "{source}" as {encoding}: {exc}') from exc
        converter = markdown.Markdown(extensions=self._extensions, output_format="html")
        try:
            return converter.convert(text)
        except Exception as exc:
            raise RenderError(f'Cannot render "{source}": {exc}') from exc


__all__ = ["MarkdownRenderer", "Renderer"]
