from __future__ import annotations

from pathlib import Path

from .errors import AbsolutePathNotAllowed, DestinationExists

MARKUP_SUFFIX = ".md"
HTML_SUFFIX = ".html"


def map_destination(path: Path) -> Path:
    """Map a relative source path to its relative HTML path.

    ``notes/a.md`` becomes ``notes/a.html``; names already ending in
    ``.html`` are kept and anything else gets ``.html`` appended.
    """

    if path.is_absolute():
        raise AbsolutePathNotAllowed(f'Paths to converted files must be relative, got "{path}"')
    name = path.name
    lowered = name.lower()
    if lowered.endswith(HTML_SUFFIX):
        return path
    if lowered.endswith(MARKUP_SUFFIX):
        name = name[: -len(MARKUP_SUFFIX)]
    return path.with_name(name + HTML_SUFFIX)


def destination_for(destination_dir: Path, path: Path) -> Path:
    return destination_dir / map_destination(path)


def check_writable(destination: Path, overwrite: bool) -> None:
    if destination.exists() and not overwrite:
        raise DestinationExists(f'Destination file "{destination}" already exists')
    destination.resolve().parent.mkdir(parents=True, exist_ok=True)


__all__ = ["HTML_SUFFIX", "MARKUP_SUFFIX", "check_writable", "destination_for", "map_destination"]
