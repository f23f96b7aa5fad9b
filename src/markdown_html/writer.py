from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from .errors import WriteError


def build_document(fragment: str, encoding: str) -> str:
    lines = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        f'<meta charset="{encoding}" />',
        "</head>",
        "<body>",
        fragment,
        "</body>",
        "</html>",
    ]
    return "\n".join(lines) + "\n"


def _target_mode(destination: Path) -> int:
    """Keep an existing file's mode, otherwise honour the umask."""

    try:
        return stat.S_IMODE(destination.stat().st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_document(destination: Path, fragment: str, encoding: str) -> None:
    """Write ``fragment`` wrapped in an HTML5 skeleton to ``destination``.

    The document goes to a temporary file next to the destination which is
    flushed, synced and renamed over it, so a failed write never leaves a
    truncated destination behind.
    """

    document = build_document(fragment, encoding)
    tmp_path: Path | None = None
    try:
        mode = _target_mode(destination)
        with tempfile.NamedTemporaryFile(
            "w",
            delete=False,
            dir=destination.parent,
            prefix=f".{destination.name}.",
            suffix=".tmp",
            encoding=encoding,
            newline="\n",
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(document)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, destination)
    except (OSError, UnicodeEncodeError, LookupError) as exc:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise WriteError(f'Error writing converted data to "{destination}": {exc}') from exc


__all__ = ["build_document", "write_document"]
