"""Validate command line arguments into a :class:`RunPlan`."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .config import ConvertConfig
from .errors import InvalidDestination, InvalidInput, MissingDestination, MissingInputs
from .models import RunPlan


def resolve_plan(arguments: Sequence[str | Path], config: ConvertConfig) -> RunPlan:
    """Build a run plan from ``[destination, input, ...]``.

    Raises a :class:`~markdown_html.errors.ConfigError` subclass for the first
    problem found; its ``exit_code`` identifies the cause.
    """

    if not arguments:
        raise MissingDestination("Destination directory is a required argument.")
    destination = Path(arguments[0])
    if not destination.is_dir():
        raise InvalidDestination(f'There is no directory at "{destination}"')
    if len(arguments) == 1:
        raise MissingInputs("Please specify at least one file to convert.")

    files: list[Path] = []
    for argument in arguments[1:]:
        path = Path(argument)
        if not path.exists() or path.is_dir():
            raise InvalidInput(f'There is no file at "{path}"')
        files.append(path)

    return RunPlan(
        destination_dir=destination,
        input_encoding=config.encoding,
        output_encoding=config.encoding,
        input_files=tuple(files),
        overwrite=config.overwrite,
        resume=config.resume,
        debug=config.debug,
    )


__all__ = ["resolve_plan"]
