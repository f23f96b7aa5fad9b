from __future__ import annotations

import json
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.traceback import Traceback


@dataclass(slots=True)
class RunLogEntry:
    source: str
    destination: str | None
    status: str
    error_code: str | None
    message: str | None
    elapsed_ms: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class RunLogger:
    def __init__(self, log_file: Path) -> None:
        self._log_file = log_file

    def append(self, entry: RunLogEntry) -> None:
        self._log_file.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(entry.to_dict(), ensure_ascii=False)
        with self._log_file.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")


@dataclass(slots=True)
class BatchSummary:
    timestamp: float = field(default_factory=time.time)
    total: int = 0
    successes: int = 0
    failures: int = 0

    @property
    def not_attempted(self) -> int:
        return self.total - self.successes - self.failures


class Reporter:
    """Progress on the output stream, diagnostics on the error stream."""

    def __init__(self, out: Console | None = None, err: Console | None = None) -> None:
        self.out = out or Console(soft_wrap=True, highlight=False)
        self.err = err or Console(stderr=True, soft_wrap=True, highlight=False)

    def converting(self, path: Path) -> None:
        self.out.print(f'Converting file "{escape(str(path))}" ...')

    def failed(self, path: Path, error: BaseException, *, debug: bool = False) -> None:
        self.err.print(f'[red]Error converting file[/red] "{escape(str(path))}":')
        if debug:
            self.err.print(Traceback.from_exception(type(error), error, error.__traceback__))
        else:
            self.err.print(escape(str(error)))

    def setup_error(self, message: str) -> None:
        self.err.print(escape(message))

    def summary(self, summary: BatchSummary) -> None:
        line = (
            f"Processed {summary.successes + summary.failures} files — "
            f"{summary.successes} succeeded, {summary.failures} failed"
        )
        if summary.not_attempted:
            line += f", {summary.not_attempted} not attempted"
        self.out.print(line + ".")


__all__ = ["BatchSummary", "Reporter", "RunLogEntry", "RunLogger"]
