from __future__ import annotations

import time
from pathlib import Path

from .errors import ConversionError, RunLogError
from .logging import Reporter, RunLogEntry, RunLogger
from .models import BatchResult, ConversionOutcome, Done, Failed, FileState, RunPlan
from .paths import check_writable, destination_for
from .renderer import MarkdownRenderer, Renderer
from .writer import write_document


def should_continue(resume: bool, outcome: ConversionOutcome) -> bool:
    """Decide whether the batch proceeds after ``outcome``."""

    return resume or isinstance(outcome, Done)


class ConversionService:
    def __init__(
        self,
        plan: RunPlan,
        *,
        renderer: Renderer | None = None,
        reporter: Reporter | None = None,
        logger: RunLogger | None = None,
    ) -> None:
        self._plan = plan
        self._renderer = renderer or MarkdownRenderer()
        self._reporter = reporter or Reporter()
        self._logger = logger
        self.states: dict[Path, FileState] = {path: FileState.PENDING for path in plan.input_files}

    def convert_file(self, path: Path) -> ConversionOutcome:
        self.states[path] = FileState.CONVERTING
        self._reporter.converting(path)
        start = time.perf_counter()
        destination: Path | None = None
        try:
            destination = destination_for(self._plan.destination_dir, path)
            check_writable(destination, self._plan.overwrite)
            fragment = self._renderer.render(path, self._plan.input_encoding)
            write_document(destination, fragment, self._plan.output_encoding)
        except ConversionError as exc:
            outcome: ConversionOutcome = _failed(path, exc, destination, start)
        else:
            outcome = Done(source=path, destination=destination, elapsed_ms=_elapsed_ms(start))
        try:
            self._log(outcome)
        except RunLogError as exc:
            # a lost log entry fails the file even when its document was written
            outcome = _failed(path, exc, destination, start)
        self.states[path] = outcome.state
        return outcome

    def run(self) -> BatchResult:
        result = BatchResult()
        files = self._plan.input_files
        result.summary.total = len(files)
        for index, path in enumerate(files):
            outcome = self.convert_file(path)
            result.record(outcome)
            if isinstance(outcome, Failed):
                self._reporter.failed(path, outcome.error, debug=self._plan.debug)
            if not should_continue(self._plan.resume, outcome):
                result.not_attempted.extend(files[index + 1 :])
                break
        return result

    def _log(self, outcome: ConversionOutcome) -> None:
        if self._logger is None:
            return
        failed = isinstance(outcome, Failed)
        entry = RunLogEntry(
            source=str(outcome.source),
            destination=str(outcome.destination) if outcome.destination else None,
            status=outcome.state.value,
            error_code=outcome.code if failed else None,
            message=outcome.reason if failed else None,
            elapsed_ms=outcome.elapsed_ms,
        )
        try:
            self._logger.append(entry)
        except OSError as exc:
            raise RunLogError(f"Cannot append to run log: {exc}") from exc


def _failed(path: Path, exc: ConversionError, destination: Path | None, start: float) -> Failed:
    return Failed(
        source=path,
        reason=str(exc),
        code=exc.code,
        error=exc,
        destination=destination,
        elapsed_ms=_elapsed_ms(start),
    )


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


__all__ = ["ConversionService", "should_continue"]
