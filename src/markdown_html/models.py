"""Domain models for batch conversion runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .logging import BatchSummary

EXIT_OK = 0
EXIT_CONVERSION_FAILED = 5


class FileState(str, Enum):
    PENDING = "pending"
    CONVERTING = "converting"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class RunPlan:
    """Validated, immutable description of one conversion batch."""

    destination_dir: Path
    input_encoding: str
    output_encoding: str
    input_files: tuple[Path, ...]
    overwrite: bool = False
    resume: bool = False
    debug: bool = False


@dataclass(frozen=True, slots=True)
class Done:
    source: Path
    destination: Path
    elapsed_ms: float = 0.0

    @property
    def state(self) -> FileState:
        return FileState.DONE


@dataclass(frozen=True, slots=True)
class Failed:
    source: Path
    reason: str
    code: str
    error: BaseException
    destination: Path | None = None
    elapsed_ms: float = 0.0
    exit_code: int = EXIT_CONVERSION_FAILED

    @property
    def state(self) -> FileState:
        return FileState.FAILED


ConversionOutcome = Done | Failed


@dataclass(slots=True)
class BatchResult:
    """Aggregate results for a batch conversion run."""

    outcomes: list[ConversionOutcome] = field(default_factory=list)
    not_attempted: list[Path] = field(default_factory=list)
    summary: BatchSummary = field(default_factory=BatchSummary)
    status: int = EXIT_OK

    def record(self, outcome: ConversionOutcome) -> None:
        self.outcomes.append(outcome)
        if isinstance(outcome, Failed):
            self.summary.failures += 1
            # a later success never clears a failure status
            self.status = outcome.exit_code
        else:
            self.summary.successes += 1

    @property
    def attempted(self) -> int:
        return len(self.outcomes)


__all__ = [
    "BatchResult",
    "ConversionOutcome",
    "Done",
    "EXIT_CONVERSION_FAILED",
    "EXIT_OK",
    "Failed",
    "FileState",
    "RunPlan",
]
