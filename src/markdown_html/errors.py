"""Error types raised while resolving a run or converting a file."""

from __future__ import annotations


class ConfigError(RuntimeError):
    """Setup failure; aborts the run before any file is touched."""

    exit_code = 1


class MissingDestination(ConfigError):
    exit_code = 1


class InvalidDestination(ConfigError):
    exit_code = 2


class MissingInputs(ConfigError):
    exit_code = 3


class InvalidInput(ConfigError):
    exit_code = 4


class InvalidConfiguration(ConfigError):
    """Unreadable config file or malformed option value."""

    exit_code = 6


class ConversionError(RuntimeError):
    """Failure converting a single file."""

    code = "CONVERSION_FAILED"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class AbsolutePathNotAllowed(ConversionError):
    code = "ABSOLUTE_PATH"


class DestinationExists(ConversionError):
    code = "DESTINATION_EXISTS"


class RenderError(ConversionError):
    code = "RENDER_FAILED"


class WriteError(ConversionError):
    code = "WRITE_FAILED"


class RunLogError(ConversionError):
    code = "LOG_FAILED"


__all__ = [
    "AbsolutePathNotAllowed",
    "ConfigError",
    "ConversionError",
    "DestinationExists",
    "InvalidConfiguration",
    "InvalidDestination",
    "InvalidInput",
    "MissingDestination",
    "MissingInputs",
    "RenderError",
    "RunLogError",
    "WriteError",
]
