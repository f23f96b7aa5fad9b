"""Batch conversion of Markdown files into standalone HTML documents."""

from .config import ConvertConfig, load_config, resolve_config
from .core import ConversionService
from .errors import ConfigError, ConversionError
from .models import BatchResult, ConversionOutcome, Done, Failed, RunPlan
from .plan import resolve_plan

__all__ = [
    "BatchResult",
    "ConfigError",
    "ConversionError",
    "ConversionOutcome",
    "ConversionService",
    "ConvertConfig",
    "Done",
    "Failed",
    "RunPlan",
    "load_config",
    "resolve_config",
    "resolve_plan",
]
