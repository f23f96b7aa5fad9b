from __future__ import annotations

import locale
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterable, Mapping

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import InvalidConfiguration


CONFIG_FILE = Path("config.toml")
ENV_PREFIX = "MD2HTML_"
DEFAULT_EXTENSIONS: tuple[str, ...] = ("extra", "sane_lists")


def default_encoding() -> str:
    return locale.getpreferredencoding(False)


@dataclass(frozen=True, slots=True)
class ConvertConfig:
    encoding: str = field(default_factory=default_encoding)
    overwrite: bool = False
    resume: bool = False
    debug: bool = False
    log_file: Path | None = None
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS


class EnvSettings(BaseSettings):
    """Options sourced from ``MD2HTML_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    config_path: Path | None = None
    encoding: str | None = None
    overwrite: bool | None = None
    resume: bool | None = None
    debug: bool | None = None
    log_file: Path | None = None


def _read_toml(path: Path) -> Mapping[str, object]:
    if not path.exists():
        return {}
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise InvalidConfiguration(f'Cannot read "{path}": {exc}') from exc


def _parse_bool(name: str, value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise InvalidConfiguration(f"Invalid boolean for {name}: {value!r}")


def _tuple_of_strings(value: object | None, default: Iterable[str]) -> tuple[str, ...]:
    if not value:
        return tuple(default)
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Iterable):
        return tuple(str(item) for item in value)
    raise InvalidConfiguration(f"Unsupported extensions configuration: {value!r}")


def _build_convert(data: Mapping[str, object] | None) -> ConvertConfig:
    if not data:
        return ConvertConfig()
    encoding = data.get("encoding")
    log_file = data.get("log_file")
    return ConvertConfig(
        encoding=str(encoding) if encoding else default_encoding(),
        overwrite=_parse_bool("overwrite", data.get("overwrite", False)),
        resume=_parse_bool("resume", data.get("resume", False)),
        debug=_parse_bool("debug", data.get("debug", False)),
        log_file=Path(str(log_file)) if log_file else None,
        extensions=_tuple_of_strings(data.get("extensions"), DEFAULT_EXTENSIONS),
    )


def load_config(path: Path | None = None) -> ConvertConfig:
    path = path or CONFIG_FILE
    raw = _read_toml(path)
    convert_data = raw.get("convert") if isinstance(raw, Mapping) else None
    return _build_convert(convert_data if isinstance(convert_data, Mapping) else None)


def apply_overrides(config: ConvertConfig, **overrides: object) -> ConvertConfig:
    """Return ``config`` with every override that is not ``None`` applied."""

    changes = {name: value for name, value in overrides.items() if value is not None}
    return replace(config, **changes) if changes else config


def resolve_config(
    path: Path | None = None,
    *,
    env: EnvSettings | None = None,
    **cli_overrides: object,
) -> ConvertConfig:
    """Merge defaults, ``config.toml``, environment and command line options.

    Later sources win: command line flags override environment variables,
    which override the TOML file, which overrides the defaults.
    """

    if env is None:
        try:
            env = EnvSettings()
        except ValidationError as exc:
            raise InvalidConfiguration(f"Invalid {ENV_PREFIX}* environment setting: {exc}") from exc
    config = load_config(path or env.config_path)
    config = apply_overrides(
        config,
        encoding=env.encoding,
        overwrite=env.overwrite,
        resume=env.resume,
        debug=env.debug,
        log_file=env.log_file,
    )
    return apply_overrides(config, **cli_overrides)


__all__ = [
    "CONFIG_FILE",
    "ENV_PREFIX",
    "ConvertConfig",
    "EnvSettings",
    "apply_overrides",
    "default_encoding",
    "load_config",
    "resolve_config",
]
