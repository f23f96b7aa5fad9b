from __future__ import annotations

from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from markdown_html.config import ConvertConfig
from markdown_html.logging import Reporter


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CONFIG_PATH", "ENCODING", "OVERWRITE", "RESUME", "DEBUG", "LOG_FILE"):
        monkeypatch.delenv(f"MD2HTML_{name}", raising=False)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "out").mkdir()
    return tmp_path


@pytest.fixture
def reporter() -> Reporter:
    return Reporter(
        out=Console(file=StringIO(), soft_wrap=True, highlight=False),
        err=Console(file=StringIO(), soft_wrap=True, highlight=False),
    )


def build_config(**overrides: object) -> ConvertConfig:
    values: dict[str, object] = {"encoding": "utf-8"}
    values.update(overrides)
    return ConvertConfig(**values)  # type: ignore[arg-type]
