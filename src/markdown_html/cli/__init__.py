from __future__ import annotations

from pathlib import Path

import typer

from ..config import resolve_config
from ..core import ConversionService
from ..errors import ConfigError
from ..logging import Reporter, RunLogger
from ..plan import resolve_plan
from ..renderer import MarkdownRenderer

app = typer.Typer(help="Batch Markdown-to-HTML converter", add_completion=False)


@app.command()
def convert(
    destination: str | None = typer.Argument(None, help="Directory that receives the HTML files"),
    files: list[str] | None = typer.Argument(None, help="Relative paths of Markdown files"),
    encoding: str | None = typer.Option(None, "--encoding", help="Input and output character encoding"),
    overwrite: bool | None = typer.Option(
        None, "--overwrite/--no-overwrite", help="Replace existing destination files"
    ),
    resume: bool | None = typer.Option(
        None, "--resume/--no-resume", help="Keep converting after a file fails"
    ),
    debug: bool | None = typer.Option(None, "--debug/--no-debug", help="Show full tracebacks"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Append a JSON line per file"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    reporter = Reporter()
    arguments = [destination, *(files or [])] if destination is not None else []
    try:
        cfg = resolve_config(
            config,
            encoding=encoding,
            overwrite=overwrite,
            resume=resume,
            debug=debug,
            log_file=log_file,
        )
        plan = resolve_plan(arguments, cfg)
    except ConfigError as exc:
        reporter.setup_error(str(exc))
        raise typer.Exit(exc.exit_code) from exc

    service = ConversionService(
        plan,
        renderer=MarkdownRenderer(cfg.extensions),
        reporter=reporter,
        logger=RunLogger(cfg.log_file) if cfg.log_file else None,
    )
    result = service.run()
    reporter.summary(result.summary)
    if result.status:
        raise typer.Exit(result.status)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
