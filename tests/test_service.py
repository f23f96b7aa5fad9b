from __future__ import annotations

import json
from pathlib import Path

from markdown_html.core import ConversionService, should_continue
from markdown_html.errors import RenderError
from markdown_html.logging import Reporter, RunLogger
from markdown_html.models import Done, Failed, FileState, RunPlan


class FakeRenderer:
    def __init__(self, failing: set[str] | None = None) -> None:
        self.failing = failing or set()
        self.calls: list[Path] = []

    def render(self, source: Path, encoding: str) -> str:
        self.calls.append(source)
        if source.name in self.failing:
            raise RenderError(f"cannot render {source.name}")
        return f"<p>{source.stem}</p>"


def build_plan(workdir: Path, names: list[str], **policies: bool) -> RunPlan:
    for name in names:
        (workdir / name).write_text(f"# {name}", encoding="utf-8")
    return RunPlan(
        destination_dir=Path("out"),
        input_encoding="utf-8",
        output_encoding="utf-8",
        input_files=tuple(Path(name) for name in names),
        **policies,
    )


def err_text(reporter: Reporter) -> str:
    return reporter.err.file.getvalue()  # type: ignore[attr-defined]


def out_text(reporter: Reporter) -> str:
    return reporter.out.file.getvalue()  # type: ignore[attr-defined]


def test_run_converts_every_file(workdir: Path, reporter: Reporter) -> None:
    plan = build_plan(workdir, ["a.md", "b.md"])
    result = ConversionService(plan, renderer=FakeRenderer(), reporter=reporter).run()
    assert result.status == 0
    assert [type(o) for o in result.outcomes] == [Done, Done]
    assert result.summary.successes == 2
    assert (workdir / "out" / "a.html").exists()
    assert 'Converting file "a.md" ...' in out_text(reporter)


def test_resume_visits_every_file(workdir: Path, reporter: Reporter) -> None:
    plan = build_plan(workdir, ["a.md", "b.md", "c.md", "d.md"], resume=True)
    renderer = FakeRenderer(failing={"a.md", "c.md"})
    service = ConversionService(plan, renderer=renderer, reporter=reporter)
    result = service.run()
    assert result.attempted == 4
    assert renderer.calls == list(plan.input_files)
    assert result.not_attempted == []
    assert result.summary.failures == 2
    assert result.summary.successes == 2
    assert result.status == 5
    assert service.states[Path("d.md")] is FileState.DONE


def test_failure_status_survives_later_success(workdir: Path, reporter: Reporter) -> None:
    plan = build_plan(workdir, ["a.md", "b.md"], resume=True)
    result = ConversionService(plan, renderer=FakeRenderer({"a.md"}), reporter=reporter).run()
    assert isinstance(result.outcomes[-1], Done)
    assert result.status == 5


def test_no_resume_halts_at_first_failure(workdir: Path, reporter: Reporter) -> None:
    plan = build_plan(workdir, ["a.md", "b.md", "c.md"])
    renderer = FakeRenderer(failing={"b.md"})
    service = ConversionService(plan, renderer=renderer, reporter=reporter)
    result = service.run()
    assert result.attempted == 2
    assert result.not_attempted == [Path("c.md")]
    assert result.summary.not_attempted == 1
    assert renderer.calls == [Path("a.md"), Path("b.md")]
    assert service.states[Path("c.md")] is FileState.PENDING
    assert service.states[Path("b.md")] is FileState.FAILED
    assert result.status == 5
    assert not (workdir / "out" / "c.html").exists()
    errors = err_text(reporter)
    assert 'Error converting file "b.md":' in errors
    assert "cannot render b.md" in errors
    assert "c.md" not in errors


def test_existing_destination_is_left_unchanged(workdir: Path, reporter: Reporter) -> None:
    plan = build_plan(workdir, ["a.md"])
    existing = workdir / "out" / "a.html"
    existing.write_text("keep me", encoding="utf-8")
    result = ConversionService(plan, renderer=FakeRenderer(), reporter=reporter).run()
    assert result.status == 5
    failure = result.outcomes[0]
    assert isinstance(failure, Failed)
    assert failure.code == "DESTINATION_EXISTS"
    assert existing.read_text(encoding="utf-8") == "keep me"
    assert "already exists" in err_text(reporter)


def test_overwrite_replaces_destination(workdir: Path, reporter: Reporter) -> None:
    plan = build_plan(workdir, ["a.md"], overwrite=True)
    existing = workdir / "out" / "a.html"
    existing.write_text("old", encoding="utf-8")
    result = ConversionService(plan, renderer=FakeRenderer(), reporter=reporter).run()
    assert result.status == 0
    assert "<p>a</p>" in existing.read_text(encoding="utf-8")


def test_absolute_input_fails_without_rendering(workdir: Path, reporter: Reporter) -> None:
    plan = build_plan(workdir, ["a.md", "b.md"])
    plan = RunPlan(
        destination_dir=plan.destination_dir,
        input_encoding="utf-8",
        output_encoding="utf-8",
        input_files=(workdir / "a.md", Path("b.md")),
    )
    renderer = FakeRenderer()
    result = ConversionService(plan, renderer=renderer, reporter=reporter).run()
    assert result.status == 5
    assert renderer.calls == []
    assert result.not_attempted == [Path("b.md")]
    assert not (workdir / "out" / "b.html").exists()


def test_nested_inputs_mirror_directories(workdir: Path, reporter: Reporter) -> None:
    (workdir / "docs" / "guide").mkdir(parents=True)
    plan = build_plan(workdir, ["docs/guide/intro.md"])
    result = ConversionService(plan, renderer=FakeRenderer(), reporter=reporter).run()
    assert result.status == 0
    assert (workdir / "out" / "docs" / "guide" / "intro.html").is_file()


def test_debug_reports_traceback(workdir: Path, reporter: Reporter) -> None:
    plan = build_plan(workdir, ["a.md"], debug=True)
    ConversionService(plan, renderer=FakeRenderer({"a.md"}), reporter=reporter).run()
    assert "Traceback" in err_text(reporter)


def test_run_log_records_each_attempt(workdir: Path, reporter: Reporter) -> None:
    plan = build_plan(workdir, ["a.md", "b.md"], resume=True)
    log_file = workdir / "logs" / "run.jsonl"
    service = ConversionService(
        plan,
        renderer=FakeRenderer({"a.md"}),
        reporter=reporter,
        logger=RunLogger(log_file),
    )
    service.run()
    entries = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert [entry["status"] for entry in entries] == ["failed", "done"]
    assert entries[0]["error_code"] == "RENDER_FAILED"
    assert entries[1]["destination"] == str(Path("out") / "b.html")


def test_should_continue_policy() -> None:
    done = Done(source=Path("a.md"), destination=Path("out/a.html"))
    failed = Failed(source=Path("a.md"), reason="boom", code="X", error=RuntimeError("boom"))
    assert should_continue(False, done) is True
    assert should_continue(True, done) is True
    assert should_continue(True, failed) is True
    assert should_continue(False, failed) is False


def test_unwritable_run_log_fails_file_and_resumes(workdir: Path, reporter: Reporter) -> None:
    plan = build_plan(workdir, ["a.md", "b.md"], resume=True)
    log_dir = workdir / "logdir"
    log_dir.mkdir()
    service = ConversionService(
        plan,
        renderer=FakeRenderer(),
        reporter=reporter,
        logger=RunLogger(log_dir),
    )
    result = service.run()
    assert result.attempted == 2
    assert result.status == 5
    codes = [outcome.code for outcome in result.outcomes if isinstance(outcome, Failed)]
    assert codes == ["LOG_FAILED", "LOG_FAILED"]
    assert (workdir / "out" / "b.html").exists()
    assert "Cannot append to run log" in err_text(reporter)


def test_unwritable_run_log_halts_without_resume(workdir: Path, reporter: Reporter) -> None:
    plan = build_plan(workdir, ["a.md", "b.md"])
    log_dir = workdir / "logdir"
    log_dir.mkdir()
    result = ConversionService(
        plan, renderer=FakeRenderer(), reporter=reporter, logger=RunLogger(log_dir)
    ).run()
    assert result.status == 5
    assert result.not_attempted == [Path("b.md")]
