"""Tests for the replay runner."""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from suite_reporter.models.events import (
    Done,
    LifecycleEvent,
    ModuleStart,
    TestDone,
    TestStart,
)
from suite_reporter.models.result import AssertionFailure, GenericError
from suite_reporter.runners.replay import ReplayConfig, ReplayError, ReplayRunner


def write_log(path: Path, *records: dict[str, Any]) -> Path:
    """Write records as a JSON-lines event log."""
    path.write_text("".join(json.dumps(record) + "\n" for record in records))
    return path


async def collect(runner: ReplayRunner, paths: Sequence[Path]) -> list[LifecycleEvent]:
    return [event async for event in runner.run_files(paths)]


@pytest.fixture
def runner() -> ReplayRunner:
    """Runner with default configuration."""
    return ReplayRunner(config=ReplayConfig())


class TestReadEvents:
    """Tests for read_events method."""

    async def test_parses_lifecycle_records(
        self, runner: ReplayRunner, tmp_path: Path
    ) -> None:
        """Converts every record into its lifecycle event."""
        path = write_log(
            tmp_path / "run.jsonl",
            {"event": "moduleStart", "name": "mod"},
            {"event": "testStart", "name": "mod.test_a"},
            {
                "event": "testDone",
                "name": "mod.test_a",
                "outcome": {"duration": 3, "assertions": [{"message": "ok"}]},
            },
            {"event": "done", "summary": {"duration": 3, "assertions": [{}]}},
        )

        events = await runner.read_events(path)

        assert events[0] == ModuleStart(name="mod")
        assert events[1] == TestStart(name="mod.test_a")
        assert isinstance(events[2], TestDone)
        assert events[2].outcome.duration == 3
        assert events[2].outcome[0].message == "ok"
        assert not events[2].outcome[0].failed()
        assert isinstance(events[3], Done)
        assert len(events[3].summary) == 1

    async def test_parses_error_kinds(self, runner: ReplayRunner, tmp_path: Path) -> None:
        """Tags errors as assertion failures or generic errors."""
        path = write_log(
            tmp_path / "run.jsonl",
            {
                "event": "testDone",
                "name": "t",
                "outcome": {
                    "assertions": [
                        {
                            "message": "expected true",
                            "error": {
                                "kind": "assertion",
                                "stack": "AssertionError\n  at t",
                                "actual": "False",
                                "expected": "True",
                                "operator": "==",
                            },
                        },
                        {"error": {"name": "TypeError", "stack": "TypeError: x"}},
                    ]
                },
            },
        )

        [event] = await runner.read_events(path)

        assert isinstance(event, TestDone)
        first, second = event.outcome
        assert first.error is not None
        assert first.error.kind == AssertionFailure(
            actual="False", expected="True", operator="=="
        )
        assert second.error is not None
        assert second.error.kind == GenericError(name="TypeError")
        assert event.outcome.failures() == 2

    async def test_error_without_stack_uses_name(
        self, runner: ReplayRunner, tmp_path: Path
    ) -> None:
        """Falls back to the error name when no stack was recorded."""
        path = write_log(
            tmp_path / "run.jsonl",
            {"event": "testDone", "name": "t", "outcome": {"assertions": [{"error": {}}]}},
        )

        [event] = await runner.read_events(path)

        assert isinstance(event, TestDone)
        assert event.outcome[0].error is not None
        assert event.outcome[0].error.stack == "Error"

    async def test_skips_blank_lines(self, runner: ReplayRunner, tmp_path: Path) -> None:
        """Ignores empty lines."""
        path = tmp_path / "run.jsonl"
        path.write_text('\n{"event": "moduleStart", "name": "m"}\n\n')

        assert await runner.read_events(path) == [ModuleStart(name="m")]

    async def test_ignores_extra_fields(self, runner: ReplayRunner, tmp_path: Path) -> None:
        """Tolerates fields added by newer writers."""
        path = write_log(
            tmp_path / "run.jsonl",
            {"event": "moduleStart", "name": "m", "timestamp": 123},
        )

        assert await runner.read_events(path) == [ModuleStart(name="m")]

    async def test_raises_for_invalid_json(
        self, runner: ReplayRunner, tmp_path: Path
    ) -> None:
        """Reports the line holding malformed JSON."""
        path = tmp_path / "run.jsonl"
        path.write_text('{"event": "moduleStart", "name": "m"}\n{oops\n')

        with pytest.raises(ReplayError, match=r"run.jsonl:2: invalid JSON"):
            await runner.read_events(path)

    async def test_raises_for_unknown_event(
        self, runner: ReplayRunner, tmp_path: Path
    ) -> None:
        """Rejects unknown events by default."""
        path = write_log(tmp_path / "run.jsonl", {"event": "suiteStart", "name": "s"})

        with pytest.raises(ReplayError, match="unknown event 'suiteStart'"):
            await runner.read_events(path)

    async def test_skips_unknown_event_when_configured(self, tmp_path: Path) -> None:
        """Skips unknown events when asked to."""
        runner = ReplayRunner(config=ReplayConfig(ignore_unknown_events=True))
        path = write_log(
            tmp_path / "run.jsonl",
            {"event": "suiteStart", "name": "s"},
            {"event": "moduleStart", "name": "m"},
        )

        assert await runner.read_events(path) == [ModuleStart(name="m")]

    async def test_raises_for_invalid_record(
        self, runner: ReplayRunner, tmp_path: Path
    ) -> None:
        """Rejects records missing required fields."""
        path = write_log(tmp_path / "run.jsonl", {"event": "testStart"})

        with pytest.raises(ReplayError, match="invalid testStart record"):
            await runner.read_events(path)


class TestRunFiles:
    """Tests for run_files method."""

    async def test_merges_done_events(self, runner: ReplayRunner, tmp_path: Path) -> None:
        """Emits a single Done with the combined summary after all logs."""
        first = write_log(
            tmp_path / "first.jsonl",
            {"event": "moduleStart", "name": "first"},
            {"event": "done", "summary": {"duration": 2, "assertions": [{}, {}]}},
        )
        second = write_log(
            tmp_path / "second.jsonl",
            {"event": "moduleStart", "name": "second"},
            {
                "event": "done",
                "summary": {"duration": 3, "assertions": [{"error": {"stack": "E"}}]},
            },
        )

        events = await collect(runner, [first, second])

        assert events[:2] == [ModuleStart(name="first"), ModuleStart(name="second")]
        assert len(events) == 3
        done = events[2]
        assert isinstance(done, Done)
        assert len(done.summary) == 3
        assert done.summary.failures() == 1
        assert done.summary.duration == 5

    async def test_incomplete_log_withholds_done(
        self, runner: ReplayRunner, tmp_path: Path
    ) -> None:
        """A log cut short leaves the run without a Done event."""
        hung = write_log(
            tmp_path / "hung.jsonl",
            {"event": "moduleStart", "name": "m"},
            {"event": "testStart", "name": "m.test_hangs"},
        )
        complete = write_log(
            tmp_path / "complete.jsonl",
            {"event": "done", "summary": {}},
        )

        events = await collect(runner, [hung, complete])

        assert events == [ModuleStart(name="m"), TestStart(name="m.test_hangs")]

    async def test_no_files(self, runner: ReplayRunner) -> None:
        """Replaying nothing completes an empty run."""
        events = await collect(runner, [])

        assert len(events) == 1
        assert isinstance(events[0], Done)
        assert len(events[0].summary) == 0
