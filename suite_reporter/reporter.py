"""Event-driven console reporter for test runs."""

import asyncio
import logging
import sys
import time
from collections.abc import AsyncIterable
from dataclasses import dataclass, field
from typing import TextIO, cast

from suite_reporter.coverage import CoverageAggregator
from suite_reporter.exit import ExitHandler, ProcessExit
from suite_reporter.formatter import Formatter, describe_error
from suite_reporter.models.coverage import CoverageSnapshot
from suite_reporter.models.events import (
    Done,
    LifecycleEvent,
    ModuleStart,
    TestDone,
    TestStart,
)
from suite_reporter.models.result import AssertionFailure, AssertionResults, TestError
from suite_reporter.tracker import Tracker

log = logging.getLogger(__name__)

FLUSH_DELAY = 0.01


@dataclass(kw_only=True)
class Reporter:
    """Prints test progress and decides the exit code of a run.

    Tests that start but never complete are caught at the end of the run:
    their names are printed and the process is terminated immediately with
    the number of such tests as exit code. Otherwise the exit code is the
    number of failed assertions, returned once output had time to drain.
    """

    formatter: Formatter = field(default_factory=Formatter)
    stream: TextIO = field(default_factory=lambda: sys.stdout)
    exit: ExitHandler = field(default_factory=ProcessExit)
    coverage: CoverageAggregator | None = None
    snapshot: CoverageSnapshot | None = None
    flush_delay: float = FLUSH_DELAY
    tracker: Tracker = field(init=False)
    _start: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        self.tracker = Tracker(on_finish=self._check_unfinished)

    async def run(self, events: AsyncIterable[LifecycleEvent]) -> int:
        """Consume a runner's events and return the exit code."""
        self._start = time.monotonic()

        try:
            async for event in events:
                match event:
                    case ModuleStart(name=name):
                        self.module_start(name)
                    case TestStart(name=name):
                        self.test_start(name)
                    case TestDone(name=name, outcome=outcome):
                        self.test_done(name, outcome)
                    case Done(summary=summary):
                        return await self.done(summary)
        except BaseException:
            # A crashing runner still owes a report of the tests it left pending.
            self.tracker.finish()
            raise

        log.warning("Runner stopped without reporting the end of the run")
        self.tracker.finish()
        return self.tracker.unfinished()

    def module_start(self, name: str) -> None:
        self._print("\n" + self.formatter.bold(name))

    def test_start(self, name: str) -> None:
        self.tracker.put(name)

    def test_done(self, name: str, outcome: AssertionResults) -> None:
        """Print the outcome of a test, with details for each failure."""
        self.tracker.remove(name)

        if not outcome.failures():
            self._print(f"✔ {name}")
            return

        self._print(self.formatter.error(f"✖ {name}") + "\n")
        for result in outcome:
            if not result.failed():
                continue
            error = cast(TestError, result.error)
            if isinstance(error.kind, AssertionFailure) and result.message:
                self._print(
                    "Assertion Message: "
                    + self.formatter.assertion_message(result.message)
                )
            self._print(describe_error(error) + "\n")

    async def done(self, summary: AssertionResults) -> int:
        """Print the run summary, then report coverage after a short delay."""
        self.tracker.finish()
        if self.tracker.unfinished():
            return self.tracker.unfinished()

        duration = round((time.monotonic() - self._start) * 1000)
        fmt = self.formatter
        if summary.failures():
            self._print(
                f"\n{fmt.bold(fmt.error('FAILURES: '))}{summary.failures()}"
                f"/{len(summary)} assertions failed ({duration}ms)"
            )
        else:
            self._print(f"\n{fmt.bold(fmt.ok('OK: '))}{len(summary)} assertions ({duration}ms)")

        # Give buffered output a chance to drain before the process ends.
        await asyncio.sleep(self.flush_delay)

        if self.coverage is not None and self.snapshot is not None:
            await asyncio.to_thread(self.coverage.report, self.snapshot)

        return summary.failures()

    def _check_unfinished(self, tracker: Tracker) -> None:
        if not tracker.unfinished():
            return

        self._print("")
        self._print(
            self.formatter.error(
                self.formatter.bold("FAILURES: Undone tests (or their setups/teardowns): ")
            )
        )
        now = time.monotonic()
        for name in tracker.names():
            self._print(f"- {name}")
            log.debug(
                "Test %s pending for %.0fms", name, (now - tracker.pending_since(name)) * 1000
            )
        self._print("")
        self._print("To fix this, make sure all tests signal completion")
        self.exit.immediately(tracker.unfinished())

    def _print(self, text: str) -> None:
        print(text, file=self.stream)
