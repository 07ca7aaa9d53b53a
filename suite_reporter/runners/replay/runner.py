"""Runner that replays recorded lifecycle event logs."""

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from suite_reporter.models.events import Done, LifecycleEvent
from suite_reporter.models.result import AssertionResults
from suite_reporter.runners.base import TestRunner
from suite_reporter.runners.replay.config import ReplayConfig
from suite_reporter.runners.replay.models import EVENT_RECORD_ADAPTER, KNOWN_EVENTS

log = logging.getLogger(__name__)


class ReplayError(Exception):
    """Raised when an event log cannot be replayed."""


@dataclass(frozen=True, kw_only=True)
class ReplayRunner(TestRunner):
    """Replays event logs recorded from earlier runs.

    Each log's own ``done`` record is held back; a single Done carrying the
    combined summary follows the last log. If any log stops before its
    ``done`` record, the run is left without a Done event, as a live run
    with a hung test would be.
    """

    config: ReplayConfig

    @classmethod
    def from_config(cls, config: ReplayConfig) -> "ReplayRunner":
        """Create a runner from its configuration."""
        return cls(config=config)

    async def run_files(self, paths: Sequence[Path]) -> AsyncIterator[LifecycleEvent]:
        summaries: list[AssertionResults] = []
        complete = True

        for path in paths:
            log.info("Replaying %s", path)
            summary: AssertionResults | None = None
            for event in await self.read_events(path):
                if isinstance(event, Done):
                    summary = event.summary
                    continue
                yield event

            if summary is None:
                log.warning("Event log %s ends before its run completed", path)
                complete = False
            else:
                summaries.append(summary)

        if complete:
            yield Done(summary=AssertionResults.combine(summaries))

    async def read_events(self, path: Path) -> Sequence[LifecycleEvent]:
        """Parse every event recorded in a log file.

        Raises:
            ReplayError: If a line is not a valid event record

        """
        content = await asyncio.to_thread(path.read_text, encoding=self.config.encoding)

        events: list[LifecycleEvent] = []
        for number, line in enumerate(content.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                data = json.loads(line)
            except json.JSONDecodeError as e:
                raise ReplayError(f"{path}:{number}: invalid JSON: {e}") from e

            event_name = data.get("event") if isinstance(data, dict) else None
            if event_name not in KNOWN_EVENTS:
                if self.config.ignore_unknown_events:
                    log.debug("Skipping unknown event %r at %s:%d", event_name, path, number)
                    continue
                raise ReplayError(f"{path}:{number}: unknown event {event_name!r}")

            try:
                record = EVENT_RECORD_ADAPTER.validate_python(data)
            except ValidationError as e:
                raise ReplayError(f"{path}:{number}: invalid {event_name} record: {e}") from e
            events.append(record.to_event())
        return events
