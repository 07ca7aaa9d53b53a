"""Models for recorded lifecycle event logs.

A log holds one JSON object per line, tagged by its ``event`` field::

    {"event": "moduleStart", "name": "test_math"}
    {"event": "testStart", "name": "test_math.test_add"}
    {"event": "testDone", "name": "test_math.test_add",
     "outcome": {"duration": 3, "assertions": [{"message": "adds"}]}}
    {"event": "done", "summary": {"duration": 3, "assertions": [{}]}}
"""

from collections.abc import Sequence
from typing import Annotated, Literal

from pydantic import ConfigDict, Field, TypeAdapter

from suite_reporter.models.base import Model
from suite_reporter.models.events import (
    Done,
    LifecycleEvent,
    ModuleStart,
    TestDone,
    TestStart,
)
from suite_reporter.models.result import (
    AssertionFailure,
    AssertionResult,
    AssertionResults,
    ErrorKind,
    GenericError,
    TestError,
)


class Record(Model):
    """Base for log records; fields added by newer writers are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class ErrorRecord(Record):
    """Error captured for a failed assertion."""

    kind: Literal["assertion", "generic"] = "generic"
    name: str = "Error"
    stack: str = ""
    actual: str | None = None
    expected: str | None = None
    operator: str | None = None

    def to_error(self) -> TestError:
        kind: ErrorKind
        if self.kind == "assertion":
            kind = AssertionFailure(
                actual=self.actual, expected=self.expected, operator=self.operator
            )
        else:
            kind = GenericError(name=self.name)
        return TestError(kind=kind, stack=self.stack or self.name)


class AssertionRecord(Record):
    """A single recorded assertion."""

    message: str | None = None
    error: ErrorRecord | None = None

    def to_result(self) -> AssertionResult:
        return AssertionResult(
            message=self.message,
            error=self.error.to_error() if self.error is not None else None,
        )


class OutcomeRecord(Record):
    """Assertions of a test, or of a whole run."""

    assertions: Sequence[AssertionRecord] = Field(default_factory=list)
    duration: int = Field(default=0, ge=0, description="Duration in milliseconds")

    def to_results(self) -> AssertionResults:
        return AssertionResults(
            results=tuple(a.to_result() for a in self.assertions),
            duration=self.duration,
        )


class ModuleStartRecord(Record):
    event: Literal["moduleStart"]
    name: str

    def to_event(self) -> LifecycleEvent:
        return ModuleStart(name=self.name)


class TestStartRecord(Record):
    __test__ = False

    event: Literal["testStart"]
    name: str

    def to_event(self) -> LifecycleEvent:
        return TestStart(name=self.name)


class TestDoneRecord(Record):
    __test__ = False

    event: Literal["testDone"]
    name: str
    outcome: OutcomeRecord = Field(default_factory=OutcomeRecord)

    def to_event(self) -> LifecycleEvent:
        return TestDone(name=self.name, outcome=self.outcome.to_results())


class DoneRecord(Record):
    event: Literal["done"]
    summary: OutcomeRecord = Field(default_factory=OutcomeRecord)

    def to_event(self) -> LifecycleEvent:
        return Done(summary=self.summary.to_results())


EventRecord = Annotated[
    ModuleStartRecord | TestStartRecord | TestDoneRecord | DoneRecord,
    Field(discriminator="event"),
]

EVENT_RECORD_ADAPTER: TypeAdapter[EventRecord] = TypeAdapter(EventRecord)

KNOWN_EVENTS = frozenset({"moduleStart", "testStart", "testDone", "done"})
