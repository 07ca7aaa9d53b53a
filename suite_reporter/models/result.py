"""Models for assertion results and test outcomes."""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import overload


@dataclass(frozen=True, kw_only=True)
class AssertionFailure:
    """Expected-vs-actual mismatch raised by an assertion.

    Values are kept in their printable form; the assertion library decides
    how to render them when it captures the failure.
    """

    actual: str | None = None
    expected: str | None = None
    operator: str | None = None


@dataclass(frozen=True, kw_only=True)
class GenericError:
    """Uncaught exception raised while a test was running."""

    name: str = "Error"


ErrorKind = AssertionFailure | GenericError


@dataclass(frozen=True, kw_only=True)
class TestError:
    """Error detail attached to a failed assertion."""

    __test__ = False

    kind: ErrorKind
    stack: str

    @property
    def name(self) -> str:
        """Exception type name shown on the first line of the stack."""
        if isinstance(self.kind, GenericError):
            return self.kind.name
        return "AssertionError"


@dataclass(frozen=True, kw_only=True)
class AssertionResult:
    """Outcome of a single assertion."""

    message: str | None = None
    error: TestError | None = None

    def failed(self) -> bool:
        """Return whether the assertion failed."""
        return self.error is not None


@dataclass(frozen=True, kw_only=True)
class AssertionResults(Sequence[AssertionResult]):
    """Ordered assertion results with the time spent producing them.

    Used both for a single test's outcome and for the summary of a run.
    """

    results: Sequence[AssertionResult] = field(default_factory=tuple)
    duration: int = 0

    def failures(self) -> int:
        """Count failed assertions."""
        return sum(1 for result in self.results if result.failed())

    @classmethod
    def combine(cls, outcomes: Iterable["AssertionResults"]) -> "AssertionResults":
        """Concatenate outcomes into one summary, summing their durations."""
        results: list[AssertionResult] = []
        duration = 0
        for outcome in outcomes:
            results.extend(outcome.results)
            duration += outcome.duration
        return cls(results=tuple(results), duration=duration)

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[AssertionResult]:
        return iter(self.results)

    @overload
    def __getitem__(self, index: int) -> AssertionResult: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[AssertionResult]: ...

    def __getitem__(
        self, index: int | slice
    ) -> AssertionResult | Sequence[AssertionResult]:
        return self.results[index]
