"""Lifecycle events emitted by a runner while it executes test modules."""

from dataclasses import dataclass

from suite_reporter.models.result import AssertionResults


@dataclass(frozen=True, kw_only=True)
class ModuleStart:
    """A test module is about to run."""

    name: str


@dataclass(frozen=True, kw_only=True)
class TestStart:
    """A test has started and owes a matching TestDone."""

    __test__ = False

    name: str


@dataclass(frozen=True, kw_only=True)
class TestDone:
    """A test signaled completion."""

    __test__ = False

    name: str
    outcome: AssertionResults


@dataclass(frozen=True, kw_only=True)
class Done:
    """Every scheduled test has delivered its outcome."""

    summary: AssertionResults


LifecycleEvent = ModuleStart | TestStart | TestDone | Done
