"""Abstract base class for test runners."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from suite_reporter.models.events import LifecycleEvent


@dataclass(frozen=True, kw_only=True)
class TestRunner(ABC):
    """Abstract base for runners that execute test modules.

    A runner reports progress as lifecycle events. Every TestStart must be
    followed by a TestDone of the same name before the final Done event; a
    runner whose test never completes simply stops without emitting Done.
    """

    __test__ = False

    @abstractmethod
    def run_files(self, paths: Sequence[Path]) -> AsyncIterator[LifecycleEvent]:
        """Run the test modules at the given paths.

        Args:
            paths: Absolute paths of the test files

        Returns:
            Lifecycle events in the order they happened

        """
