"""Tracking of tests that started but have not signaled completion."""

import logging
import time
from collections.abc import Callable, Sequence

log = logging.getLogger(__name__)


class TestAlreadyPendingError(Exception):
    """Raised when a test starts again before its previous run completed."""

    __test__ = False


class Tracker:
    """Pending set of asynchronous tests.

    Tests may overlap arbitrarily, so entries are keyed by test name and kept
    in the order they started. ``finish`` is the end-of-run hook: it hands
    the tracker to ``on_finish`` once, however many times it is called.
    """

    def __init__(self, on_finish: Callable[["Tracker"], None] | None = None) -> None:
        self._pending: dict[str, float] = {}
        self._on_finish = on_finish
        self._finished = False

    def put(self, name: str) -> None:
        """Register a test as pending.

        Raises:
            TestAlreadyPendingError: If the test is already pending

        """
        if name in self._pending:
            raise TestAlreadyPendingError(f"Test '{name}' is already pending")
        self._pending[name] = time.monotonic()

    def remove(self, name: str) -> None:
        """Mark a test as completed. Unknown names are ignored."""
        if self._pending.pop(name, None) is None:
            log.debug("Ignoring completion of test that is not pending: %s", name)

    def unfinished(self) -> int:
        """Count pending tests."""
        return len(self._pending)

    def names(self) -> Sequence[str]:
        """Pending test names in the order they started."""
        return list(self._pending)

    def pending_since(self, name: str) -> float:
        """Monotonic timestamp at which a pending test started."""
        return self._pending[name]

    def finish(self) -> None:
        """Fire the end-of-run hook if it has not fired yet."""
        if self._finished:
            return
        self._finished = True
        if self._on_finish is not None:
            self._on_finish(self)
