"""Process termination paths."""

import os
import sys
from typing import NoReturn, Protocol

# Exit statuses are truncated to 8 bits; 256 failures would read as success.
MAX_EXIT_CODE = 255


def exit_status(code: int) -> int:
    """Clamp a failure count to the largest status the OS reports intact."""
    return min(code, MAX_EXIT_CODE)


class ExitHandler(Protocol):
    """Ends the run with an exit code."""

    def immediately(self, code: int) -> None:
        """Terminate at once, skipping normal shutdown."""

    def gracefully(self, code: int) -> None:
        """Request a normal shutdown."""


class ProcessExit:
    """Terminates the current process."""

    def immediately(self, code: int) -> NoReturn:
        """Exit without running cleanup handlers or waiting on the event loop.

        Standard streams are flushed first so the final report survives.
        """
        sys.stdout.flush()
        sys.stderr.flush()
        os._exit(exit_status(code))

    def gracefully(self, code: int) -> NoReturn:
        """Exit through the interpreter's normal shutdown."""
        sys.exit(exit_status(code))
