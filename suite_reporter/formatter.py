"""Text decoration for reporter output."""

from dataclasses import dataclass, field

from suite_reporter.config import ReporterOptions
from suite_reporter.models.result import AssertionFailure, TestError


@dataclass(frozen=True, kw_only=True)
class Formatter:
    """Wraps text with the configured prefix/suffix pairs."""

    options: ReporterOptions = field(default_factory=ReporterOptions)

    def error(self, text: str) -> str:
        return self.options.error_prefix + text + self.options.error_suffix

    def ok(self, text: str) -> str:
        return self.options.ok_prefix + text + self.options.ok_suffix

    def bold(self, text: str) -> str:
        return self.options.bold_prefix + text + self.options.bold_suffix

    def assertion_message(self, text: str) -> str:
        return self.options.assertion_prefix + text + self.options.assertion_suffix


def describe_error(error: TestError) -> str:
    """Render an error's stack, spelling out failed comparisons.

    When an assertion failure knows both compared values, the first stack
    line is replaced with ``<name>: <actual> <operator> <expected>``. Values
    spanning several lines are put on lines of their own.
    """
    kind = error.kind
    if not (
        isinstance(kind, AssertionFailure)
        and kind.actual is not None
        and kind.expected is not None
    ):
        return error.stack

    actual = kind.actual.rstrip("\n")
    expected = kind.expected.rstrip("\n")
    spacing = "\n" if "\n" in actual or "\n" in expected else " "
    headline = (
        f"{error.name}:{spacing}{actual}{spacing}{kind.operator or '=='}"
        f"{spacing}{expected}"
    )
    frames = error.stack.split("\n")[1:]
    return "\n".join([headline, *frames])
