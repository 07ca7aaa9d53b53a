"""Shared fixtures."""

import pytest

from suite_reporter.config import ReporterOptions
from suite_reporter.formatter import Formatter


@pytest.fixture
def tagged_options() -> ReporterOptions:
    """Options wrapping text in readable tags instead of ANSI codes."""
    return ReporterOptions(
        error_prefix="<error>",
        error_suffix="</error>",
        ok_prefix="<ok>",
        ok_suffix="</ok>",
        bold_prefix="<b>",
        bold_suffix="</b>",
        assertion_prefix="<assert>",
        assertion_suffix="</assert>",
    )


@pytest.fixture
def formatter(tagged_options: ReporterOptions) -> Formatter:
    """Formatter using tagged options."""
    return Formatter(options=tagged_options)
