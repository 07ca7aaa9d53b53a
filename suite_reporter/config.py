"""Output decoration options for the reporter."""

import asyncio
from pathlib import Path

import yaml

from suite_reporter.models.base import Model


class ReporterOptions(Model):
    """Prefix/suffix pairs wrapped around decorated text.

    The defaults are ANSI escape sequences; any literal strings work, such
    as HTML tags when the output is rendered in a browser.
    """

    error_prefix: str = "\x1b[31m"
    error_suffix: str = "\x1b[39m"
    ok_prefix: str = "\x1b[32m"
    ok_suffix: str = "\x1b[39m"
    bold_prefix: str = "\x1b[1m"
    bold_suffix: str = "\x1b[22m"
    assertion_prefix: str = "\x1b[35m"
    assertion_suffix: str = "\x1b[39m"

    @classmethod
    def plain(cls) -> "ReporterOptions":
        """Options that leave text undecorated."""
        return cls(**{name: "" for name in cls.model_fields})


async def load_options(path: Path) -> ReporterOptions:
    """Load reporter options from a YAML or JSON file.

    Options missing from the file keep their defaults.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the file holds unknown or non-string options

    """
    content = await asyncio.to_thread(path.read_text)
    data = yaml.safe_load(content) or {}
    return ReporterOptions.model_validate(data)
