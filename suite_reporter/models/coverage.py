"""Models for line coverage data."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from pydantic import TypeAdapter

_HITS_ADAPTER = TypeAdapter(dict[str, dict[int, int]])


def percentage(covered: int, executable: int) -> int:
    """Return covered/executable as a percentage rounded half up.

    A file without executable lines counts as fully covered.
    """
    if executable == 0:
        return 100
    return (200 * covered + executable) // (2 * executable)


@dataclass(frozen=True, kw_only=True)
class CoverageSnapshot:
    """Line hit counters collected by an instrumentation engine.

    Maps a source file path to a mapping of 1-based line number to the
    number of times that line executed.
    """

    hits: Mapping[str, Mapping[int, int]]

    @classmethod
    def from_json(cls, data: str | bytes) -> "CoverageSnapshot":
        """Parse a snapshot from JSON, coercing line keys to integers."""
        return cls(hits=_HITS_ADAPTER.validate_json(data))

    @classmethod
    def from_file(cls, path: Path) -> "CoverageSnapshot":
        """Load a snapshot from a JSON file."""
        return cls.from_json(path.read_bytes())


@dataclass(frozen=True, kw_only=True)
class CoverageRecord:
    """Coverage of a single source file."""

    path: Path
    name: str
    id: str
    lines: Sequence[str]
    hits: Mapping[int, int]
    executable: int
    covered: int

    @property
    def percentage(self) -> int:
        """Covered share of executable lines."""
        return percentage(self.covered, self.executable)

    def is_covered(self, line_number: int) -> bool:
        """Return whether the 1-based line executed at least once."""
        return self.hits.get(line_number, 0) > 0


@dataclass(frozen=True, kw_only=True)
class CoverageSummary:
    """Totals across every file that took part in the report."""

    records: Sequence[CoverageRecord]

    @property
    def executable(self) -> int:
        """Executable lines across all files."""
        return sum(record.executable for record in self.records)

    @property
    def covered(self) -> int:
        """Covered lines across all files."""
        return sum(record.covered for record in self.records)

    @property
    def percentage(self) -> int:
        """Total coverage percentage."""
        return percentage(self.covered, self.executable)
