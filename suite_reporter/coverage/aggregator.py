"""Aggregation of line hit counters into an HTML coverage report."""

import logging
import re
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from html import escape
from importlib.resources import files
from pathlib import Path
from typing import TextIO

from suite_reporter.models.coverage import (
    CoverageRecord,
    CoverageSnapshot,
    CoverageSummary,
)

log = logging.getLogger(__name__)

PLACEHOLDER = "CODE"
DEFAULT_EXCLUDED_DIRS = ("node_modules", "site-packages", ".venv")

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]+")


def load_template() -> str:
    """Read the packaged report template."""
    return files("suite_reporter.coverage").joinpath("template.html").read_text()


def make_id(name: str) -> str:
    """Turn a relative file name into an HTML id, e.g. ``lib/a.js`` -> ``lib-a-js``."""
    return _NON_ALPHANUMERIC.sub("-", name).strip("-")


@dataclass(frozen=True, kw_only=True)
class CoverageAggregator:
    """Builds per-file coverage records and writes the HTML report.

    A line counts as executable when its right-trimmed text ends with one of
    ``terminators``. This is a rough approximation of what an instrumenter
    considers a statement and will misjudge some lines.
    """

    cwd: Path
    stream: TextIO = field(default_factory=lambda: sys.stdout)
    excluded_dirs: Sequence[str] = DEFAULT_EXCLUDED_DIRS
    terminators: str = ";"
    output_name: str = "coverage.html"
    template: str | None = None

    def collect(self, snapshot: CoverageSnapshot) -> CoverageSummary:
        """Build records for every snapshot file that belongs to the project."""
        records: list[CoverageRecord] = []
        for file_name, hits in snapshot.hits.items():
            path = Path(file_name)
            if not path.is_absolute():
                path = self.cwd / path
            path = path.resolve()

            name = self._project_name(path)
            if name is None:
                log.debug("Skipping coverage for %s", path)
                continue

            try:
                lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
            except FileNotFoundError:
                log.warning("Skipping coverage for missing file %s", path)
                continue

            records.append(self._build_record(path, name, lines, hits))
        return CoverageSummary(records=records)

    def render(self, summary: CoverageSummary) -> str:
        """Render the report, largest files first.

        Files with fewer than two executable lines are left out of the page
        but still count towards the totals.
        """
        listed = sorted(
            (record for record in summary.records if record.executable > 1),
            key=lambda record: record.executable,
            reverse=True,
        )
        body = "\n".join(self.render_file(record) for record in listed)
        template = self.template if self.template is not None else load_template()
        return template.replace(PLACEHOLDER, body, 1)

    def render_file(self, record: CoverageRecord) -> str:
        """Render the gauge and collapsible listing of one file."""
        pct = record.percentage
        html = (
            f'<div class="file"><a href="#{record.id}" class="filename" '
            f'name="{record.id}" onclick="var el = document.getElementById('
            f"'{record.id}'); el.style.display = el.style.display ? '' : 'none';\">"
            f"{escape(record.name)}</a> "
            f'<div class="gauge" style="width: {3 * pct}px"><strong>{pct}%</strong> '
            f"[{record.executable} to cover, {len(record.lines)} total]</div></div>\n"
        )
        html += f'<div id="{record.id}" style="display:none;">'
        for number, line in enumerate(record.lines, start=1):
            if record.is_covered(number):
                css = "covered"
            elif self.is_executable(line):
                css = "uncovered"
            else:
                css = ""
            html += f'<pre class="{css}">{escape(line)}</pre>\n'
        html += "</div>"
        return html

    def report(self, snapshot: CoverageSnapshot) -> CoverageSummary:
        """Write the HTML report and print the total coverage."""
        summary = self.collect(snapshot)
        output = self.cwd / self.output_name
        output.write_text(self.render(summary), encoding="utf-8")
        log.info("Coverage report written to %s", output)

        print("=" * 20, file=self.stream)
        print(f"TOTAL COVERAGE: {summary.percentage}%", file=self.stream)
        return summary

    def is_executable(self, line: str) -> bool:
        """Guess whether a line is a statement from its last character.

        Only an approximation of what the instrumenter counts; multi-line
        statements and terminator-free languages are misjudged.
        """
        return line.rstrip().endswith(tuple(self.terminators))

    def _project_name(self, path: Path) -> str | None:
        """Path relative to the working directory, None for foreign files.

        Expects a resolved path, so `..` segments cannot climb out of it.
        """
        try:
            relative = path.relative_to(self.cwd.resolve())
        except ValueError:
            return None
        if any(part in self.excluded_dirs for part in relative.parts[:-1]):
            return None
        return relative.as_posix()

    def _build_record(
        self,
        path: Path,
        name: str,
        lines: Sequence[str],
        hits: Mapping[int, int],
    ) -> CoverageRecord:
        executable = sum(1 for line in lines if self.is_executable(line))
        # Instrumented lines need not match the heuristic one-to-one.
        covered = min(sum(1 for count in hits.values() if count > 0), executable)
        return CoverageRecord(
            path=path,
            name=name,
            id=make_id(name),
            lines=lines,
            hits=hits,
            executable=executable,
            covered=covered,
        )
