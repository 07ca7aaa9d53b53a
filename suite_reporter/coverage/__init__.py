"""HTML coverage reporting from line hit snapshots."""

from suite_reporter.coverage.aggregator import CoverageAggregator

__all__ = ["CoverageAggregator"]
