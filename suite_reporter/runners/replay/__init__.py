"""Replay runner module."""

from suite_reporter.runners.replay.config import ReplayConfig
from suite_reporter.runners.replay.manifest import replay_manifest
from suite_reporter.runners.replay.runner import ReplayError, ReplayRunner

__all__ = ["ReplayConfig", "ReplayError", "ReplayRunner", "replay_manifest"]
