"""Replay runner manifest."""

from suite_reporter.runners.manifest import RunnerManifest
from suite_reporter.runners.replay.config import ReplayConfig
from suite_reporter.runners.replay.runner import ReplayRunner

replay_manifest = RunnerManifest(
    config_cls=ReplayConfig,
    runner_factory=ReplayRunner.from_config,
    info="Replays recorded JSON-lines event logs",
)
