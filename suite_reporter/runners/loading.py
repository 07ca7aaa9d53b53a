"""Discovery of runner plugins registered as entry points."""

import logging
from collections.abc import Mapping
from importlib.metadata import entry_points
from typing import Any

from suite_reporter.runners.manifest import RunnerManifest

log = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "suite_reporter.runners"


def describe_runner(key: str, manifest: RunnerManifest[Any]) -> str:
    """One-line description of a runner, e.g. ``replay (Replays ...)``."""
    return f"{key} ({manifest.info})" if manifest.info else key


class RunnerNotFoundError(Exception):
    """Raised when no installed runner is registered under a key."""

    def __init__(self, key: str, available: Mapping[str, RunnerManifest[Any]]) -> None:
        self.key = key
        self.available = available
        if available:
            choices = ", ".join(
                describe_runner(name, manifest) for name, manifest in sorted(available.items())
            )
        else:
            choices = "none installed"
        super().__init__(f"Runner '{key}' not found. Available runners: {choices}")


def available_runners() -> Mapping[str, RunnerManifest[Any]]:
    """Load the manifest of every installed runner, keyed by entry point name."""
    manifests: dict[str, RunnerManifest[Any]] = {}
    for entry in entry_points(group=ENTRY_POINT_GROUP):
        if entry.name in manifests:
            log.warning("Runner '%s' registered twice, keeping %s", entry.name, entry.value)
        manifests[entry.name] = entry.load()
    return manifests


def load_runner_manifest(key: str) -> RunnerManifest[Any]:
    """Load a runner manifest by key.

    Only the requested entry point is imported; the others are loaded when
    the key is unknown, to describe them in the error.

    Raises:
        RunnerNotFoundError: If no runner with the given key is installed

    """
    for entry in entry_points(group=ENTRY_POINT_GROUP, name=key):
        manifest: RunnerManifest[Any] = entry.load()
        return manifest

    raise RunnerNotFoundError(key, available_runners())
