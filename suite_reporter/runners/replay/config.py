"""Configuration for the replay runner."""

from pydantic import BaseModel


class ReplayConfig(BaseModel):
    """Configuration for the replay runner."""

    encoding: str = "utf-8"
    # Skip records written by newer runners instead of failing the replay
    ignore_unknown_events: bool = False
