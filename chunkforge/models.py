"""Shared data types used across ChunkForge."""

from dataclasses import dataclass
from pathlib import Path

from chunkforge.timecode import to_seconds


@dataclass(frozen=True)
class TimeRange:
    """A start/end pair in whole seconds.

    Either bound may be given as an ``HH:MM:SS`` string or an integer offset;
    both are normalized to seconds on construction.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        start = to_seconds(self.start)
        end = to_seconds(self.end)
        if end <= start:
            raise ValueError(f"TimeRange end ({end}) must be after start ({start})")
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)


@dataclass(frozen=True)
class ChunkSpec:
    """One planned output chunk."""

    index: int
    start: int
    duration: int
    path: Path
