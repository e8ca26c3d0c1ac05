"""JSON manifest schema — the contract between CLI/API and engine."""

import json
from dataclasses import dataclass, field
from pathlib import Path

from chunkforge.models import TimeRange
from chunkforge.timecode import to_seconds


@dataclass(frozen=True)
class MuteConfig:
    """Time ranges whose audio is silenced before splitting."""

    ranges: tuple[TimeRange, ...] = ()

    @property
    def enabled(self) -> bool:
        return bool(self.ranges)


@dataclass(frozen=True)
class SplitConfig:
    """Configuration for fixed-length chunking.

    ``trailing_chunk`` plans one extra chunk past ``floor(duration / chunk)``
    regardless of the remainder. ``name_template`` is formatted with
    ``stem``, ``index`` and ``suffix`` of the input file.
    """

    chunk_duration: int
    trailing_chunk: bool = False
    name_template: str = "{stem}_{index}.mp4"

    def __post_init__(self) -> None:
        seconds = to_seconds(self.chunk_duration)
        if seconds <= 0:
            raise ValueError(f"chunk_duration must be positive, got {self.chunk_duration!r}")
        object.__setattr__(self, "chunk_duration", seconds)


@dataclass(frozen=True)
class Manifest:
    """Top-level chunking job."""

    input: Path
    output_dir: Path
    split: SplitConfig
    version: str = "1"
    tools_dir: Path | None = None
    mute: MuteConfig = field(default_factory=MuteConfig)


def parse_ranges(items: list) -> tuple[TimeRange, ...]:
    """Build TimeRanges from ``{"start", "end"}`` dicts or ``[start, end]`` pairs."""
    ranges: list[TimeRange] = []
    for item in items:
        if isinstance(item, dict):
            ranges.append(TimeRange(start=item["start"], end=item["end"]))
        else:
            start, end = item
            ranges.append(TimeRange(start=start, end=end))
    return tuple(ranges)


def load_manifest(path: str | Path) -> Manifest:
    """Load and validate a manifest from a JSON file."""
    path = Path(path)
    data = json.loads(path.read_text())

    if "input" not in data or "output_dir" not in data:
        raise ValueError("Manifest must contain 'input' and 'output_dir' fields")
    if "chunk_duration" not in data.get("split", {}):
        raise ValueError("Manifest must contain 'split.chunk_duration'")

    split = SplitConfig(**data["split"])
    mute = MuteConfig(ranges=parse_ranges(data["mute"].get("ranges", []))) if "mute" in data else MuteConfig()
    tools_dir = data.get("tools_dir")

    return Manifest(
        version=data.get("version", "1"),
        input=Path(data["input"]),
        output_dir=Path(data["output_dir"]),
        tools_dir=Path(tools_dir) if tools_dir else None,
        split=split,
        mute=mute,
    )
