"""Chunk boundary arithmetic."""

from pathlib import Path
from typing import Iterator

from chunkforge.manifest import SplitConfig
from chunkforge.models import ChunkSpec


def count_chunks(duration: int, chunk_duration: int, trailing_chunk: bool = False) -> int:
    """Number of chunks for a ``duration``-second video.

    A remainder shorter than ``chunk_duration`` is dropped unless
    ``trailing_chunk`` is set, in which case one extra chunk is always added.
    """
    if chunk_duration <= 0:
        raise ValueError(f"chunk_duration must be positive, got {chunk_duration}")
    if duration < 0:
        raise ValueError(f"duration must not be negative, got {duration}")

    n = duration // chunk_duration
    if trailing_chunk:
        n += 1
    return n


def plan_offsets(duration: int, chunk_duration: int, trailing_chunk: bool = False) -> Iterator[int]:
    """Yield chunk start offsets ``0, C, 2C, ...`` in seconds."""
    for i in range(count_chunks(duration, chunk_duration, trailing_chunk)):
        yield i * chunk_duration


def chunk_filename(input_path: Path, index: int, template: str) -> str:
    return template.format(stem=input_path.stem, index=index, suffix=input_path.suffix)


def plan_chunks(
    input_path: Path, output_dir: Path, duration: int, config: SplitConfig
) -> Iterator[ChunkSpec]:
    """Yield a ChunkSpec per planned chunk, numbered from 1."""
    offsets = plan_offsets(duration, config.chunk_duration, config.trailing_chunk)
    for index, start in enumerate(offsets, 1):
        yield ChunkSpec(
            index=index,
            start=start,
            duration=config.chunk_duration,
            path=output_dir / chunk_filename(input_path, index, config.name_template),
        )
