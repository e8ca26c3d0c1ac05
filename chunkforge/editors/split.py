"""Split editor — exports fixed-length chunks with stream copy."""

import logging
from pathlib import Path
from typing import Callable, Iterable

from chunkforge import ffutil
from chunkforge.models import ChunkSpec

logger = logging.getLogger(__name__)


def apply_split(
    input_path: Path,
    chunks: Iterable[ChunkSpec],
    total: int,
    tools_dir: Path | None = None,
    on_progress: Callable[[float], None] | None = None,
) -> list[Path]:
    """Export each planned chunk in order; the first ffmpeg failure aborts."""
    written: list[Path] = []
    for chunk in chunks:
        ffutil.split_chunk(
            input_path, chunk.start, chunk.duration, chunk.path, tools_dir=tools_dir
        )
        written.append(chunk.path)
        logger.info("Chunk %d/%d done", chunk.index, total)
        if on_progress:
            on_progress(chunk.index / total)
    return written
