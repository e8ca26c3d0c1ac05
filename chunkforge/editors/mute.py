"""Mute editor — silences audio inside configured time ranges."""

import logging
from pathlib import Path
from typing import Sequence

from chunkforge import ffutil
from chunkforge.models import TimeRange
from chunkforge.timecode import format_duration

logger = logging.getLogger(__name__)


def muted_path(input_path: Path, output_dir: Path) -> Path:
    """Location of the intermediate muted copy of *input_path*."""
    return output_dir / f"muted_{input_path.name}"


def apply_mute(
    input_path: Path,
    ranges: Sequence[TimeRange],
    output_dir: Path,
    tools_dir: Path | None = None,
) -> Path:
    """Return the file the split step should read.

    With no ranges this is *input_path* itself and nothing is written.
    Otherwise all ranges are muted in one ffmpeg pass over the original input.
    """
    if not ranges:
        return input_path

    logger.info("Muting video in %d time ranges", len(ranges))
    output_path = muted_path(input_path, output_dir)
    ffutil.mute_ranges(input_path, ranges, output_path, tools_dir=tools_dir)

    for r in ranges:
        logger.info("Muted video from %s to %s", format_duration(r.start), format_duration(r.end))
    return output_path
