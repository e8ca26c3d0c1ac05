"""FFmpeg/ffprobe subprocess helpers."""

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Sequence

from chunkforge.models import TimeRange

logger = logging.getLogger(__name__)

EXE_SUFFIX = ".exe" if os.name == "nt" else ""


class FFmpegNotFoundError(RuntimeError):
    pass


class ProbeError(RuntimeError):
    """Raised when ffprobe output cannot be read as a duration."""
    pass


def tool_path(name: str, tools_dir: Path | None = None) -> str:
    """Return the executable for *name*, inside *tools_dir* when one is given."""
    if tools_dir is None:
        return name
    return str(Path(tools_dir) / (name + EXE_SUFFIX))


def check_ffmpeg(tools_dir: Path | None = None) -> None:
    """Raise FFmpegNotFoundError if ffmpeg/ffprobe cannot be found."""
    for cmd in ("ffmpeg", "ffprobe"):
        exe = tool_path(cmd, tools_dir)
        if tools_dir is None:
            if shutil.which(exe) is None:
                raise FFmpegNotFoundError(f"{cmd} not found on PATH")
        elif not Path(exe).is_file():
            raise FFmpegNotFoundError(f"{cmd} not found at {exe}")


def probe_duration(input_path: Path, tools_dir: Path | None = None) -> float:
    """Return the container duration in seconds via ffprobe."""
    cmd = [
        tool_path("ffprobe", tools_dir),
        "-v", "error",
        "-show_entries", "format=duration",
        "-of", "default=noprint_wrappers=1:nokey=1",
        str(input_path),
    ]
    result = subprocess.run(cmd, capture_output=True, text=True, check=True)

    out = result.stdout.strip()
    try:
        return float(out)
    except ValueError as e:
        raise ProbeError(f"Could not read duration of {input_path} from ffprobe output {out!r}") from e


def build_mute_filter(ranges: Sequence[TimeRange]) -> str:
    """Return a volume filter that silences audio inside every range.

    The ``between`` terms are summed so a single pass covers all ranges.
    """
    if not ranges:
        raise ValueError("build_mute_filter called with empty range list")

    enable = "+".join(f"between(t,{r.start},{r.end})" for r in ranges)
    return f"volume=enable='{enable}':volume=0"


def mute_ranges(
    input_path: Path,
    ranges: Sequence[TimeRange],
    output_path: Path,
    tools_dir: Path | None = None,
) -> None:
    """Write a copy of *input_path* with audio silenced in *ranges*.

    Video is stream-copied; audio is re-encoded to AAC.
    """
    cmd = [
        tool_path("ffmpeg", tools_dir), "-y",
        "-i", str(input_path),
        "-af", build_mute_filter(ranges),
        "-c:v", "copy",
        "-c:a", "aac",
        "-strict", "-2",
        str(output_path),
    ]
    logger.debug("Running %s", cmd)
    subprocess.run(cmd, capture_output=True, check=True)


def split_chunk(
    input_path: Path,
    start: int,
    duration: int,
    output_path: Path,
    tools_dir: Path | None = None,
) -> None:
    """Copy ``duration`` seconds starting at ``start`` into *output_path* without re-encoding."""
    cmd = [
        tool_path("ffmpeg", tools_dir), "-y",
        "-ss", str(start),
        "-i", str(input_path),
        "-t", str(duration),
        "-c", "copy",
        str(output_path),
    ]
    logger.debug("Running %s", cmd)
    subprocess.run(cmd, capture_output=True, check=True)
