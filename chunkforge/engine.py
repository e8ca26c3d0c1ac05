"""Orchestrator — runs the chunking pipeline defined by a Manifest."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from chunkforge import ffutil
from chunkforge.editors.mute import apply_mute, muted_path
from chunkforge.editors.split import apply_split
from chunkforge.manifest import Manifest
from chunkforge.planner import count_chunks, plan_chunks

logger = logging.getLogger(__name__)


@dataclass
class EngineResult:
    output_dir: Path
    chunk_paths: list[Path] = field(default_factory=list)
    duration: int = 0
    chunk_duration: int = 0
    ranges_muted: int = 0


def process(
    manifest: Manifest,
    on_progress: Callable[[str, float], None] | None = None,
) -> EngineResult:
    """Execute the full chunking pipeline.

    Args:
        manifest: Validated chunking manifest.
        on_progress: Optional callback(stage_name, fraction_complete).
    """

    def _progress(stage: str, frac: float) -> None:
        if on_progress:
            on_progress(stage, frac)

    def _sub_progress(stage: str, base: float, span: float):
        """Return a callback that maps a step's [0,1] to [base, base+span]."""
        def cb(frac: float) -> None:
            _progress(stage, base + frac * span)
        return cb

    tools_dir = manifest.tools_dir
    ffutil.check_ffmpeg(tools_dir)

    _progress("Probing video duration", 0.0)
    duration = int(ffutil.probe_duration(manifest.input, tools_dir))
    logger.info("Video duration: %ds", duration)

    manifest.output_dir.mkdir(parents=True, exist_ok=True)

    chunk_duration = manifest.split.chunk_duration
    total = count_chunks(duration, chunk_duration, manifest.split.trailing_chunk)
    logger.info("Chunk duration: %ds", chunk_duration)
    logger.info("Number of chunks: %d", total)

    ranges = manifest.mute.ranges
    try:
        # --- Mute ---
        if ranges:
            _progress(f"Muting {len(ranges)} time ranges", 0.05)
        current_input = apply_mute(manifest.input, ranges, manifest.output_dir, tools_dir)

        # --- Split ---
        _progress(f"Exporting {total} chunks", 0.3)
        chunk_paths = apply_split(
            current_input,
            plan_chunks(manifest.input, manifest.output_dir, duration, manifest.split),
            total,
            tools_dir=tools_dir,
            on_progress=_sub_progress(f"Exporting {total} chunks", 0.3, 0.65),
        )
    finally:
        # --- Cleanup ---
        if ranges:
            muted = muted_path(manifest.input, manifest.output_dir)
            muted.unlink(missing_ok=True)
            logger.info("Deleted muted video %s", muted)

    _progress("Done", 1.0)
    return EngineResult(
        output_dir=manifest.output_dir,
        chunk_paths=chunk_paths,
        duration=duration,
        chunk_duration=chunk_duration,
        ranges_muted=len(ranges),
    )
