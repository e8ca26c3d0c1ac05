#!/usr/bin/env python3
"""Generate a synthetic test video for ChunkForge pipeline testing.

Produces a video (45 seconds by default) whose picture is ffmpeg's
``testsrc`` pattern, which shows a running seconds counter, and whose audio
is a continuous 440 Hz tone. Chunk boundaries can be checked against the
counter and muted ranges are audible as gaps in the tone.

Usage: generate_test_video.py [OUTPUT] [SECONDS]
"""

import subprocess
import sys
from pathlib import Path


def generate_test_video(output: Path, seconds: int = 45) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)

    cmd = [
        "ffmpeg", "-y",
        "-f", "lavfi", "-i", f"testsrc=d={seconds}:s=320x240:r=30",
        "-f", "lavfi", "-i", f"sine=f=440:d={seconds}",
        "-c:v", "libx264",
        # keyframe every second so stream-copied chunks start cleanly
        "-g", "30",
        "-c:a", "aac",
        "-shortest",
        str(output),
    ]
    subprocess.run(cmd, check=True)
    print(f"Generated: {output}")


if __name__ == "__main__":
    out = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("tests/fixtures/synthetic.mp4")
    secs = int(sys.argv[2]) if len(sys.argv) > 2 else 45
    generate_test_video(out, secs)
