"""Thin CLI entry point — builds a Manifest and calls the engine."""

import argparse
import logging
import subprocess
import sys
from pathlib import Path

from chunkforge.engine import process
from chunkforge.ffutil import FFmpegNotFoundError, ProbeError
from chunkforge.manifest import Manifest, MuteConfig, SplitConfig, load_manifest
from chunkforge.models import TimeRange

logger = logging.getLogger("chunkforge")


def parse_range_arg(text: str) -> TimeRange:
    """Parse ``START-END`` where each side is seconds or HH:MM:SS."""
    start, sep, end = text.partition("-")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected START-END, got {text!r}")
    try:
        return TimeRange(start=_offset(start), end=_offset(end))
    except (TypeError, ValueError) as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _offset(text: str) -> int | str:
    return int(text) if text.isdigit() else text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chunkforge",
        description="ChunkForge — split videos into fixed-length chunks, optionally muting ranges first.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    split = sub.add_parser("split", help="Split a video file into chunks")
    split.add_argument("video", nargs="?", type=Path, help="Input video file")
    split.add_argument("--manifest", "-m", type=Path, help="Path to a JSON manifest file")
    split.add_argument("--output-dir", "-o", type=Path, help="Directory for the chunks")
    split.add_argument("--chunk-duration", "-c", type=str, default="00:03:00",
                       help="Chunk length as HH:MM:SS or seconds")
    split.add_argument("--mute", type=parse_range_arg, action="append", default=[],
                       metavar="START-END", help="Mute audio in this range (repeatable)")
    split.add_argument("--tools-dir", type=Path, help="Directory containing ffmpeg and ffprobe")
    split.add_argument("--trailing-chunk", action="store_true",
                       help="Always plan one extra chunk after the last full one")
    split.add_argument("--name-template", type=str, default="{stem}_{index}.mp4",
                       help="Chunk file name template ({stem}, {index}, {suffix})")

    serve = sub.add_parser("serve", help="Launch the web UI")
    serve.add_argument("--port", type=int, default=8321, help="Port to listen on")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to")
    serve.add_argument("--tools-dir", type=Path, help="Directory containing ffmpeg and ffprobe")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from chunkforge.web import create_app
        app = create_app(tools_dir=args.tools_dir)
        print(f"ChunkForge web UI: http://{args.host}:{args.port}")
        app.run(host=args.host, port=args.port, debug=False)
        return

    try:
        if args.manifest:
            m = load_manifest(args.manifest)
        elif args.video:
            m = Manifest(
                input=args.video,
                output_dir=args.output_dir or args.video.parent / "output",
                tools_dir=args.tools_dir,
                split=SplitConfig(
                    chunk_duration=_offset(args.chunk_duration),
                    trailing_chunk=args.trailing_chunk,
                    name_template=args.name_template,
                ),
                mute=MuteConfig(ranges=tuple(args.mute)),
            )
        else:
            print("Error: provide either a VIDEO argument or --manifest.", file=sys.stderr)
            sys.exit(1)

        result = process(m)
    except subprocess.CalledProcessError as e:
        stderr = e.stderr if isinstance(e.stderr, str) else (e.stderr or b"").decode(errors="replace")
        logger.error("ffmpeg failed (rc=%s): %s", e.returncode, stderr[-500:] or e)
        sys.exit(1)
    except (FFmpegNotFoundError, ProbeError, KeyError, ValueError, TypeError, OSError) as e:
        logger.error("%s", e)
        sys.exit(1)

    print()
    print(f"Done! {len(result.chunk_paths)} chunks in {result.output_dir}")
    print(f"  Duration: {result.duration}s, chunk length: {result.chunk_duration}s")
    if result.ranges_muted:
        print(f"  Muted ranges: {result.ranges_muted}")


if __name__ == "__main__":
    main()
