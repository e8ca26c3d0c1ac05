"""Unit tests for ffutil — subprocess wrappers and command construction."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from chunkforge.ffutil import (
    FFmpegNotFoundError,
    ProbeError,
    build_mute_filter,
    check_ffmpeg,
    mute_ranges,
    probe_duration,
    split_chunk,
    tool_path,
)
from chunkforge.models import TimeRange


# ---------------------------------------------------------------------------
# tool_path / check_ffmpeg
# ---------------------------------------------------------------------------

class TestToolPath:
    def test_bare_name_without_dir(self):
        assert tool_path("ffmpeg") == "ffmpeg"

    @patch("chunkforge.ffutil.EXE_SUFFIX", "")
    def test_inside_dir(self):
        assert tool_path("ffmpeg", Path("/opt/ff/bin")) == str(Path("/opt/ff/bin") / "ffmpeg")

    @patch("chunkforge.ffutil.EXE_SUFFIX", ".exe")
    def test_windows_extension(self):
        assert tool_path("ffprobe", Path("bin")).endswith("ffprobe.exe")


class TestCheckFFmpeg:
    @patch("chunkforge.ffutil.shutil.which", return_value=None)
    def test_missing_on_path(self, mock_which):
        with pytest.raises(FFmpegNotFoundError, match="not found on PATH"):
            check_ffmpeg()

    @patch("chunkforge.ffutil.shutil.which", return_value="/usr/bin/ffmpeg")
    def test_present_on_path(self, mock_which):
        check_ffmpeg()
        assert mock_which.call_count == 2

    @patch("chunkforge.ffutil.EXE_SUFFIX", "")
    def test_tools_dir(self, tmp_path: Path):
        (tmp_path / "ffmpeg").touch()
        with pytest.raises(FFmpegNotFoundError, match="ffprobe not found"):
            check_ffmpeg(tmp_path)
        (tmp_path / "ffprobe").touch()
        check_ffmpeg(tmp_path)


# ---------------------------------------------------------------------------
# probe_duration (mocked subprocess)
# ---------------------------------------------------------------------------

class TestProbeDuration:
    @patch("chunkforge.ffutil.subprocess.run")
    def test_basic(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="1512.345000\n")
        assert probe_duration(Path("video.mp4")) == pytest.approx(1512.345)

        cmd = mock_run.call_args[0][0]
        assert cmd[0] == "ffprobe"
        assert cmd[cmd.index("-show_entries") + 1] == "format=duration"
        assert cmd[-1] == "video.mp4"

    @patch("chunkforge.ffutil.subprocess.run")
    def test_unparsable(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="N/A\n")
        with pytest.raises(ProbeError, match="Could not read duration"):
            probe_duration(Path("video.mp4"))

    @patch("chunkforge.ffutil.subprocess.run")
    def test_failure_propagates(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(1, ["ffprobe"])
        with pytest.raises(subprocess.CalledProcessError):
            probe_duration(Path("video.mp4"))


# ---------------------------------------------------------------------------
# mute filter + commands (mocked subprocess — just verify the command shape)
# ---------------------------------------------------------------------------

class TestBuildMuteFilter:
    def test_single_range(self):
        assert build_mute_filter([TimeRange(start=10, end=20)]) == "volume=enable='between(t,10,20)':volume=0"

    def test_ranges_compose(self):
        f = build_mute_filter([TimeRange(start=113, end=202), TimeRange(start=1311, end=1400)])
        assert f == "volume=enable='between(t,113,202)+between(t,1311,1400)':volume=0"

    def test_empty_raises(self):
        with pytest.raises(ValueError, match="empty range list"):
            build_mute_filter([])


class TestMuteRanges:
    @patch("chunkforge.ffutil.subprocess.run")
    def test_command(self, mock_run):
        mute_ranges(Path("in.mp4"), [TimeRange(start=10, end=20)], Path("out/muted_in.mp4"))

        mock_run.assert_called_once()
        cmd = mock_run.call_args[0][0]
        assert cmd[cmd.index("-i") + 1] == "in.mp4"
        assert "between(t,10,20)" in cmd[cmd.index("-af") + 1]
        assert cmd[cmd.index("-c:v") + 1] == "copy"
        assert cmd[cmd.index("-c:a") + 1] == "aac"
        assert cmd[-1] == str(Path("out/muted_in.mp4"))
        assert mock_run.call_args.kwargs["check"] is True


class TestSplitChunk:
    @patch("chunkforge.ffutil.subprocess.run")
    def test_command(self, mock_run):
        split_chunk(Path("in.mp4"), 360, 180, Path("out/in_3.mp4"))

        cmd = mock_run.call_args[0][0]
        assert cmd[cmd.index("-ss") + 1] == "360"
        assert cmd[cmd.index("-t") + 1] == "180"
        assert cmd[cmd.index("-c") + 1] == "copy"
        # -ss before -i seeks the input rather than decoding up to it
        assert cmd.index("-ss") < cmd.index("-i")
        assert cmd[-1] == str(Path("out/in_3.mp4"))

    @patch("chunkforge.ffutil.EXE_SUFFIX", "")
    @patch("chunkforge.ffutil.subprocess.run")
    def test_tools_dir(self, mock_run):
        split_chunk(Path("in.mp4"), 0, 10, Path("o.mp4"), tools_dir=Path("bin"))
        assert mock_run.call_args[0][0][0] == str(Path("bin") / "ffmpeg")

    @patch("chunkforge.ffutil.subprocess.run")
    def test_failure_propagates(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(1, ["ffmpeg"], stderr=b"boom")
        with pytest.raises(subprocess.CalledProcessError):
            split_chunk(Path("in.mp4"), 0, 10, Path("o.mp4"))
