"""Unit tests for the parse CLI command."""

import io
import json
import logging

import pytest
from click.testing import CliRunner

from vidprobe.cli import main
from vidprobe.cli.exit_codes import ExitCode
from vidprobe.cli.parse import parse_banner
from vidprobe.config.models import ParserConfig, PlaybackConfig, VidprobeConfig

VIDEO_ONLY_BANNER = (
    "Input #0, mpegts, from 'silent.ts':\n"
    "  Duration: 00:00:10.00, start: 1.400000, bitrate: 2000 kb/s\n"
    "    Stream #0:0[0x100]: Video: h264 (High), yuv420p, 1280x720, 25 fps\n"
)


@pytest.fixture(autouse=True)
def _isolate(isolated_config, reset_root_logger):
    yield


def _invoke(*args: str, input: str | bytes | None = None):
    return CliRunner().invoke(main, list(args), input=input)


class TestParseCommand:
    """Tests for `vidprobe parse`."""

    def test_complete_banner_human(self, ffmpeg_fixtures_dir):
        path = ffmpeg_fixtures_dir / "h264_aac.txt"
        result = _invoke("parse", str(path))

        assert result.exit_code == ExitCode.SUCCESS
        assert f"Source: {path}" in result.output
        assert "VideoCodec: h264" in result.output
        assert "Resolution: 1920x1080" in result.output
        assert "Complete:   yes" in result.output

    def test_json_output(self, ffmpeg_fixtures_dir):
        path = ffmpeg_fixtures_dir / "hevc_multi_audio.txt"
        result = _invoke("parse", str(path), "--format", "json")

        assert result.exit_code == ExitCode.SUCCESS
        data = json.loads(result.stdout)
        assert data["source"] == str(path)
        assert data["duration"] == "00:23:40.01"
        assert data["audio_codec"] == "opus"
        assert data["sample_rate_hz"] == 48000.0
        assert data["video_codec"] == "hevc"
        assert data["resolution"] == {"width": 1920, "height": 1080}
        assert data["frame_rate_fps"] == 23.98
        assert data["is_complete"] is True
        assert data["issues"] == []

    def test_reads_stdin(self, load_banner):
        result = _invoke(
            "parse", "-", "--format", "json", input="".join(load_banner("h264_aac"))
        )

        assert result.exit_code == ExitCode.SUCCESS
        assert json.loads(result.stdout)["source"] == "<stdin>"

    def test_stdin_with_invalid_utf8(self):
        """Undecodable bytes on stdin are replaced instead of aborting."""
        banner = (
            b"  Duration: 00:00:01.00, start: 0.000000\n"
            b"\xff\xfe bad\n"
            b"    Stream #0:0: Video: h264 (High), yuv420p, 640x480, 25 fps\n"
        )
        result = _invoke("parse", "-", "--format", "json", input=banner)

        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert result.exit_code == ExitCode.SUCCESS
        data = json.loads(result.stdout)
        assert data["duration"] == "00:00:01.00"
        assert data["video_codec"] == "h264"

    def test_missing_file(self, tmp_path):
        result = _invoke("parse", str(tmp_path / "missing.txt"))

        assert result.exit_code == ExitCode.TARGET_NOT_FOUND
        assert "Error: File not found" in result.output

    def test_incomplete_banner(self, ffmpeg_fixtures_dir):
        result = _invoke("parse", str(ffmpeg_fixtures_dir / "audio_only.txt"))

        assert result.exit_code == ExitCode.INCOMPLETE
        assert "GoodEnough: no" in result.output

    def test_malformed_duration(self, ffmpeg_fixtures_dir):
        """An unusable descriptor with a malformed duration is a parse error."""
        result = _invoke("parse", str(ffmpeg_fixtures_dir / "malformed_duration.txt"))

        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "[malformed_duration]" in result.output

    def test_require_complete(self, tmp_path):
        banner = tmp_path / "silent.txt"
        banner.write_text(VIDEO_ONLY_BANNER)

        assert _invoke("parse", str(banner)).exit_code == ExitCode.SUCCESS
        result = _invoke("parse", str(banner), "--require", "complete")
        assert result.exit_code == ExitCode.INCOMPLETE

    def test_acceptance_from_config_file(self, isolated_config, tmp_path):
        isolated_config.write_text('[playback]\nacceptance = "complete"\n')
        banner = tmp_path / "silent.txt"
        banner.write_text(VIDEO_ONLY_BANNER)

        result = _invoke("parse", str(banner))

        assert result.exit_code == ExitCode.INCOMPLETE

    def test_invalid_config_file(self, isolated_config, ffmpeg_fixtures_dir):
        isolated_config.write_text("[logging]\nverbosity = 3\n")

        result = _invoke("parse", str(ffmpeg_fixtures_dir / "h264_aac.txt"))

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "Error: Invalid config file" in result.output

    def test_log_file_tags_probe(self, tmp_path, ffmpeg_fixtures_dir):
        """Debug logs written during a parse carry the probe tag."""
        log_file = tmp_path / "vidprobe.log"
        result = _invoke(
            "--log-level",
            "debug",
            "--log-file",
            str(log_file),
            "parse",
            str(ffmpeg_fixtures_dir / "mpegts_tagged.txt"),
        )
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert result.exit_code == ExitCode.SUCCESS
        log_text = log_file.read_text()
        expected = "[P01] vidprobe.parsing.formatters - DEBUG - VideoCodec: mpeg2video"
        assert expected in log_text
        assert "Resolution: 720x576" in log_text


class TestParseBanner:
    """Tests for parse_banner."""

    def test_stop_when_usable(self, load_banner):
        """Lines after the descriptor becomes usable are not read."""
        stream = io.StringIO("".join(load_banner("hevc_multi_audio")))

        result = parse_banner(stream, VidprobeConfig(), stop_when_usable=True)

        assert result.is_good_enough
        assert result.descriptor.video_codec == "hevc"
        assert result.descriptor.audio_codec is None

    def test_reads_everything_by_default(self, load_banner):
        stream = io.StringIO("".join(load_banner("hevc_multi_audio")))

        result = parse_banner(stream, VidprobeConfig())

        assert result.descriptor.audio_codec == "opus"
        assert result.descriptor.sample_rate_hz == 48000.0

    def test_stop_when_complete(self, load_banner):
        stream = io.StringIO("".join(load_banner("hevc_multi_audio")))
        config = VidprobeConfig(playback=PlaybackConfig(acceptance="complete"))

        result = parse_banner(stream, config, stop_when_usable=True)

        assert result.is_complete
        assert result.descriptor.audio_codec == "opus"

    def test_log_lines(self, load_banner, caplog):
        lines = load_banner("audio_only")
        config = VidprobeConfig(parser=ParserConfig(log_lines=True))

        with caplog.at_level(logging.DEBUG, logger="vidprobe.parsing.lines"):
            parse_banner(io.StringIO("".join(lines)), config, is_error=False)

        records = [r for r in caplog.records if r.name == "vidprobe.parsing.lines"]
        assert len(records) == len(lines)
        assert {r.channel for r in records} == {"stdout"}

    def test_record_unparsable(self, load_banner):
        lines = load_banner("audio_only")
        config = VidprobeConfig(parser=ParserConfig(record_unparsable=True))

        result = parse_banner(io.StringIO("".join(lines)), config)

        # Everything except the duration and the single stream line.
        assert len(result.issues) == len(lines) - 2
