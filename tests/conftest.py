"""Shared test configuration and fixtures."""

import sys
import textwrap
from pathlib import Path

import pytest

import bandcompress
from bandcompress.transcode import core
from bandcompress.utils import LogLevel, logger
from bandcompress.utils.config import CompressorConfig
from bandcompress.utils.system_util import Toolchain


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore the default log level and stop file mirroring after each test."""
    yield
    logger.set_log_level(LogLevel.INFO)
    logger.set_log_file(None)
    bandcompress.DEBUG = False


@pytest.fixture
def tools():
    return Toolchain(ffmpeg="ffmpeg", ffprobe="ffprobe")


@pytest.fixture
def output_dir(tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    return out


@pytest.fixture
def config(output_dir):
    return CompressorConfig(output_directory=output_dir)


@pytest.fixture
def make_video(tmp_path):
    """Create a small fake media file relative to tmp_path."""

    def _make(relative: str, content: bytes = b"fake video content") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def fake_encoder(monkeypatch):
    """Replace the ffmpeg call; records commands and writes the output file."""
    calls = []

    def _transcode(cmd, src, debug=False):
        calls.append(cmd)
        Path(cmd[-1]).write_bytes(b"encoded")
        return 0, ""

    monkeypatch.setattr(core, "transcode_video", _transcode)
    return calls


@pytest.fixture
def probe_result(monkeypatch):
    """Make probe_height return a fixed value; set `probe_result.height` to change it."""

    class _Probe:
        height = 720

    probe = _Probe()
    monkeypatch.setattr(core, "probe_height", lambda path, ffprobe="ffprobe": probe.height)
    return probe


@pytest.fixture
def script_tool(tmp_path):
    """Write an executable Python script that stands in for ffmpeg or ffprobe."""
    if sys.platform == "win32":
        pytest.skip("shebang scripts need a POSIX system")

    def _make(name: str, body: str) -> str:
        path = tmp_path / "bin" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"#!{sys.executable}\nimport sys\n{textwrap.dedent(body)}", encoding="utf-8")
        path.chmod(0o755)
        return str(path)

    return _make
