"""Tests for the command line entry point and the interactive menu."""

import json

import pytest

import bandcompressor
from bandcompress.utils import config as config_module
from bandcompress.utils.errors import ToolMissingError
from bandcompress.utils.system_util import Toolchain


@pytest.fixture
def discovered(monkeypatch, tools):
    monkeypatch.setattr(Toolchain, "discover", lambda *args, **kwargs: tools)
    return tools


@pytest.fixture(autouse=True)
def default_out(tmp_path, monkeypatch):
    """Keep the fallback output folder inside tmp_path."""
    default = tmp_path / "default-out"
    monkeypatch.setattr(config_module, "default_output_directory", lambda: default)
    return default


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "settings" / "config.json"


def _scripted(answers):
    answers = list(answers)

    def _input(prompt=""):
        if not answers:
            raise EOFError
        return answers.pop(0)

    return _input


class TestMain:
    """Batch mode."""

    def test_batch_success(self, tmp_path, make_video, output_dir, config_file, discovered, fake_encoder,
                           probe_result, capsys):
        clip = make_video("Alpha 29092025.mov")

        code = bandcompressor.main([str(clip), "--output-dir", str(output_dir), "--config", str(config_file)])

        assert code == 0
        assert (output_dir / "Alpha 29092025.mp4").exists()
        assert "FOUND=1 OK=1 SKIP=0 FAIL=0" in capsys.readouterr().out
        assert not config_file.exists()

    def test_failed_job_sets_exit_code(self, make_video, output_dir, config_file, discovered, probe_result,
                                       monkeypatch):
        from bandcompress.transcode import core
        monkeypatch.setattr(core, "transcode_video", lambda cmd, src, debug=False: (1, "boom"))

        code = bandcompressor.main([str(make_video("a.mov")), "--output-dir", str(output_dir),
                                    "--config", str(config_file)])

        assert code == 1

    def test_missing_tool_aborts(self, make_video, monkeypatch, fake_encoder):
        def _missing(*args, **kwargs):
            raise ToolMissingError("ffmpeg")

        monkeypatch.setattr(Toolchain, "discover", _missing)

        assert bandcompressor.main([str(make_video("a.mov"))]) == 2
        assert fake_encoder == []

    def test_missing_tool_hint_is_platform_neutral(self):
        message = str(ToolMissingError("ffprobe"))

        assert "'ffprobe' not found on PATH" in message
        assert "https://ffmpeg.org/download.html" in message
        assert "BANDCOMPRESS_FFPROBE" in message
        assert "brew" not in message

    def test_unusable_default_output_folder_aborts(self, make_video, config_file, discovered, fake_encoder,
                                                   monkeypatch, capsys):
        blocker = make_video("blocker", b"not a folder")
        monkeypatch.setattr(config_module, "default_output_directory", lambda: blocker / "out")

        assert bandcompressor.main([str(make_video("a.mov")), "--config", str(config_file)]) == 2
        assert "startup.error" in capsys.readouterr().out
        assert fake_encoder == []

    def test_save_persists_settings(self, tmp_path, output_dir, config_file, discovered):
        empty = tmp_path / "empty"
        empty.mkdir()

        code = bandcompressor.main([str(empty), "--output-dir", str(output_dir), "--on-collision", "skip", "--save",
                                    "--config", str(config_file)])

        assert code == 0
        assert json.loads(config_file.read_text()) == {"output_directory": str(output_dir.resolve()),
                                                       "on_collision": "skip"}

    def test_log_file(self, tmp_path, make_video, output_dir, config_file, discovered, fake_encoder, probe_result):
        log_path = tmp_path / "logs" / "run.log"

        bandcompressor.main([str(make_video("a.mov")), "--output-dir", str(output_dir), "--config",
                             str(config_file), "--log-file", str(log_path)])

        text = log_path.read_text()
        assert "job.ok" in text
        assert "batch.end" in text

    def test_workers_must_be_positive(self):
        with pytest.raises(SystemExit):
            bandcompressor.build_parser().parse_args(["--workers", "0"])


class TestInteractiveMenu:
    """Menu mode (no path arguments)."""

    def test_set_output_folder_and_compress(self, tmp_path, make_video, config, tools, config_file, fake_encoder,
                                            probe_result, capsys):
        new_out = tmp_path / "new out"
        clip = make_video("in/Alpha 29092025.mov")

        bandcompressor.interactive_menu(config, tools, config_file, input_fn=_scripted([
            "1", f'"{new_out}"',
            "2", str(clip),
            "q",
        ]))

        assert config.output_directory == new_out.resolve()
        assert json.loads(config_file.read_text())["output_directory"] == str(new_out.resolve())
        assert (new_out / "Alpha 29092025.mp4").exists()
        assert "FOUND=1 OK=1" in capsys.readouterr().out

    def test_compress_folder(self, tmp_path, make_video, config, tools, config_file, fake_encoder, probe_result):
        make_video("in/a.mov")
        make_video("in/sub/b.mts")

        bandcompressor.interactive_menu(config, tools, config_file, input_fn=_scripted(["3", str(tmp_path / "in")]))

        assert sorted(p.name for p in config.output_directory.iterdir()) == ["a.mp4", "b.mp4"]

    def test_wrong_kind_of_path_is_rejected(self, tmp_path, make_video, config, tools, config_file, fake_encoder,
                                            capsys):
        bandcompressor.interactive_menu(config, tools, config_file, input_fn=_scripted([
            "2", str(tmp_path),
            "3", str(make_video("a.mov")),
            "x",
        ]))

        out = capsys.readouterr().out
        assert "Not a file" in out
        assert "Not a folder" in out
        assert "Unknown choice" in out
        assert fake_encoder == []
