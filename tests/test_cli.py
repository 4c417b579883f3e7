"""
Tests for the gbs2gb command-line tool
======================================

These tests drive the Click command with CliRunner and a synthetic player.
"""

import pytest
from click.testing import CliRunner

from gbs2gb import __version__
from gbs2gb.cli.errors import ExitCode, describe_error, handle_cli_exception
from gbs2gb.cli.gbs2gb import main
from gbs2gb.errors import InvalidHeaderError, PlayerNotFoundError
from gbs2gb.rom import DEFAULT_PLAYER_NAME, PLAYER_ENV_VAR
from gbs2gb.rom import assembler as assembler_module


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def gbs_file(tmp_path, gbs_data):
    path = tmp_path / "song.gbs"
    path.write_bytes(gbs_data)
    return path


class TestConvert:
    """Tests for successful conversions."""

    def test_single_file(self, runner, tmp_path, gbs_file, player_file):
        out_dir = tmp_path / "out"
        result = runner.invoke(main, [
            "-p", str(player_file),
            "-o", str(out_dir),
            str(gbs_file),
        ])

        assert result.exit_code == 0, result.output
        rom = out_dir / "song.gb"
        assert rom.exists()
        assert len(rom.read_bytes()) == 0x8000
        assert "Created" in result.output

    def test_player_from_environment(self, runner, tmp_path, gbs_file, player_file):
        result = runner.invoke(
            main,
            ["-o", str(tmp_path), str(gbs_file)],
            env={PLAYER_ENV_VAR: str(player_file)},
        )

        assert result.exit_code == 0, result.output
        assert (tmp_path / "song.gb").exists()

    def test_verbose_summary(self, runner, tmp_path, gbs_file, player_file):
        result = runner.invoke(main, [
            "-v", "-p", str(player_file), "-o", str(tmp_path), str(gbs_file),
        ])

        assert result.exit_code == 0, result.output
        assert "1/1 files converted" in result.output


class TestBatch:
    """A failing file is reported and the batch continues."""

    def test_bad_file_does_not_stop_batch(self, runner, tmp_path, gbs_factory, player_file):
        bad = tmp_path / "bad.gbs"
        bad.write_bytes(gbs_factory(identifier=b"XYZ"))
        good = tmp_path / "good.gbs"
        good.write_bytes(gbs_factory())
        out_dir = tmp_path / "out"

        result = runner.invoke(main, [
            "-p", str(player_file), "-o", str(out_dir), str(bad), str(good),
        ])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "Failed" in result.output
        assert "valid GBS header" in result.output
        assert not (out_dir / "bad.gb").exists()
        assert (out_dir / "good.gb").exists()

    def test_missing_input_file(self, runner, tmp_path, gbs_file, player_file):
        result = runner.invoke(main, [
            "-p", str(player_file),
            "-o", str(tmp_path),
            str(tmp_path / "missing.gbs"),
            str(gbs_file),
        ])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "missing.gbs" in result.output
        assert (tmp_path / "song.gb").exists()

    def test_directory_input_does_not_stop_batch(self, runner, tmp_path, gbs_file, player_file):
        subdir = tmp_path / "subdir"
        subdir.mkdir()
        out_dir = tmp_path / "out"

        result = runner.invoke(main, [
            "-p", str(player_file), "-o", str(out_dir), str(subdir), str(gbs_file),
        ])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert f"Failed {subdir}" in result.output
        assert (out_dir / "song.gb").exists()

    def test_unwritable_output_is_reported(self, runner, tmp_path, gbs_file, player_file):
        blocker = tmp_path / "blocker"
        blocker.write_bytes(b"")

        result = runner.invoke(main, [
            "-p", str(player_file), "-o", str(blocker / "sub"), str(gbs_file),
        ])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert f"Failed {gbs_file}" in result.output
        assert blocker.read_bytes() == b""

    def test_write_failure_does_not_stop_batch(
        self, runner, tmp_path, gbs_factory, player_file, monkeypatch
    ):
        first = tmp_path / "first.gbs"
        first.write_bytes(gbs_factory())
        second = tmp_path / "second.gbs"
        second.write_bytes(gbs_factory())
        out_dir = tmp_path / "out"

        real_write_rom = assembler_module.write_rom

        def write_rom(path, rom):
            if path.stem == "first":
                raise NotADirectoryError(20, "Not a directory", str(path))
            return real_write_rom(path, rom)

        monkeypatch.setattr(assembler_module, "write_rom", write_rom)

        result = runner.invoke(main, [
            "-p", str(player_file), "-o", str(out_dir), str(first), str(second),
        ])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert f"Failed {first}" in result.output
        assert "Not a directory" in result.output
        assert not (out_dir / "first.gb").exists()
        assert (out_dir / "second.gb").exists()


class TestArguments:

    def test_missing_player(self, runner, tmp_path, gbs_file):
        result = runner.invoke(main, [
            "-p", str(tmp_path / "nope.gb"), "-o", str(tmp_path), str(gbs_file),
        ])

        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "player" in result.output.lower()

    def test_short_player(self, runner, tmp_path, gbs_file):
        player = tmp_path / "short.gb"
        player.write_bytes(bytes(0x10))
        result = runner.invoke(main, ["-p", str(player), str(gbs_file)])

        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_no_inputs(self, runner):
        result = runner.invoke(main, [])
        assert result.exit_code == 2

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_names_player_location(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "bundled" not in result.output
        assert DEFAULT_PLAYER_NAME in result.output
        assert PLAYER_ENV_VAR in result.output


class TestHandleCliException:

    def test_player_error(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(PlayerNotFoundError("no player"))
        assert exc_info.value.code == ExitCode.INVALID_ARGS

    def test_os_error(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(IsADirectoryError(21, "Is a directory", "roms"))
        assert exc_info.value.code == ExitCode.INVALID_ARGS

    def test_unexpected_error(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(RuntimeError("boom"))
        assert exc_info.value.code == ExitCode.INTERNAL_ERROR


class TestDescribeError:

    def test_converter_error(self):
        assert describe_error(InvalidHeaderError("bad header")) == "bad header"

    def test_os_error(self):
        error = FileNotFoundError(2, "No such file or directory", "x.gbs")
        assert describe_error(error) == "cannot access x.gbs: No such file or directory"
