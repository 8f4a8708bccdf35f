"""Unit tests for tildesh.cli."""

import logging
from unittest.mock import MagicMock, patch

import pytest

from tildesh import __version__
from tildesh.cli import entrypoint, main
from tildesh.models import ShellConfig


def _cli_patches(**overrides):
    shell = MagicMock()
    shell.return_value.run.return_value = 0
    defaults = dict(
        load_config=MagicMock(return_value=ShellConfig()),
        Shell=shell,
    )
    defaults.update(overrides)
    return patch.multiple("tildesh.cli", **defaults)


class TestMain:
    def test_returns_shell_exit_status(self):
        shell = MagicMock()
        shell.return_value.run.return_value = 1
        with _cli_patches(Shell=shell):
            assert main([]) == 1

    def test_passes_loaded_config_to_shell(self):
        config = ShellConfig(max_tokens=32)
        shell = MagicMock()
        shell.return_value.run.return_value = 0
        with _cli_patches(load_config=MagicMock(return_value=config), Shell=shell):
            main([])

        shell.assert_called_once_with(config)

    def test_no_color_flag_overrides_config(self):
        config = ShellConfig(color=True)
        with _cli_patches(load_config=MagicMock(return_value=config)):
            main(["--no-color"])

        assert config.color is False

    def test_debug_flag_enables_debug_logging(self):
        with _cli_patches():
            with patch("tildesh.cli.logging.basicConfig") as mock_basic:
                main(["--debug"])

        assert mock_basic.call_args.kwargs["level"] == logging.DEBUG

    def test_default_logging_level_is_warning(self):
        with _cli_patches():
            with patch("tildesh.cli.logging.basicConfig") as mock_basic:
                main([])

        assert mock_basic.call_args.kwargs["level"] == logging.WARNING

    def test_requires_fork(self, capsys):
        shell = MagicMock()
        with _cli_patches(Shell=shell):
            with patch("tildesh.cli.os", spec=[]):
                assert main([]) == 1

        shell.assert_not_called()
        assert "POSIX" in capsys.readouterr().err


class TestVersion:
    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestEntrypoint:
    def test_raises_system_exit_with_main_status(self):
        with patch("tildesh.cli.main", return_value=0):
            with pytest.raises(SystemExit) as exc_info:
                entrypoint()

        assert exc_info.value.code == 0


class TestStreamConfiguration:
    def test_standard_streams_pass_undecodable_bytes_through(self):
        with _cli_patches():
            with patch("tildesh.cli.sys") as mock_sys:
                main([])

        mock_sys.stdin.reconfigure.assert_called_once_with(errors="surrogateescape")
        mock_sys.stdout.reconfigure.assert_called_once_with(errors="surrogateescape")

    def test_streams_without_reconfigure_are_left_alone(self):
        shell = MagicMock()
        shell.return_value.run.return_value = 0
        with _cli_patches(Shell=shell):
            with patch("tildesh.cli.sys") as mock_sys:
                mock_sys.stdin = object()
                mock_sys.stdout = object()
                assert main([]) == 0

        shell.assert_called_once()
