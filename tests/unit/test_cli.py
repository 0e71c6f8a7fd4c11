"""Tests for the Stockroom CLI."""

from unittest.mock import patch

from click.testing import CliRunner

from stockroom.cli import cli, mask_secret
from stockroom.core.config import Settings


def cli_settings(**overrides):
    values = {"environment": "testing", "log_format": "console"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_serve_uses_config_defaults():
    runner = CliRunner()

    with patch("stockroom.cli.get_settings", return_value=cli_settings(port=4000)):
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(cli, ["serve"])

            assert result.exit_code == 0
            mock_run.assert_called_once()
            args, kwargs = mock_run.call_args
            assert args[0] == "stockroom.infrastructure.api.app:app"
            assert kwargs["port"] == 4000
            assert kwargs["workers"] == 1
            assert kwargs["reload"] is False


def test_serve_options_override_config():
    runner = CliRunner()

    with patch("stockroom.cli.get_settings", return_value=cli_settings()):
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(
                cli, ["serve", "--host", "127.0.0.1", "--port", "8123", "--workers", "3"]
            )

            assert result.exit_code == 0
            kwargs = mock_run.call_args.kwargs
            assert kwargs["host"] == "127.0.0.1"
            assert kwargs["port"] == 8123
            assert kwargs["workers"] == 3


def test_serve_reload_forces_single_worker():
    runner = CliRunner()

    with patch("stockroom.cli.get_settings", return_value=cli_settings(workers=4)):
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(cli, ["serve", "--reload"])

            assert result.exit_code == 0
            assert mock_run.call_args.kwargs["workers"] == 1
            assert mock_run.call_args.kwargs["reload"] is True


def test_info_masks_api_key():
    runner = CliRunner()

    with patch("stockroom.cli.get_settings", return_value=cli_settings(api_key="supersecret")):
        result = runner.invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "supe*******" in result.output
    assert "supersecret" not in result.output
    assert "x-api-key" in result.output


def test_mask_secret():
    assert mask_secret(None) == "(not set)"
    assert mask_secret("abc") == "***"
    assert mask_secret("abcdef") == "abcd**"
