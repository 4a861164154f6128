"""
Tests for configuration loading and the command line.
"""

from unittest.mock import MagicMock, patch

import click
import pytest
from click.testing import CliRunner
from pydantic import ValidationError

from webdriver_server.cli import create_command, single_session_factory
from webdriver_server.config import DEFAULT_IDLE_TIMEOUT_SECONDS, ServerConfig, load_config
from webdriver_server.modules.backend import BaseSingleSessionHooks
from webdriver_server.modules.session import SingleSessionBackend

ENV_VARS = [
    "WEBDRIVER_PORT",
    "WEBDRIVER_HOST",
    "WEBDRIVER_LOG_PATH",
    "WEBDRIVER_LOG_LEVEL",
    "WEBDRIVER_IDLE_TIMEOUT_SECONDS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without server settings in the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# load_config
# =============================================================================


def test_load_config_from_env(monkeypatch):
    """Test configuration is read from the environment."""
    monkeypatch.setenv("WEBDRIVER_PORT", "5555")
    monkeypatch.setenv("WEBDRIVER_IDLE_TIMEOUT_SECONDS", "30")
    monkeypatch.setenv("WEBDRIVER_LOG_PATH", "/tmp/webdriver.log")

    config = load_config()

    assert config.port == 5555
    assert config.idle_timeout_seconds == 30.0
    assert config.log_path == "/tmp/webdriver.log"
    assert config.host == "0.0.0.0"
    assert config.log_level == "INFO"


def test_load_config_defaults():
    """Test everything but the port has a default."""
    config = load_config(port=4444)

    assert config.idle_timeout_seconds == DEFAULT_IDLE_TIMEOUT_SECONDS == 120
    assert config.log_path is None


def test_overrides_win_over_env(monkeypatch):
    """Test explicit values (command-line flags) beat the environment."""
    monkeypatch.setenv("WEBDRIVER_PORT", "5555")

    config = load_config(port=6666, host=None)

    assert config.port == 6666


def test_missing_port():
    """Test the port is required."""
    with pytest.raises(ValueError, match="port"):
        load_config()


@pytest.mark.parametrize("port", [0, 65536, -1, "not-a-port"])
def test_invalid_port(port):
    """Test ports outside 1-65535 are rejected."""
    with pytest.raises(ValidationError):
        load_config(port=port)


def test_invalid_idle_timeout():
    """Test the idle timeout must be positive."""
    with pytest.raises(ValidationError):
        ServerConfig(port=4444, idle_timeout_seconds=0)


def test_log_level_from_env_is_normalized(monkeypatch):
    """Test log level names are accepted in any case."""
    monkeypatch.setenv("WEBDRIVER_LOG_LEVEL", "debug")

    assert load_config(port=4444).log_level == "DEBUG"


@pytest.mark.parametrize("log_level", ["verbose", "", "trace"])
def test_invalid_log_level(log_level):
    """Test unknown log levels are rejected with the config, not by logging."""
    with pytest.raises(ValidationError, match="log level"):
        ServerConfig(port=4444, log_level=log_level)


def test_config_is_immutable():
    """Test configuration cannot change after startup."""
    config = ServerConfig(port=4444)

    with pytest.raises(ValidationError):
        config.port = 5555


# =============================================================================
# Command line
# =============================================================================


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def mock_server():
    """Patch out .env loading and the listener."""
    with patch("webdriver_server.cli.WebDriverServer") as server_class, \
            patch("webdriver_server.cli.load_dotenv"):
        yield server_class


@pytest.fixture(autouse=True)
def mock_configure_logging():
    """Keep dictConfig from replacing the handlers pytest captures with."""
    with patch("webdriver_server.cli.configure_logging") as configure_logging:
        yield configure_logging


def test_cli_runs_server(runner, mock_server, mock_configure_logging):
    """Test flags become configuration and the server starts listening."""
    command = create_command(single_session_factory(BaseSingleSessionHooks))

    result = runner.invoke(command, ["--port", "4444", "--idle-timeout-seconds", "30"])

    assert result.exit_code == 0, result.output
    backend, config = mock_server.call_args[0]
    assert isinstance(backend, SingleSessionBackend)
    assert backend.idle_timeout_seconds == 30
    assert config.port == 4444
    mock_server.return_value.listen.assert_called_once()
    mock_configure_logging.assert_called_once_with(None, "INFO")


def test_cli_log_path(runner, mock_server, mock_configure_logging, tmp_path):
    """Test --log-path sends logging to a file."""
    log_path = str(tmp_path / "server.log")
    command = create_command(single_session_factory(BaseSingleSessionHooks))

    result = runner.invoke(command, ["--port", "4444", "--log-path", log_path])

    assert result.exit_code == 0, result.output
    mock_configure_logging.assert_called_once_with(log_path, "INFO")


def test_cli_port_from_env(runner, mock_server, monkeypatch):
    """Test the port may come from the environment."""
    monkeypatch.setenv("WEBDRIVER_PORT", "7777")
    command = create_command(single_session_factory(BaseSingleSessionHooks))

    result = runner.invoke(command, [])

    assert result.exit_code == 0, result.output
    assert mock_server.call_args[0][1].port == 7777


@pytest.mark.parametrize("args", [[], ["--port", "0"], ["--port", "70000"], ["--port", "1.5"]])
def test_cli_rejects_bad_port(runner, mock_server, args):
    """Test a missing or invalid port is a usage error."""
    command = create_command(single_session_factory(BaseSingleSessionHooks))

    result = runner.invoke(command, args)

    assert result.exit_code == 2
    assert "port" in result.output.lower()
    mock_server.assert_not_called()


def test_cli_rejects_bad_log_level_from_env(runner, mock_server, mock_configure_logging,
                                            monkeypatch):
    """Test an invalid WEBDRIVER_LOG_LEVEL is a usage error."""
    monkeypatch.setenv("WEBDRIVER_PORT", "4444")
    monkeypatch.setenv("WEBDRIVER_LOG_LEVEL", "verbose")
    command = create_command(single_session_factory(BaseSingleSessionHooks))

    result = runner.invoke(command, [])

    assert result.exit_code == 2
    assert "log level" in result.output.lower()
    mock_configure_logging.assert_not_called()
    mock_server.assert_not_called()


def test_cli_extra_options_reach_backend(runner, mock_server):
    """Test backends can register their own flags."""
    factory = MagicMock()
    command = create_command(
        factory,
        extra_options=[click.Option(["--device-ip"], required=True, help="device address")],
    )

    result = runner.invoke(command, ["--port", "4444", "--device-ip", "10.0.0.5"])

    assert result.exit_code == 0, result.output
    config = factory.call_args[0][0]
    assert config.port == 4444
    assert factory.call_args[1] == {"device_ip": "10.0.0.5"}
