"""
Command-line entry points.

Backends build their own command with create_command(), adding any flags
their device needs on top of the standard ones.
"""

from typing import Any, Callable, Sequence

import click
from dotenv import load_dotenv

from webdriver_server.config import (
    DEFAULT_IDLE_TIMEOUT_SECONDS,
    LOG_LEVELS,
    ServerConfig,
    load_config,
)
from webdriver_server.logging_config import configure_logging
from webdriver_server.main import WebDriverServer
from webdriver_server.modules.backend import Backend, SingleSessionHooks
from webdriver_server.modules.session import SingleSessionBackend


# Takes the server configuration plus the values of any extra options.
BackendFactory = Callable[..., Backend]


def single_session_factory(hooks_factory: Callable[..., SingleSessionHooks]) -> BackendFactory:
    """
    Adapt a hooks factory into a backend factory for single-session devices.

    Args:
        hooks_factory: Called with the values of the extra options

    Returns:
        Factory producing a SingleSessionBackend with the configured idle
        timeout
    """

    def factory(config: ServerConfig, **extra: Any) -> Backend:
        return SingleSessionBackend(hooks_factory(**extra), config.idle_timeout_seconds)

    return factory


def create_command(
    backend_factory: BackendFactory,
    extra_options: Sequence[click.Option] = (),
    name: str = "webdriver-server",
) -> click.Command:
    """
    Build the server command for a backend.

    Args:
        backend_factory: Called with (config, **extra_option_values)
        extra_options: Additional click options the backend needs
        name: Command name shown in usage messages

    Returns:
        A click command that configures logging and runs the server
    """

    @click.command(name=name)
    @click.option("--port", type=click.IntRange(1, 65535), default=None,
                  help="port to listen on (or WEBDRIVER_PORT)")
    @click.option("--host", default=None, help="address to bind [default: 0.0.0.0]")
    @click.option("--log-path", type=click.Path(dir_okay=False), default=None,
                  help="write server log to file instead of stderr")
    @click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False),
                  default=None, help="logging level [default: INFO]")
    @click.option("--idle-timeout-seconds", type=click.FloatRange(min=0, min_open=True),
                  default=None,
                  help=f"A timeout for idle sessions [default: {DEFAULT_IDLE_TIMEOUT_SECONDS:g}]")
    def command(port, host, log_path, log_level, idle_timeout_seconds, **extra):
        load_dotenv()

        try:
            config = load_config(
                port=port,
                host=host,
                log_path=log_path,
                log_level=log_level,
                idle_timeout_seconds=idle_timeout_seconds,
            )
        except ValueError as e:
            raise click.UsageError(str(e))

        configure_logging(config.log_path, config.log_level)

        backend = backend_factory(config, **extra)
        server = WebDriverServer(backend, config)
        server.listen()

    command.params.extend(extra_options)
    return command
