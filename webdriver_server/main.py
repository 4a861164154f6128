"""
Generic WebDriver Server - Orchestration Layer

This is the thin layer that:
1. Wires the WebDriver endpoints to a backend through the dispatcher
2. Builds the FastAPI application
3. Runs it under uvicorn until shut down

All device-specific logic lives in backends, following black box principles.
"""

import base64
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from webdriver_server import __version__
from webdriver_server.config import ServerConfig
from webdriver_server.logging_config import get_logging_config
from webdriver_server.modules.api import (
    ErrorCode,
    NavigateRequest,
    NewSessionValue,
    StatusValue,
    WebDriverResponse,
)
from webdriver_server.modules.backend import Backend
from webdriver_server.modules.dispatcher import ProtocolDispatcher

logger = logging.getLogger(__name__)


class WebDriverServer:
    """
    A server which implements part of the W3C WebDriver protocol.

    Backends implement the functionality for a particular type of device or
    platform:
     - ready
     - shutdown (optional)
     - create_session
     - navigate_to
     - screenshot (optional)
     - get_title
     - close_session

    https://www.w3.org/TR/webdriver2/
    """

    def __init__(self, backend: Backend, config: ServerConfig):
        self.backend = backend
        self.config = config
        self.dispatcher = ProtocolDispatcher()
        self._uvicorn_server: Optional[uvicorn.Server] = None
        self._shut_down = False

        self._register_routes()
        self.app = self.create_app()

    def _register_routes(self) -> None:
        register = self.dispatcher.register_route

        # https://www.w3.org/TR/webdriver2/#dfn-status
        register("GET", "/status", self.status)
        # Not spec'd, but sent by Selenium client on driver.close() and
        # supported by ChromeDriver.
        register("GET", "/shutdown", self.shutdown)
        # https://www.w3.org/TR/webdriver2/#dfn-new-sessions
        register("POST", "/session", self.new_session)
        # https://www.w3.org/TR/webdriver2/#dfn-navigate-to
        register("POST", "/session/{sessionId}/url", self.navigate_to)
        # https://www.w3.org/TR/webdriver2/#dfn-take-screenshot
        register("GET", "/session/{sessionId}/screenshot", self.screenshot)
        # https://www.w3.org/TR/webdriver2/#dfn-close-window
        register("DELETE", "/session/{sessionId}/window", self.close_session)
        # https://www.w3.org/TR/webdriver2/#dfn-delete-session
        register("DELETE", "/session/{sessionId}", self.close_session)
        # https://www.w3.org/TR/webdriver2/#dfn-get-title
        register("GET", "/session/{sessionId}/title", self.get_title)

    def create_app(self) -> FastAPI:
        """Create the FastAPI application with every WebDriver route."""

        @asynccontextmanager
        async def lifespan(app: FastAPI):
            logger.info(f"Starting WebDriver server with {type(self.backend).__name__}")

            yield

            # Release the device if the process is stopped without /shutdown.
            await self._shutdown_backend()
            logger.info("WebDriver server shutdown complete")

        app = FastAPI(
            title="Generic WebDriver Server",
            description="W3C WebDriver subset for devices without their own driver",
            version=__version__,
            lifespan=lifespan,
            docs_url=None,
            redoc_url=None,
            openapi_url=None,
        )
        return self.dispatcher.build(app)

    # Endpoints

    async def status(self, params: Dict[str, str], body: Any) -> WebDriverResponse:
        ready = await self.backend.ready()
        value = StatusValue(ready=ready, message="ok" if ready else "busy")
        return WebDriverResponse.success(value.model_dump())

    async def shutdown(self, params: Dict[str, str], body: Any) -> WebDriverResponse:
        await self._shutdown_backend()
        self.stop()
        return WebDriverResponse.success({})

    async def new_session(self, params: Dict[str, str], body: Any) -> WebDriverResponse:
        # NOTE: The client's requested capabilities are in the body if any
        # backend turns out to need them.
        session_id = await self.backend.create_session()
        if not session_id:
            return WebDriverResponse.error(ErrorCode.SESSION_NOT_CREATED)

        value = NewSessionValue(sessionId=session_id)
        return WebDriverResponse.success(value.model_dump())

    async def navigate_to(self, params: Dict[str, str], body: Any) -> WebDriverResponse:
        try:
            request = NavigateRequest.model_validate(body)
        except ValidationError:
            return WebDriverResponse.error(ErrorCode.INVALID_ARGUMENT)

        await self.backend.navigate_to(params["sessionId"], request.url)
        return WebDriverResponse.success({})

    async def screenshot(self, params: Dict[str, str], body: Any) -> WebDriverResponse:
        png = await self.backend.screenshot(params["sessionId"])
        return WebDriverResponse.success(base64.b64encode(png).decode("ascii"))

    async def close_session(self, params: Dict[str, str], body: Any) -> WebDriverResponse:
        await self.backend.close_session(params["sessionId"])
        return WebDriverResponse.success({})

    async def get_title(self, params: Dict[str, str], body: Any) -> WebDriverResponse:
        title = await self.backend.get_title(params["sessionId"])
        return WebDriverResponse.success(title)

    # Lifecycle

    async def _shutdown_backend(self) -> None:
        if self._shut_down:
            return
        self._shut_down = True
        await self.backend.shutdown()

    def listen(self) -> None:
        """
        Start the server on the configured host and port.
        Does not return until the server is shut down.
        """
        logger.info(f"Listening on port {self.config.port}")
        uvicorn_config = uvicorn.Config(
            self.app,
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level.lower(),
            log_config=get_logging_config(self.config.log_path, self.config.log_level),
        )
        self._uvicorn_server = uvicorn.Server(uvicorn_config)
        self._uvicorn_server.run()

    def stop(self) -> None:
        """Ask the listener to exit once in-flight requests are answered."""
        if self._uvicorn_server is None:
            logger.warning("stop() called with no listener running")
            return
        logger.info("Stopping listener")
        self._uvicorn_server.should_exit = True
