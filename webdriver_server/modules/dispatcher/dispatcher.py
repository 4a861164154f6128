import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Tuple

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..api import ErrorCode, WebDriverError, WebDriverResponse

logger = logging.getLogger(__name__)

# Takes URL parameters and the parsed JSON body, returns a response.
Handler = Callable[[Dict[str, str], Any], Awaitable[WebDriverResponse]]

CATCH_ALL_PATH = "/{path:path}"
CATCH_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


@dataclass(frozen=True)
class Route:
    """A protocol route: HTTP method and path pattern bound to a handler."""

    method: str
    path: str
    handler: Handler


class ProtocolDispatcher:
    """
    Routes WebDriver commands and handles the common details of the protocol.

    Handlers see only URL parameters and the parsed JSON body, and answer
    with a WebDriverResponse.  The dispatcher formats that response according
    to the W3C WebDriver protocol.  Protocol errors raised as WebDriverError
    become their matching response; anything else raised becomes an
    "unknown error" so no request ever fails outside the protocol.

    Routes are registered once, before build(), and are immutable afterward.
    """

    def __init__(self):
        self._routes: List[Route] = []
        self._built = False

    @property
    def routes(self) -> Tuple[Route, ...]:
        return tuple(self._routes)

    def register_route(self, method: str, path: str, handler: Handler) -> None:
        """
        Register a handler for a method and path pattern.

        Args:
            method: HTTP method (GET, POST, DELETE, ...)
            path: Path pattern, may contain named parameters like {sessionId}
            handler: Async callable taking (path_params, body)

        Raises:
            RuntimeError: If routes were already installed on an app
        """
        if self._built:
            raise RuntimeError("Routes cannot be registered after the dispatcher is built")
        self._routes.append(Route(method=method.upper(), path=path, handler=handler))

    def build(self, app: FastAPI) -> FastAPI:
        """
        Install all registered routes, plus the catch-all, on a FastAPI app.

        The catch-all is installed last.  It matches every method and path,
        which also makes it win over Starlette's 405 for known paths.
        """
        for route in self._routes:
            app.add_api_route(
                route.path,
                self._endpoint(route.handler),
                methods=[route.method],
                include_in_schema=False,
            )

        # https://www.w3.org/TR/webdriver2/#routing-requests
        app.add_api_route(
            CATCH_ALL_PATH,
            self._endpoint(self._unknown_command, parse_body=False),
            methods=CATCH_ALL_METHODS,
            include_in_schema=False,
        )

        self._built = True
        return app

    def _endpoint(self, handler: Handler, parse_body: bool = True):
        async def endpoint(request: Request) -> JSONResponse:
            return await self.dispatch(handler, request, parse_body=parse_body)

        return endpoint

    async def dispatch(
        self, handler: Handler, request: Request, parse_body: bool = True
    ) -> JSONResponse:
        """
        Run one request through a handler and format the wire response.

        Args:
            handler: The handler bound to the matched route
            request: Incoming request
            parse_body: Parse the JSON body, or hand the handler an empty object

        Returns:
            JSON response of the form {"value": ...} with the status code
            carried by the handler's WebDriverResponse
        """
        params = dict(request.path_params)

        body: Any = {}
        try:
            if parse_body:
                body = await self._parse_body(request)
        except ValueError:
            logger.info(f"{request.method} {request.url.path} <malformed JSON body>")
            return self._to_wire(WebDriverResponse.error(ErrorCode.INVALID_ARGUMENT))

        logger.info(f"{request.method} {request.url.path} {body}")

        try:
            response = await handler(params, body)
        except WebDriverError as e:
            # Thrown on purpose by a backend.
            response = e.response
        except Exception:
            logger.exception(f"Caught error handling {request.method} {request.url.path}")
            response = WebDriverResponse.error(ErrorCode.UNKNOWN_ERROR)

        if not isinstance(response, WebDriverResponse):
            logger.error(f"Handler for {request.url.path} returned {type(response).__name__}")
            response = WebDriverResponse.error(ErrorCode.UNKNOWN_ERROR)

        if response.is_error:
            logger.debug(f"Responding {response.http_status_code}: {response.value}")

        return self._to_wire(response)

    @staticmethod
    async def _parse_body(request: Request) -> Any:
        """
        Parse the JSON body.

        Only application/json bodies are parsed.  An empty body, or one of any
        other media type, parses as an empty object.
        """
        media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
        if media_type != "application/json":
            return {}

        raw = await request.body()
        if not raw:
            return {}
        return json.loads(raw)

    @staticmethod
    def _to_wire(response: WebDriverResponse) -> JSONResponse:
        return JSONResponse(status_code=response.http_status_code, content=response.to_wire())

    @staticmethod
    async def _unknown_command(params: Dict[str, str], body: Any) -> WebDriverResponse:
        return WebDriverResponse.error(ErrorCode.UNKNOWN_COMMAND)
