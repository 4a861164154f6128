"""Backend interfaces following Black Box Design principles."""
from typing import Optional, Protocol

from ..api import InvalidSessionIdError, UnableToCaptureScreenError


class Backend(Protocol):
    """
    Protocol for WebDriver backends - one per type of device or platform.

    The server calls these from its endpoints.  All methods are async.
    """

    async def ready(self) -> bool:
        """
        Check if the backend is ready and can create a session.

        Returns:
            True if a session can be created.  Backends without concurrent
            sessions return False while a session is in use.
        """
        ...

    async def shutdown(self) -> None:
        """Shut down after closing any open sessions."""
        ...

    async def create_session(self) -> Optional[str]:
        """
        Create a new session.

        Returns:
            The session ID.  None or an empty string means no session could
            be created.
        """
        ...

    async def navigate_to(self, session_id: str, url: str) -> None:
        """
        Navigate to a URL in a session.

        Raises:
            InvalidSessionIdError: on an invalid session
        """
        ...

    async def screenshot(self, session_id: str) -> bytes:
        """
        Take a screenshot of the session's browsing window.

        Returns:
            PNG image data

        Raises:
            InvalidSessionIdError: on an invalid session
            UnableToCaptureScreenError: if screenshots are not supported
        """
        ...

    async def get_title(self, session_id: str) -> str:
        """
        Get the page title.  Sometimes used as a ping to keep the session
        alive, so it does not have to be accurate.

        Raises:
            InvalidSessionIdError: on an invalid session
        """
        ...

    async def close_session(self, session_id: str) -> None:
        """Close a session.  Never raises, even on an unknown session ID."""
        ...


class BaseBackend:
    """
    Fallback behavior for backends that do not implement every command.

    Not ready, creates no sessions, knows no session IDs and cannot take
    screenshots.
    """

    async def ready(self) -> bool:
        return False

    async def shutdown(self) -> None:
        pass

    async def create_session(self) -> Optional[str]:
        return None

    async def navigate_to(self, session_id: str, url: str) -> None:
        raise InvalidSessionIdError()

    async def screenshot(self, session_id: str) -> bytes:
        raise UnableToCaptureScreenError()

    async def get_title(self, session_id: str) -> str:
        raise InvalidSessionIdError()

    async def close_session(self, session_id: str) -> None:
        pass


class SingleSessionHooks(Protocol):
    """
    Protocol for device integrations that can run only one session at a time.

    Each hook acts on "the" session, since there is never more than one.

    close() runs while no other session can start, but navigate() and
    screenshot() run unguarded.  A slow navigate() or screenshot() may still
    be in progress when close() is called for an idle timeout or a DELETE, so
    integrations that cannot drive the device concurrently must serialize
    these calls themselves.
    """

    async def navigate(self, url: str) -> None:
        """Navigate the device to a URL."""
        ...

    async def screenshot(self) -> bytes:
        """Capture the device screen as PNG data."""
        ...

    async def close(self) -> None:
        """Release the device, e.g. send it back to its home screen."""
        ...

    async def shutdown(self) -> None:
        """Shut down after the session has been closed."""
        ...


class BaseSingleSessionHooks:
    """Fallback hooks for device integrations that leave some out."""

    async def navigate(self, url: str) -> None:
        raise InvalidSessionIdError()

    async def screenshot(self) -> bytes:
        raise UnableToCaptureScreenError()

    async def close(self) -> None:
        raise InvalidSessionIdError()

    async def shutdown(self) -> None:
        pass
