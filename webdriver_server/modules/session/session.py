import asyncio
import itertools
import logging
import secrets
from dataclasses import dataclass
from typing import Optional, Set, Union

from ..api import InvalidSessionIdError
from ..backend import SingleSessionHooks

logger = logging.getLogger(__name__)

NUM_RANDOM_ID_BYTES = 16  # AKA 128 bits, the same as a UUID.

PLACEHOLDER_TITLE = "Title of the page"


@dataclass(frozen=True)
class Idle:
    """No active session; the device is free."""


@dataclass(frozen=True)
class Active:
    """One session owns the device."""

    session_id: str
    idle_timer: asyncio.TimerHandle
    # Identifies the timer that is allowed to evict this session.
    timer_generation: int


SessionState = Union[Idle, Active]

IDLE = Idle()


class SingleSessionBackend:
    """
    Backend for devices that can only run one session at a time.

    The session ID is random, the backend is not ready for a new session
    until the old one is closed, and the session is closed automatically
    after it goes idle.  Device-specific work is delegated to hooks.
    """

    def __init__(self, hooks: SingleSessionHooks, idle_timeout_seconds: float = 120):
        """
        Initialize single-session backend.

        Args:
            hooks: Device integration acting on the one active session
            idle_timeout_seconds: Inactivity period after which the active
                session is released (2 minutes)
        """
        self.hooks = hooks
        self.idle_timeout_seconds = idle_timeout_seconds
        self._state: SessionState = IDLE
        self._lock = asyncio.Lock()
        self._timer_generations = itertools.count(1)
        self._eviction_tasks: Set[asyncio.Task] = set()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session_id(self) -> Optional[str]:
        """ID of the active session, or None when idle."""
        if isinstance(self._state, Active):
            return self._state.session_id
        return None

    async def ready(self) -> bool:
        # We're ready if there's no active session.
        return isinstance(self._state, Idle)

    async def create_session(self) -> Optional[str]:
        """
        Create the session, unless one is already active.

        Returns:
            32-character hex session ID, or None if a session is active

        Logic:
        1. Check for an active session
        2. Generate a random 128-bit ID
        3. Commit the session and arm its idle timer
        All three steps run under the lock, so concurrent requests cannot
        both create a session.
        """
        async with self._lock:
            if isinstance(self._state, Active):
                # None tells the server to reply with "session not created".
                logger.error("create_session() called when we were not ready!")
                return None

            session_id = secrets.token_hex(NUM_RANDOM_ID_BYTES)
            self._state = self._activate(session_id)

        logger.debug(f"Session ID {session_id} created")
        return session_id

    async def navigate_to(self, session_id: str, url: str) -> None:
        async with self._lock:
            self._touch(session_id)

        await self.hooks.navigate(url)

    async def screenshot(self, session_id: str) -> bytes:
        async with self._lock:
            self._touch(session_id)

        return await self.hooks.screenshot()

    async def get_title(self, session_id: str) -> str:
        async with self._lock:
            self._touch(session_id)

        # This doesn't have to be real.
        return PLACEHOLDER_TITLE

    async def close_session(self, session_id: str) -> None:
        """
        Close the session if the ID matches the active one.

        Never raises, even on an invalid session ID, so redundant cleanup
        calls from clients always succeed.
        """
        async with self._lock:
            state = self._state
            if not isinstance(state, Active) or session_id != state.session_id:
                return

            await self._release(state)

    async def shutdown(self) -> None:
        session_id = self.session_id
        if session_id:
            await self.close_session(session_id)

        await self.hooks.shutdown()

    def _activate(self, session_id: str) -> Active:
        """Build the Active state for a session with a freshly armed timer."""
        generation = next(self._timer_generations)
        loop = asyncio.get_running_loop()
        timer = loop.call_later(
            self.idle_timeout_seconds, self._on_idle_timeout, session_id, generation
        )
        return Active(session_id=session_id, idle_timer=timer, timer_generation=generation)

    def _touch(self, session_id: str) -> None:
        """
        Validate the session ID and restart the idle clock.

        Caller must hold the lock.

        Raises:
            InvalidSessionIdError: if session_id is not the active session
        """
        state = self._state
        if not isinstance(state, Active) or session_id != state.session_id:
            raise InvalidSessionIdError()

        state.idle_timer.cancel()
        self._state = self._activate(state.session_id)

    async def _release(self, state: Active) -> None:
        """Return to Idle and release the device.  Caller must hold the lock."""
        logger.debug(f"Session ID {state.session_id} released")
        state.idle_timer.cancel()
        self._state = IDLE

        try:
            await self.hooks.close()
        except Exception as e:
            # close_session() should never throw.
            logger.error(f"Error closing session {state.session_id}: {e}", exc_info=True)

    def _on_idle_timeout(self, session_id: str, generation: int) -> None:
        task = asyncio.create_task(self._evict(session_id, generation))
        self._eviction_tasks.add(task)
        task.add_done_callback(self._eviction_tasks.discard)

    async def _evict(self, session_id: str, generation: int) -> None:
        """Close the session when no activity re-armed the timer in between."""
        async with self._lock:
            state = self._state
            if (
                not isinstance(state, Active)
                or state.session_id != session_id
                or state.timer_generation != generation
            ):
                return

            # When there is no activity for a while, close the session.  This
            # keeps the device from being unavailable forever if the client
            # vanishes.
            logger.info("Activity timeout.  Releasing session.")
            await self._release(state)
