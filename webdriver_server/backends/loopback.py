"""Loopback device: records what a real device would have been asked to do."""

import base64
import logging
from typing import List

from webdriver_server.modules.backend import BaseSingleSessionHooks

logger = logging.getLogger(__name__)

# A 1x1 PNG.
BLANK_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


class LoopbackHooks(BaseSingleSessionHooks):
    """Single-session hooks that drive no device at all."""

    def __init__(self):
        self.history: List[str] = []
        self.closed_count = 0
        self.shut_down = False

    async def navigate(self, url: str) -> None:
        logger.info(f"Loading {url}")
        self.history.append(url)

    async def screenshot(self) -> bytes:
        return BLANK_PNG

    async def close(self) -> None:
        # Send the "device" back to the home screen.
        logger.info("Returning to home screen")
        self.closed_count += 1

    async def shutdown(self) -> None:
        self.shut_down = True
