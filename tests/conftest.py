"""
Shared pytest fixtures for WebDriver server tests.

This module provides common fixtures including:
- Server configuration with short idle timeouts
- Mock backends and single-session hooks
- FastAPI test client utilities
"""

import os
import sys
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from webdriver_server.config import ServerConfig
from webdriver_server.main import WebDriverServer
from webdriver_server.modules.backend import BaseBackend, BaseSingleSessionHooks


@pytest.fixture
def server_config():
    """Configuration for a server that is never actually bound."""
    return ServerConfig(port=4444, idle_timeout_seconds=120)


@pytest.fixture
def mock_backend():
    """Create a mock backend with every hook as an AsyncMock."""
    backend = AsyncMock(spec=BaseBackend)
    backend.ready.return_value = True
    backend.create_session.return_value = "ab12cd34ab12cd34ab12cd34ab12cd34"
    backend.screenshot.return_value = b"\x89PNG fake"
    backend.get_title.return_value = "Example Domain"
    backend.navigate_to.return_value = None
    backend.close_session.return_value = None
    backend.shutdown.return_value = None
    return backend


@pytest.fixture
def mock_hooks():
    """Create mock single-session hooks."""
    hooks = AsyncMock(spec=BaseSingleSessionHooks)
    hooks.navigate.return_value = None
    hooks.screenshot.return_value = b"\x89PNG fake"
    hooks.close.return_value = None
    hooks.shutdown.return_value = None
    return hooks


@pytest.fixture
def make_client(server_config):
    """
    Build a TestClient around a WebDriverServer for a backend.

    Usage:
        def test_something(make_client, mock_backend):
            with make_client(mock_backend) as client:
                client.get("/status")
    """

    def factory(backend, config=None):
        server = WebDriverServer(backend, config or server_config)
        return TestClient(server.app)

    return factory
