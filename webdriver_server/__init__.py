"""
Generic WebDriver Server - Reusable W3C WebDriver Server Framework

A framework for building WebDriver servers for devices and browsers that
have no driver of their own.

Architecture:
- Each module is self-contained with clear interfaces
- Backends plug in through a small contract and never see HTTP
- All communication through defined interfaces

Modules:
- api: Response model and protocol error taxonomy
- dispatcher: HTTP routing and wire formatting
- backend: Backend contract and default behaviors
- session: Single-session lifecycle and idle eviction
"""

__version__ = "1.0.0"
