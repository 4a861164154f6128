"""
Backend Module - Black Box Interface

Purpose: Contract between the server and device/browser integrations
Interface: Backend, SingleSessionHooks protocols and their default classes
Hidden: Nothing device-specific; integrations live outside the framework

Any object satisfying Backend can drive the server.
"""

from .interfaces import Backend, BaseBackend, BaseSingleSessionHooks, SingleSessionHooks

__all__ = ["Backend", "BaseBackend", "SingleSessionHooks", "BaseSingleSessionHooks"]
