"""
Backends bundled with the framework.

Device integrations normally live in their own packages; these exist to
exercise the server without hardware.
"""

from .loopback import LoopbackHooks

__all__ = ["LoopbackHooks"]
