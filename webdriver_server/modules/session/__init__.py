"""
Session Module - Black Box Interface

Purpose: Manage the lifecycle of the one session a device can run
Interface: SingleSessionBackend (a Backend built from SingleSessionHooks)
Hidden: Session ID generation, idle timers, state transitions, locking

Replaceable with any Backend implementation, e.g. one supporting
concurrent sessions.
"""

from .session import PLACEHOLDER_TITLE, Active, Idle, SingleSessionBackend

__all__ = ["SingleSessionBackend", "Active", "Idle", "PLACEHOLDER_TITLE"]
