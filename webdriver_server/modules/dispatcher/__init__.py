"""
Dispatcher Module - Black Box Interface

Purpose: Turn HTTP method + path + body into handler calls and back into
WebDriver wire format
Interface: ProtocolDispatcher.register_route(), build(), dispatch()
Hidden: Body parsing, error conversion, catch-all routing

Replaceable with any HTTP layer that can deliver path params and a body.
"""

from .dispatcher import Handler, ProtocolDispatcher, Route

__all__ = ["ProtocolDispatcher", "Route", "Handler"]
