"""TCP connectivity helpers built on the retry loops."""

from .connect import connect_until_connected, connect_until_connected_or_timeout, dial

__all__ = ["connect_until_connected", "connect_until_connected_or_timeout", "dial"]
