"""
Feature managers for the connection steps.

Provides high-level managers for each part of bringing the link up:
- ModeManager: Operating mode and raw-IP data format
- SessionManager: Data session start, settings retrieval, teardown
- InterfaceManager: Interface reset and address/route/MTU/DNS configuration
- TTLManager: Optional TTL mangle rule
"""

from .modem import ModeManager
from .session import SessionManager
from .interface import InterfaceManager
from .firewall import TTLManager

__all__ = [
    "ModeManager",
    "SessionManager",
    "InterfaceManager",
    "TTLManager",
]
