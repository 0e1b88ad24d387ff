"""
Response parsers for qmicli output.

Provides parsing of free-form modem responses into structured data, isolated
from process execution so the text contract can be tested on its own.
"""

from .base import ResponseParser, find_line, word_after_label, quoted_after_label
from .session import SessionResultParser
from .settings import NetworkSettingsParser

__all__ = [
    "ResponseParser",
    "find_line",
    "word_after_label",
    "quoted_after_label",
    "SessionResultParser",
    "NetworkSettingsParser",
]
