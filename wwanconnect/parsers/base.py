"""
Base parser classes and utilities.

qmicli prints free-form text. The label substrings and token positions used
here are the wire contract with qmicli: changing them breaks compatibility.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Optional, Sequence, TypeVar, Generic

logger = logging.getLogger(__name__)

T = TypeVar('T')

_QUOTED_VALUE = re.compile(r":\s*'([^']*)'")


class ResponseParser(ABC, Generic[T]):
    """
    Abstract base class for response parsers.

    Parsers convert raw qmicli output into typed data structures.
    """

    @abstractmethod
    def parse(self, text: str) -> T:
        """
        Parse qmicli output.

        Args:
            text: Raw output, stdout and stderr combined

        Returns:
            Parsed data structure
        """
        pass


def find_line(text: str, label: str) -> Optional[str]:
    """Return the first line containing label, or None."""
    for line in text.splitlines():
        if label in line:
            return line
    return None


def word_after_label(text: str, labels: Sequence[str]) -> Optional[str]:
    """
    Extract the word following a label.

    The first line containing any of the labels (tried in order) is used.
    The value is the first whitespace-delimited word after the label and its
    colon, e.g. "10.0.0.5" in "    IPv4 address: 10.0.0.5".

    Returns:
        The word, or None if no line matches or nothing follows the label
    """
    for label in labels:
        line = find_line(text, label)
        if line is None:
            continue

        words = line.split(label, 1)[1].lstrip(" \t:").split()
        if words:
            return words[0]
        logger.debug(f"Label {label!r} present without a value")

    return None


def quoted_after_label(text: str, label: str) -> Optional[str]:
    """
    Extract the single-quoted value following a label.

    Handles both "Packet data handle: '123'" and "'Packet data handle': '123'".
    """
    line = find_line(text, label)
    if line is None:
        return None

    match = _QUOTED_VALUE.search(line.split(label, 1)[1])
    return match.group(1) if match else None
