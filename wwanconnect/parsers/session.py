"""
Session start response parser.
"""

import logging

from .base import ResponseParser, quoted_after_label
from ..types import SessionResult

logger = logging.getLogger(__name__)

SUCCESS_MARKER = "Network started"
HANDLE_LABEL = "Packet data handle"


class SessionResultParser(ResponseParser[SessionResult]):
    """Parser for qmicli --wds-start-network output."""

    def parse(self, text: str) -> SessionResult:
        """
        Parse --wds-start-network output.

        Success is decided by the marker phrase alone, never by exit status:
        qmicli can exit 0 while reporting a failure, and vice versa.

        Expected format on success:
            [/dev/wwan0qmi0] Network started
                    Packet data handle: '2264924912'
            [/dev/wwan0qmi0] Client ID not released:
                    Service: 'wds'
                        CID: '20'
        """
        if SUCCESS_MARKER not in text:
            return SessionResult(success=False, raw_output=text)

        handle = quoted_after_label(text, HANDLE_LABEL)
        if handle is None:
            logger.debug("Session started without a packet data handle in output")

        return SessionResult(success=True, raw_output=text, handle=handle)
