"""
Session manager.

Handles the packet-data session: start, settings retrieval and teardown.
"""

import logging
from typing import TYPE_CHECKING

from ..types import IPFamily, SessionResult, NetworkSettings
from ..parsers import SessionResultParser, NetworkSettingsParser
from ..exceptions import SessionStartError, SettingsRetrievalError, TransportError

if TYPE_CHECKING:
    from ..core import QMIClient

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Manages the packet-data session on one modem.

    Provides methods to start a session on an APN, read the negotiated IP
    settings, and stop the session.
    """

    def __init__(self, qmi: "QMIClient", ip_type: IPFamily = IPFamily.IPV4) -> None:
        """
        Initialize session manager.

        Args:
            qmi: QMIClient for the control device
            ip_type: IP family used for start, query and stop requests
        """
        self.qmi = qmi
        self.ip_type = IPFamily(ip_type)

        # Parsers
        self._session_parser = SessionResultParser()
        self._settings_parser = NetworkSettingsParser()

        logger.debug("Initialized SessionManager")

    def start_session(self, apn: str) -> SessionResult:
        """
        Start a data session on an APN.

        The WDS client is not released, so the session stays up after qmicli
        exits. Success is read from the output, not from the exit status.

        Args:
            apn: Access Point Name

        Returns:
            SessionResult with success flag and packet data handle

        Raises:
            SessionStartError: If the modem does not report "Network started"

        Example:

        .. code-block:: python

            result = connection.session.start_session("web.o2.de")
            print(f"Handle: {result.handle}")
        """
        logger.info(f"Starting data session on '{apn}'")
        response = self.qmi.start_network(apn, self.ip_type, no_release=True)
        result = self._session_parser.parse(response.output)

        if not result.success:
            logger.error("Modem did not report a successful connection")
            raise SessionStartError(
                "Modem did not report a successful connection",
                command=response.command_line,
                response=result.raw_output
            )

        if not response.ok:
            logger.debug(f"Session started despite exit status {response.returncode}")

        logger.info(f"Packet data handle: {result.handle}")
        return result

    def get_current_settings(self) -> NetworkSettings:
        """
        Get the IP settings negotiated for the session.

        Returns:
            Usable NetworkSettings (address and gateway present)

        Raises:
            SettingsRetrievalError: If address or gateway is missing

        Example:

        .. code-block:: python

            settings = connection.session.get_current_settings()
            print(f"{settings.ipv4_address} via {settings.gateway}")
        """
        logger.info("Querying runtime settings")
        response = self.qmi.get_current_settings(self.ip_type)
        settings = self._settings_parser.parse(response.output)

        if not settings.is_usable:
            logger.error("Couldn't retrieve IP or gateway")
            raise SettingsRetrievalError(
                "Couldn't retrieve IP or gateway",
                command=response.command_line,
                response=response.output
            )

        logger.debug(f"Current settings: {settings}")
        return settings

    def stop_session(self) -> bool:
        """
        Stop the data session and disable autoconnect.

        Best-effort: there may be no session to stop.

        Returns:
            True if qmicli reported success, False otherwise
        """
        logger.info("Stopping data session")
        try:
            result = self.qmi.stop_network(self.ip_type)
        except TransportError as e:
            logger.warning(f"Could not stop data session: {e}")
            return False

        if not result.ok:
            logger.warning(f"Stop request failed: {result.output.strip()}")
            return False

        return True
