"""
Modem mode manager.

Puts the modem into a state where the kernel interface carries usable
packets: online, with raw-IP framing.
"""

import logging
from typing import TYPE_CHECKING

from ..types import OperatingMode, DataFormat
from ..exceptions import ModemControlError, TransportError

if TYPE_CHECKING:
    from ..core import QMIClient

logger = logging.getLogger(__name__)


class ModeManager:
    """
    Manages modem operating mode and data format.
    """

    def __init__(self, qmi: "QMIClient") -> None:
        """
        Initialize mode manager.

        Args:
            qmi: QMIClient for the control device
        """
        self.qmi = qmi
        logger.debug("Initialized ModeManager")

    def set_online(self) -> bool:
        """
        Set operating mode to online.

        Best-effort: a modem that is already online may reject the request,
        so failures are logged and never raised.

        Returns:
            True if the request succeeded, False otherwise
        """
        logger.info("Setting operating mode to online")
        try:
            result = self.qmi.set_operating_mode(OperatingMode.ONLINE)
        except TransportError as e:
            logger.warning(f"Could not set operating mode: {e}")
            return False

        if not result.ok:
            logger.warning(
                f"Operating mode request failed (modem may already be online): "
                f"{result.output.strip()}"
            )
            return False

        return True

    def set_raw_ip(self) -> None:
        """
        Set the link-layer data format to raw-IP.

        Raises:
            ModemControlError: If the modem rejects the request
        """
        logger.info("Setting data format to raw-IP")
        result = self.qmi.set_data_format(DataFormat.RAW_IP)

        if not result.ok:
            logger.error("Failed to set raw-IP data format")
            raise ModemControlError(
                "Failed to set raw-IP data format",
                command=result.command_line,
                response=result.output
            )

    def set_data_mode(self) -> None:
        """
        Ensure the modem is online with raw-IP framing.

        Raises:
            ModemControlError: If raw-IP framing cannot be set

        Example:

        .. code-block:: python

            connection.mode.set_data_mode()
        """
        self.set_online()
        self.set_raw_ip()
