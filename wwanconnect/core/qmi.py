"""
QMI modem control via qmicli.

Builds qmicli requests for a single control device. Responses are returned
as raw text: interpreting them is the job of the parsers.
"""

import logging
from typing import Optional

from .transport import CommandRunner, CommandResult
from ..types import IPFamily, OperatingMode, DataFormat

logger = logging.getLogger(__name__)


class QMIClient:
    """
    qmicli request builder for one control device.

    All requests go through the qmi-proxy so they can share the device with
    other QMI clients.
    """

    def __init__(
        self,
        runner: CommandRunner,
        device: str,
        qmicli: str = "qmicli"
    ) -> None:
        """
        Initialize QMI client.

        Args:
            runner: CommandRunner used to execute qmicli
            device: QMI control device path (e.g., /dev/wwan0qmi0)
            qmicli: qmicli executable name or path
        """
        self.runner = runner
        self.device = device
        self.qmicli = qmicli

        logger.info(f"Initialized QMI client for {device}")

    def request(self, *args: str) -> CommandResult:
        """
        Send a raw qmicli request.

        Args:
            args: qmicli options (e.g., "--dms-get-operating-mode")

        Returns:
            CommandResult with the textual response
        """
        argv = [self.qmicli, "-d", self.device, "--device-open-proxy", *args]
        logger.debug(f"QMI request: {' '.join(args)}")
        return self.runner.run(argv)

    def set_operating_mode(self, mode: OperatingMode = OperatingMode.ONLINE) -> CommandResult:
        """Request a DMS operating mode."""
        return self.request(f"--dms-set-operating-mode={mode.value}")

    def set_data_format(self, data_format: DataFormat = DataFormat.RAW_IP) -> CommandResult:
        """Request a WDA link-layer data format."""
        return self.request(f"--wda-set-data-format={data_format.value}")

    def start_network(
        self,
        apn: str,
        ip_type: IPFamily,
        no_release: bool = True
    ) -> CommandResult:
        """
        Request a packet-data session.

        Args:
            apn: Access Point Name
            ip_type: IP family selector
            no_release: Keep the WDS client allocated after qmicli exits, so
                        the session outlives the helper process
        """
        args = [f"--wds-start-network=apn={apn},ip-type={int(ip_type)}"]
        if no_release:
            args.append("--client-no-release-cid")
        return self.request(*args)

    def get_current_settings(self, ip_family: IPFamily) -> CommandResult:
        """Query the IP settings negotiated for the running session."""
        return self.request(f"--wds-get-current-settings=ip-family={int(ip_family)}")

    def stop_network(
        self,
        ip_family: IPFamily,
        flags: Optional[list[str]] = None
    ) -> CommandResult:
        """
        Stop the packet-data session.

        Args:
            ip_family: IP family of the session
            flags: Stop flags (default: ["disable-autoconnect"])
        """
        if flags is None:
            flags = ["disable-autoconnect"]
        value = ",".join([*flags, f"ip-family={int(ip_family)}"])
        return self.request(f"--wds-stop-network={value}")
