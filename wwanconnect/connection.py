"""
Main WWANConnection class.

User-facing API that runs the connection steps in order.
"""

import logging
import time
from typing import Callable, Optional

from .core import (
    CommandRunner,
    SubprocessRunner,
    QMIClient,
    IPRoute,
    IPTables,
    KernelModules,
    Systemd,
    ResolvConf,
)
from .features import ModeManager, SessionManager, InterfaceManager, TTLManager
from .types import RunConfig, NetworkSettings
from .exceptions import TransportError

logger = logging.getLogger(__name__)

CONFLICTING_SERVICE = "ModemManager.service"


class WWANConnection:
    """
    Brings one QMI modem online and routes traffic through it.

    The steps run strictly in order, once, without retries:

    - stop ModemManager (optional, best-effort)
    - mode: online + raw-IP (raw-IP is required)
    - interface: reset link (best-effort)
    - session: start data session (aborts on failure)
    - session: retrieve settings (aborts without address and gateway)
    - interface: apply address, MTU, route, DNS (aborts on failure)
    - ttl: TTL mangle rule (optional, skipped without kernel support)

    Example usage:

    .. code-block:: python

        config = RunConfig(device="/dev/wwan0qmi0", interface="wwan0", apn="internet")
        settings = WWANConnection(config).connect()
        print(f"Up with {settings.ipv4_address}")

    Example usage with individual steps:

    .. code-block:: python

        connection = WWANConnection(config)
        connection.mode.set_data_mode()
        connection.session.start_session(config.apn)
        print(connection.session.get_current_settings())
    """

    def __init__(
        self,
        config: RunConfig,
        runner: Optional[CommandRunner] = None,
        sleep: Callable[[float], None] = time.sleep
    ) -> None:
        """
        Initialize WWANConnection.

        Args:
            config: Run configuration
            runner: Custom command runner (for testing). Defaults to SubprocessRunner.
            sleep: Sleep function used by the interface reset (for testing)
        """
        if runner is None:
            runner = SubprocessRunner()

        self.config = config
        self.runner = runner
        self._systemd = Systemd(runner)

        qmi = QMIClient(runner, config.device)

        self.mode = ModeManager(qmi)
        self.session = SessionManager(qmi, config.ip_type)
        self.interface = InterfaceManager(
            IPRoute(runner, config.interface),
            ResolvConf(config.resolv_conf),
            reset_delay=config.reset_delay,
            sleep=sleep
        )
        self.ttl = TTLManager(
            IPTables(runner, table="mangle"),
            KernelModules(runner),
            config.interface
        )

        logger.info(f"Initialized WWANConnection for {config.device} ({config.interface})")

    def stop_conflicting_service(self) -> None:
        """Stop ModemManager so it does not fight over the modem (best-effort)."""
        logger.info("Stopping ModemManager (if running)")
        try:
            result = self._systemd.stop(CONFLICTING_SERVICE)
        except TransportError as e:
            logger.warning(f"Could not stop {CONFLICTING_SERVICE}: {e}")
            return

        if not result.ok:
            logger.debug(f"{CONFLICTING_SERVICE} not stopped: {result.output.strip()}")

    def connect(self) -> NetworkSettings:
        """
        Run the full connection sequence.

        Returns:
            The NetworkSettings applied to the interface

        Raises:
            ModemControlError: If raw-IP framing cannot be set
            SessionStartError: If the data session does not start
            SettingsRetrievalError: If address or gateway is missing
            NetworkApplyError: If applying a setting fails
            TransportError: If a required tool cannot be executed
        """
        if self.config.stop_modem_manager:
            self.stop_conflicting_service()

        self.mode.set_data_mode()
        self.interface.reset()
        self.session.start_session(self.config.apn)

        settings = self.session.get_current_settings()
        self.interface.configure(settings)

        if self.config.ttl_hack:
            self.ttl.apply()

        logger.info("Connection up!")
        status = self.interface.show_status()
        if status:
            logger.info(status)

        return settings

    def disconnect(self) -> None:
        """
        Stop the data session and deconfigure the interface.

        Every step is best-effort, so teardown always runs to completion.
        """
        self.session.stop_session()
        self.interface.deconfigure()
        logger.info("Connection down")

    def __repr__(self) -> str:
        """String representation of connection."""
        return (
            f"<WWANConnection device={self.config.device} "
            f"interface={self.config.interface} apn={self.config.apn}>"
        )
