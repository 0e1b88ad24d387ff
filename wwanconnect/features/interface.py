"""
Interface manager.

Resets the WWAN interface and applies retrieved network settings to it.
"""

import logging
import time
from typing import TYPE_CHECKING, Callable, Optional

from ..types import NetworkSettings, MTU
from ..exceptions import NetworkApplyError, SettingsRetrievalError, TransportError

if TYPE_CHECKING:
    from ..core import IPRoute, ResolvConf, CommandResult

logger = logging.getLogger(__name__)


class InterfaceManager:
    """
    Manages the kernel network interface of the modem.

    Link resets are best-effort. Configuration steps change host state, so
    every failure there is raised as NetworkApplyError.
    """

    def __init__(
        self,
        iproute: "IPRoute",
        resolv_conf: "ResolvConf",
        reset_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep
    ) -> None:
        """
        Initialize interface manager.

        Args:
            iproute: IPRoute bound to the interface
            resolv_conf: Resolver file to overwrite with retrieved DNS servers
            reset_delay: Seconds between link down and link up
            sleep: Sleep function (injectable for tests)
        """
        self.iproute = iproute
        self.resolv_conf = resolv_conf
        self.reset_delay = reset_delay
        self._sleep = sleep

        logger.debug(f"Initialized InterfaceManager for {iproute.interface}")

    @property
    def interface(self) -> str:
        return self.iproute.interface

    def _best_effort(self, action: str, call: Callable[[], "CommandResult"]) -> bool:
        try:
            result = call()
        except TransportError as e:
            logger.warning(f"{action} failed: {e}")
            return False

        if not result.ok:
            logger.warning(f"{action} failed: {result.output.strip()}")
            return False

        return True

    def reset(self) -> None:
        """
        Cycle the interface down and up to clear stale kernel state.

        Both steps are best-effort: the interface may not exist yet at boot,
        or may already be in the target state.
        """
        logger.info(f"Resetting {self.interface}")
        self._best_effort(f"Bringing {self.interface} down", lambda: self.iproute.link_set(up=False))
        self._sleep(self.reset_delay)
        self._best_effort(f"Bringing {self.interface} up", lambda: self.iproute.link_set(up=True))

    def _apply(self, step: str, call: Callable[[], "CommandResult"]) -> None:
        try:
            result = call()
        except TransportError as e:
            logger.error(f"Failed to apply {step} on {self.interface}: {e}")
            raise NetworkApplyError(
                f"Failed to apply {step} on {self.interface}: {e}",
                step=step,
                command=e.command
            ) from e

        if not result.ok:
            logger.error(f"Failed to apply {step} on {self.interface}")
            raise NetworkApplyError(
                f"Failed to apply {step} on {self.interface}",
                step=step,
                command=result.command_line,
                response=result.output
            )

    def configure(self, settings: NetworkSettings) -> None:
        """
        Apply address, MTU, default route and DNS to the interface.

        Args:
            settings: Usable settings from SessionManager.get_current_settings

        Raises:
            SettingsRetrievalError: If settings lack an address or gateway
            NetworkApplyError: If any configuration step fails

        Example:

        .. code-block:: python

            settings = connection.session.get_current_settings()
            connection.interface.configure(settings)
        """
        if not settings.is_usable:
            raise SettingsRetrievalError(
                "Refusing to configure interface without address and gateway",
                response=settings.raw_output
            )

        logger.info(f"Configuring {settings.cidr} on {self.interface}")
        self._best_effort(f"Flushing addresses on {self.interface}", self.iproute.addr_flush)
        self._apply("address", lambda: self.iproute.addr_add(settings.cidr))

        logger.info(f"Setting MTU {MTU}")
        self._apply("mtu", lambda: self.iproute.set_mtu(MTU))

        logger.info(f"Adding default route via {settings.gateway}")
        self._apply("route", lambda: self.iproute.route_replace_default(settings.gateway))

        self.write_dns(settings.dns)

    def write_dns(self, servers: list[str]) -> bool:
        """
        Overwrite the resolver file with the given DNS servers.

        The file is left untouched when no server was retrieved.

        Returns:
            True if the file was written

        Raises:
            NetworkApplyError: If the file cannot be written
        """
        if not servers:
            logger.info("No DNS servers retrieved, leaving resolver configuration untouched")
            return False

        logger.info(f"Writing DNS servers to {self.resolv_conf.path}")
        try:
            self.resolv_conf.write(servers)
        except OSError as e:
            logger.error(f"Failed to write {self.resolv_conf.path}: {e}")
            raise NetworkApplyError(
                f"Failed to write {self.resolv_conf.path}: {e}",
                step="dns"
            ) from e

        return True

    def deconfigure(self) -> None:
        """Flush addresses and bring the interface down (best-effort)."""
        logger.info(f"Deconfiguring {self.interface}")
        self._best_effort(f"Flushing addresses on {self.interface}", self.iproute.addr_flush)
        self._best_effort(f"Bringing {self.interface} down", lambda: self.iproute.link_set(up=False))

    def show_status(self) -> Optional[str]:
        """
        Get the IPv4 address listing of the interface.

        Returns:
            Address listing without qdisc lines, or None if unavailable
        """
        try:
            result = self.iproute.addr_show()
        except TransportError as e:
            logger.warning(f"Could not show {self.interface} status: {e}")
            return None

        if not result.ok:
            return None

        lines = [line for line in result.output.splitlines() if "qdisc" not in line]
        return "\n".join(lines)
