"""
TTL manager.

Rewrites the TTL of outgoing packets on the WWAN interface so tethered
traffic looks like it originates from the modem host.
"""

import logging
from typing import TYPE_CHECKING

from ..types import TTL_VALUE
from ..exceptions import NetworkApplyError, TransportError

if TYPE_CHECKING:
    from ..core import IPTables, KernelModules

logger = logging.getLogger(__name__)

TTL_MODULE = "xt_TTL"
TTL_CHAIN = "POSTROUTING"


class TTLManager:
    """
    Manages the TTL mangle rule for one interface.
    """

    def __init__(
        self,
        iptables: "IPTables",
        modules: "KernelModules",
        interface: str,
        ttl: int = TTL_VALUE
    ) -> None:
        """
        Initialize TTL manager.

        Args:
            iptables: IPTables bound to the mangle table
            modules: KernelModules used to load xt_TTL
            interface: Outgoing interface to match
            ttl: TTL value to set
        """
        self.iptables = iptables
        self.modules = modules
        self.interface = interface
        self.ttl = ttl

    @property
    def rule(self) -> list[str]:
        """Rule specification (without table and chain)."""
        return ["-o", self.interface, "-j", "TTL", "--ttl-set", str(self.ttl)]

    def load_module(self) -> bool:
        """Load the TTL target module; False if it is unavailable."""
        try:
            result = self.modules.load(TTL_MODULE)
        except TransportError as e:
            logger.warning(f"Cannot load {TTL_MODULE}: {e}")
            return False

        return result.ok

    def apply(self) -> bool:
        """
        Insert the TTL rule unless it is already present.

        A missing kernel module is not an error: the rule is skipped.

        Returns:
            True if the rule is in place, False if skipped

        Raises:
            NetworkApplyError: If iptables rejects the rule

        Example:

        .. code-block:: python

            if not connection.ttl.apply():
                print("TTL rule skipped")
        """
        logger.info("Applying tether-TTL rule")

        if not self.load_module():
            logger.warning(f"{TTL_MODULE} module missing, skipping TTL rule")
            return False

        try:
            if self.iptables.rule_exists(TTL_CHAIN, self.rule):
                logger.info("TTL rule already present")
                return True

            result = self.iptables.append_rule(TTL_CHAIN, self.rule)
        except TransportError as e:
            logger.error(f"Failed to append TTL rule: {e}")
            raise NetworkApplyError(
                f"Failed to append TTL rule: {e}",
                step="ttl",
                command=e.command
            ) from e

        if not result.ok:
            logger.error("Failed to append TTL rule")
            raise NetworkApplyError(
                "Failed to append TTL rule",
                step="ttl",
                command=result.command_line,
                response=result.output
            )

        return True
