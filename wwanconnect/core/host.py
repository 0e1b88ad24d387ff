"""
Host-side collaborators.

Thin wrappers around the host network stack (iproute2), the firewall
(iptables, kernel modules), the resolver file and the service manager.
Each call returns the CommandResult; deciding whether a failure is fatal is
left to the feature managers.
"""

import logging
from pathlib import Path
from typing import Sequence

from .transport import CommandRunner, CommandResult

logger = logging.getLogger(__name__)


class IPRoute:
    """iproute2 operations on a single interface."""

    def __init__(self, runner: CommandRunner, interface: str) -> None:
        self.runner = runner
        self.interface = interface

    def link_set(self, up: bool) -> CommandResult:
        """Set the interface administratively up or down."""
        state = "up" if up else "down"
        return self.runner.run(["ip", "link", "set", self.interface, state])

    def addr_flush(self) -> CommandResult:
        """Remove all addresses from the interface."""
        return self.runner.run(["ip", "addr", "flush", "dev", self.interface])

    def addr_add(self, cidr: str) -> CommandResult:
        """Add an address in CIDR notation (e.g., "10.0.0.5/24")."""
        return self.runner.run(["ip", "addr", "add", cidr, "dev", self.interface])

    def set_mtu(self, mtu: int) -> CommandResult:
        """Set the interface MTU."""
        return self.runner.run(["ip", "link", "set", "dev", self.interface, "mtu", str(mtu)])

    def route_replace_default(self, gateway: str) -> CommandResult:
        """Create or overwrite the default route via gateway on this interface."""
        return self.runner.run(
            ["ip", "route", "replace", "default", "via", gateway, "dev", self.interface]
        )

    def addr_show(self) -> CommandResult:
        """Show the IPv4 addresses of the interface."""
        return self.runner.run(["ip", "-4", "addr", "show", "dev", self.interface])


class IPTables:
    """iptables rule checks and inserts for one table."""

    def __init__(self, runner: CommandRunner, table: str = "mangle") -> None:
        self.runner = runner
        self.table = table

    def rule_exists(self, chain: str, rule: Sequence[str]) -> bool:
        """Check if a rule is already present in chain."""
        result = self.runner.run(["iptables", "-t", self.table, "-C", chain, *rule])
        return result.ok

    def append_rule(self, chain: str, rule: Sequence[str]) -> CommandResult:
        """Append a rule to chain."""
        return self.runner.run(["iptables", "-t", self.table, "-A", chain, *rule])


class KernelModules:
    """Kernel module loading via modprobe."""

    def __init__(self, runner: CommandRunner) -> None:
        self.runner = runner

    def load(self, module: str) -> CommandResult:
        """Load a kernel module (no-op if already loaded)."""
        return self.runner.run(["modprobe", module])


class Systemd:
    """Service manager operations via systemctl."""

    def __init__(self, runner: CommandRunner) -> None:
        self.runner = runner

    def stop(self, unit: str) -> CommandResult:
        """Stop a unit."""
        return self.runner.run(["systemctl", "stop", unit])


class ResolvConf:
    """
    Resolver configuration file.

    The file is overwritten, never appended to.
    """

    def __init__(self, path: str = "/etc/resolv.conf") -> None:
        self.path = Path(path)

    def write(self, servers: Sequence[str]) -> None:
        """
        Overwrite the file with one nameserver line per server.

        Raises:
            OSError: If the file cannot be written
        """
        content = "".join(f"nameserver {server}\n" for server in servers)
        self.path.write_text(content, encoding="utf-8")
        logger.debug(f"Wrote {len(servers)} nameserver(s) to {self.path}")
