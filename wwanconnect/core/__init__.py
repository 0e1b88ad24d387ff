"""
Core infrastructure.

Provides low-level building blocks for bringing a WWAN link up:
- Transport: External command execution abstraction
- QMI: qmicli request builder
- Host: iproute2, iptables, modprobe, systemctl and resolver file wrappers
"""

from .transport import CommandRunner, CommandResult, SubprocessRunner, MockRunner
from .qmi import QMIClient
from .host import IPRoute, IPTables, KernelModules, Systemd, ResolvConf

__all__ = [
    "CommandRunner",
    "CommandResult",
    "SubprocessRunner",
    "MockRunner",
    "QMIClient",
    "IPRoute",
    "IPTables",
    "KernelModules",
    "Systemd",
    "ResolvConf",
]
