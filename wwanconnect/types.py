"""
Data types and structures for wwanconnect.

Provides typed representations of the run configuration and of the values
parsed from modem output.
"""

from dataclasses import dataclass, field
from enum import IntEnum, Enum
from typing import Optional

from .exceptions import ConfigError

# Leaves headroom for encapsulation overhead versus the standard 1500
MTU = 1452

# The carrier's real prefix is not queried
PREFIX_LENGTH = 24

TTL_VALUE = 65


class IPFamily(IntEnum):
    """IP type selector for session start and settings queries."""
    IPV4V6 = 0
    IPV4 = 4
    IPV6 = 6


class OperatingMode(Enum):
    """Modem operating modes (DMS)."""
    ONLINE = "online"
    LOW_POWER = "low-power"
    OFFLINE = "offline"


class DataFormat(Enum):
    """Link-layer data formats (WDA)."""
    RAW_IP = "raw-ip"
    ETHERNET = "802-3"


@dataclass(frozen=True)
class RunConfig:
    """
    Immutable parameters for one connection run.

    Attributes:
        device: QMI control device (e.g., "/dev/wwan0qmi0")
        interface: Network interface provided by the kernel (e.g., "wwan0")
        apn: Access Point Name, unauthenticated
        ip_type: IP family selector (4, 6 or 0)
        ttl_hack: Apply the TTL-65 mangle rule
        stop_modem_manager: Stop ModemManager before touching the modem
        resolv_conf: Resolver configuration file to overwrite
        reset_delay: Seconds to wait between interface down and up
    """
    device: str = "/dev/wwan0qmi0"
    interface: str = "wwan0"
    apn: str = "web.o2.de"
    ip_type: int = IPFamily.IPV4
    ttl_hack: bool = False
    stop_modem_manager: bool = True
    resolv_conf: str = "/etc/resolv.conf"
    reset_delay: float = 1.0

    def __post_init__(self) -> None:
        if not self.apn:
            raise ConfigError("APN must not be empty")

        try:
            family = IPFamily(int(self.ip_type))
        except ValueError as e:
            raise ConfigError(
                f"Invalid IP type {self.ip_type!r} (expected 4, 6 or 0)"
            ) from e

        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "ip_type", family)


@dataclass
class SessionResult:
    """Outcome of a data-session start request."""
    success: bool
    raw_output: str
    handle: Optional[str] = None   # Packet data handle, informational


@dataclass
class NetworkSettings:
    """
    IPv4 settings negotiated during session start.

    Settings without an address or gateway are unusable and must never be
    applied to the interface.
    """
    ipv4_address: Optional[str] = None
    gateway: Optional[str] = None
    dns: list[str] = field(default_factory=list)   # Primary first, at most 2
    raw_output: str = field(default="", repr=False)

    @property
    def is_usable(self) -> bool:
        """Check if both address and gateway were retrieved."""
        return bool(self.ipv4_address) and bool(self.gateway)

    @property
    def cidr(self) -> str:
        """Address with the fixed prefix length (e.g., "10.0.0.5/24")."""
        return f"{self.ipv4_address}/{PREFIX_LENGTH}"
