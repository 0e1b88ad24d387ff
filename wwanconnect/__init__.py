"""
wwanconnect - bring a QMI cellular modem online and route traffic through it.
"""

from .version import __version__
from .connection import WWANConnection

from .types import (
    RunConfig,
    SessionResult,
    NetworkSettings,
    IPFamily,
    OperatingMode,
    DataFormat,
)

from .exceptions import (
    WWANError,
    ConfigError,
    TransportError,
    CommandNotFoundError,
    ModemControlError,
    SessionStartError,
    SettingsRetrievalError,
    NetworkApplyError,
)

__all__ = [
    "__version__",
    "WWANConnection",
    "RunConfig",
    "SessionResult",
    "NetworkSettings",
    "IPFamily",
    "OperatingMode",
    "DataFormat",
    "WWANError",
    "ConfigError",
    "TransportError",
    "CommandNotFoundError",
    "ModemControlError",
    "SessionStartError",
    "SettingsRetrievalError",
    "NetworkApplyError",
]
