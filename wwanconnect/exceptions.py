"""
Exceptions for wwanconnect.

Every exception keeps the command line and the raw tool output it acted on,
so an operator can diagnose a carrier-side or device-side problem from a
single failed run.
"""

from typing import Optional


class WWANError(Exception):
    """
    Base exception for WWAN connection errors.

    All wwanconnect exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        response: Optional[str] = None
    ) -> None:
        """
        Initialize exception with context.

        Args:
            message: Error description
            command: Command line that caused the error (if applicable)
            response: Raw command output (if applicable)
        """
        self.command = command
        self.response = response
        super().__init__(message)

    def __str__(self) -> str:
        """Format error message with context."""
        parts = [super().__str__()]

        if self.command:
            parts.append(f"Command: {self.command}")

        return " | ".join(parts)


class ConfigError(WWANError):
    """
    Raised when the run configuration is invalid.

    This indicates:
    - Empty APN
    - IP type other than 4, 6 or 0
    """
    pass


class TransportError(WWANError):
    """
    Raised when an external command cannot be executed at all.
    """
    pass


class CommandNotFoundError(TransportError):
    """
    Raised when the executable for a command is not installed.
    """
    pass


class ModemControlError(WWANError):
    """
    Raised when a required modem control request fails.

    Raw-IP framing is mandatory, so a failed data-format request ends the run.
    """
    pass


class SessionStartError(WWANError):
    """
    Raised when the modem does not report a started data session.
    """
    pass


class SettingsRetrievalError(WWANError):
    """
    Raised when the current settings lack an IPv4 address or gateway.

    No host-side mutation happens after this error.
    """
    pass


class NetworkApplyError(WWANError):
    """
    Raised when applying a setting to the host network stack fails.

    The ``step`` attribute names the failed sub-step
    (``address``, ``mtu``, ``route``, ``dns`` or ``ttl``).
    """

    def __init__(
        self,
        message: str,
        step: str,
        command: Optional[str] = None,
        response: Optional[str] = None
    ) -> None:
        self.step = step
        super().__init__(message, command=command, response=response)

    def __str__(self) -> str:
        return f"[{self.step}] {super().__str__()}"
