"""
Current settings response parser.
"""

import logging

from .base import ResponseParser, word_after_label
from ..types import NetworkSettings

logger = logging.getLogger(__name__)

ADDRESS_LABELS = ("IPv4 address",)
GATEWAY_LABELS = ("Primary IPv4 gateway", "IPv4 gateway address")
PRIMARY_DNS_LABELS = ("IPv4 primary DNS",)
SECONDARY_DNS_LABELS = ("IPv4 secondary DNS",)


class NetworkSettingsParser(ResponseParser[NetworkSettings]):
    """Parser for qmicli --wds-get-current-settings output."""

    def parse(self, text: str) -> NetworkSettings:
        """
        Parse --wds-get-current-settings output.

        Missing lines leave the field empty; usability is checked by the
        caller via NetworkSettings.is_usable.

        Expected format:
            [/dev/wwan0qmi0] Current settings retrieved:
                       IP Family: IPv4
                    IPv4 address: 10.134.203.177
                IPv4 subnet mask: 255.255.255.248
            IPv4 gateway address: 10.134.203.178
                IPv4 primary DNS: 10.177.0.34
              IPv4 secondary DNS: 10.168.183.116
                             MTU: 1500
        """
        address = word_after_label(text, ADDRESS_LABELS)
        gateway = word_after_label(text, GATEWAY_LABELS)

        dns = []
        for labels in (PRIMARY_DNS_LABELS, SECONDARY_DNS_LABELS):
            server = word_after_label(text, labels)
            if server:
                dns.append(server)

        settings = NetworkSettings(
            ipv4_address=address,
            gateway=gateway,
            dns=dns,
            raw_output=text
        )
        logger.debug(f"Parsed settings: {settings}")
        return settings
