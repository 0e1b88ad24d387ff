"""
Connection example.

Brings the WWAN link up with explicit settings and prints what was applied.
Must run as root.
"""

import logging

from wwanconnect import RunConfig, WWANConnection, WWANError

# Replace with your device and APN
DEVICE = "/dev/wwan0qmi0"
INTERFACE = "wwan0"
APN = "web.o2.de"


def main():
    """Main function."""
    logging.basicConfig(level=logging.INFO, format="[*] %(message)s")

    config = RunConfig(device=DEVICE, interface=INTERFACE, apn=APN, ttl_hack=False)
    connection = WWANConnection(config)

    try:
        settings = connection.connect()
    except WWANError as e:
        print(f"Connection failed: {e}")
        if e.response:
            print(e.response)
        return 1

    print("\n=== Applied Settings ===")
    print(f"Address: {settings.cidr}")
    print(f"Gateway: {settings.gateway}")
    print(f"DNS: {', '.join(settings.dns) or 'unchanged'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
