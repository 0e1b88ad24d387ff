"""
Step-by-step example.

Runs the modem-side steps one at a time without touching the host network,
useful to check that a SIM and APN work before installing the service.
"""

from wwanconnect import RunConfig, WWANConnection

# Replace with your device and APN
DEVICE = "/dev/wwan0qmi0"
APN = "web.o2.de"


def main():
    """Main function."""
    connection = WWANConnection(RunConfig(device=DEVICE, apn=APN))

    print("=== Modem ===")
    connection.mode.set_data_mode()
    print("Online, raw-IP")

    print("\n=== Session ===")
    result = connection.session.start_session(APN)
    print(f"Packet data handle: {result.handle}")

    print("\n=== Settings ===")
    settings = connection.session.get_current_settings()
    print(f"IPv4 address: {settings.ipv4_address}")
    print(f"Gateway: {settings.gateway}")
    for server in settings.dns:
        print(f"DNS: {server}")

    connection.session.stop_session()
    print("\nSession stopped.")


if __name__ == "__main__":
    main()
