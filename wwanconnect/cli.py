"""
Command line interface for wwanconnect.

Brings the WWAN link up or down, shows the negotiated settings, and prints a
systemd unit that runs the connection at boot.
"""

import argparse
import logging
import os
import shlex
import shutil
import sys
from typing import Optional

from .connection import WWANConnection
from .version import __version__
from .types import RunConfig
from .exceptions import WWANError

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

UNIT_TEMPLATE = """\
[Unit]
Description=LTE auto-connect via WWAN modem ({interface})
After=network.target
Wants=network-online.target

[Service]
Type=oneshot
RemainAfterExit=yes
ExecStart={exec_start}
ExecStop={exec_stop}
TimeoutSec=60

[Install]
WantedBy=multi-user.target
"""


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "yes", "true", "on")


def warn(message: str) -> None:
    """Print a diagnostic line to stderr."""
    print(f"[!] {message}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser; defaults come from the environment."""
    parser = argparse.ArgumentParser(
        prog="wwan-connect",
        description="Bring a QMI WWAN modem online and route traffic through it",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wwan-connect up
  wwan-connect up --apn internet --ttl-hack
  wwan-connect settings -d /dev/cdc-wdm0
  wwan-connect unit > /etc/systemd/system/wwan-connect.service

Environment:
  WWAN_DEV, IFACE, APN, IPTYPE, TTL_HACK, STOP_MODEMMANAGER, RESOLV_CONF
        """
    )

    parser.add_argument(
        "command",
        choices=["up", "down", "settings", "unit"],
        help="up: connect, down: disconnect, settings: show current settings, "
             "unit: print a systemd service unit"
    )
    parser.add_argument(
        "-d", "--device",
        default=os.environ.get("WWAN_DEV", "/dev/wwan0qmi0"),
        help="QMI control device (default: $WWAN_DEV or /dev/wwan0qmi0)"
    )
    parser.add_argument(
        "-i", "--interface",
        default=os.environ.get("IFACE", "wwan0"),
        help="Network interface (default: $IFACE or wwan0)"
    )
    parser.add_argument(
        "-a", "--apn",
        default=os.environ.get("APN", "web.o2.de"),
        help="Access Point Name (default: $APN or web.o2.de)"
    )
    parser.add_argument(
        "-t", "--ip-type",
        type=int,
        choices=[4, 6, 0],
        default=os.environ.get("IPTYPE", "4"),
        help="4 = IPv4, 6 = IPv6, 0 = v4v6 (default: $IPTYPE or 4)"
    )
    parser.add_argument(
        "--ttl-hack",
        action="store_true",
        default=_env_flag("TTL_HACK", "0"),
        help="Apply the TTL-65 mangle rule (needs xt_TTL)"
    )
    parser.add_argument(
        "--keep-modem-manager",
        dest="stop_modem_manager",
        action="store_false",
        default=_env_flag("STOP_MODEMMANAGER", "1"),
        help="Do not stop ModemManager before connecting"
    )
    parser.add_argument(
        "--resolv-conf",
        default=os.environ.get("RESOLV_CONF", "/etc/resolv.conf"),
        help="Resolver file to overwrite (default: $RESOLV_CONF or /etc/resolv.conf)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def render_unit(args: argparse.Namespace) -> str:
    """Render a systemd one-shot unit running this command with the same options."""
    options = [
        "--device", args.device,
        "--interface", args.interface,
        "--apn", args.apn,
        "--ip-type", str(args.ip_type),
        "--resolv-conf", args.resolv_conf,
    ]
    if args.ttl_hack:
        options.append("--ttl-hack")
    if not args.stop_modem_manager:
        options.append("--keep-modem-manager")

    executable = shutil.which("wwan-connect") or os.path.abspath(sys.argv[0])
    return UNIT_TEMPLATE.format(
        interface=args.interface,
        exec_start=shlex.join([executable, "up", *options]),
        exec_stop=shlex.join([executable, "down", *options])
    )


def run(args: argparse.Namespace, connection: Optional[WWANConnection] = None) -> int:
    """
    Execute a parsed command.

    Args:
        args: Parsed arguments
        connection: Pre-built connection (for testing)

    Returns:
        Process exit code
    """
    if args.command == "unit":
        print(render_unit(args), end="")
        return EXIT_OK

    try:
        if connection is None:
            config = RunConfig(
                device=args.device,
                interface=args.interface,
                apn=args.apn,
                ip_type=args.ip_type,
                ttl_hack=args.ttl_hack,
                stop_modem_manager=args.stop_modem_manager,
                resolv_conf=args.resolv_conf
            )
            connection = WWANConnection(config)

        if args.command == "up":
            settings = connection.connect()
            print(f"Connected: {settings.cidr} via {settings.gateway}")

        elif args.command == "down":
            connection.disconnect()

        elif args.command == "settings":
            settings = connection.session.get_current_settings()
            print(f"IPv4 address: {settings.ipv4_address}")
            print(f"Gateway: {settings.gateway}")
            print(f"DNS: {', '.join(settings.dns) if settings.dns else 'none'}")

    except WWANError as e:
        warn(str(e))
        if e.response:
            print(e.response.rstrip("\n"), file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        warn("Interrupted")
        return EXIT_INTERRUPTED

    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)

    # Setup logging
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
    else:
        logging.basicConfig(
            level=logging.INFO,
            format='[*] %(message)s'
        )

    return run(args)


if __name__ == "__main__":
    sys.exit(main())
