"""
Pytest configuration and fixtures.

Provides shared test fixtures for wwanconnect tests.
"""

import pytest
import logging

from wwanconnect.core import MockRunner
from wwanconnect import RunConfig, WWANConnection


# Enable logging for tests
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


START_OK = """\
[/dev/wwan0qmi0] Network started
\tPacket data handle: '2264924912'
[/dev/wwan0qmi0] Client ID not released:
\tService: 'wds'
\t    CID: '20'
"""

START_FAILED = """\
error: couldn't start network: QMI protocol error (14): 'CallFailed'
call end reason (3): generic-no-service
verbose call end reason (2,210): [cm] no-service
"""

SETTINGS_FULL = """\
[/dev/wwan0qmi0] Current settings retrieved:
           IP Family: IPv4
        IPv4 address: 10.134.203.177
    IPv4 subnet mask: 255.255.255.248
Primary IPv4 gateway: 10.134.203.178
    IPv4 primary DNS: 10.177.0.34
  IPv4 secondary DNS: 10.168.183.116
                 MTU: 1500
             Domains: none
"""

SETTINGS_NO_DNS = """\
[/dev/wwan0qmi0] Current settings retrieved:
        IPv4 address: 10.0.0.5
Primary IPv4 gateway: 10.0.0.1
"""

SETTINGS_NO_GATEWAY = """\
[/dev/wwan0qmi0] Current settings retrieved:
        IPv4 address: 10.0.0.5
    IPv4 primary DNS: 10.177.0.34
"""


@pytest.fixture
def mock_runner():
    """
    Create a MockRunner instance for testing.

    Example:
        def test_something(mock_runner):
            mock_runner.add_response(["qmicli", "--wds-start-network"], START_OK)
            # ... test code ...
    """
    return MockRunner()


@pytest.fixture
def resolv_conf(tmp_path):
    """Resolver file with pre-existing content."""
    path = tmp_path / "resolv.conf"
    path.write_text("nameserver 192.168.1.1\n")
    return path


@pytest.fixture
def config(resolv_conf):
    """RunConfig pointing at the temporary resolver file."""
    return RunConfig(
        device="/dev/wwan0qmi0",
        interface="wwan0",
        apn="web.o2.de",
        ip_type=4,
        ttl_hack=False,
        resolv_conf=str(resolv_conf),
        reset_delay=0
    )


@pytest.fixture
def connection(config, mock_runner):
    """
    Create a WWANConnection with MockRunner and a no-op sleep.

    Example:
        def test_connect(connection, mock_runner):
            mock_runner.add_response(["qmicli", "--wds-start-network"], START_OK)
            connection.connect()
    """
    return WWANConnection(config, runner=mock_runner, sleep=lambda seconds: None)


@pytest.fixture
def mock_start_ok():
    """Mock output for a successful --wds-start-network."""
    return START_OK


@pytest.fixture
def mock_settings_full():
    """Mock output for --wds-get-current-settings with DNS."""
    return SETTINGS_FULL
