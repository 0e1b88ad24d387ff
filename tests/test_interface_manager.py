"""
Tests for InterfaceManager.
"""

import pytest
from wwanconnect.core import IPRoute, ResolvConf, CommandResult
from wwanconnect.features import InterfaceManager
from wwanconnect.types import NetworkSettings
from wwanconnect.exceptions import NetworkApplyError, SettingsRetrievalError, CommandNotFoundError


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def interface(mock_runner, resolv_conf, sleeps):
    return InterfaceManager(
        IPRoute(mock_runner, "wwan0"),
        ResolvConf(str(resolv_conf)),
        reset_delay=1.0,
        sleep=sleeps.append
    )


@pytest.fixture
def settings():
    return NetworkSettings(
        ipv4_address="10.0.0.5",
        gateway="10.0.0.1",
        dns=["10.177.0.34", "10.168.183.116"]
    )


def test_reset(interface, mock_runner, sleeps):
    """Test link is cycled down, paused, and up."""
    interface.reset()

    assert mock_runner.calls == [
        ["ip", "link", "set", "wwan0", "down"],
        ["ip", "link", "set", "wwan0", "up"],
    ]
    assert sleeps == [1.0]


def test_reset_failures_are_tolerated(interface, mock_runner):
    """Test a missing interface does not abort the reset."""
    mock_runner.add_response(["ip", "link", "down"], 'Cannot find device "wwan0"\n', returncode=1)
    mock_runner.add_response(["ip", "link", "up"], 'Cannot find device "wwan0"\n', returncode=1)

    interface.reset()

    assert len(mock_runner.calls) == 2


def test_reset_missing_ip_is_tolerated(interface, mock_runner):
    """Test a missing ip binary does not abort the reset."""
    def missing(argv):
        raise CommandNotFoundError("Command not found: ip")

    mock_runner.set_handler("ip", missing)

    interface.reset()


def test_configure(interface, mock_runner, resolv_conf, settings):
    """Test address, MTU, route and DNS are applied in order."""
    interface.configure(settings)

    assert mock_runner.calls == [
        ["ip", "addr", "flush", "dev", "wwan0"],
        ["ip", "addr", "add", "10.0.0.5/24", "dev", "wwan0"],
        ["ip", "link", "set", "dev", "wwan0", "mtu", "1452"],
        ["ip", "route", "replace", "default", "via", "10.0.0.1", "dev", "wwan0"],
    ]
    assert resolv_conf.read_text() == "nameserver 10.177.0.34\nnameserver 10.168.183.116\n"


def test_configure_single_dns(interface, resolv_conf, settings):
    """Test a single DNS server replaces the whole file."""
    settings.dns = ["10.177.0.34"]

    interface.configure(settings)

    assert resolv_conf.read_text() == "nameserver 10.177.0.34\n"


def test_configure_without_dns_leaves_resolver(interface, resolv_conf, settings):
    """Test no DNS servers means the resolver file is not written."""
    settings.dns = []

    interface.configure(settings)

    assert resolv_conf.read_text() == "nameserver 192.168.1.1\n"


def test_flush_failure_is_tolerated(interface, mock_runner, settings):
    """Test a failed flush does not abort configuration."""
    mock_runner.add_response(["ip", "addr", "flush"], "error\n", returncode=1)

    interface.configure(settings)

    assert len(mock_runner.calls_for("ip", "route", "replace")) == 1


@pytest.mark.parametrize("pattern,step", [
    (["ip", "addr", "add"], "address"),
    (["ip", "link", "mtu"], "mtu"),
    (["ip", "route", "replace"], "route"),
])
def test_configure_step_failure(interface, mock_runner, resolv_conf, settings, pattern, step):
    """Test each mutating step reports which step failed."""
    mock_runner.add_response(pattern, "RTNETLINK answers: Operation not permitted\n", returncode=2)

    with pytest.raises(NetworkApplyError) as exc_info:
        interface.configure(settings)

    assert exc_info.value.step == step
    assert exc_info.value.response == "RTNETLINK answers: Operation not permitted\n"
    assert resolv_conf.read_text() == "nameserver 192.168.1.1\n"


@pytest.mark.parametrize("subcommand,step", [
    ("addr", "address"),
    ("link", "mtu"),
    ("route", "route"),
])
def test_configure_missing_ip_names_step(interface, mock_runner, resolv_conf, settings, subcommand, step):
    """Test a missing ip binary during configuration reports the failed step."""
    def missing(argv):
        if argv[1] == subcommand and "flush" not in argv:
            raise CommandNotFoundError("Command not found: ip", command=" ".join(argv))
        return CommandResult(argv=argv, returncode=0)

    mock_runner.set_handler("ip", missing)

    with pytest.raises(NetworkApplyError) as exc_info:
        interface.configure(settings)

    assert exc_info.value.step == step
    assert isinstance(exc_info.value.__cause__, CommandNotFoundError)
    assert resolv_conf.read_text() == "nameserver 192.168.1.1\n"


def test_configure_dns_failure(mock_runner, tmp_path, settings):
    """Test an unwritable resolver file reports the dns step."""
    interface = InterfaceManager(
        IPRoute(mock_runner, "wwan0"),
        ResolvConf(str(tmp_path / "missing" / "resolv.conf")),
        sleep=lambda seconds: None
    )

    with pytest.raises(NetworkApplyError) as exc_info:
        interface.configure(settings)

    assert exc_info.value.step == "dns"


def test_configure_refuses_unusable_settings(interface, mock_runner):
    """Test unusable settings never reach the interface."""
    settings = NetworkSettings(ipv4_address="10.0.0.5", gateway=None, raw_output="raw")

    with pytest.raises(SettingsRetrievalError):
        interface.configure(settings)

    assert mock_runner.calls == []


def test_deconfigure(interface, mock_runner):
    """Test teardown flushes and brings the link down."""
    interface.deconfigure()

    assert mock_runner.calls == [
        ["ip", "addr", "flush", "dev", "wwan0"],
        ["ip", "link", "set", "wwan0", "down"],
    ]


def test_show_status_strips_qdisc(interface, mock_runner):
    """Test status output without the qdisc line."""
    mock_runner.add_response(
        ["ip", "-4", "addr", "show"],
        "5: wwan0: <POINTOPOINT,UP,LOWER_UP> mtu 1452 qdisc fq_codel state UNKNOWN\n"
        "    inet 10.0.0.5/24 scope global wwan0\n"
    )

    assert interface.show_status() == "    inet 10.0.0.5/24 scope global wwan0"
