"""
Tests for SessionManager.
"""

import pytest
from wwanconnect.core import QMIClient
from wwanconnect.features import SessionManager
from wwanconnect.types import IPFamily, SessionResult, NetworkSettings
from wwanconnect.exceptions import SessionStartError, SettingsRetrievalError

from conftest import START_OK, START_FAILED, SETTINGS_FULL, SETTINGS_NO_GATEWAY


@pytest.fixture
def session(mock_runner):
    return SessionManager(QMIClient(mock_runner, "/dev/wwan0qmi0"), IPFamily.IPV4)


def test_start_session(session, mock_runner):
    """Test starting a data session."""
    mock_runner.add_response(["qmicli", "--wds-start-network"], START_OK)

    result = session.start_session("web.o2.de")

    assert isinstance(result, SessionResult)
    assert result.success is True
    assert result.handle == "2264924912"
    assert mock_runner.calls[0][-2:] == [
        "--wds-start-network=apn=web.o2.de,ip-type=4",
        "--client-no-release-cid",
    ]


def test_start_session_ignores_exit_status(session, mock_runner):
    """Test the marker wins over a non-zero exit status."""
    mock_runner.add_response(["qmicli", "--wds-start-network"], START_OK, returncode=1)

    result = session.start_session("web.o2.de")

    assert result.success is True


def test_start_session_failure(session, mock_runner):
    """Test a missing marker aborts even with exit status 0."""
    mock_runner.add_response(["qmicli", "--wds-start-network"], START_FAILED, returncode=0)

    with pytest.raises(SessionStartError) as exc_info:
        session.start_session("web.o2.de")

    assert exc_info.value.response == START_FAILED


def test_start_session_not_retried(session, mock_runner):
    """Test a failed start is attempted exactly once."""
    mock_runner.add_response(["qmicli", "--wds-start-network"], START_FAILED, returncode=1)

    with pytest.raises(SessionStartError):
        session.start_session("web.o2.de")

    assert len(mock_runner.calls_for("qmicli", "--wds-start-network")) == 1


def test_get_current_settings(session, mock_runner):
    """Test retrieving usable settings."""
    mock_runner.add_response(["qmicli", "--wds-get-current-settings"], SETTINGS_FULL)

    settings = session.get_current_settings()

    assert isinstance(settings, NetworkSettings)
    assert settings.ipv4_address == "10.134.203.177"
    assert settings.gateway == "10.134.203.178"
    assert settings.dns == ["10.177.0.34", "10.168.183.116"]
    assert mock_runner.calls[0][-1] == "--wds-get-current-settings=ip-family=4"


def test_get_current_settings_unusable(session, mock_runner):
    """Test missing gateway aborts with the full raw output."""
    mock_runner.add_response(["qmicli", "--wds-get-current-settings"], SETTINGS_NO_GATEWAY, returncode=0)

    with pytest.raises(SettingsRetrievalError) as exc_info:
        session.get_current_settings()

    assert exc_info.value.response == SETTINGS_NO_GATEWAY


def test_get_current_settings_command_failed(session, mock_runner):
    """Test a failed query aborts with its output."""
    output = "error: couldn't get current settings: QMI protocol error (15): 'OutOfCall'\n"
    mock_runner.add_response(["qmicli", "--wds-get-current-settings"], output, returncode=1)

    with pytest.raises(SettingsRetrievalError) as exc_info:
        session.get_current_settings()

    assert exc_info.value.response == output


def test_stop_session(session, mock_runner):
    """Test stopping the session."""
    assert session.stop_session() is True
    assert mock_runner.calls[0][-1] == "--wds-stop-network=disable-autoconnect,ip-family=4"


def test_stop_session_failure_is_tolerated(session, mock_runner):
    """Test a failed stop is only reported."""
    mock_runner.add_response(["qmicli", "--wds-stop-network"], "error: no session\n", returncode=1)

    assert session.stop_session() is False
