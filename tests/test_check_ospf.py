import threading

from easysnmp import EasySNMPConnectionError, EasySNMPTimeoutError

import check_ospf
from fakes import SNMPVariable, nbr_state
from ospfnm.snmp import open_session
from ospfnm.watchdog import Deadline


def run(capsys, argv):
    status = check_ospf.main(argv)
    return status, capsys.readouterr().out


def test_all_neighbors_up(fake_session, capsys):
    fake_session.rows = [nbr_state('10.0.0.1', 4), nbr_state('10.0.0.2', 8)]

    status, out = run(capsys, ['-H', 'router1', '-C', 'public'])

    assert status == 0
    assert out == 'OK: 2 neighbors OK.\n10.0.0.1\ttwoWay\n10.0.0.2\tfull\n'


def test_down_neighbor_is_critical(fake_session, capsys):
    fake_session.rows = [nbr_state('10.0.0.1', 1), nbr_state('10.0.0.2', 4)]

    status, out = run(capsys, ['-H', 'router1', '-C', 'public'])

    assert status == 2
    assert out.startswith('CRITICAL: 1 neighbor CRITICAL, 1 neighbor OK.\n')


def test_neighbor_in_init_is_warning(fake_session, capsys):
    fake_session.rows = [nbr_state('10.0.0.1', 3)]

    status, out = run(capsys, ['-H', 'router1', '-C', 'public'])

    assert status == 1
    assert out.splitlines()[0] == 'WARNING: 1 neighbor WARNING.'


def test_no_neighbors_is_ok(fake_session, capsys):
    status, out = run(capsys, ['-H', 'router1', '-C', 'public'])

    assert status == 0
    assert out == 'OK\n'


def test_session_failure_is_unknown(monkeypatch, capsys):
    def refuse(**kwargs):
        raise EasySNMPConnectionError('unknown user name')

    monkeypatch.setattr('ospfnm.snmp.Session', refuse)

    status, out = run(capsys, ['-H', 'router1', '-l', 'nagios', '-x', 'wrong'])

    assert status == 3
    assert out == 'UNKNOWN: ERROR opening session: unknown user name.\n'


def test_fetch_failure_is_unknown(fake_session, capsys):
    fake_session.error = EasySNMPTimeoutError('timed out while connecting to remote host')

    status, out = run(capsys, ['-H', 'router1', '-C', 'public'])

    assert status == 3
    assert out == 'UNKNOWN: ERROR: timed out while connecting to remote host\n'


def test_watchdog_timeout(monkeypatch, capsys):
    release = threading.Event()

    def stuck(config, deadline):
        release.wait(5)

    monkeypatch.setattr(check_ospf, 'arm', lambda timeout: Deadline(0.05))
    monkeypatch.setattr(check_ospf, 'run_probe', stuck)
    try:
        status, out = run(capsys, ['-H', 'router1', '-C', 'public'])
    finally:
        release.set()

    assert status == 3
    assert out == 'UNKNOWN: Script timed out\n'


def test_bad_options_are_unknown(capsys):
    status, out = run(capsys, ['-H', 'router1'])

    assert status == 3
    assert out == 'UNKNOWN: Put SNMP login info!\n'


def test_non_integer_state_counts_as_unknown(fake_session, capsys):
    fake_session.rows = [
        nbr_state('10.0.0.1', 8),
        SNMPVariable('.1.3.6.1.2.1.14.10.1.6.10.0.0.2.0', '', 'garbage', 'OCTETSTR'),
    ]

    status, out = run(capsys, ['-H', 'router1', '-C', 'public'])

    assert status == 3
    assert out == 'UNKNOWN: 1 neighbor OK, 1 neighbor UNKNOWN.\n10.0.0.1\tfull\n10.0.0.2\tunknown(garbage)\n'


def test_unexpected_error_is_unknown_without_traceback(monkeypatch, capsys):
    def broken(**kwargs):
        raise SystemError('error return without exception set')

    monkeypatch.setattr('ospfnm.snmp.Session', broken)

    status, out = run(capsys, ['-H', 'router1', '-C', 'public'])

    assert status == 3
    assert out == 'UNKNOWN: ERROR: SystemError: error return without exception set\n'


def test_timeout_closes_session_before_reporting(fake_session, monkeypatch, capsys):
    opened = []

    def recording_open_session(config, deadline=None):
        session = open_session(config, deadline)
        opened.append(session)
        return session

    release = threading.Event()
    fake_session.blocker = release
    monkeypatch.setattr(check_ospf, 'arm', lambda timeout: Deadline(0.2))
    monkeypatch.setattr('ospfnm.probe.open_session', recording_open_session)
    try:
        status, out = run(capsys, ['-H', 'router1', '-C', 'public'])
        assert status == 3
        assert out == 'UNKNOWN: Script timed out\n'
        assert len(opened) == 1
        assert opened[0].closed
    finally:
        release.set()
