import pytest

import ospfnm.snmp
from fakes import FakeSession, reset_fake_session


@pytest.fixture
def fake_session(monkeypatch):
    reset_fake_session()
    monkeypatch.setattr(ospfnm.snmp, 'Session', FakeSession)
    yield FakeSession
    reset_fake_session()
