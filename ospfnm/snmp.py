#
# @descr    SNMP session negotiation and table walking
#

import logging
from collections import namedtuple

from easysnmp import Session, EasySNMPError

from ospfnm.config import has_v3_credentials

# Net-SNMP transport retries per request
DEFAULT_RETRIES = 1

# Values a walk hands back when the agent has nothing under the requested oid
end_of_table_types = ['NOSUCHOBJECT', 'NOSUCHINSTANCE', 'ENDOFMIBVIEW']

RawEntry = namedtuple('RawEntry', ['oid', 'value'])

_LOGGER = logging.getLogger(__name__)


class SessionError(Exception):
    pass


class FetchError(Exception):
    pass


# Wraps one easysnmp session, usable for exactly one walk
class ProbeSession(object):

    def __init__(self, session, version):
        self._session = session
        self.version = version

    @property
    def closed(self):
        return self._session is None

    def walk(self, oid):
        if self._session is None:
            raise FetchError('Session already closed')
        if self.version == 1:
            # SNMPv1 has no GETBULK
            return self._session.walk(oid)
        return self._session.bulkwalk(oid)

    # Dropping the handle releases the Net-SNMP session struct
    def close(self):
        self._session = None


def peername(config):
    if config.ipv6:
        return 'udp6:[{}]:{}'.format(config.host.strip('[]'), config.port)
    return 'udp:{}:{}'.format(config.host, config.port)


def transport_retries(config, deadline=None):
    if deadline is None:
        return DEFAULT_RETRIES
    attempts = int(deadline.remaining() // config.timeout)
    return max(0, min(DEFAULT_RETRIES, attempts - 1))


# Picks the SNMP version and security settings, first match wins
def session_options(config):
    if has_v3_credentials(config):
        options = {
            'version': 3,
            'security_username': config.login,
            'auth_protocol': config.auth_protocol.upper(),
            'auth_password': config.passwd,
        }
        if config.privpass is None:
            _LOGGER.debug("SNMPv3 AuthNoPriv login : %s, %s", config.login, config.auth_protocol)
            options['security_level'] = 'auth_without_privacy'
        else:
            _LOGGER.debug("SNMPv3 AuthPriv login : %s, %s, %s",
                          config.login, config.auth_protocol, config.priv_protocol)
            options['security_level'] = 'auth_with_privacy'
            options['privacy_protocol'] = config.priv_protocol.upper()
            options['privacy_password'] = config.privpass
        return options
    if config.use_v2c or not config.use_v1:
        _LOGGER.debug("SNMP v2c login")
        return {'version': 2, 'community': config.community}
    _LOGGER.debug("SNMP v1 login")
    return {'version': 1, 'community': config.community}


def open_session(config, deadline=None):
    options = session_options(config)
    try:
        session = Session(
            hostname=peername(config),
            timeout=config.timeout,
            retries=transport_retries(config, deadline),
            use_numeric=True,
            **options
        )
    except (EasySNMPError, ValueError) as err:
        raise SessionError(str(err))
    probe_session = ProbeSession(session, options['version'])
    if deadline is not None:
        deadline.on_cancel(probe_session.close)
    return probe_session


# Integer state, or the raw value when the agent sent something else
def state_value(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        _LOGGER.warning("Non-integer neighbor state %r", value)
        return value


# Full dotted oid of a walked variable, without the leading dot
def variable_oid(var):
    oid = var.oid
    if var.oid_index:
        oid = '{}.{}'.format(oid, var.oid_index)
    return oid.lstrip('.')


# Walks the subtree under base_oid. The session is always closed on the way out.
def fetch_table(session, base_oid, deadline=None):
    try:
        if deadline is not None:
            deadline.check()
        try:
            rawdata = session.walk('.' + base_oid)
        except EasySNMPError as err:
            raise FetchError(str(err))
        if deadline is not None:
            deadline.check()

        entries = []
        for var in rawdata:
            if var.snmp_type in end_of_table_types:
                continue
            oid = variable_oid(var)
            _LOGGER.debug("%s = %s", oid, var.value)
            entries.append(RawEntry(oid, state_value(var.value)))
        return entries
    finally:
        session.close()
