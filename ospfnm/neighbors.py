#
# @descr    OSPF neighbor table parsing, state classification and aggregation
#

import logging
from collections import Counter, namedtuple

from ospfnm.nagios import Severity, worst_severity

# OSPF-MIB::ospfNbrState
OID_OSPF_NBR_STATE = '1.3.6.1.2.1.14.10.1.6'

# OSPF states:
# 1=down, 2=attempt, 3=init, 4=twoway
# 5=exchangestart, 6=exchange, 7=loading
# 8=full
ospf_statemapper = {
    1: 'down',
    2: 'attempt',
    3: 'init',
    4: 'twoWay',
    5: 'exchangeStart',
    6: 'exchange',
    7: 'loading',
    8: 'full'
}
ospf_ok_states = [4, 8]
ospf_warn_states = [2, 3, 5, 6, 7]
ospf_crit_states = [1]

VerdictSummary = namedtuple('VerdictSummary', ['status', 'ok', 'warning', 'critical', 'unknown'])

_LOGGER = logging.getLogger(__name__)


# Neighbor IP from an ospfNbrState oid: <base>.<a>.<b>.<c>.<d>.0
def neighbor_address(oid, base_oid=OID_OSPF_NBR_STATE):
    prefix = base_oid + '.'
    if oid.startswith(prefix):
        address = oid[len(prefix):]
    else:
        _LOGGER.warning("Unexpected oid %s outside of %s", oid, base_oid)
        address = oid
    if address.endswith('.0'):
        address = address[:-2]
    return address


def extract_neighbors(entries, base_oid=OID_OSPF_NBR_STATE):
    neighbors = {}
    for entry in entries:
        neighbors[neighbor_address(entry.oid, base_oid)] = entry.value
    return neighbors


def classify_state(state):
    if state in ospf_ok_states:
        return Severity.OK
    if state in ospf_warn_states:
        return Severity.WARNING
    if state in ospf_crit_states:
        return Severity.CRITICAL
    return Severity.UNKNOWN


def state_name(state):
    return ospf_statemapper.get(state, 'unknown({})'.format(state))


def aggregate(neighbors):
    status = Severity.OK
    counts = Counter()
    for state in neighbors.values():
        severity = classify_state(state)
        counts[severity] += 1
        status = worst_severity(status, severity)
    return VerdictSummary(
        status=status,
        ok=counts[Severity.OK],
        warning=counts[Severity.WARNING],
        critical=counts[Severity.CRITICAL],
        unknown=counts[Severity.UNKNOWN]
    )


# Number of neighbors per adjacency state name, every known state included
def count_by_state(neighbors):
    counts = dict((name, 0) for name in ospf_statemapper.values())
    counts['unknown'] = 0
    for state in neighbors.values():
        counts[ospf_statemapper.get(state, 'unknown')] += 1
    return counts
