#
# @descr    OSPF neighbor check pipeline: session, walk, parse, aggregate
#

from ospfnm.neighbors import OID_OSPF_NBR_STATE, aggregate, extract_neighbors
from ospfnm.snmp import fetch_table, open_session


def collect_neighbors(config, deadline=None):
    session = open_session(config, deadline)
    entries = fetch_table(session, OID_OSPF_NBR_STATE, deadline)
    return extract_neighbors(entries)


def run_probe(config, deadline=None):
    neighbors = collect_neighbors(config, deadline)
    return aggregate(neighbors), neighbors
