#
# @descr    Graphite plaintext metrics for OSPF neighbor states
#

from socket import create_connection
from time import time

from ospfnm.neighbors import count_by_state

CARBON_PORT = 2003


def metric_prefix(host):
    return "ospf.{}.neighbors".format(host.replace('.', '_').replace(':', '_'))


def format_metrics(host, neighbors, timestamp=None):
    if timestamp is None:
        timestamp = int(time())
    prefix = metric_prefix(host)
    counts = count_by_state(neighbors)
    return ["{}.{} {:d} {:d}\n".format(prefix, name, count, timestamp)
            for name, count in sorted(counts.items())]


def send_metrics(graphite_host, lines, port=CARBON_PORT, timeout=5):
    sock = create_connection((graphite_host, port), timeout)
    try:
        sock.sendall("".join(lines).encode('ascii'))
    finally:
        sock.close()
