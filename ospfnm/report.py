#
# @descr    Nagios output for the OSPF neighbor check
#

from ospfnm.nagios import exit_code
from ospfnm.neighbors import state_name


def pluralize(count, label):
    if count == 1:
        return "1 neighbor {}".format(label)
    return "{} neighbors {}".format(count, label)


# ": 1 neighbor CRITICAL, 2 neighbors OK." or "" when there is nothing to count
def summary_clause(summary):
    counters = [
        (summary.critical, 'CRITICAL'),
        (summary.warning, 'WARNING'),
        (summary.ok, 'OK'),
        (summary.unknown, 'UNKNOWN'),
    ]
    parts = [pluralize(count, label) for count, label in counters if count > 0]
    if not parts:
        return ""
    return ": {}.".format(", ".join(parts))


def neighbor_lines(neighbors):
    return ["{}\t{}".format(address, state_name(state)) for address, state in neighbors.items()]


def render_report(summary, neighbors):
    lines = [summary.status.value + summary_clause(summary)]
    lines.extend(neighbor_lines(neighbors))
    return "\n".join(lines), exit_code(summary.status)
