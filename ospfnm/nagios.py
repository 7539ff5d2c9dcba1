#
# @descr    Nagios states, severity ordering and plugin exit helpers
#

from enum import Enum

# Nagios states
STATE_OK = 0
STATE_WARN = 1
STATE_CRIT = 2
STATE_UNKNOWN = 3

status_txt_mapper = {
    0: 'OK',
    1: 'WARNING',
    2: 'CRITICAL',
    3: 'UNKNOWN'
}


class Severity(Enum):
    OK = 'OK'
    WARNING = 'WARNING'
    CRITICAL = 'CRITICAL'
    UNKNOWN = 'UNKNOWN'


# Aggregation priority, lowest first. UNKNOWN outranks CRITICAL.
severity_priority = (
    Severity.OK,
    Severity.WARNING,
    Severity.CRITICAL,
    Severity.UNKNOWN
)

severity_exit_mapper = {
    Severity.OK: STATE_OK,
    Severity.WARNING: STATE_WARN,
    Severity.CRITICAL: STATE_CRIT,
    Severity.UNKNOWN: STATE_UNKNOWN
}


# Status change wrapper, only ever moves the status upwards
def worst_severity(status, req_state):
    if severity_priority.index(req_state) > severity_priority.index(status):
        return req_state
    return status


def exit_code(severity):
    return severity_exit_mapper[severity]


# Single-line UNKNOWN message for anything that aborted the check
def unknown_line(message):
    return "{}: {}".format(status_txt_mapper[STATE_UNKNOWN], message)

