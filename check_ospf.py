#!/usr/bin/env python
#
# @descr    Checks the state of all OSPF neighbors (SNMP v1, v2c or v3)
#

import logging
import sys

from ospfnm.config import ConfigurationError, build_parser, parse_config
from ospfnm.nagios import STATE_UNKNOWN, unknown_line
from ospfnm.probe import run_probe
from ospfnm.report import render_report
from ospfnm.snmp import FetchError, SessionError
from ospfnm.watchdog import ProbeTimeout, arm, run_with_deadline

_LOGGER = logging.getLogger(__name__)


def configure_logging(verbose):
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(message)s")


def main(argv=None):
    parser = build_parser(description='Check the state of all OSPF neighbors')
    try:
        config = parse_config(argv, parser)
    except ConfigurationError as err:
        print(unknown_line(err))
        parser.print_usage(sys.stderr)
        return STATE_UNKNOWN
    configure_logging(config.verbose)

    # Check global timeout if SNMP screws up
    deadline = arm(config.timeout)
    try:
        summary, neighbors = run_with_deadline(deadline, run_probe, config, deadline)
    except ProbeTimeout as err:
        print(unknown_line(err))
        return STATE_UNKNOWN
    except SessionError as err:
        print(unknown_line("ERROR opening session: {}.".format(err)))
        return STATE_UNKNOWN
    except FetchError as err:
        print(unknown_line("ERROR: {}".format(err)))
        return STATE_UNKNOWN
    except Exception as err:
        _LOGGER.debug("Check aborted", exc_info=True)
        print(unknown_line("ERROR: {}: {}".format(type(err).__name__, err)))
        return STATE_UNKNOWN

    output, status = render_report(summary, neighbors)
    print(output)
    return status


if __name__ == '__main__':
    sys.exit(main())
