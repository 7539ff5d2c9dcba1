#!/usr/bin/env python
#
# @descr    Retrieves OSPF neighbor counts per adjacency state and sends them to Graphite
#

import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ospfnm.config import ConfigurationError, build_parser, config_from_args  # noqa
from ospfnm.metrics import CARBON_PORT, format_metrics, send_metrics  # noqa
from ospfnm.nagios import STATE_OK, STATE_UNKNOWN, unknown_line  # noqa
from ospfnm.probe import collect_neighbors  # noqa
from ospfnm.watchdog import arm, run_with_deadline  # noqa


def main(argv=None):
    # Argument parsing
    parser = build_parser(description='Retrieves OSPF neighbor states for graphing')
    parser.add_argument('-g', metavar='<host>', required=True,
                        help='Graphite host')
    parser.add_argument('-P', metavar='<port>', type=int, default=CARBON_PORT,
                        help='Graphite carbon port (default 2003)')
    try:
        args = parser.parse_args(argv)
        config = config_from_args(args)
    except ConfigurationError as err:
        print(unknown_line(err))
        return STATE_UNKNOWN

    deadline = arm(config.timeout)
    try:
        neighbors = run_with_deadline(deadline, collect_neighbors, config, deadline)
        send_metrics(args.g, format_metrics(config.host, neighbors), port=args.P)
    except Exception as err:
        print(unknown_line("ERROR: {}".format(err)))
        return STATE_UNKNOWN
    return STATE_OK


if __name__ == '__main__':
    sys.exit(main())
