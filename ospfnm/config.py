#
# @descr    Probe configuration and command line parsing
#

import argparse
import sys
from collections import namedtuple

from ospfnm import __version__
from ospfnm.nagios import STATE_UNKNOWN

DEFAULT_PORT = 161
DEFAULT_TIMEOUT = 5
MIN_TIMEOUT = 2
MAX_TIMEOUT = 60
DEFAULT_AUTH_PROTOCOL = 'sha'
DEFAULT_PRIV_PROTOCOL = 'aes'
auth_protocols = ['md5', 'sha']
priv_protocols = ['des', 'aes']


ProbeConfig = namedtuple('ProbeConfig', [
    'host',
    'port',
    'use_v1',
    'use_v2c',
    'community',
    'login',
    'passwd',
    'auth_protocol',
    'privpass',
    'priv_protocol',
    'timeout',
    'ipv6',
    'verbose',
])


class ConfigurationError(Exception):
    pass


# argparse exits with 2 on bad input, which Nagios reads as CRITICAL
class ProbeArgumentParser(argparse.ArgumentParser):

    def error(self, message):
        raise ConfigurationError(message)

    def exit(self, status=0, message=None):
        if message:
            sys.stdout.write(message)
        sys.exit(STATE_UNKNOWN)


def has_v3_credentials(config):
    return config.login is not None and config.passwd is not None


def build_parser(description='Check OSPF neighbor states over SNMP'):
    parser = ProbeArgumentParser(description=description)
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Print extra debugging information (on stderr)')
    parser.add_argument('-H', '--hostname', metavar='<host>',
                        help='Hostname or IPv4/IPv6 address of host to check')
    parser.add_argument('-6', '--use-ipv6', dest='ipv6', action='store_true',
                        help='Use IPv6 connection')
    parser.add_argument('-C', '--community', metavar='<community>',
                        help='SNMP Community')
    parser.add_argument('-1', '--v1', dest='v1', action='store_true',
                        help='Use SNMPv1')
    parser.add_argument('-2', '--v2c', dest='v2c', action='store_true',
                        help='Use SNMPv2c (default)')
    parser.add_argument('-l', '--login', metavar='<login>',
                        help='Login for SNMPv3 authentication')
    parser.add_argument('-x', '--passwd', metavar='<passwd>',
                        help='Auth password for SNMPv3 authentication, implies AuthNoPriv without -X')
    parser.add_argument('-X', '--privpass', metavar='<passwd>',
                        help='Priv password for SNMPv3 (AuthPriv protocol)')
    parser.add_argument('-L', '--protocols', metavar='<authproto>,<privproto>',
                        help='SNMPv3 protocols: md5|sha (default sha), des|aes (default aes)')
    parser.add_argument('-p', '--port', metavar='<port>', type=int, default=DEFAULT_PORT,
                        help='SNMP port (default 161)')
    parser.add_argument('-t', '--timeout', metavar='<seconds>', type=int, default=DEFAULT_TIMEOUT,
                        help='Timeout for SNMP in seconds (default 5)')
    parser.add_argument('-V', '--version', action='version',
                        version='%(prog)s version : {}'.format(__version__))
    return parser


# Validates the parsed arguments once and freezes them into a ProbeConfig
def config_from_args(args):
    if args.timeout < MIN_TIMEOUT or args.timeout > MAX_TIMEOUT:
        raise ConfigurationError('Timeout must be >1 and <60 !')
    if not args.hostname:
        raise ConfigurationError('No host given!')

    if args.community is None and (args.login is None or args.passwd is None):
        raise ConfigurationError('Put SNMP login info!')
    if (args.login is not None or args.passwd is not None) and (args.community is not None or args.v2c):
        raise ConfigurationError("Can't mix SNMP v1,v2c,v3 protocols!")

    auth_protocol = DEFAULT_AUTH_PROTOCOL
    priv_protocol = DEFAULT_PRIV_PROTOCOL
    if args.protocols is not None:
        if args.login is None:
            raise ConfigurationError('Put SNMP V3 login info with protocols!')
        v3proto = args.protocols.split(',')
        if v3proto[0]:
            auth_protocol = v3proto[0].lower()
        if len(v3proto) > 1 and v3proto[1]:
            priv_protocol = v3proto[1].lower()
            if args.privpass is None:
                raise ConfigurationError('Put SNMP v3 priv login info with priv protocols!')
    if auth_protocol not in auth_protocols:
        raise ConfigurationError('Unsupported auth protocol {}'.format(auth_protocol))
    if priv_protocol not in priv_protocols:
        raise ConfigurationError('Unsupported priv protocol {}'.format(priv_protocol))

    v3 = args.login is not None and args.passwd is not None
    return ProbeConfig(
        host=args.hostname,
        port=args.port,
        use_v1=args.v1,
        use_v2c=args.v2c,
        community=args.community,
        login=args.login,
        passwd=args.passwd,
        auth_protocol=auth_protocol,
        privpass=args.privpass if v3 else None,
        priv_protocol=priv_protocol,
        timeout=args.timeout,
        ipv6=args.ipv6,
        verbose=args.verbose
    )


def parse_config(argv=None, parser=None):
    if parser is None:
        parser = build_parser()
    return config_from_args(parser.parse_args(argv))
