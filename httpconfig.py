"""
Per-call fetch settings, plus the env/argparse layer the command-line scripts
use to build them.
"""

import os
import sys
import logging
from collections import namedtuple

from httpaddr import parse_relay


class FetchContext(namedtuple('FetchContext', [
        'relay', 'connect_timeout', 'read_timeout', 'max_hops', 'max_response_bytes', 'cancel'],
        defaults=(None, 10.0, 30.0, 5, 10 * 1024 * 1024, None))):
    """Relay, deadlines, hop limit and cancel event for one fetch.

    Built once by the caller and handed to the top-level fetch; every helper
    below reads what it needs from it instead of taking extra arguments.
    """
    __slots__ = ()

    @property
    def cancelled(self):
        return self.cancel is not None and self.cancel.is_set()


DEFAULT_CONTEXT = FetchContext()

# Environment variable -> setting name
ENV_MAPPINGS = {
    'HTTPTITLE_RELAY': 'relay',
    'HTTPTITLE_CONNECT_TIMEOUT': 'connect_timeout',
    'HTTPTITLE_READ_TIMEOUT': 'read_timeout',
    'HTTPTITLE_MAX_HOPS': 'max_hops',
    'HTTPTITLE_MAX_RESPONSE_BYTES': 'max_response_bytes',
    'LOG_LEVEL': 'log_level',
}


def _convert_env_value(value):
    """Convert an environment string to bool, int, float or leave it as str"""
    if value.lower() in ('true', 'false'):
        return value.lower() == 'true'
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        pass
    return value


def env_settings(environ=None):
    """Collect the settings present in the environment"""
    environ = os.environ if environ is None else environ
    settings = {}
    for env_var, key in ENV_MAPPINGS.items():
        value = environ.get(env_var)
        if value is not None and value != '':
            settings[key] = _convert_env_value(value)
    return settings


def add_fetch_arguments(parser):
    """Add the flags shared by the httpget/httptitle/httppost scripts"""
    parser.add_argument('--relay', help='Upstream HTTP relay as host:port')
    parser.add_argument('--timeout', type=float, help='Connect and read timeout in seconds')
    parser.add_argument('--max-hops', type=int, help='Maximum redirects to follow')
    return parser


def context_from_args(args, environ=None):
    """Build a FetchContext: command-line flags beat env vars, env vars beat defaults"""
    settings = env_settings(environ)
    settings.pop('log_level', None)

    relay = getattr(args, 'relay', None)
    if relay:
        settings['relay'] = relay
    timeout = getattr(args, 'timeout', None)
    if timeout is not None:
        settings['connect_timeout'] = settings['read_timeout'] = timeout
    max_hops = getattr(args, 'max_hops', None)
    if max_hops is not None:
        settings['max_hops'] = max_hops

    if 'relay' in settings:
        settings['relay'] = parse_relay(str(settings['relay']))
    for key in ('connect_timeout', 'read_timeout'):
        if key in settings:
            settings[key] = float(settings[key])
    for key in ('max_hops', 'max_response_bytes'):
        if key in settings:
            settings[key] = int(settings[key])
    return DEFAULT_CONTEXT._replace(**settings)


def setup_logging(environ=None):
    """Send log records to stderr at LOG_LEVEL (default WARNING)"""
    level = str(env_settings(environ).get('log_level', 'WARNING')).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )
