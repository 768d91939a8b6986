from collections import namedtuple
from urllib.parse import urlsplit, urlunsplit

from httperrors import AddressParseError

DEFAULT_PORT = 80


class Address(namedtuple('Address', 'scheme host port path query fragment')):
    """Parsed URL. query and fragment are kept without their '?' / '#'"""
    __slots__ = ()

    @property
    def authority(self):
        host = f"[{self.host}]" if ':' in self.host else self.host
        return host if self.port is None else f"{host}:{self.port}"

    def request_target(self):
        """path+query+fragment as sent on a direct request line"""
        target = self.path
        if self.query:
            target += '?' + self.query
        if self.fragment:
            target += '#' + self.fragment
        return target if target.startswith('/') else '/' + target

    def geturl(self):
        return urlunsplit((self.scheme, self.authority, self.path, self.query, self.fragment))


Relay = namedtuple('Relay', 'host port')


def parse(text):
    """Parse an absolute URL, or return None if it has no scheme or host"""
    if not text:
        return None
    try:
        parts = urlsplit(text.strip())
        port = parts.port
    except ValueError:
        return None
    if not parts.scheme or not parts.hostname:
        return None
    return Address(parts.scheme, parts.hostname, port, parts.path, parts.query, parts.fragment)


def resolve(base, location):
    """Turn a Location value into an Address, borrowing base's scheme and authority if needed.

    The location becomes a path suffix with no '..' normalisation.
    """
    address = parse(location)
    if address is not None:
        return address
    if not location.startswith(('/', '?', '#')):
        location = '/' + location
    address = parse(f"{base.scheme}://{base.authority}{location}")
    if address is None:
        raise AddressParseError(f"Cannot resolve {location!r} against {base.geturl()}")
    return address


def parse_relay(text):
    """Parse 'host[:port]' into a Relay; empty text means no relay"""
    if not text:
        return None
    host, sep, port = text.strip().rpartition(':')
    if not sep:
        host, port = port, ''
    if not host:
        raise AddressParseError(f"Relay has no host: {text!r}")
    try:
        return Relay(host, int(port) if port else DEFAULT_PORT)
    except ValueError:
        raise AddressParseError(f"Bad relay port in {text!r}") from None
