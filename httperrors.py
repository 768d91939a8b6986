"""Exceptions raised while fetching a page and pulling out its title"""


class HttpTitleError(Exception):
    """Base class for everything the title pipeline can raise"""


class AddressParseError(HttpTitleError):
    """URL has no scheme or host, or a bad port"""


class DecodeError(HttpTitleError):
    """Malformed percent escape"""


class TransportError(HttpTitleError):
    """Could not resolve, connect, send or read"""


class FetchCancelled(TransportError):
    """Caller set the cancel event while a fetch was in flight"""


class ProtocolError(HttpTitleError):
    """Response does not start with a usable status line"""


class RedirectError(HttpTitleError):
    """3xx without a Location header, or too many hops"""


class ContentError(HttpTitleError):
    """Not text/html, bad status, or no complete <title> element"""
