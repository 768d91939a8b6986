import logging

from httpaddr import resolve
from httpconfig import DEFAULT_CONTEXT
from httperrors import AddressParseError, ContentError, FetchCancelled, RedirectError
from httpget import fetch
from httpresponse import header, status_code

logger = logging.getLogger(__name__)

REDIRECT_STATUSES = (301, 302)


def redirected_address(address, lines):
    """Where a 3xx response points, resolved against the address that produced it"""
    location = header("Location", lines)
    if location is None:
        raise RedirectError(f"No Location header in {status_code(lines)} response from {address.geturl()}")
    try:
        return resolve(address, location)
    except AddressParseError as e:
        raise RedirectError(str(e)) from e


def get_html_page(address, context=DEFAULT_CONTEXT):
    """Fetch address following 301/302 redirects; return the lines of the 200 response"""
    hops = 0
    while True:
        lines = fetch(address, context)
        status = status_code(lines)
        if status == 200:
            return lines
        if status not in REDIRECT_STATUSES:
            raise ContentError(f"Unexpected status {status} from {address.geturl()}")

        hops += 1
        if hops > context.max_hops:
            raise RedirectError(f"Gave up after {context.max_hops} redirects, last at {address.geturl()}")
        target = redirected_address(address, lines)
        if context.cancelled:
            raise FetchCancelled(f"Redirect to {target.geturl()} cancelled")
        logger.debug(f"{status} redirect {hops}: {address.geturl()} -> {target.geturl()}")
        address = target
