#!/usr/bin/env python3

import sys, logging, argparse

from httpaddr import parse
from httpcodec import encode_form
from httpconfig import DEFAULT_CONTEXT, add_fetch_arguments, context_from_args, setup_logging
from httperrors import AddressParseError, HttpTitleError
from httpget import read_page
from httpresponse import header, status_code
from httptitle import extract_title, format_title

logger = logging.getLogger(__name__)


def build_post(address, body):
    """Request lines for a form POST; body is sent after the blank line"""
    return [f"POST {address.geturl()} HTTP/1.0",
            f"Host: {address.authority}",
            "Accept: */*",
            "Content-Type: application/x-www-form-urlencoded",
            f"Content-Length: {len(body.encode())}",
            ""]


def http_post(url, form, context=DEFAULT_CONTEXT):
    """POST form fields to url and return the raw response lines. Redirects are not followed."""
    address = parse(url)
    if address is None:
        raise AddressParseError(f"Not an absolute URL: {url!r}")
    body = encode_form(form)
    logger.debug(f"POST {address.geturl()} with {len(body)} byte body")
    return read_page(address, build_post(address, body), body, context)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Raw HTTP form POST client")
    parser.add_argument('--url', required=True, help='URL to send POST request to')
    parser.add_argument('--form-param', nargs='*', help='Form parameters (key=value)')
    add_fetch_arguments(parser)
    args = parser.parse_args(argv)
    setup_logging()

    form = []
    for p in args.form_param or []:
        if '=' in p:
            k, v = p.split('=', 1)
            form.append((k, v))

    try:
        lines = http_post(args.url, form, context_from_args(args))
        status = status_code(lines)
    except HttpTitleError as e:
        print(f"Error: {e}")
        return 1

    print(f"Status Code: {status}")
    location = header("Location", lines)
    if location:
        print(f"Location: {location}")
    title = extract_title(lines)
    if title:
        print(format_title(title))
    return 0


if __name__ == "__main__":
    sys.exit(main())
