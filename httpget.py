#!/usr/bin/env python3

import socket, sys, time, logging, argparse
from contextlib import closing

from httpaddr import DEFAULT_PORT, parse
from httpconfig import DEFAULT_CONTEXT, add_fetch_arguments, context_from_args, setup_logging
from httperrors import FetchCancelled, TransportError, HttpTitleError

logger = logging.getLogger(__name__)


def build_get(address, relay=None):
    """Request lines for a GET, blank terminator included"""
    if relay:
        return [f"GET {address.geturl()} HTTP/1.0", ""]
    # No framing is honoured on the way back, so the server must close
    return [f"GET {address.request_target()} HTTP/1.1",
            f"Host: {address.authority}",
            "Connection: close",
            ""]


def _check_cancel(context, address):
    if context.cancelled:
        raise FetchCancelled(f"Fetch of {address.geturl()} cancelled")


def _read_lines(sock, stream, context, address):
    """Read lines until the peer closes; strips '\\n' but keeps any '\\r'.

    read_timeout bounds the whole response, not just each read, so a peer
    that trickles bytes is still cut off.
    """
    lines, total = [], 0
    deadline = time.monotonic() + context.read_timeout
    while True:
        _check_cancel(context, address)
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise TransportError(f"No end of response from {address.geturl()} within {context.read_timeout}s")
        sock.settimeout(remaining)
        raw = stream.readline(context.max_response_bytes - total + 1)
        if not raw:
            break
        total += len(raw)
        if total > context.max_response_bytes:
            logger.warning(f"Response from {address.geturl()} over {context.max_response_bytes} bytes, truncating")
            break
        if raw.endswith(b'\n'):
            raw = raw[:-1]
        lines.append(raw.decode('utf-8', errors='replace'))
    return lines


def read_page(address, request, body='', context=DEFAULT_CONTEXT):
    """Send request lines and body, return every response line up to EOF"""
    relay = context.relay
    host, port = (relay.host, relay.port) if relay else (address.host, address.port or DEFAULT_PORT)

    _check_cancel(context, address)
    logger.debug(f"Connecting to {host}:{port} for {address.geturl()}")
    try:
        sock = socket.create_connection((host, port), timeout=context.connect_timeout)
    except (OSError, UnicodeError, ValueError) as e:
        # idna raises UnicodeError for empty or over-long labels
        raise TransportError(f"Cannot connect to {host}:{port}: {e}") from e

    with closing(sock):
        try:
            sock.settimeout(context.read_timeout)
            payload = ''.join(f"{line}\r\n" for line in request) + body
            sock.sendall(payload.encode())
            with closing(sock.makefile('rb')) as stream:
                lines = _read_lines(sock, stream, context, address)
        except OSError as e:
            raise TransportError(f"I/O error talking to {host}:{port}: {e}") from e

    logger.debug(f"Read {len(lines)} lines from {address.geturl()}")
    return lines


def fetch(address, context=DEFAULT_CONTEXT):
    """GET address (directly or through context.relay), return raw response lines"""
    return read_page(address, build_get(address, context.relay), '', context)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Raw HTTP GET client")
    parser.add_argument('--url', required=True, help='URL to fetch')
    add_fetch_arguments(parser)
    args = parser.parse_args(argv)
    setup_logging()

    address = parse(args.url)
    if address is None:
        print(f"Error: not an absolute URL: {args.url}")
        return 2
    try:
        lines = fetch(address, context_from_args(args))
    except HttpTitleError as e:
        print(f"Error: {e}")
        return 1

    for line in lines:
        print(line.rstrip('\r'))
    return 0


if __name__ == "__main__":
    sys.exit(main())
