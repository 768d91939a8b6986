#!/usr/bin/env python3

import re, sys, logging, argparse

from httpaddr import parse
from httpcodec import decode
from httpconfig import DEFAULT_CONTEXT, add_fetch_arguments, context_from_args, setup_logging
from httpdisplay import for_destination
from httperrors import AddressParseError, ContentError, FetchCancelled, HttpTitleError
from httpredirect import get_html_page
from httpresponse import is_html

logger = logging.getLogger(__name__)

# Other plugins match on this prefix to skip titles we already posted
TITLE_PROMPT = "Title: "
MAX_TITLE_LENGTH = 80

TITLE_OPEN = re.compile(r'<title>\s*', re.IGNORECASE)
TITLE_CLOSE = re.compile(r'\s*</title>', re.IGNORECASE)

# Partial on purpose; anything not listed is left as written
ENTITIES = {
    "&raquo;": "»",
    "&iexcl;": "¡",
    "&cent;": "¢",
    "&copy;": "©",
    "&laquo;": "«",
    "&deg;": "°",
    "&sup2;": "²",
    "&micro;": "µ",
}


def find_title(lines):
    """Text of the first <title> element of an HTML response, whitespace collapsed.

    Raises ContentError when the response is not text/html or either tag
    is missing.
    """
    if not is_html(lines):
        raise ContentError("Response is not text/html")
    text = '\n'.join(lines)
    start = TITLE_OPEN.search(text)
    if not start:
        raise ContentError("No <title> tag")
    end = TITLE_CLOSE.search(text, start.end())
    if not end:
        raise ContentError("Unterminated <title> tag")
    return ' '.join(text[start.end():end.start()].split())


def extract_title(lines):
    try:
        return find_title(lines)
    except ContentError as e:
        logger.debug(f"No title: {e}")
        return None


def unhtml(text):
    for entity, char in ENTITIES.items():
        text = text.replace(entity, char)
    return text


def limit_length(text):
    if len(text) > MAX_TITLE_LENGTH:
        return text[:MAX_TITLE_LENGTH] + " ..."
    return text


def format_title(title):
    """Decode, unescape, cap at 80 chars and quote behind the title prompt"""
    text = unhtml(decode(title, strict=False))
    return f'{TITLE_PROMPT}"{limit_length(text)}"'


def raw_page_title(url, context=DEFAULT_CONTEXT):
    """Unformatted title of the page at url, or None.

    Meant for callers that post-process the title themselves; anything shown
    to a channel should go through url_page_title so it carries the prompt.
    """
    address = parse(url)
    if address is None:
        logger.debug(f"Not a fetchable URL: {url!r}")
        return None
    try:
        return extract_title(get_html_page(address, context))
    except (AddressParseError, ContentError) as e:
        logger.debug(f"No title for {url}: {e}")
    except FetchCancelled as e:
        logger.info(str(e))
    except HttpTitleError as e:
        logger.warning(f"Fetching {url} failed: {e}")
    return None


def url_page_title(url, context=DEFAULT_CONTEXT):
    """Title of the page at url ready for display, e.g. 'Title: "Example Domain"'"""
    title = raw_page_title(url, context)
    return None if title is None else format_title(title)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Fetch a page title over a raw HTTP socket")
    parser.add_argument('--url', required=True, help='URL to fetch')
    parser.add_argument('--to', help='Destination; names starting with # get the channel width limit')
    add_fetch_arguments(parser)
    args = parser.parse_args(argv)
    setup_logging()

    try:
        context = context_from_args(args)
    except HttpTitleError as e:
        print(f"Error: {e}")
        return 2

    title = url_page_title(args.url, context)
    if title is None:
        print("No title found")
        return 1
    print(for_destination(args.to, title) if args.to else title)
    return 0


if __name__ == "__main__":
    sys.exit(main())
