import unicodedata

CHANNEL_LIMIT = 80


def limit_str(limit, text):
    """Cut text to limit characters, ending in '...' when something was dropped"""
    if len(text) <= limit:
        return text
    return text[:limit - 3] + "..."


def remove_control(text):
    return ''.join(c for c in text if c.isspace() or unicodedata.category(c) != 'Cc')


def space_out(text):
    return '\n'.join(' ' + line for line in text.splitlines())


def for_destination(destination, text):
    """Shape output for where it is going.

    Channels (names starting with '#') are shared, so output there is capped;
    private messages get everything. Control characters are dropped and each
    line is indented by one space either way.
    """
    text = space_out(remove_control(text))
    if destination and destination.startswith('#'):
        return limit_str(CHANNEL_LIMIT, text)
    return text
