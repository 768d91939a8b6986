from httperrors import ProtocolError


def status_code(lines):
    """Status code from a line like 'HTTP/1.1 200 OK'"""
    if not lines:
        raise ProtocolError("Empty response, connection closed before a status line")
    parts = lines[0].split()
    try:
        return int(parts[1])
    except (IndexError, ValueError):
        raise ProtocolError(f"Malformed status line: {lines[0]!r}") from None


def header(name, lines):
    """Value of the first 'name: value' line after the status line, or None.

    Every remaining line is scanned, body included, and the name must match
    exactly. The value stops at the first carriage return.
    """
    for line in lines[1:]:
        key, sep, value = line.partition(':')
        if not sep or key != name:
            continue
        if value.startswith(' '):
            value = value[1:]
        return value.split('\r', 1)[0]
    return None


def is_html(lines):
    """True if Content-Type, up to any ';', is exactly text/html"""
    ctype = header("Content-Type", lines)
    if ctype is None:
        return False
    return ctype.split(';', 1)[0] == "text/html"
