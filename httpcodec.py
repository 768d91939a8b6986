import re

from httperrors import DecodeError

RESERVED = set(b';/?:@&=+,${}|\\^[]`<>#%"')
HEX_PAIR = re.compile(r'[0-9A-Fa-f]{2}')
ESCAPE = re.compile(r'%([0-9A-Fa-f]{2})')


def _must_escape(byte):
    if 0x30 <= byte <= 0x39 or 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A:
        return False
    return byte <= 0x20 or byte >= 0x7F or byte in RESERVED


def encode(text):
    """Percent-encode text, byte by byte over its UTF-8 form"""
    out = []
    for byte in text.encode('utf-8', 'surrogatepass'):
        out.append(f"%{byte:02x}" if _must_escape(byte) else chr(byte))
    return ''.join(out)


def decode(text, strict=True):
    """Replace %XX escapes with the bytes they name.

    With strict=False a '%' that does not start a valid escape is copied
    through as-is instead of raising DecodeError.
    """
    buf = bytearray()
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == '%':
            pair = text[i + 1:i + 3]
            if HEX_PAIR.fullmatch(pair):
                buf.append(int(pair, 16))
                i += 3
                continue
            if strict:
                raise DecodeError(f"Bad percent escape at offset {i}: {text[i:i + 3]!r}")
        buf.extend(ch.encode('utf-8', 'surrogatepass'))
        i += 1

    try:
        return buf.decode('utf-8', 'surrogatepass')
    except UnicodeDecodeError:
        # Escapes that don't form valid UTF-8 are read as single code points
        return ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), text)


def encode_form(pairs):
    """Build an application/x-www-form-urlencoded body from a dict or pair list"""
    items = pairs.items() if hasattr(pairs, 'items') else pairs
    return '&'.join(f"{encode(str(k))}={encode(str(v))}" for k, v in items)
