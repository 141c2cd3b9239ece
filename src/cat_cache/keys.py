"""Key extraction from request paths."""

import re

from cat_cache.errors import InvalidKeyError

MISSING_KEY_MESSAGE = "Bad Request: missing code in path, expected /<code>"
MALFORMED_KEY_MESSAGE = "Bad Request: malformed percent-encoding in path"

# Characters whose escapes stay encoded, as in JavaScript's decodeURI
URI_RESERVED = frozenset(";/?:@&=+$,#")

_ESCAPE_RUN = re.compile(r"(?:%[0-9A-Fa-f]{2})+")
_STRAY_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _decode_run(match: re.Match) -> str:
    escapes = [match.group()[i:i + 3] for i in range(0, len(match.group()), 3)]
    raw = bytes(int(escape[1:], 16) for escape in escapes)
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidKeyError(MALFORMED_KEY_MESSAGE) from e

    decoded = []
    position = 0
    for char in text:
        width = len(char.encode("utf-8"))
        if char in URI_RESERVED:
            decoded.append(escapes[position])
        else:
            decoded.append(char)
        position += width
    return "".join(decoded)


def decode_uri(text: str) -> str:
    """Percent-decode a path the way ``decodeURI`` does.

    Escapes of reserved characters (``%2F``, ``%3F``, ...) are kept verbatim.
    Everything else must decode to valid UTF-8.

    Raises:
        InvalidKeyError: On a stray ``%`` or an invalid UTF-8 sequence
    """
    if _STRAY_PERCENT.search(text):
        raise InvalidKeyError(MALFORMED_KEY_MESSAGE)
    return _ESCAPE_RUN.sub(_decode_run, text)


def extract_key(raw_path: str) -> str:
    """Turn a raw request path into a cache key.

    The path is decoded with ``decode_uri``, then every leading and trailing
    ``/`` is stripped. Whatever remains, embedded slashes included, is the key.

    Args:
        raw_path: The request path as sent by the client, without query string

    Returns:
        The non-empty key

    Raises:
        InvalidKeyError: If the path is malformed or nothing is left after
            stripping
    """
    key = decode_uri(raw_path).strip("/")
    if not key:
        raise InvalidKeyError(MISSING_KEY_MESSAGE)
    return key
