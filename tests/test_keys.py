"""
Tests for key extraction.
"""

import pytest

from cat_cache.errors import InvalidKeyError
from cat_cache.keys import decode_uri, extract_key


@pytest.mark.parametrize(
    ("raw_path", "key"),
    [
        ("/418", "418"),
        ("/418/", "418"),
        ("///418///", "418"),
        ("/nested/code/", "nested/code"),
        ("/cat%20nap", "cat nap"),
        ("/caf%C3%A9", "café"),
        ("/100%25", "100%"),
        ("/Tea", "Tea"),
        ("/a%2Fb", "a%2Fb"),
        ("/%2F", "%2F"),
        ("/%2f418%2F", "%2f418%2F"),
    ],
)
def test_extract_key(raw_path, key):
    assert extract_key(raw_path) == key


@pytest.mark.parametrize(
    ("text", "decoded"),
    [
        ("%3B%2F%3F%3A%40%26%3D%2B%24%2C%23", "%3B%2F%3F%3A%40%26%3D%2B%24%2C%23"),
        ("%41%2F%42", "A%2FB"),
        ("%E2%82%AC%3F", "€%3F"),
        ("%7E%21%2A", "~!*"),
        ("plain", "plain"),
    ],
)
def test_decode_uri_keeps_reserved_escapes(text, decoded):
    assert decode_uri(text) == decoded


@pytest.mark.parametrize("raw_path", ["", "/", "//", "///"])
def test_extract_key_rejects_empty(raw_path):
    with pytest.raises(InvalidKeyError, match="missing code"):
        extract_key(raw_path)


@pytest.mark.parametrize("raw_path", ["/%FF", "/%FE", "/%C3", "/%E2%82", "/%ED%A0%80", "/100%", "/%zz", "/%4"])
def test_extract_key_rejects_malformed_escapes(raw_path):
    with pytest.raises(InvalidKeyError, match="malformed"):
        extract_key(raw_path)
