"""
Percent-encoding used around the VRF cipher.

Encoding follows the HTML form rules (unreserved set ``A-Za-z0-9.-*_``)
except that spaces come out as ``%20``. Decoding is plain percent-decoding,
so a literal ``+`` is left alone.
"""

from urllib.parse import quote_plus, unquote

# Form encoding leaves '*' alone but escapes '~'
_SAFE = "*"


def encode(text: str) -> str:
    """
    Percent-encode ``text`` as UTF-8, writing spaces as ``%20``.

    Args:
        text: Text to encode

    Returns:
        ASCII string safe for a URL query component
    """
    encoded = quote_plus(text, safe=_SAFE, encoding="utf-8", errors="replace")
    return encoded.replace("~", "%7E").replace("+", "%20")


def decode(text: str) -> str:
    """
    Percent-decode ``text`` as UTF-8.

    Args:
        text: Percent-encoded text

    Returns:
        Decoded text (``+`` is not treated as a space)
    """
    return unquote(text, encoding="utf-8", errors="replace")
