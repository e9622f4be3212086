"""
Base64-style codec with an injectable alphabet.

The bit layout is the usual 3-bytes-to-4-symbols packing, but decoding
follows the site's own rules: trailing ``=`` is only stripped when the
input length is a multiple of four, and partial groups are unpacked with
explicit shifts instead of implicit padding.
"""

import re

from vrfcodec.codec.errors import BadInputError, IllegalCharacterError

PAD = "="

_CONTROL_CHARS = re.compile(r"[\t\n\f\r]")
_TRAILING_PAD = re.compile(r"==?\Z")
_FOREIGN_SYMBOL = re.compile(r"[^+/0-9A-Za-z]")


def encode(alphabet: str, text: str) -> str:
    """
    Encode single-byte ``text`` with ``alphabet``.

    Args:
        alphabet: 64-character symbol table
        text: Text whose code points are all <= 255

    Returns:
        Encoded string, length a multiple of 4

    Raises:
        IllegalCharacterError: If any code point exceeds 255
    """
    for position, ch in enumerate(text):
        if ord(ch) > 255:
            raise IllegalCharacterError(ch, position)

    out = []
    for i in range(0, len(text), 3):
        x0 = ord(text[i])
        # -1 marks an undefined slot
        a = [x0 >> 2, (x0 & 3) << 4, -1, -1]
        if len(text) > i + 1:
            x1 = ord(text[i + 1])
            a[1] |= x1 >> 4
            a[2] = (x1 & 15) << 2
        if len(text) > i + 2:
            x2 = ord(text[i + 2])
            a[2] |= x2 >> 6
            a[3] = x2 & 63
        for n in a:
            out.append(PAD if n == -1 else alphabet[n])
    return "".join(out)


def decode(alphabet: str, text: str) -> str:
    """
    Decode ``text`` with ``alphabet``.

    Args:
        alphabet: 64-character symbol table used to encode
        text: Encoded string

    Returns:
        Decoded single-byte string

    Raises:
        BadInputError: If the input length or symbols are invalid
    """
    if len(_CONTROL_CHARS.sub("", text)) % 4 == 0:
        text = _TRAILING_PAD.sub("", text)

    if len(text) % 4 == 1:
        raise BadInputError(f"bad input: invalid length {len(text)}")
    match = _FOREIGN_SYMBOL.search(text)
    if match:
        raise BadInputError(
            f"bad input: unexpected character {match.group()!r} at position {match.start()}"
        )

    out = []
    e = 0
    u = 0
    for position, ch in enumerate(text):
        index = alphabet.find(ch)
        if index < 0:
            raise BadInputError(
                f"bad input: character {ch!r} at position {position} not in alphabet"
            )
        e = (e << 6) | index
        u += 6
        if u == 24:
            out.append(chr((e >> 16) & 0xFF))
            out.append(chr((e >> 8) & 0xFF))
            out.append(chr(e & 0xFF))
            e = 0
            u = 0

    if u == 12:
        e >>= 4
        out.append(chr(e & 0xFF))
    elif u == 18:
        e >>= 2
        out.append(chr((e >> 8) & 0xFF))
        out.append(chr(e & 0xFF))

    return "".join(out)
