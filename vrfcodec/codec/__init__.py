"""
Token codec package for vrfcodec.

Composes the XOR stream cipher, the variant Base64 codec and the
percent-encoding wrapper into the VRF token pipeline.
"""

from .errors import TokenError, IllegalCharacterError, BadInputError
from .pipeline import CIPHER_KEY, ALPHABET, encode_token, decode_token

__all__ = [
    "TokenError",
    "IllegalCharacterError",
    "BadInputError",
    "CIPHER_KEY",
    "ALPHABET",
    "encode_token",
    "decode_token",
]
