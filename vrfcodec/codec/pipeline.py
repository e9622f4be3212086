"""VRF token encoding and decoding."""

from vrfcodec.codec import percent_codec, stream_cipher, variant_codec

# Keystream material for the XOR cipher
CIPHER_KEY = "kMXzgyNzT3k5dYab"

# Symbol table for the Base64-style codec (unrelated to CIPHER_KEY)
ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"


def encode_token(plaintext: str) -> str:
    """
    Encode a parameter into a ``vrf`` token.

    Args:
        plaintext: Identifier or search query

    Returns:
        Percent-encoded token ready for a query string
    """
    encoded = percent_codec.encode(plaintext)
    ciphered = stream_cipher.apply(CIPHER_KEY, encoded)
    return percent_codec.encode(variant_codec.encode(ALPHABET, ciphered))


def decode_token(token: str) -> str:
    """
    Decode a token returned by the site.

    The token is decoded as-is. Tokens copied out of a URL must be
    percent-decoded by the caller first.

    Args:
        token: Token from a JSON response field

    Returns:
        Decoded plaintext

    Raises:
        BadInputError: If the token is malformed
    """
    ciphered = variant_codec.decode(ALPHABET, token)
    return percent_codec.decode(stream_cipher.apply(CIPHER_KEY, ciphered))
