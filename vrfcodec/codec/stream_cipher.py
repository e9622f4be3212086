"""
Key-scheduled XOR stream cipher used by the VRF scheme.

SECURITY NOTE: This is the classic 256-slot permutation keystream (RC4
layout). It only reproduces the site's token format and offers no
confidentiality whatsoever.
"""

from typing import List


def _schedule(key: str) -> List[int]:
    """
    Build the working permutation for ``key``.

    Args:
        key: Key material (single-byte characters)

    Returns:
        Fresh 256-entry permutation of 0..255
    """
    perm = list(range(256))
    u = 0
    for i in range(256):
        u = (u + perm[i] + ord(key[i % len(key)])) % 256
        perm[i], perm[u] = perm[u], perm[i]
    return perm


def apply(key: str, text: str) -> str:
    """
    XOR ``text`` with the keystream derived from ``key``.

    The keystream depends only on the key and the position, so applying
    the cipher twice with the same key returns the original text.

    Args:
        key: Key material (single-byte characters)
        text: Text to encrypt/decrypt

    Returns:
        Transformed text, same length as ``text``
    """
    perm = _schedule(key)
    c = 0
    u = 0
    out = []
    for ch in text:
        c = (c + 1) % 256
        u = (u + perm[c]) % 256
        perm[c], perm[u] = perm[u], perm[c]
        out.append(chr(ord(ch) ^ perm[(perm[c] + perm[u]) % 256]))
    return "".join(out)
