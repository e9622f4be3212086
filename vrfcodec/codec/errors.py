"""Exceptions raised by the token codecs."""


class TokenError(ValueError):
    """Base class for token encoding/decoding errors."""
    pass


class IllegalCharacterError(TokenError):
    """Input contains a code point outside the single-byte range."""

    def __init__(self, character: str, position: int):
        self.character = character
        self.position = position
        super().__init__(
            f"illegal character {character!r} (U+{ord(character):04X}) at position {position}"
        )


class BadInputError(TokenError):
    """Token is not a well-formed variant Base64 string."""
    pass
