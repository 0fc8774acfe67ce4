"""Exceptions raised by key material, curve arithmetic and generators."""

from wgkeys.constants import KEY_SIZE


class KeyMaterialError(Exception):
    """Base exception for key material errors."""

    pass


class InvalidKeyLengthError(KeyMaterialError, ValueError):
    """Input is not exactly 32 bytes where a fixed-size key is required."""

    def __init__(self, length: int, what: str = "Key"):
        self.length = length
        super().__init__(f"{what} must be {KEY_SIZE} bytes, got {length}")


class InvalidKeyEncodingError(KeyMaterialError, ValueError):
    """Key text is not valid standard base64."""

    pass


class DisposedAccessError(KeyMaterialError):
    """Key material was read or mutated after it was wiped."""

    pass


class GenerationFailureError(KeyMaterialError):
    """The secure random source is unavailable."""

    pass
