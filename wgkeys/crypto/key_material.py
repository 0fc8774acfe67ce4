"""
Secure 32-byte key buffer with an explicit wipe-on-disposal lifecycle.

Security Properties:
- All randomness from secrets module (CSPRNG)
- Key bytes live in a private bytearray that is zero-filled on dispose()
- Callers only ever receive independent copies
- Disposal is scoped with the context manager protocol, so the wipe runs
  on every exit path:

    with KeyMaterial.create() as key:
        send(key.encoded())

Thread safety: concurrent readers are fine, but regenerate() and dispose()
must be serialized by the caller.
"""

import base64
import binascii
import hmac
import logging
import secrets
from typing import Optional, Union

from wgkeys.constants import KEY_SIZE
from wgkeys.crypto.errors import (
    DisposedAccessError,
    GenerationFailureError,
    InvalidKeyEncodingError,
    InvalidKeyLengthError,
)

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


def secure_random_bytes(length: int = KEY_SIZE) -> bytes:
    """
    Draw cryptographically secure random bytes.

    Raises:
        GenerationFailureError: If the operating system random source is unavailable
    """
    try:
        return secrets.token_bytes(length)
    except (OSError, NotImplementedError) as e:
        raise GenerationFailureError(f"Secure random source unavailable: {e}") from e


def _wipe(buf: bytearray) -> None:
    for i in range(len(buf)):
        buf[i] = 0


class KeyMaterial:
    """
    Exactly 32 bytes of scalar or point data.

    Attributes are private; use raw_bytes() and encoded() to read, and
    dispose() (or a with-block) to wipe.
    """

    __slots__ = ("_key", "_disposed", "__weakref__")

    def __init__(self, data: Optional[BytesLike] = None, *, strict: Optional[bool] = None):
        """
        Create key material from caller bytes or fresh randomness.

        Args:
            data: Exactly 32 bytes to copy in. If None, 32 random bytes are drawn.
            strict: If False, wrong-length data is replaced with a random key
                    instead of raising (legacy behaviour). Defaults to
                    settings.STRICT_KEY_LENGTH.

        Raises:
            InvalidKeyLengthError: If data is not 32 bytes (strict mode)
            GenerationFailureError: If randomness is needed and unavailable
        """
        self._disposed = False

        if data is None:
            self._key = bytearray(secure_random_bytes(KEY_SIZE))
            return

        if len(data) != KEY_SIZE:
            if strict is None:
                from wgkeys.config import settings

                strict = settings.STRICT_KEY_LENGTH
            if strict:
                raise InvalidKeyLengthError(len(data))
            logger.warning(
                "Substituting random key for %d-byte input (non-strict key length)", len(data)
            )
            self._key = bytearray(secure_random_bytes(KEY_SIZE))
            return

        self._key = bytearray(data)

    @classmethod
    def create(cls, data: Optional[BytesLike] = None, *, strict: Optional[bool] = None) -> "KeyMaterial":
        return cls(data, strict=strict)

    @classmethod
    def create_random(cls) -> "KeyMaterial":
        return cls()

    @classmethod
    def from_base64(cls, text: str) -> "KeyMaterial":
        """
        Parse a key in WireGuard's text form (standard padded base64).

        Always strict: a decoded length other than 32 is an error.

        Raises:
            InvalidKeyEncodingError: If text is not valid base64
            InvalidKeyLengthError: If the decoded key is not 32 bytes
        """
        try:
            raw = bytearray(base64.b64decode(text.strip(), validate=True))
        except (binascii.Error, ValueError) as e:
            raise InvalidKeyEncodingError(f"Key is not valid base64: {e}") from e

        try:
            return cls(raw, strict=True)
        finally:
            _wipe(raw)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def _check_not_disposed(self) -> None:
        if self._disposed:
            raise DisposedAccessError("KeyMaterial has been disposed")

    def raw_bytes(self) -> bytes:
        """Independent copy of the 32 key bytes."""
        self._check_not_disposed()
        return bytes(self._key)

    def encoded(self) -> str:
        """Standard padded base64 (44 characters, ending in '=')."""
        self._check_not_disposed()
        return base64.b64encode(self._key).decode("ascii")

    @property
    def size(self) -> int:
        self._check_not_disposed()
        return len(self._key)

    @property
    def is_valid(self) -> bool:
        return not self._disposed and len(self._key) == KEY_SIZE

    def matches(self, other: Union["KeyMaterial", BytesLike]) -> bool:
        """Constant-time comparison with another key or raw bytes."""
        self._check_not_disposed()
        other_bytes = other.raw_bytes() if isinstance(other, KeyMaterial) else bytes(other)
        return hmac.compare_digest(bytes(self._key), other_bytes)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def regenerate(self) -> None:
        """Refill the buffer in place with fresh random bytes."""
        self._check_not_disposed()
        self._key[:] = secure_random_bytes(KEY_SIZE)

    def dispose(self) -> None:
        """Zero the buffer and invalidate. Idempotent; never raises."""
        if self._disposed:
            return
        _wipe(self._key)
        self._disposed = True

    def __enter__(self) -> "KeyMaterial":
        return self

    def __exit__(self, *_) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "valid"
        return f"<KeyMaterial {state}>"
