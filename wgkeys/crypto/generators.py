"""
Key pair generators.

Backends:
- ladder  : pure-Python RFC 7748 Montgomery ladder over CURVE25519
- sodium  : libsodium via PyNaCl (crypto_scalarmult_base)
- openssl : OpenSSL via cryptography (X25519PrivateKey)

generate_random() clamps fresh randomness before deriving the public key.
generate_from_private() uses the caller's bytes as an already-clamped
scalar. The native backends clamp internally regardless, so all three agree
on every clamped scalar (which is all WireGuard ever produces).
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Union

from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey
from nacl.bindings import crypto_scalarmult_base

from wgkeys.constants import KEY_SIZE
from wgkeys.crypto.curve import CURVE25519, CurveParameters, clamp_scalar, scalar_mult_base
from wgkeys.crypto.errors import InvalidKeyLengthError
from wgkeys.crypto.key_material import BytesLike, KeyMaterial, secure_random_bytes
from wgkeys.crypto.keypair import KeyPair

logger = logging.getLogger(__name__)


class KeyPairGenerator(ABC):
    """Produces private/public KeyPairs; implementations differ only in scalar multiplication."""

    name: str = "abstract"

    @abstractmethod
    def derive_public_key(self, private_key: bytes) -> bytes:
        """Return scalar * G for a 32-byte scalar."""

    def generate_random(self) -> KeyPair:
        """
        Generate a new clamped private key and its public key.

        Returns:
            KeyPair owning both KeyMaterial instances

        Raises:
            GenerationFailureError: If the secure random source is unavailable
        """
        scalar = clamp_scalar(secure_random_bytes(KEY_SIZE))
        return self._wrap(scalar, self.derive_public_key(scalar))

    def generate_from_private(self, private_key: Union[KeyMaterial, BytesLike]) -> KeyPair:
        """
        Build a pair for an existing private key.

        The private key is not re-clamped. The returned pair holds its own
        copy of the private bytes; the caller's object is left untouched.

        Raises:
            InvalidKeyLengthError: If the private key is not 32 bytes
            DisposedAccessError: If a disposed KeyMaterial is passed
        """
        if isinstance(private_key, KeyMaterial):
            scalar = private_key.raw_bytes()
        else:
            scalar = bytes(private_key)

        if len(scalar) != KEY_SIZE:
            raise InvalidKeyLengthError(len(scalar), "Private key")

        return self._wrap(scalar, self.derive_public_key(scalar))

    @staticmethod
    def _wrap(private_bytes: bytes, public_bytes: bytes) -> KeyPair:
        private_key = KeyMaterial(private_bytes, strict=True)
        try:
            public_key = KeyMaterial(public_bytes, strict=True)
        except Exception:
            private_key.dispose()
            raise
        return KeyPair(private_key, public_key)


class Curve25519KeyPairGenerator(KeyPairGenerator):
    """Montgomery ladder over the curve parameters (default CURVE25519)."""

    name = "ladder"

    def __init__(self, curve: CurveParameters = CURVE25519):
        self.curve = curve

    def derive_public_key(self, private_key: bytes) -> bytes:
        return scalar_mult_base(private_key, self.curve)


class SodiumKeyPairGenerator(KeyPairGenerator):
    """libsodium scalar multiplication (constant time)."""

    name = "sodium"

    def derive_public_key(self, private_key: bytes) -> bytes:
        return crypto_scalarmult_base(bytes(private_key))


class OpenSSLKeyPairGenerator(KeyPairGenerator):
    """OpenSSL X25519 through the cryptography package (constant time)."""

    name = "openssl"

    def derive_public_key(self, private_key: bytes) -> bytes:
        return X25519PrivateKey.from_private_bytes(bytes(private_key)).public_key().public_bytes_raw()


def get_key_pair_generator(name: Optional[str] = None) -> KeyPairGenerator:
    """
    Look up a generator backend by name.

    Args:
        name: "ladder", "sodium" or "openssl". Defaults to settings.KEY_BACKEND.

    Raises:
        ValueError: If the backend name is unknown
    """
    if name is None:
        from wgkeys.config import settings

        name = settings.KEY_BACKEND

    n = name.strip().lower()
    if n in ("ladder", "curve25519", "python"):
        generator: KeyPairGenerator = Curve25519KeyPairGenerator()
    elif n in ("sodium", "nacl", "libsodium"):
        generator = SodiumKeyPairGenerator()
    elif n in ("openssl", "cryptography"):
        generator = OpenSSLKeyPairGenerator()
    else:
        raise ValueError(f"Unknown key backend: {name}")

    logger.debug("Using %s key pair generator", generator.name)
    return generator
