"""Curve25519 key material package."""

from .curve import (
    CURVE25519,
    CurveParameters,
    clamp_scalar,
    is_clamped,
    scalar_mult_base,
    x25519,
)
from .errors import (
    DisposedAccessError,
    GenerationFailureError,
    InvalidKeyEncodingError,
    InvalidKeyLengthError,
    KeyMaterialError,
)
from .key_material import KeyMaterial, secure_random_bytes
from .keypair import KeyPair, Tunnel
from .generators import (
    Curve25519KeyPairGenerator,
    KeyPairGenerator,
    OpenSSLKeyPairGenerator,
    SodiumKeyPairGenerator,
    get_key_pair_generator,
)

__all__ = [
    "CURVE25519",
    "CurveParameters",
    "clamp_scalar",
    "is_clamped",
    "scalar_mult_base",
    "x25519",
    "KeyMaterialError",
    "InvalidKeyLengthError",
    "InvalidKeyEncodingError",
    "DisposedAccessError",
    "GenerationFailureError",
    "KeyMaterial",
    "secure_random_bytes",
    "KeyPair",
    "Tunnel",
    "KeyPairGenerator",
    "Curve25519KeyPairGenerator",
    "SodiumKeyPairGenerator",
    "OpenSSLKeyPairGenerator",
    "get_key_pair_generator",
]
