"""
Curve25519 parameters and X25519 scalar multiplication.

Security Properties:
- Parameters are a single frozen, process-wide instance (CURVE25519)
- Scalar multiplication is the RFC 7748 Montgomery ladder with a
  conditional swap on every bit
- Python integers are not constant time; use the sodium or openssl
  generator backends where timing side channels matter

Encoding:
- Scalars and u-coordinates are 32-byte little-endian strings, as used by
  WireGuard and RFC 7748
- CurveParameters.to_bytes() gives the 32-byte big-endian form the curve
  constants are usually published in
"""

from dataclasses import dataclass

from wgkeys.constants import KEY_SIZE
from wgkeys.crypto.errors import InvalidKeyLengthError


# =============================================================================
# Curve Parameters
# =============================================================================


@dataclass(frozen=True)
class CurveParameters:
    """
    Montgomery curve v^2 = u^3 + a*u^2 + u over GF(prime), in the form
    b*y^2 = x^3 + a*x^2 + x.

    Attributes:
        prime: Field modulus
        a: Montgomery A coefficient
        b: Montgomery B coefficient
        gx: Base point u-coordinate
        gy: Base point v-coordinate
        order: Order of the prime-order subgroup generated by the base point
        cofactor: Curve order divided by the subgroup order
    """

    prime: int
    a: int
    b: int
    gx: int
    gy: int
    order: int
    cofactor: int

    @property
    def a24(self) -> int:
        """Ladder constant (a - 2) / 4."""
        return (self.a - 2) // 4

    @property
    def bits(self) -> int:
        return self.prime.bit_length()

    def to_bytes(self, value: int, length: int = KEY_SIZE) -> bytes:
        """Fixed-width big-endian encoding of a curve parameter."""
        return value.to_bytes(length, "big")

    def encode_u(self, u: int) -> bytes:
        """Little-endian wire encoding of a u-coordinate."""
        return (u % self.prime).to_bytes(KEY_SIZE, "little")

    def decode_u(self, data: bytes) -> int:
        """Decode a u-coordinate, masking the unused high bit (RFC 7748)."""
        if len(data) != KEY_SIZE:
            raise InvalidKeyLengthError(len(data), "Point")
        return (int.from_bytes(data, "little") & ((1 << self.bits) - 1)) % self.prime

    @property
    def base_point(self) -> bytes:
        return self.encode_u(self.gx)


CURVE25519 = CurveParameters(
    prime=2**255 - 19,
    a=486662,
    b=1,
    gx=9,
    gy=0x20AE19A1B8A086B4E01EDD2C7748D14C923D4D7E6D7C61B229E9C5A27ECED3D9,
    order=2**252 + 27742317777372353535851937790883648493,
    cofactor=8,
)


# =============================================================================
# Scalar Operations
# =============================================================================


def clamp_scalar(scalar: bytes) -> bytes:
    """
    Apply Curve25519 clamping to a 32-byte scalar.

    Clears the three lowest bits (multiple of the cofactor), clears the
    highest bit and sets the second-highest bit.

    Args:
        scalar: 32 bytes, typically fresh randomness

    Returns:
        New clamped 32-byte scalar

    Raises:
        InvalidKeyLengthError: If scalar is not 32 bytes
    """
    if len(scalar) != KEY_SIZE:
        raise InvalidKeyLengthError(len(scalar), "Scalar")

    clamped = bytearray(scalar)
    clamped[0] &= 248
    clamped[31] &= 127
    clamped[31] |= 64
    return bytes(clamped)


def is_clamped(scalar: bytes) -> bool:
    if len(scalar) != KEY_SIZE:
        return False
    return (scalar[0] & 7) == 0 and (scalar[31] & 128) == 0 and (scalar[31] & 64) == 64


def x25519(scalar: bytes, u: bytes, curve: CurveParameters = CURVE25519) -> bytes:
    """
    Multiply the point with u-coordinate u by scalar using the Montgomery ladder.

    The scalar is used exactly as given; callers wanting X25519 semantics
    for raw randomness must clamp first. Bits above bit 254 are ignored.

    Args:
        scalar: 32-byte little-endian scalar
        u: 32-byte little-endian u-coordinate
        curve: Curve parameters (default: CURVE25519)

    Returns:
        32-byte little-endian u-coordinate of scalar * P

    Raises:
        InvalidKeyLengthError: If scalar or u is not 32 bytes

    Example:
        >>> k = clamp_scalar(bytes([9] + [0] * 31))
        >>> x25519(k, CURVE25519.base_point).hex()[:8]
        '422c8e7a'
    """
    if len(scalar) != KEY_SIZE:
        raise InvalidKeyLengthError(len(scalar), "Scalar")

    p = curve.prime
    a24 = curve.a24
    k = int.from_bytes(scalar, "little")
    x1 = curve.decode_u(u)

    x2, z2 = 1, 0
    x3, z3 = x1, 1
    swap = 0

    for t in reversed(range(curve.bits)):
        k_t = (k >> t) & 1
        swap ^= k_t
        if swap:
            x2, x3 = x3, x2
            z2, z3 = z3, z2
        swap = k_t

        a = (x2 + z2) % p
        aa = a * a % p
        b = (x2 - z2) % p
        bb = b * b % p
        e = (aa - bb) % p
        c = (x3 + z3) % p
        d = (x3 - z3) % p
        da = d * a % p
        cb = c * b % p

        x3 = (da + cb) ** 2 % p
        z3 = x1 * (da - cb) ** 2 % p
        x2 = aa * bb % p
        z2 = e * (aa + a24 * e) % p

    if swap:
        x2, x3 = x3, x2
        z2, z3 = z3, z2

    # z2 == 0 (low-order input) encodes as zero, matching RFC 7748
    return curve.encode_u(x2 * pow(z2, p - 2, p))


def scalar_mult_base(scalar: bytes, curve: CurveParameters = CURVE25519) -> bytes:
    """Public point for a private scalar: scalar * G."""
    return x25519(scalar, curve.base_point, curve)
