"""WireGuard-compatible Curve25519 key material with reference-tool validation."""

__version__ = "0.1.0"
