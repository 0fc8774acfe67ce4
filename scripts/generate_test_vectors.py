#!/usr/bin/env python3
"""
Generate X25519 test vectors for the key derivation tests.
libsodium is the source of truth; the ladder output is checked against it.
"""
import base64
import json
import sys
from pathlib import Path

# Add project root to path for imports
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from nacl.bindings import crypto_scalarmult, crypto_scalarmult_base

from wgkeys.crypto.curve import clamp_scalar, scalar_mult_base, x25519


def hex_to_bytes(h: str) -> bytes:
    return bytes.fromhex(h)


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def generate_vectors():
    vectors = {
        "version": "1.0",
        "description": "X25519 / WireGuard key derivation test vectors",
        "scalar_mult": [],
        "public_key": [],
    }

    # RFC 7748 section 5.2
    scalar = hex_to_bytes("a546e36bf0527c9d3b16154b82465edd62144c0ac1fc5a18506a2244ba449ac4")
    u = hex_to_bytes("e6db6867583030db3594c1a424b15f7c726624ec26b3353b10a903a6d0ab1c4c")
    expected = crypto_scalarmult(scalar, u)
    assert x25519(clamp_scalar(scalar), u) == expected
    vectors["scalar_mult"].append({
        "description": "RFC 7748 5.2 vector 1",
        "scalar_hex": scalar.hex(),
        "u_hex": u.hex(),
        "expected_hex": expected.hex(),
    })

    # RFC 7748 section 6.1 (Alice and Bob), stored clamped as WireGuard stores them
    for name, private_hex in (
        ("alice", "77076d0a7318a57d3c16c17251b26645df4c2f87ebc0992ab177fba51db92c2a"),
        ("bob", "5dab087e624a8a4b79e17f8b83800ee66f3bb1292618b6fd1c2f8b27ff88e0eb"),
    ):
        private_key = clamp_scalar(hex_to_bytes(private_hex))
        public_key = crypto_scalarmult_base(private_key)
        assert scalar_mult_base(private_key) == public_key
        vectors["public_key"].append({
            "description": f"RFC 7748 6.1 {name}",
            "private_key_hex": private_key.hex(),
            "public_key_hex": public_key.hex(),
            "private_key_b64": b64(private_key),
            "public_key_b64": b64(public_key),
        })

    output = project_dir / "tests" / "fixtures" / "x25519_test_vectors.json"
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(vectors, indent=2) + "\n")

    print(f"Generated: {output}")


if __name__ == "__main__":
    generate_vectors()
