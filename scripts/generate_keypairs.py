#!/usr/bin/env python3
"""
Generate WireGuard key pairs and print them.

Prints each private/public key in base64 plus the matching
`echo <private> | wg pubkey` command for cross-checking by hand. With
--validate, each pair is also checked against the installed wg tool.

Usage:
    python scripts/generate_keypairs.py --count 5
    python scripts/generate_keypairs.py --backend sodium --validate
    python scripts/generate_keypairs.py --tunnel
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from wgkeys.config import settings
from wgkeys.crypto import KeyPair, Tunnel, get_key_pair_generator
from wgkeys.validation import ReferenceToolError, ReferenceValidator

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main(count: int, backend: str, validate: bool, tunnel: bool) -> int:
    generator = get_key_pair_generator(backend)
    validator = ReferenceValidator() if validate else None

    if validator is not None and not validator.is_tool_available():
        logger.error("wg tool not available, cannot validate")
        return 2

    if tunnel:
        for t in Tunnel.create_many(count, generator):
            with t:
                print(t.describe())
                print()
        return 0

    failures = 0
    commands = []
    for _ in range(count):
        with KeyPair.create_random(generator) as pair:
            print(pair.private_key.encoded())
            print(pair.public_key.encoded())
            commands.append(f"echo {pair.private_key.encoded()} | wg pubkey")

            if validator is not None:
                try:
                    ok = validator.validate(pair)
                except ReferenceToolError as e:
                    logger.error("Validation error: %s", e)
                    return 1
                print("valid" if ok else "MISMATCH")
                failures += 0 if ok else 1
            print()

    for command in commands:
        print(command)

    return 1 if failures else 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate WireGuard key pairs")
    parser.add_argument("--count", type=int, default=5, help="Number of pairs (default: 5)")
    parser.add_argument(
        "--backend",
        default=settings.KEY_BACKEND,
        choices=["ladder", "sodium", "openssl"],
        help="Scalar multiplication backend",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Check every pair against the installed wg tool",
    )
    parser.add_argument(
        "--tunnel",
        action="store_true",
        help="Generate tunnel key sets (two pairs plus a preshared key) instead",
    )
    args = parser.parse_args()

    sys.exit(main(args.count, args.backend, args.validate, args.tunnel))
