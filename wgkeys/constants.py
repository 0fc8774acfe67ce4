"""
Library-wide constants.

These constants are used across the codebase for consistency and maintainability.
"""

import sys

# WireGuard keys (private scalars, public points, preshared keys) are 32 bytes.
KEY_SIZE = 32

# Standard padded base64 of 32 bytes: 44 characters, always ending in "=".
ENCODED_KEY_LENGTH = 44

# Executable name of the reference tool on this platform.
DEFAULT_WG_COMMAND = "wg.exe" if sys.platform == "win32" else "wg"

# Reference tool budgets (seconds)
DEFAULT_TOOL_TIMEOUT = 10.0
DEFAULT_VERSION_TIMEOUT = 5.0

# Key derivation backends understood by get_key_pair_generator()
KEY_BACKENDS = ("ladder", "sodium", "openssl")

# After a kill, how long to wait for the tool's pipes to close and its exit
# status to arrive (seconds)
TOOL_KILL_GRACE = 2.0

# Bytes of tool stdout/stderr kept; anything beyond is read and discarded
TOOL_OUTPUT_KEEP = 64 * 1024
