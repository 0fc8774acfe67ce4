"""
Differential validation of key pairs against the WireGuard reference tool.

The reference tool protocol:
1. Spawn `wg pubkey`
2. Write the base64 private key plus a newline to stdin, close stdin
3. Read stdout to EOF; its first line is the base64 public key
4. Non-zero exit is always a failure, whatever was printed
5. Total budget of 10 seconds, after which the process (and anything it
   spawned) is killed

stdout, stderr and the exit status are awaited as three concurrent tasks.
Both pipes are read to EOF (keeping the first 64 KiB of each) so the tool
can never block on a full pipe that nobody drains.
"""

import asyncio
import base64
import binascii
import hmac
import logging
import os
import shlex
import signal
import subprocess
from typing import List, Optional, Sequence, Set, Tuple

from wgkeys.constants import TOOL_KILL_GRACE, TOOL_OUTPUT_KEEP
from wgkeys.crypto.keypair import KeyPair
from wgkeys.validation.errors import (
    ReferenceToolError,
    ToolExitNonZeroError,
    ToolNoOutputError,
    ToolOutputError,
    ToolTimeoutError,
    ToolUnavailableError,
    ValidationMismatchError,
)

logger = logging.getLogger(__name__)

_POSIX = os.name == "posix"


def _default_command() -> List[str]:
    from wgkeys.config import settings

    return shlex.split(settings.WG_TOOL_COMMAND, posix=_POSIX)


async def _drain(stream: asyncio.StreamReader, keep: int = TOOL_OUTPUT_KEEP) -> Tuple[bytes, bool]:
    """
    Read a pipe to EOF, keeping at most `keep` bytes.

    Returns:
        (kept bytes, whether anything was discarded)
    """
    kept = bytearray()
    truncated = False
    while True:
        chunk = await stream.read(TOOL_OUTPUT_KEEP)
        if not chunk:
            return bytes(kept), truncated
        room = keep - len(kept)
        if len(chunk) > room:
            truncated = True
        kept += chunk[:room]


async def _reap(pending: Set["asyncio.Future"]) -> None:
    """Give the killed tool's tasks a short grace period, then cancel the rest."""
    _, still_pending = await asyncio.wait(pending, timeout=TOOL_KILL_GRACE)
    if still_pending:
        logger.warning("Reference tool pipes still open %ss after kill", TOOL_KILL_GRACE)
        for task in still_pending:
            task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)


def _kill_tree_windows(process: asyncio.subprocess.Process) -> None:
    try:
        subprocess.run(
            ["taskkill", "/T", "/F", "/PID", str(process.pid)],
            capture_output=True,
            timeout=TOOL_KILL_GRACE,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning("taskkill failed, killing tool only: %s", e)
        if process.returncode is None:
            process.kill()


class ReferenceValidator:
    """
    Checks locally derived public keys against the reference `wg` tool.

    Usage:
        validator = ReferenceValidator()
        if validator.is_tool_available():
            with KeyPair.create_random() as pair:
                assert validator.validate(pair)
    """

    def __init__(
        self,
        command: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
        version_timeout: Optional[float] = None,
    ):
        """
        Initialize the validator.

        Args:
            command: Tool command as argv prefix (default: settings.WG_TOOL_COMMAND)
            timeout: Budget for one pubkey derivation in seconds (default: 10)
            version_timeout: Budget for the availability probe in seconds (default: 5)
        """
        from wgkeys.config import settings

        self.command = list(command) if command else _default_command()
        if not self.command:
            raise ValueError("Reference tool command must not be empty")
        self.timeout = timeout if timeout is not None else settings.WG_TOOL_TIMEOUT
        self.version_timeout = (
            version_timeout if version_timeout is not None else settings.WG_TOOL_VERSION_TIMEOUT
        )

    # =========================================================================
    # Tool discovery
    # =========================================================================

    def _run_version(self) -> Optional[subprocess.CompletedProcess]:
        try:
            return subprocess.run(
                [*self.command, "--version"],
                capture_output=True,
                text=True,
                timeout=self.version_timeout,
            )
        except FileNotFoundError:
            logger.debug("Reference tool not found: %s", self.command[0])
        except subprocess.TimeoutExpired:
            logger.warning("Reference tool version query timed out after %ss", self.version_timeout)
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning("Could not run reference tool: %s", e)
        return None

    def is_tool_available(self) -> bool:
        """Whether `<tool> --version` starts and exits zero. Never raises."""
        result = self._run_version()
        return result is not None and result.returncode == 0

    def get_tool_version(self) -> Optional[str]:
        """Version string reported by the tool, or None if unavailable."""
        result = self._run_version()
        if result is None or result.returncode != 0:
            return None
        return result.stdout.strip() or None

    # =========================================================================
    # Public key derivation
    # =========================================================================

    async def derive_public_key_via_tool_async(self, private_key_encoded: str) -> str:
        """
        Derive the public key for a base64 private key using the reference tool.

        Args:
            private_key_encoded: Private key in base64 (44 characters)

        Returns:
            The tool's base64 public key, stripped

        Raises:
            ToolUnavailableError: If the tool is not installed or fails to start
            ToolTimeoutError: If the tool does not finish within the timeout
            ToolExitNonZeroError: If the tool exits non-zero
            ToolNoOutputError: If the tool prints nothing
            ToolOutputError: If the output cannot be read or has no line break
                within the kept bytes
        """
        if not await asyncio.to_thread(self.is_tool_available):
            raise ToolUnavailableError(
                f"Reference tool '{self.command[0]}' is not available. Please install WireGuard."
            )

        try:
            process = await asyncio.create_subprocess_exec(
                *self.command,
                "pubkey",
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=_POSIX,
            )
        except OSError as e:
            raise ToolUnavailableError(f"Could not start reference tool: {e}") from e

        try:
            process.stdin.write(f"{private_key_encoded}\n".encode("utf-8"))
            await process.stdin.drain()
        except (BrokenPipeError, ConnectionResetError):
            # Tool exited before reading; its exit status tells us why
            logger.debug("Reference tool closed stdin early")
        finally:
            process.stdin.close()

        stdout_task = asyncio.ensure_future(_drain(process.stdout))
        stderr_task = asyncio.ensure_future(_drain(process.stderr))
        exit_task = asyncio.ensure_future(process.wait())
        tasks = [stdout_task, stderr_task, exit_task]

        try:
            done, pending = await asyncio.wait(
                tasks, timeout=self.timeout, return_when=asyncio.FIRST_EXCEPTION
            )
        except asyncio.CancelledError:
            self._kill(process)
            for task in tasks:
                task.cancel()
            raise

        failed = next((task for task in done if task.exception() is not None), None)
        if pending:
            self._kill(process)
            await _reap(pending)
            if failed is None:
                logger.warning(
                    "Reference tool timed out after %ss, killed pid %s", self.timeout, process.pid
                )
                raise ToolTimeoutError(self.timeout)
        if failed is not None:
            raise ToolOutputError(
                f"Could not read reference tool output: {failed.exception()}"
            ) from failed.exception()

        (stdout, stdout_truncated), (stderr, _), returncode = (task.result() for task in tasks)

        error_text = stderr.decode("utf-8", errors="replace")
        if returncode != 0:
            logger.warning("Reference tool exited with code %s", returncode)
            raise ToolExitNonZeroError(returncode, error_text)

        if stdout_truncated and b"\n" not in stdout:
            raise ToolOutputError(
                f"Reference tool printed more than {TOOL_OUTPUT_KEEP} bytes without a newline"
            )

        lines = stdout.decode("utf-8", errors="replace").splitlines()
        public_key = lines[0].strip() if lines else ""
        if not public_key:
            raise ToolNoOutputError("Reference tool returned no output")

        return public_key

    def derive_public_key_via_tool(self, private_key_encoded: str) -> str:
        """Synchronous wrapper around derive_public_key_via_tool_async()."""
        return asyncio.run(self.derive_public_key_via_tool_async(private_key_encoded))

    @staticmethod
    def _kill(process: asyncio.subprocess.Process) -> None:
        """Kill the tool and everything it spawned."""
        if not _POSIX:
            _kill_tree_windows(process)
            return
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
        except PermissionError:
            if process.returncode is None:
                process.kill()

    # =========================================================================
    # Validation
    # =========================================================================

    async def _reference_public_key(self, key_pair: KeyPair) -> bytes:
        reference = await self.derive_public_key_via_tool_async(key_pair.private_key.encoded())
        try:
            return base64.b64decode(reference, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ReferenceToolError(f"Reference tool returned invalid base64: {reference!r}") from e

    async def validate_async(self, key_pair: KeyPair) -> bool:
        """
        Check a pair's public key against the reference tool's derivation.

        Keys are compared as decoded bytes, in constant time. Tool failures
        propagate; they are never reported as a plain mismatch.
        """
        reference = await self._reference_public_key(key_pair)
        matches = hmac.compare_digest(reference, key_pair.public_key.raw_bytes())
        logger.info("Reference validation %s", "passed" if matches else "failed")
        return matches

    def validate(self, key_pair: KeyPair) -> bool:
        return asyncio.run(self.validate_async(key_pair))

    def assert_valid(self, key_pair: KeyPair) -> None:
        """
        Like validate(), but raises on mismatch.

        Raises:
            ValidationMismatchError: If the public keys differ
        """
        reference = asyncio.run(self._reference_public_key(key_pair))
        if not hmac.compare_digest(reference, key_pair.public_key.raw_bytes()):
            raise ValidationMismatchError(
                expected=base64.b64encode(reference).decode("ascii"),
                actual=key_pair.public_key.encoded(),
            )
