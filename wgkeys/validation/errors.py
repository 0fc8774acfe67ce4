"""Exceptions raised by the reference-tool validator."""

from typing import Optional


class ReferenceToolError(Exception):
    """Base exception for reference tool errors."""

    pass


class ToolUnavailableError(ReferenceToolError):
    """The reference tool is not installed or does not start."""

    pass


class ToolTimeoutError(ReferenceToolError):
    """The reference tool did not finish in time and was killed."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Reference tool timed out after {timeout:g} seconds")


class ToolExitNonZeroError(ReferenceToolError):
    """The reference tool exited with a non-zero status."""

    def __init__(self, returncode: int, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        message = f"Reference tool failed with exit code {returncode}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class ToolNoOutputError(ReferenceToolError):
    """The reference tool exited cleanly but printed nothing."""

    pass


class ToolOutputError(ReferenceToolError):
    """The reference tool output could not be read or is not a single key line."""

    pass


class ValidationMismatchError(ReferenceToolError):
    """Locally derived and reference-derived public keys differ."""

    def __init__(self, expected: str, actual: Optional[str]):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Public key mismatch: reference tool derived {expected}, key pair holds {actual}")
