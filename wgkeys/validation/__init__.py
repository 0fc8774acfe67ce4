"""Differential validation against the WireGuard reference tool."""

from .errors import (
    ReferenceToolError,
    ToolExitNonZeroError,
    ToolNoOutputError,
    ToolOutputError,
    ToolTimeoutError,
    ToolUnavailableError,
    ValidationMismatchError,
)
from .reference_validator import ReferenceValidator

__all__ = [
    "ReferenceValidator",
    "ReferenceToolError",
    "ToolUnavailableError",
    "ToolTimeoutError",
    "ToolExitNonZeroError",
    "ToolNoOutputError",
    "ToolOutputError",
    "ValidationMismatchError",
]
