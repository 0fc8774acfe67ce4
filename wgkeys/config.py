import os

from pydantic import field_validator
from pydantic_settings import BaseSettings

from wgkeys.constants import (
    DEFAULT_TOOL_TIMEOUT,
    DEFAULT_VERSION_TIMEOUT,
    DEFAULT_WG_COMMAND,
    KEY_BACKENDS,
)


class Settings(BaseSettings):
    PROJECT_NAME: str = "wgkeys"

    # Reference tool (wg) invocation
    WG_TOOL_COMMAND: str = os.getenv("WG_TOOL_COMMAND", DEFAULT_WG_COMMAND)
    WG_TOOL_TIMEOUT: float = float(os.getenv("WG_TOOL_TIMEOUT", str(DEFAULT_TOOL_TIMEOUT)))
    WG_TOOL_VERSION_TIMEOUT: float = float(
        os.getenv("WG_TOOL_VERSION_TIMEOUT", str(DEFAULT_VERSION_TIMEOUT))
    )

    # Scalar multiplication backend: "ladder" (pure Python), "sodium" or "openssl"
    KEY_BACKEND: str = os.getenv("KEY_BACKEND", "ladder")

    # Strict: wrong-length key input raises. Non-strict is the legacy behaviour
    # of substituting a fresh random key, kept only for old callers.
    STRICT_KEY_LENGTH: bool = os.getenv("STRICT_KEY_LENGTH", "true").lower() == "true"

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @field_validator("WG_TOOL_COMMAND")
    @classmethod
    def validate_wg_tool_command(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("WG_TOOL_COMMAND must not be empty")
        return v.strip()

    @field_validator("WG_TOOL_TIMEOUT", "WG_TOOL_VERSION_TIMEOUT")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeouts must be positive")
        return v

    @field_validator("KEY_BACKEND")
    @classmethod
    def validate_key_backend(cls, v: str) -> str:
        name = v.strip().lower()
        if name not in KEY_BACKENDS:
            raise ValueError(f"KEY_BACKEND must be one of {', '.join(KEY_BACKENDS)}")
        return name

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
