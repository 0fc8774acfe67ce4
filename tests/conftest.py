"""
Shared test fixtures for wgkeys tests.

The reference tool is simulated by tests/utils/fake_wg.py, run with the
current interpreter. Tests against the real `wg` binary use the
wg_validator fixture and are skipped when WireGuard is not installed.
"""
import sys

import pytest

from wgkeys.crypto import (
    Curve25519KeyPairGenerator,
    KeyPairGenerator,
    OpenSSLKeyPairGenerator,
    SodiumKeyPairGenerator,
)
from wgkeys.validation import ReferenceValidator
from tests.utils.crypto_test_utils import FAKE_WG_PATH, load_test_vectors


@pytest.fixture(scope="session")
def test_vectors() -> dict:
    """X25519 vectors from tests/fixtures."""
    return load_test_vectors()


@pytest.fixture
def ladder_generator() -> KeyPairGenerator:
    return Curve25519KeyPairGenerator()


@pytest.fixture(
    params=[Curve25519KeyPairGenerator, SodiumKeyPairGenerator, OpenSSLKeyPairGenerator],
    ids=["ladder", "sodium", "openssl"],
)
def generator(request) -> KeyPairGenerator:
    """Every generator backend in turn."""
    return request.param()


@pytest.fixture
def fake_wg_command() -> list[str]:
    return [sys.executable, str(FAKE_WG_PATH)]


@pytest.fixture
def fake_wg_mode(monkeypatch):
    """Select the fake tool's behaviour for this test."""
    def _set(mode: str) -> None:
        monkeypatch.setenv("FAKE_WG_MODE", mode)
    _set("ok")
    return _set


@pytest.fixture
def fake_validator(fake_wg_command, fake_wg_mode) -> ReferenceValidator:
    """Validator wired to the fake tool."""
    return ReferenceValidator(command=fake_wg_command, timeout=5.0, version_timeout=5.0)


@pytest.fixture
def wg_validator() -> ReferenceValidator:
    """Validator wired to the real `wg` tool; skips when it is not installed."""
    validator = ReferenceValidator()
    if not validator.is_tool_available():
        pytest.skip("WireGuard tools (wg) not installed")
    return validator
