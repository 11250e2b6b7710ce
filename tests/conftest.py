# merkle_engine - conftest.py
from __future__ import annotations

from collections.abc import Generator

import pytest

from merkle_engine.config import get_settings

MERKLE_ENV_VARS = (
    "MERKLE_HASH_ALGORITHM",
    "MERKLE_PROOF_MATCH",
    "MERKLE_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_settings(
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Run every test against default settings unless it overrides them."""
    for name in MERKLE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
