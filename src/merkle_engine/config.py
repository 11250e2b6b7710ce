# merkle_engine - config.py
# Copyright (C) 2025 The merkle-engine Contributors
# This program is licensed under the Peer Production License (PPL).
"""Runtime configuration for the Merkle engine."""

from __future__ import annotations

import enum
import hashlib
import logging
import os
from functools import lru_cache
from typing import Final

from pydantic import BaseModel, field_validator

DEFAULT_HASH_ALGORITHM: Final[str] = "sha256"
DEFAULT_LOG_LEVEL: Final[str] = "INFO"

# Digests whose output length is chosen by the caller have no fixed hexdigest().
VARIABLE_LENGTH_ALGORITHMS: Final = frozenset({"shake_128", "shake_256"})

LOG_FORMAT: Final[str] = (
    "[%(name)s] %(asctime)s | %(levelname)s | %(filename)s:%(lineno)s >>> %(message)s"
)


def check_algorithm(value: str) -> str:
    """Normalize a hashlib algorithm name, refusing ones the engine cannot use.

    Raises:
        ValueError: If hashlib cannot construct the algorithm, or its digest
            length is chosen by the caller.

    """
    name = value.strip().lower()
    if name in VARIABLE_LENGTH_ALGORITHMS:
        raise ValueError(f"hash algorithm '{value}' has no fixed digest length")
    try:
        hashlib.new(name)
    except ValueError as e:
        raise ValueError(f"unknown hash algorithm '{value}'") from e
    return name


class ProofMatch(str, enum.Enum):
    """Which nodes a proof lookup is allowed to match against."""

    ANY_NODE = "any_node"
    LEAF_ONLY = "leaf_only"


class Settings(BaseModel):
    """Used as a checkpoint between the environment and the engine."""

    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    proof_match: ProofMatch = ProofMatch.ANY_NODE
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("hash_algorithm")
    @classmethod
    def _check_algorithm(cls, value: str) -> str:
        return check_algorithm(value)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        name = value.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"unknown log level '{value}'")
        return name

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings, letting MERKLE_* environment variables override defaults."""
        return cls(
            hash_algorithm=os.environ.get(
                "MERKLE_HASH_ALGORITHM",
                DEFAULT_HASH_ALGORITHM,
            ),
            proof_match=os.environ.get(
                "MERKLE_PROOF_MATCH",
                ProofMatch.ANY_NODE.value,
            ),
            log_level=os.environ.get("MERKLE_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read from the environment once."""
    return Settings.from_env()
