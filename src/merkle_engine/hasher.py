# merkle_engine - hasher.py
# Copyright (C) 2025 The merkle-engine Contributors
# This program is licensed under the Peer Production License (PPL).
"""Hasher - the digest primitive shared by every node of a tree."""

from __future__ import annotations

import hashlib

from merkle_engine.config import check_algorithm, get_settings

ENCODING = "utf-8"


class HasherError(Exception):
    """Raised when a digest algorithm cannot be used by the engine."""

    __slots__ = ()


class Hasher:
    """A fixed-length cryptographic digest bound to one hashlib algorithm."""

    __slots__ = ("algorithm", "digest_size")

    def __init__(self, algorithm: str | None = None) -> None:
        """Bind the hasher to ``algorithm``, or the configured default.

        Raises:
            HasherError: If hashlib does not provide the algorithm, or it
                has no fixed digest length.

        """
        if algorithm is None:
            algorithm = get_settings().hash_algorithm
        try:
            name = check_algorithm(algorithm)
        except ValueError as e:
            raise HasherError(str(e)) from e

        self.algorithm: str = name
        self.digest_size: int = hashlib.new(name).digest_size

    def digest(self, data: bytes | str) -> str:
        """Return the lowercase hex digest of ``data``."""
        if isinstance(data, str):
            data = data.encode(ENCODING)
        return hashlib.new(self.algorithm, data).hexdigest()

    def combine(self, left: str, right: str) -> str:
        """Hash two node hashes joined as text, left first."""
        return self.digest(left + right)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hasher):
            return NotImplemented
        return self.algorithm == other.algorithm

    def __hash__(self) -> int:
        return hash(self.algorithm)

    def __repr__(self) -> str:
        return f"Hasher(algorithm={self.algorithm!r})"


def digest(data: bytes | str, algorithm: str | None = None) -> str:
    """Hash ``data`` with ``algorithm`` (or the configured default)."""
    return Hasher(algorithm).digest(data)
