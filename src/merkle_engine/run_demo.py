# merkle_engine - run_demo.py
# Copyright (C) 2025 The merkle-engine Contributors
# This program is licensed under the Peer Production License (PPL).
"""Build a small tree and print the inclusion proof for one of its leaves."""

from __future__ import annotations

import logging
import sys
from typing import Final

from pydantic import ValidationError

from merkle_engine import merkle
from merkle_engine.config import LOG_FORMAT, get_settings
from merkle_engine.hasher import Hasher, HasherError

logger = logging.getLogger("merkle-demo")

stdout_handler = logging.StreamHandler(stream=sys.stdout)
stdout_handler.setFormatter(logging.Formatter(LOG_FORMAT))

logger.addHandler(stdout_handler)
logger.setLevel(logging.INFO)
logger.propagate = False

DEMO_LEAVES: Final[tuple[str, ...]] = ("data1", "data2", "data3", "data4")
DEMO_TARGET: Final[str] = "data3"


def main() -> int:
    """Run the demonstration and return a process exit code."""
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error(f"invalid MERKLE_* environment configuration ({e})")
        return 1

    logger.setLevel(settings.log_level)
    merkle.logger.setLevel(settings.log_level)
    logger.info(f"running with config {settings}")

    try:
        hasher = Hasher(settings.hash_algorithm)
    except HasherError as e:
        logger.error(f"cannot hash with '{settings.hash_algorithm}' ({e})")
        return 1

    tree = merkle.build(DEMO_LEAVES, hasher, settings.proof_match)
    proof = tree.generate_proof(DEMO_TARGET)

    if proof is not None:
        print(f"Merkle Proof for {DEMO_TARGET}: {proof}")
    else:
        print("Leaf not found in the Merkle tree.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
