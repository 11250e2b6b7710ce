# merkle_engine - merkle.py
# Copyright (C) 2025 The merkle-engine Contributors
# This program is licensed under the Peer Production License (PPL).
"""Hash trees over ordered string leaves, with sibling-path inclusion proofs."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING

from merkle_engine.config import LOG_FORMAT, ProofMatch, get_settings
from merkle_engine.hasher import Hasher

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)

stdout_handler = logging.StreamHandler(stream=sys.stdout)
stdout_handler.setFormatter(logging.Formatter(LOG_FORMAT))

logger.addHandler(stdout_handler)
logger.setLevel(logging.INFO)
logger.propagate = False


@dataclass
class MerkleNode:
    """One vertex of the tree.

    A leaf stores its input value verbatim as ``hash``. An internal node
    always owns exactly two children and stores the digest of their
    concatenated hashes.
    """

    hash: str
    left: MerkleNode | None = None
    right: MerkleNode | None = None

    @property
    def is_leaf(self) -> bool:
        """Return True if this node has no children."""
        return self.left is None and self.right is None

    def copy(self) -> MerkleNode:
        """Return an independent copy of this node and its whole subtree."""
        if self.left is None or self.right is None:
            return MerkleNode(self.hash)
        return MerkleNode(self.hash, self.left.copy(), self.right.copy())


class MerkleTree:
    """An immutable binary hash tree built once from its leaves.

    Leaves keep the order they were given in. The hasher and the proof
    match policy are fixed at construction.
    """

    def __init__(
        self,
        leaves: Iterable[str],
        hasher: Hasher | None = None,
        match: ProofMatch | None = None,
    ) -> None:
        """Build the tree bottom-up from ``leaves``, in the order given.

        Leaf values are NOT hashed: each one is stored as its node's hash.
        An empty sequence yields a tree with no root. ``hasher`` and
        ``match`` default to the configured settings.
        """
        self.hasher: Hasher = hasher if hasher is not None else Hasher()
        self.match: ProofMatch = (
            match if match is not None else get_settings().proof_match
        )
        self.leaves: tuple[str, ...] = tuple(leaves)
        for leaf in self.leaves:
            if not isinstance(leaf, str):
                raise TypeError(
                    f"leaf values must be str, not {type(leaf).__name__}",
                )

        self.depth: int = 0
        self.root: MerkleNode | None = self._build_tree(
            [MerkleNode(leaf) for leaf in self.leaves],
        )
        logger.debug(
            f"Built Merkle tree: {len(self.leaves)} leaves, depth {self.depth}, "
            f"root {self.root_hash}",
        )

    def _build_tree(self, level: list[MerkleNode]) -> MerkleNode | None:
        """Combine the current level pairwise until a single root remains."""
        while len(level) > 1:
            level = self._build_next_level(level)
            self.depth += 1
        return level[0] if level else None

    def _build_next_level(self, level: list[MerkleNode]) -> list[MerkleNode]:
        """Pair off ``level`` left to right and hash each pair into a parent.

        A trailing odd node is paired with a copy of itself.
        """
        next_level: list[MerkleNode] = []
        for i in range(0, len(level), 2):
            left = level[i]
            right = level[i + 1] if i + 1 < len(level) else left.copy()
            next_level.append(
                MerkleNode(
                    self.hasher.combine(left.hash, right.hash),
                    left,
                    right,
                ),
            )
        return next_level

    @property
    def root_hash(self) -> str | None:
        """Return the root's hash, or None for an empty tree."""
        return self.root.hash if self.root is not None else None

    def generate_proof(
        self,
        target: str,
        match: ProofMatch | None = None,
    ) -> list[str] | None:
        """Generate the proof of inclusion for ``target``.

        The proof lists sibling hashes from the deepest level up to the
        root. ``target`` is compared exactly against stored node hashes;
        with ``ProofMatch.ANY_NODE`` an internal node may match as well as
        a leaf. ``match`` overrides the tree's policy for this lookup.
        Returns None when nothing matches. A match at the root gives an
        empty (but present) proof.
        """
        if match is None:
            match = self.match

        if self.root is None:
            logger.debug(f"Proof requested for '{target}' on an empty tree.")
            return None

        proof: list[str] = []
        if not self._search(self.root, target, match, proof):
            logger.debug(f"'{target}' not found in the Merkle tree.")
            return None
        return proof

    def _search(
        self,
        node: MerkleNode,
        target: str,
        match: ProofMatch,
        proof: list[str],
    ) -> bool:
        """Depth-first search, left before right, recording siblings on unwind."""
        if node.hash == target and (
            match == ProofMatch.ANY_NODE or node.is_leaf
        ):
            return True

        if node.left is None or node.right is None:
            return False

        if self._search(node.left, target, match, proof):
            proof.append(node.right.hash)
            return True

        if self._search(node.right, target, match, proof):
            proof.append(node.left.hash)
            return True

        return False

    def contains(self, target: str, match: ProofMatch | None = None) -> bool:
        """Return True if a proof can be generated for ``target``."""
        return self.generate_proof(target, match) is not None

    def __contains__(self, target: object) -> bool:
        return isinstance(target, str) and self.contains(target)

    def __len__(self) -> int:
        return len(self.leaves)

    def __iter__(self) -> Iterator[str]:
        return iter(self.leaves)

    def __repr__(self) -> str:
        return (
            f"MerkleTree(leaves={len(self.leaves)}, depth={self.depth}, "
            f"root={self.root_hash!r}, algorithm={self.hasher.algorithm!r})"
        )


def build(
    leaves: Iterable[str],
    hasher: Hasher | None = None,
    match: ProofMatch | None = None,
) -> MerkleTree:
    """Build a MerkleTree over ``leaves``."""
    return MerkleTree(leaves, hasher=hasher, match=match)
