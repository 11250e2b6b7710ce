# merkle_engine - test_run_demo.py

import pytest

from merkle_engine import run_demo
from merkle_engine.hasher import Hasher, HasherError


def test_demo_prints_proof(capsys: pytest.CaptureFixture[str]) -> None:
    """The demo proves 'data3' against the four sample leaves."""
    assert run_demo.main() == 0

    sibling = Hasher("sha256").combine("data1", "data2")
    out = capsys.readouterr().out
    assert f"Merkle Proof for data3: ['data4', '{sibling}']" in out


def test_demo_reports_missing_leaf(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(run_demo, "DEMO_TARGET", "data9")
    assert run_demo.main() == 0
    assert "Leaf not found in the Merkle tree." in capsys.readouterr().out


def test_demo_rejects_bad_configuration(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """An unusable MERKLE_* setting ends the demo with a failure code."""
    monkeypatch.setenv("MERKLE_HASH_ALGORITHM", "not-a-real-hash")
    assert run_demo.main() == 1


def test_demo_rejects_unusable_hasher(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A hash algorithm that cannot be constructed ends the demo with a failure code."""

    def refuse(algorithm: str) -> Hasher:
        raise HasherError(f"unknown hash algorithm '{algorithm}'")

    monkeypatch.setattr(run_demo, "Hasher", refuse)
    assert run_demo.main() == 1
