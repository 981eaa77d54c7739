"""Tests for the coqtop runner using an installed Coq."""

import shutil
from pathlib import Path

import pytest

from roq.coq.coqtop import Coqtop
from roq.errors import ProverFailure

# Skip all tests if Coq is not installed
pytestmark = pytest.mark.skipif(
    shutil.which("coqtop") is None,
    reason="Coq not installed",
)


class TestRealCoqtop:
    """Tests for Coqtop using the actual coqtop binary."""

    @pytest.mark.asyncio
    async def test_verify_valid_definition(self, tmp_path: Path):
        """coqtop accepts a well-formed definition."""
        source = tmp_path / "double.v"
        source.write_text("Definition double (a: nat) : nat :=\n\t(plus a a)\n.\n")
        await Coqtop().run_batch([source])

    @pytest.mark.asyncio
    async def test_verify_type_error(self, tmp_path: Path):
        """coqtop rejects ill-typed definitions with its own diagnostics."""
        source = tmp_path / "broken.v"
        source.write_text("Definition broken : nat := true.\n")
        with pytest.raises(ProverFailure) as exc_info:
            await Coqtop().run_batch([source])
        assert "Error" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_later_file_sees_earlier_definitions(self, tmp_path: Path):
        """Files are loaded in order into one session."""
        first = tmp_path / "first.v"
        first.write_text("Definition one : nat := 1.\n")
        second = tmp_path / "second.v"
        second.write_text("Theorem one_eq : one = 1.\nProof. reflexivity. Qed.\n")
        await Coqtop().run_batch([first, second])
