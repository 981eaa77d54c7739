"""Tests for the prover interface and the mock prover."""

from pathlib import Path

import pytest

from roq.coq.interface import Prover, validate_batch
from roq.coq.mock import MockProver
from roq.errors import InvalidInput, ProverFailure


class TestValidateBatch:
    """Tests for '.v' extension validation."""

    def test_accepts_v_files(self):
        assert validate_batch(["a.v", Path("dir/b.v")]) == [Path("a.v"), Path("dir/b.v")]

    def test_preserves_order(self):
        assert validate_batch(["z.v", "a.v"]) == [Path("z.v"), Path("a.v")]

    @pytest.mark.parametrize("name", ["proof.txt", "proof", "proof.v.bak", "proof.V", ".v"])
    def test_rejects_other_extensions(self, name):
        with pytest.raises(InvalidInput, match="'.v' extension"):
            validate_batch(["ok.v", name])

    def test_empty_batch(self):
        assert validate_batch([]) == []


class TestProver:
    """Tests for the abstract Prover class."""

    def test_cannot_instantiate_directly(self):
        """Prover is abstract and cannot be instantiated."""
        with pytest.raises(TypeError):
            Prover()  # type: ignore

    def test_subclass_must_implement_run_batch(self):
        """Subclasses must implement run_batch."""

        class IncompleteProver(Prover):
            pass

        with pytest.raises(TypeError):
            IncompleteProver()  # type: ignore


class TestMockProver:
    """Tests for MockProver."""

    @pytest.mark.asyncio
    async def test_accepts_complete_proof(self, tmp_path: Path):
        """Mock prover accepts files without admitted proofs."""
        proof = tmp_path / "ok.v"
        proof.write_text("Theorem t : True.\nProof. exact I. Qed.\n")
        prover = MockProver(output="done\n")

        assert await prover.run_batch([proof]) == "done\n"
        assert prover.run_count == 1
        assert prover.batches[0].paths == [proof]
        assert "exact I" in prover.batches[0].contents[0]

    @pytest.mark.asyncio
    async def test_rejects_admitted(self, tmp_path: Path):
        """Mock prover rejects incomplete proofs."""
        proof = tmp_path / "admitted.v"
        proof.write_text("Theorem t : False.\nProof. Admitted.\n")
        prover = MockProver()

        with pytest.raises(ProverFailure, match="incomplete") as exc_info:
            await prover.run_batch([proof])
        assert exc_info.value.returncode == 1

    @pytest.mark.asyncio
    async def test_rejects_bad_extension_without_recording(self, tmp_path: Path):
        """Invalid batches are rejected before the mock records anything."""
        prover = MockProver()
        with pytest.raises(InvalidInput):
            await prover.run_batch([tmp_path / "proof.lean"])
        assert prover.run_count == 0

    @pytest.mark.asyncio
    async def test_missing_file_is_prover_failure(self, tmp_path: Path):
        """A batch file that cannot be loaded fails like a real prover run."""
        prover = MockProver()
        with pytest.raises(ProverFailure, match="gone.v") as exc_info:
            await prover.run_batch([tmp_path / "gone.v"])
        assert exc_info.value.returncode == 1
        assert prover.run_count == 0
