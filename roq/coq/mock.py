"""Mock Coq prover for development and testing."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from roq.coq.interface import BatchPath, Prover, validate_batch
from roq.errors import ProverFailure


@dataclass
class RecordedBatch:
    """A batch the mock received, with file contents captured at run time."""

    paths: list[Path]
    contents: list[str]


class MockProver(Prover):
    """Mock prover that never spawns a process.

    Applies the same '.v' validation as the real runner, then uses a
    heuristic:
    - Rejects files that admit instead of prove ('Admitted.', 'admit.')
    - Fails like coqtop on files it cannot load
    - Accepts everything else, returning ``output``

    Every batch that passes validation is recorded in ``batches``.
    """

    INCOMPLETE = re.compile(r"\b(Admitted|admit)\s*\.")

    def __init__(self, output: str = "") -> None:
        """Initialize mock prover.

        Args:
            output: Standard output to return for accepted batches
        """
        self.output = output
        self.batches: list[RecordedBatch] = []

    @property
    def run_count(self) -> int:
        return len(self.batches)

    async def run_batch(self, batch: Sequence[BatchPath]) -> str:
        paths = validate_batch(batch)
        contents = []
        for path in paths:
            try:
                contents.append(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError) as e:
                raise ProverFailure(f'Error: Can\'t load "{path}": {e}\n', returncode=1) from e
        self.batches.append(RecordedBatch(paths=paths, contents=contents))

        for path, text in zip(paths, contents):
            if self.INCOMPLETE.search(text):
                raise ProverFailure(
                    f'File "{path}": proof is incomplete (admitted)\n',
                    returncode=1,
                )

        return self.output
