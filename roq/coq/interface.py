"""Abstract interface for running Coq batches."""

from abc import ABC, abstractmethod
from os import PathLike
from pathlib import Path
from typing import Sequence, Union

from roq.errors import InvalidInput

COQ_EXTENSION = ".v"

BatchPath = Union[str, PathLike]


def validate_batch(batch: Sequence[BatchPath]) -> list[Path]:
    """Check that every file in a batch is a Coq vernacular file.

    All paths are checked before anything is run.

    Returns:
        The batch as a list of Paths, in the given order

    Raises:
        InvalidInput: If any path lacks the '.v' extension
    """
    paths = [Path(p) for p in batch]
    for path in paths:
        if path.suffix != COQ_EXTENSION:
            raise InvalidInput(f"File must have '{COQ_EXTENSION}' extension: {str(path)!r}")
    return paths


class Prover(ABC):
    """Abstract base class for batch Coq checkers.

    Implementations either run the real coqtop binary or simulate it for
    development and testing.
    """

    @abstractmethod
    async def run_batch(self, batch: Sequence[BatchPath]) -> str:
        """Check a batch of Coq vernacular files in order.

        Args:
            batch: Paths of '.v' files, loaded in the given order

        Returns:
            The prover's standard output

        Raises:
            InvalidInput: If a file does not have the '.v' extension
            SpawnFailure: If the prover could not be started
            WaitFailure: If the prover could not be awaited
            ProverFailure: If the prover rejected the batch
        """
        pass
