"""Coq prover invocation for roq."""

from roq.coq.coqtop import Coqtop
from roq.coq.interface import COQ_EXTENSION, Prover, validate_batch
from roq.coq.mock import MockProver, RecordedBatch

__all__ = [
    "COQ_EXTENSION",
    "Coqtop",
    "MockProver",
    "Prover",
    "RecordedBatch",
    "validate_batch",
]
