"""roq: translate host functions to Coq and prove things about them.

Pure host functions over naturals and booleans become Coq ``Definition``
statements, which can be checked alongside hand-written proofs by coqtop.
"""

__version__ = "0.1.0"

from roq.ast import Definition, Vernacular
from roq.batch import File, Function, Inline, ProofResult, assemble, prove, try_prove
from roq.config import Config
from roq.coq import Coqtop, MockProver, Prover
from roq.errors import (
    InvalidInput,
    ParseRejected,
    ProverError,
    ProverFailure,
    ProverTimeout,
    RoqError,
    SpawnFailure,
    StructuralViolation,
    TranslationError,
    WaitFailure,
)
from roq.translate import translate_function, vernacular

__all__ = [
    # Config
    "Config",
    # AST
    "Definition",
    "Vernacular",
    # Translation
    "translate_function",
    "vernacular",
    # Proving
    "Prover",
    "Coqtop",
    "MockProver",
    "Inline",
    "File",
    "Function",
    "ProofResult",
    "assemble",
    "prove",
    "try_prove",
    # Errors
    "RoqError",
    "TranslationError",
    "ParseRejected",
    "StructuralViolation",
    "ProverError",
    "InvalidInput",
    "SpawnFailure",
    "WaitFailure",
    "ProverTimeout",
    "ProverFailure",
]
