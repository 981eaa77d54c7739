"""Error taxonomy for roq.

Translation errors read like compiler diagnostics pinned to the offending
host construct. Prover errors classify how a batch run of coqtop went wrong.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """Position of a host syntax node."""

    line: int
    column: int
    file: str = "<input>"

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


class RoqError(Exception):
    """Base class for every error raised by roq."""


# ---------------------------------------------------------------------------
# Translation
# ---------------------------------------------------------------------------


class TranslationError(RoqError):
    """A host function could not be translated to a Coq definition."""

    def __init__(self, message: str, location: SourceLocation | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self) -> str:
        if self.location is None:
            return f"error: {self.message}"
        return f"{self.location}: error: {self.message}"


class ParseRejected(TranslationError):
    """An unrecognized syntactic node, operator or type.

    Attributes:
        kind: Tag naming the syntactic kind that was rejected
    """

    def __init__(
        self,
        message: str,
        kind: str,
        location: SourceLocation | None = None,
    ) -> None:
        super().__init__(message, location)
        self.kind = kind


class StructuralViolation(TranslationError):
    """A recognized construct used in an unsupported shape."""


# ---------------------------------------------------------------------------
# Prover invocation
# ---------------------------------------------------------------------------


class ProverError(RoqError):
    """Running the external prover did not produce a successful result."""


class InvalidInput(ProverError):
    """The batch was rejected before any process was spawned."""


class SpawnFailure(ProverError):
    """The prover process could not be started."""


class WaitFailure(ProverError):
    """The prover process started but could not be awaited."""


class ProverTimeout(WaitFailure):
    """The prover did not exit within the caller-supplied timeout."""


class ProverFailure(ProverError):
    """The prover ran and exited with a non-zero status.

    ``str()`` of this error is the prover's standard error, unmodified apart
    from lossy UTF-8 decoding.
    """

    def __init__(self, diagnostics: str, returncode: int | None = None, stdout: str = "") -> None:
        super().__init__(diagnostics)
        self.diagnostics = diagnostics
        self.returncode = returncode
        self.stdout = stdout

    def __str__(self) -> str:
        return self.diagnostics
