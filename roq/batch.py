"""Assemble Coq batches from definitions and hand-written proof text.

A batch is an ordered list of fragments. Each fragment becomes a header
comment followed by its text; the whole batch is written to one temporary
'.v' file and handed to a prover.

Usage:
    from roq.batch import Function, Inline, prove
    output = await prove([
        Function(double),
        Inline("Theorem double_mul : forall n, double n = 2 * n. ..."),
    ])
"""

from __future__ import annotations

import logging
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Union

from roq.ast import Definition, Vernacular
from roq.config import Config
from roq.coq.coqtop import Coqtop
from roq.coq.interface import COQ_EXTENSION, Prover
from roq.errors import InvalidInput, ProverError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Inline:
    """Literal Coq text."""

    text: str


@dataclass(frozen=True)
class File:
    """A file whose contents are included verbatim."""

    path: Path


@dataclass(frozen=True)
class Function:
    """A translated definition, included as its rendered vernacular."""

    definition: Definition


Fragment = Union[Inline, File, Function]


@dataclass
class ProofResult:
    """Result of proving a batch.

    Attributes:
        success: Whether the prover accepted the batch
        code: The assembled Coq text that was checked
        output: The prover's standard output on success
        error: The prover's diagnostics (or why it could not run) on failure
    """

    success: bool
    code: str
    output: str | None = None
    error: str | None = None


def header(fragment: Fragment) -> str:
    """The comment line introducing a fragment in the batch."""
    if isinstance(fragment, Inline):
        return "(** ** inline *)"
    if isinstance(fragment, File):
        return f"(** ** file: {fragment.path} *)"
    if isinstance(fragment, Function):
        return f"(** ** function: {fragment.definition.name} *)"
    raise TypeError(f"Not a batch fragment: {type(fragment).__name__}")


def fragment_text(fragment: Fragment) -> str:
    """The Coq text a fragment contributes to the batch.

    Raises:
        InvalidInput: If a File fragment cannot be read as UTF-8 text
    """
    if isinstance(fragment, Inline):
        return fragment.text
    if isinstance(fragment, File):
        try:
            return Path(fragment.path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidInput(f"Cannot read batch file {str(fragment.path)!r}: {e}") from e
    if isinstance(fragment, Function):
        return str(Vernacular.from_statement(fragment.definition))
    raise TypeError(f"Not a batch fragment: {type(fragment).__name__}")


def assemble(fragments: Sequence[Fragment]) -> str:
    """Concatenate fragments, in order, into one Coq source text."""
    parts = []
    for fragment in fragments:
        parts.append(f"{header(fragment)}\n{fragment_text(fragment)}\n\n\n")
    return "".join(parts)


def echo(code: str) -> None:
    """Show a batch on stderr so prover diagnostics can be matched to it."""
    print("```coq", file=sys.stderr)
    print(code, file=sys.stderr)
    print("```", file=sys.stderr)


async def prove_text(
    code: str,
    prover: Prover | None = None,
    config: Config | None = None,
) -> str:
    """Write Coq text to a temporary '.v' file and run a prover on it.

    The file exists for the whole prover run and is removed afterwards,
    whether or not the run succeeded.

    Raises:
        InvalidInput: If the text cannot be written as UTF-8
        ProverError: Whatever the prover raised
    """
    config = config or Config()
    prover = prover or Coqtop.from_config(config)

    if config.echo_batch:
        echo(code)

    f = tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        prefix="roq_",
        suffix=COQ_EXTENSION,
        dir=config.temp_dir,
        delete=False,
    )
    temp_path = Path(f.name)
    try:
        with f:
            try:
                f.write(code)
            except UnicodeEncodeError as e:
                raise InvalidInput(f"Batch is not valid UTF-8 text: {e}") from e
        logger.debug("Wrote batch to %s", temp_path)
        return await prover.run_batch([temp_path])
    finally:
        temp_path.unlink(missing_ok=True)


async def prove(
    fragments: Sequence[Fragment],
    prover: Prover | None = None,
    config: Config | None = None,
) -> str:
    """Assemble fragments and check them in one prover run.

    Args:
        fragments: Inline text, files and definitions, in batch order
        prover: Prover to use. Defaults to coqtop configured from ``config``.
        config: Settings for the batch. Defaults to ``Config()``.

    Returns:
        The prover's standard output

    Raises:
        InvalidInput: If a File fragment cannot be read as UTF-8 text
        ProverError: If the prover could not run or rejected the batch
    """
    return await prove_text(assemble(fragments), prover=prover, config=config)


async def try_prove(
    fragments: Sequence[Fragment],
    prover: Prover | None = None,
    config: Config | None = None,
) -> ProofResult:
    """Like ``prove``, but report prover errors in the result instead of raising."""
    try:
        code = assemble(fragments)
    except InvalidInput as e:
        return ProofResult(success=False, code="", error=str(e))

    try:
        output = await prove_text(code, prover=prover, config=config)
    except ProverError as e:
        return ProofResult(success=False, code=code, error=str(e))

    return ProofResult(success=True, code=code, output=output)
