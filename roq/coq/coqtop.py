"""Run batches of Coq vernacular through the coqtop binary."""

import asyncio
import logging
import os
import shutil
from typing import Optional, Sequence

from roq.config import DEFAULT_COQTOP, DEFAULT_FAKE_HOME, Config
from roq.coq.interface import BatchPath, Prover, validate_batch
from roq.errors import ProverFailure, ProverTimeout, SpawnFailure, WaitFailure

logger = logging.getLogger(__name__)


def _decode(data: Optional[bytes]) -> str:
    return (data or b"").decode("utf-8", errors="replace")


class Coqtop(Prover):
    """Prover backed by a coqtop binary.

    Each batch is one independent process: ``coqtop -q -l a.v -l b.v ...``
    with every standard stream captured and an environment holding nothing
    but a fake HOME. Attempts are never retried.
    """

    def __init__(
        self,
        binary_path: str | os.PathLike = DEFAULT_COQTOP,
        fake_home: str = DEFAULT_FAKE_HOME,
        timeout: float | None = None,
    ) -> None:
        """Initialize the coqtop runner.

        Args:
            binary_path: coqtop executable. A bare name is looked up on the
                         caller's PATH when the batch is run.
            fake_home: Value of HOME inside the prover process.
            timeout: Seconds to wait before killing the prover. None waits
                     indefinitely.
        """
        self.binary_path = os.fspath(binary_path)
        self.fake_home = fake_home
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: Config) -> "Coqtop":
        return cls(
            binary_path=config.coqtop_binary,
            fake_home=config.fake_home,
            timeout=config.timeout,
        )

    def _resolve_binary(self) -> str:
        # The child's environment has no PATH, so resolve against ours.
        return shutil.which(self.binary_path) or self.binary_path

    def command(self, batch: Sequence[BatchPath]) -> list[str]:
        """Build the argument vector for a batch (without validating it)."""
        args = [self._resolve_binary(), "-q"]  # -q: don't load the rcfile
        for path in batch:
            args.extend(["-l", os.fspath(path)])
        return args

    def environment(self) -> dict[str, str]:
        return {"HOME": self.fake_home}

    async def run_batch(self, batch: Sequence[BatchPath]) -> str:
        """Run coqtop over the batch.

        Args:
            batch: Paths of '.v' files, loaded in the given order

        Returns:
            coqtop's standard output, decoded lossily

        Raises:
            InvalidInput: If a file does not have the '.v' extension
            SpawnFailure: If coqtop could not be started
            WaitFailure: If coqtop could not be awaited (ProverTimeout when
                         the timeout expired)
            ProverFailure: If coqtop exited non-zero; carries its stderr
        """
        paths = validate_batch(batch)
        args = self.command(paths)
        logger.debug("Running %s", " ".join(args))

        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=self.environment(),
            )
        except OSError as e:
            raise SpawnFailure(f"Failed to spawn coqtop ({self.binary_path}): {e}") from e

        try:
            # Empty input closes stdin so coqtop exits after loading the batch.
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(input=b""),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            raise ProverTimeout(f"coqtop timed out after {self.timeout}s") from None
        except OSError as e:
            raise WaitFailure(f"Failed to wait for coqtop to exit: {e}") from e

        if proc.returncode != 0:
            logger.warning("coqtop exited with status %s", proc.returncode)
            raise ProverFailure(
                _decode(stderr),
                returncode=proc.returncode,
                stdout=_decode(stdout),
            )

        return _decode(stdout)
