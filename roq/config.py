"""Configuration management for roq."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_COQTOP = "coqtop"
# HOME for the prover process; nothing is expected to exist there, so coqtop
# never picks up user configuration.
DEFAULT_FAKE_HOME = "/roq-fake-home"
DEFAULT_LOG_LEVEL = "WARNING"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Config:
    """Settings for translating and proving."""

    # Prover settings
    coqtop_binary: str = DEFAULT_COQTOP
    fake_home: str = DEFAULT_FAKE_HOME
    timeout: Optional[float] = None

    # Batch settings
    temp_dir: Optional[Path] = None
    echo_batch: bool = False

    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "Config":
        """Load configuration from environment variables.

        Raises:
            ValueError: If ROQ_TIMEOUT is not a positive number
        """
        if env_path:
            load_dotenv(env_path)
        else:
            load_dotenv()

        config = cls()

        config.coqtop_binary = os.getenv("ROQ_COQTOP", DEFAULT_COQTOP)
        config.fake_home = os.getenv("ROQ_FAKE_HOME", DEFAULT_FAKE_HOME)

        timeout = os.getenv("ROQ_TIMEOUT")
        if timeout:
            try:
                config.timeout = float(timeout)
            except ValueError:
                raise ValueError(f"ROQ_TIMEOUT must be a number of seconds, got {timeout!r}") from None
            if config.timeout <= 0:
                raise ValueError(f"ROQ_TIMEOUT must be positive, got {timeout!r}")

        temp_dir = os.getenv("ROQ_TEMP_DIR")
        if temp_dir:
            config.temp_dir = Path(temp_dir)

        config.echo_batch = os.getenv("ROQ_ECHO", "").strip().lower() in _TRUTHY
        config.log_level = os.getenv("ROQ_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

        return config
