"""Runtime configuration for light curve synthesis."""

from __future__ import annotations

import os
from dataclasses import dataclass

from transit_synth.errors import InvalidParameterError

ENV_PREFIX = "TRANSIT_SYNTH_"


@dataclass(frozen=True)
class SynthesisConfig:
    """
    Configuration for a synthesis run.

    This dataclass is frozen (immutable) so a single config can be shared
    by concurrent calls without copying.

    Attributes
    ----------
    noise : float
        Standard deviation of additive Gaussian noise (default: 0.0, no noise).
    seed : int | None
        Seed for the noise generator (default: None, fresh entropy).
    max_workers : int
        Worker threads used to evaluate chunks of the time series
        (default: 1, serial evaluation).
    chunk_size : int
        Number of samples per worker chunk (default: 65536).
    """

    noise: float = 0.0
    seed: int | None = None
    max_workers: int = 1
    chunk_size: int = 65536

    def __post_init__(self) -> None:
        if not self.noise >= 0.0:
            raise InvalidParameterError(
                f"noise must be non-negative, got {self.noise}", field="noise"
            )
        if self.max_workers < 1:
            raise InvalidParameterError(
                f"max_workers must be at least 1, got {self.max_workers}",
                field="max_workers",
            )
        if self.chunk_size < 1:
            raise InvalidParameterError(
                f"chunk_size must be at least 1, got {self.chunk_size}",
                field="chunk_size",
            )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> SynthesisConfig:
        """Build a config from ``TRANSIT_SYNTH_*`` environment variables.

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, float | int | None] = {}
        try:
            if (raw := env.get(f"{ENV_PREFIX}NOISE")) is not None:
                kwargs["noise"] = float(raw)
            if (raw := env.get(f"{ENV_PREFIX}SEED")) is not None:
                kwargs["seed"] = int(raw) if raw.strip() else None
            if (raw := env.get(f"{ENV_PREFIX}MAX_WORKERS")) is not None:
                kwargs["max_workers"] = int(raw)
            if (raw := env.get(f"{ENV_PREFIX}CHUNK_SIZE")) is not None:
                kwargs["chunk_size"] = int(raw)
        except ValueError as exc:
            raise InvalidParameterError(f"Malformed {ENV_PREFIX}* setting: {exc}") from exc
        return cls(**kwargs)  # type: ignore[arg-type]
