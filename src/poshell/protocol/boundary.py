"""Boundary token generation."""

from __future__ import annotations

import logging
import os
import random
import time

logger = logging.getLogger(__name__)

BOUNDARY_PREFIX = "$command"
RANDOM_PART_BYTES = 12  # 96 bits


def random_seed() -> int:
    """Seed from the OS entropy source, or the clock when none is available."""
    try:
        return int.from_bytes(os.urandom(8), "little")
    except NotImplementedError:
        logger.warning("No OS randomness source, seeding boundaries from the clock")
        return time.time_ns()


class BoundaryGenerator:
    """Produces a fresh end-of-output token per command.

    Tokens are ``$command`` followed by 24 lowercase hex characters. The
    generator is session-local and not thread-safe; callers serialize access
    the same way they serialize ``Shell.exec``.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rnd = random.Random(random_seed() if seed is None else seed)

    def next(self) -> str:
        return BOUNDARY_PREFIX + self._rnd.randbytes(RANDOM_PART_BYTES).hex()

    __call__ = next
