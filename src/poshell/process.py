"""Process launcher — starts the shell with three byte pipes."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess

from poshell.config import ShellConfig
from poshell.errors import DependencyNotFoundError, LaunchError

logger = logging.getLogger(__name__)


def find_executable(name: str) -> str:
    """Resolve ``name`` on PATH.

    Raises:
        DependencyNotFoundError: nothing executable by that name was found.
    """
    path = shutil.which(name)
    if path is None:
        raise DependencyNotFoundError(name)
    return path


def launch(config: ShellConfig) -> subprocess.Popen:
    """Start the shell in interactive, stdin-driven mode.

    The returned process has unbuffered binary ``stdin``, ``stdout`` and
    ``stderr`` pipes. Nothing here stops the process; it lives until its
    input is closed or the owning program exits.

    Raises:
        DependencyNotFoundError: the executable is not on PATH.
        LaunchError: the pipes or the process could not be created.
    """
    exe_path = find_executable(config.executable)
    argv = [exe_path, *config.arguments]
    env = {**os.environ, **config.env} if config.env else None

    try:
        proc = subprocess.Popen(
            argv,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            bufsize=0,  # raw pipes: read(n) returns as soon as any bytes arrive
            cwd=config.cwd,
            env=env,
        )
    except OSError as e:
        raise LaunchError(f"start {config.executable}: {e}") from e

    logger.info("Shell started: pid=%d cmd=%s", proc.pid, " ".join(argv))
    return proc
