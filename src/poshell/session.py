"""Shell session — one long-lived shell process executing commands serially."""

from __future__ import annotations

import enum
import logging
import subprocess
from types import TracebackType

from poshell import encoding
from poshell.codepage import detect_code_page
from poshell.config import ShellConfig
from poshell.encoding import NOP, Codec
from poshell.errors import (
    CloseError,
    CommandError,
    SessionClosedError,
    TransportError,
    WriteError,
)
from poshell.process import launch
from poshell.protocol import (
    NEWLINE,
    BoundaryGenerator,
    frame_command,
    read_both,
    send_command,
    write_all,
)

logger = logging.getLogger(__name__)


class ShellStatus(enum.Enum):
    """Lifecycle states for a shell session."""

    RUNNING = "running"
    EXITED = "exited"  # exit() succeeded; the input pipe is closed


class Shell:
    """A shell session executing one command at a time.

    Build one with :meth:`new` (detects the code page) or
    :meth:`new_with_code_page`. The codec chosen at construction is used for
    every command and never changes.

    Not thread-safe: only one ``exec`` may be in flight per session, since
    output is matched to commands by their boundary token alone.
    """

    def __init__(
        self,
        proc: subprocess.Popen,
        config: ShellConfig | None = None,
        boundaries: BoundaryGenerator | None = None,
    ) -> None:
        self._config = config or ShellConfig()
        self._proc = proc
        self._stdin = proc.stdin
        self._stdout = proc.stdout
        self._stderr = proc.stderr
        self._boundaries = boundaries or BoundaryGenerator()
        self._code_page = 0
        self._codec: Codec = NOP
        self._status = ShellStatus.RUNNING

    # -- construction ------------------------------------------------------

    @classmethod
    def new(cls, config: ShellConfig | None = None) -> Shell:
        """Start a shell and detect its code page.

        If ``config.code_page`` is set, detection is skipped.

        Raises:
            SetupError: the shell could not be started.
            BootstrapError: the code page is unreadable or unsupported.
        """
        config = config or ShellConfig()
        if config.code_page is not None:
            return cls.new_with_code_page(config.code_page, config)

        shell = cls(launch(config), config)
        try:
            cp = detect_code_page(shell.exec)
            shell._use_code_page(cp)
        except Exception:
            shell._abandon()
            raise
        return shell

    @classmethod
    def new_with_code_page(
        cls, code_page: int, config: ShellConfig | None = None
    ) -> Shell:
        """Start a shell using ``code_page`` without asking the shell.

        The code page is checked against the registry before the process
        is started.

        Raises:
            UnsupportedCodePageError: ``code_page`` is not registered.
            SetupError: the shell could not be started.
        """
        config = config or ShellConfig()
        codec = encoding.lookup(code_page, config.encodings)
        shell = cls(launch(config), config)
        shell._code_page = code_page
        shell._codec = codec
        logger.info("Shell %d using code page %d (%s)", shell.pid, code_page, codec.name)
        return shell

    def _use_code_page(self, code_page: int) -> None:
        self._codec = encoding.lookup(code_page, self._config.encodings)
        self._code_page = code_page
        logger.info(
            "Shell %d detected code page %d (%s)", self.pid, code_page, self._codec.name
        )

    def _abandon(self) -> None:
        """Close our end of the pipes after a failed construction.

        The shell sees EOF on its input and exits by itself.
        """
        for pipe in (self._stdin, self._stdout, self._stderr):
            try:
                pipe.close()
            except OSError as e:
                logger.debug("Error closing pipe of shell %d: %s", self.pid, e)
        self._status = ShellStatus.EXITED
        logger.info("Shell %d abandoned during setup", self.pid)

    # -- properties --------------------------------------------------------

    @property
    def code_page(self) -> int:
        """The session's code page (0 while still detecting)."""
        return self._code_page

    @property
    def codec(self) -> Codec:
        return self._codec

    @property
    def pid(self) -> int:
        return self._proc.pid

    @property
    def status(self) -> ShellStatus:
        return self._status

    @property
    def alive(self) -> bool:
        return self._status == ShellStatus.RUNNING and self._proc.poll() is None

    # -- commands ----------------------------------------------------------

    def exec(self, command: str) -> str:
        """Execute ``command`` and return its decoded standard output.

        Blocks until both stdout and stderr have delivered the command's
        boundary token (or closed). There is no timeout: a command that never
        returns to the prompt blocks forever.

        Returns:
            Everything the command wrote to stdout, line endings included.

        Raises:
            CommandError: the command wrote to stderr. The exception carries
                the stdout text in ``err.stdout``.
            EncodingError: the session codec cannot represent ``command``.
            WriteError: the input pipe is closed (``SessionClosedError`` after
                :meth:`exit`).
        """
        if self._status != ShellStatus.RUNNING:
            raise SessionClosedError("write command: session already exited")

        boundary = self._boundaries.next()
        send_command(self._stdin, self._codec, frame_command(command, boundary))
        logger.debug("Shell %d exec %r (boundary %s)", self.pid, command, boundary)

        stdout, stderr = read_both(
            self._stdout,
            self._stderr,
            self._codec,
            boundary,
            self._config.chunk_size,
        )
        if stderr:
            raise CommandError(command, stderr, stdout)
        return stdout

    def exit(self) -> None:
        """Ask the shell to exit and close its input pipe.

        Does not wait for, or kill, the process.

        Raises:
            SessionClosedError: the session was already exited.
            WriteError: the exit statement could not be written.
            CloseError: the input pipe could not be closed.
        """
        if self._status != ShellStatus.RUNNING:
            raise SessionClosedError("write exit: session already exited")

        try:
            write_all(self._stdin, ("exit" + NEWLINE).encode("ascii"))
        except (OSError, ValueError) as e:
            raise WriteError(f"write exit: {e}") from e

        try:
            self._stdin.close()
        except OSError as e:
            raise CloseError(f"close stdin: {e}") from e

        self._status = ShellStatus.EXITED
        logger.info("Shell %d exited", self.pid)

    # -- context manager ---------------------------------------------------

    def __enter__(self) -> Shell:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._status != ShellStatus.RUNNING:
            return
        if self._proc.poll() is not None:
            self._status = ShellStatus.EXITED
            logger.info("Shell %d already gone (code=%s)", self.pid, self._proc.returncode)
            return
        try:
            self.exit()
        except TransportError as e:
            # The input pipe is gone, so the shell is already on its way out.
            self._status = ShellStatus.EXITED
            logger.debug("Error exiting shell %d: %s", self.pid, e)

    def __repr__(self) -> str:
        return (
            f"Shell(pid={self.pid}, code_page={self._code_page}, "
            f"status={self._status.value})"
        )


def new(config: ShellConfig | None = None) -> Shell:
    """Start a shell session and detect its code page."""
    return Shell.new(config)


def new_with_code_page(code_page: int, config: ShellConfig | None = None) -> Shell:
    """Start a shell session with a fixed code page."""
    return Shell.new_with_code_page(code_page, config)
