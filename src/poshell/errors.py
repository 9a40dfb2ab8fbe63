"""Exception hierarchy for poshell.

Every error raised by the library derives from :class:`PoshellError`, grouped
by the stage that failed:

* :class:`SetupError` — the shell process could not be started.
* :class:`BootstrapError` — the code page could not be resolved.
* :class:`TransportError` — a command could not be sent (or the session is closed).
* :class:`CommandError` — the command wrote to its error stream.
"""

from __future__ import annotations

__all__ = [
    "PoshellError",
    "SetupError",
    "DependencyNotFoundError",
    "LaunchError",
    "BootstrapError",
    "CodePageDetectionError",
    "InvalidCodePageOutputError",
    "NonNumericCodePageError",
    "UnsupportedCodePageError",
    "ErrUnsupportedCodePage",
    "TransportError",
    "EncodingError",
    "WriteError",
    "CloseError",
    "SessionClosedError",
    "CommandError",
]


class PoshellError(Exception):
    """Base exception for all poshell errors."""


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------


class SetupError(PoshellError):
    """The shell process could not be started."""


class DependencyNotFoundError(SetupError):
    """The shell executable is not on the search path."""

    def __init__(self, executable: str) -> None:
        self.executable = executable
        super().__init__(f"need {executable}: executable not found in PATH")


class LaunchError(SetupError):
    """Creating the pipes or starting the process failed."""


# ---------------------------------------------------------------------------
# Bootstrap
# ---------------------------------------------------------------------------


class BootstrapError(PoshellError):
    """The session's code page could not be resolved."""


class CodePageDetectionError(BootstrapError):
    """The code page query itself failed."""


class InvalidCodePageOutputError(BootstrapError):
    """The code page query output has no ``": "`` delimiter."""

    def __init__(self, output: str) -> None:
        self.output = output
        super().__init__(f"invalid codepage output: {output!r}")


class NonNumericCodePageError(BootstrapError):
    """The field after the delimiter is not an integer."""

    def __init__(self, output: str) -> None:
        self.output = output
        super().__init__(f"non-numeric codepage: {output!r}")


class UnsupportedCodePageError(BootstrapError):
    """The code page has no entry in the encoding registry."""

    def __init__(self, code_page: int) -> None:
        self.code_page = code_page
        super().__init__(f"unsupported code page: {code_page}")


ErrUnsupportedCodePage = UnsupportedCodePageError


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------


class TransportError(PoshellError):
    """A command could not be delivered to the shell."""


class EncodingError(TransportError):
    """The session codec cannot represent the command text."""


class WriteError(TransportError):
    """Writing to the shell's input pipe failed."""


class CloseError(TransportError):
    """Closing the shell's input pipe failed."""


class SessionClosedError(WriteError):
    """The session was already exited."""


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------


class CommandError(PoshellError):
    """The command produced error-stream output.

    ``str(err)`` is exactly the error-stream text. Whatever the command wrote
    to standard output before failing is kept in :attr:`stdout`.

    Attributes:
        command: The command as passed to ``Shell.exec``.
        stderr: Decoded error-stream text.
        stdout: Decoded standard-output text captured alongside it.
    """

    def __init__(self, command: str, stderr: str, stdout: str = "") -> None:
        self.command = command
        self.stderr = stderr
        self.stdout = stdout
        super().__init__(stderr)
