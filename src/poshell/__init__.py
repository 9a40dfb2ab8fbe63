"""poshell — run commands serially in a long-lived PowerShell session.

The session detects the console code page at startup and uses the matching
codec to encode commands and decode their output.
"""

from poshell.config import ShellConfig
from poshell.encoding import ENCODINGS, NOP, Codec, lookup, register_encoding
from poshell.errors import (
    BootstrapError,
    CloseError,
    CodePageDetectionError,
    CommandError,
    DependencyNotFoundError,
    EncodingError,
    ErrUnsupportedCodePage,
    InvalidCodePageOutputError,
    LaunchError,
    NonNumericCodePageError,
    PoshellError,
    SessionClosedError,
    SetupError,
    TransportError,
    UnsupportedCodePageError,
    WriteError,
)
from poshell.session import Shell, ShellStatus, new, new_with_code_page

__all__ = [
    "Shell",
    "ShellStatus",
    "ShellConfig",
    "new",
    "new_with_code_page",
    "Codec",
    "ENCODINGS",
    "NOP",
    "lookup",
    "register_encoding",
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
