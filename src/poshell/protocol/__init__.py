"""Output framing — boundary tokens, command framing and stream readers.

The shell has no native end-of-output signal, so every command is followed by
statements that echo a fresh boundary token to both stdout and stderr. One
reader per stream consumes output until the token arrives.
"""

from poshell.protocol.boundary import BOUNDARY_PREFIX, BoundaryGenerator
from poshell.protocol.framing import NEWLINE, frame_command, send_command, write_all
from poshell.protocol.reader import read_both, read_output

__all__ = [
    "BOUNDARY_PREFIX",
    "BoundaryGenerator",
    "NEWLINE",
    "frame_command",
    "send_command",
    "write_all",
    "read_both",
    "read_output",
]
