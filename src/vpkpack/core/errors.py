"""
Error types raised while packing a VPK.

Fatal errors carry the process exit status the CLI should report, taken from
sysexits.h.
"""

from typing import Optional

EX_USAGE = 64
EX_NOINPUT = 66
EX_CANTCREAT = 73


class VpkError(Exception):
    """Base class for every packing error."""
    exit_code: int = 1


class MissingInputError(VpkError):
    """A declared source file or folder does not exist."""
    exit_code = EX_NOINPUT

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Given file or folder doesn't exist: {path}")


class InvalidEntryError(VpkError, ValueError):
    """An `src=dst` token or destination cannot be used as an archive entry."""
    exit_code = EX_USAGE


class OutputCreateError(VpkError):
    """The output archive could not be created."""
    exit_code = EX_CANTCREAT

    def __init__(self, path: str, reason: Optional[BaseException] = None):
        self.path = path
        self.reason = reason
        message = f"Unable to make the {path} file"
        if reason is not None:
            message += f": {reason}"
        super().__init__(message)


class AssemblerStateError(RuntimeError):
    """An assembler was asked to run twice."""
