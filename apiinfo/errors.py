"""
Exceptions raised by the conversion pipeline.

Each pipeline stage has its own exception class so callers can tell
which stage failed. All of them share ConversionError as a base.
"""

from typing import Optional


class ConversionError(Exception):
    """Base class for every failure in the api-info pipeline."""

    stage = "convert"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.stage}: {self.message}"


class SpawnError(ConversionError):
    """Raised when the collaborator command cannot be started."""
    stage = "spawn"


class InputError(ConversionError):
    """Raised when a saved payload cannot be read."""
    stage = "read"


class ProcessError(ConversionError):
    """Raised when the collaborator exits non-zero, times out, or prints nothing."""

    stage = "process"

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: bytes = b""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class DecodeError(ConversionError):
    """Raised when captured bytes are not valid MessagePack."""
    stage = "decode"


class EncodeError(ConversionError):
    """Raised when a decoded value cannot be represented as YAML."""
    stage = "encode"


class WriteError(ConversionError):
    """Raised when the output file cannot be created or written."""
    stage = "write"


class ModelError(ValueError):
    """Raised when a document does not look like an API description."""
    pass
