"""
apiinfo - Editor API Description to YAML

Runs ``nvim --api-info``, decodes the MessagePack description of the
editor's remote API, and writes it out as readable YAML.
"""

__version__ = "1.0.0"

from .core import ApiInfoConverter, convert
from .errors import (
    ConversionError,
    DecodeError,
    EncodeError,
    InputError,
    ModelError,
    ProcessError,
    SpawnError,
    WriteError,
)

__all__ = [
    "ApiInfoConverter",
    "convert",
    "ConversionError",
    "SpawnError",
    "ProcessError",
    "DecodeError",
    "EncodeError",
    "InputError",
    "WriteError",
    "ModelError",
]
