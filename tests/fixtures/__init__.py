# Test fixtures
from .sample_api_info import (
    SAMPLE_API_INFO,
    MINIMAL_API_INFO,
    pack,
    payload_command,
    failing_command,
    silent_command,
    sleeping_command,
    write_fake_nvim,
    nested_document,
    nested_payload,
)

__all__ = [
    "SAMPLE_API_INFO",
    "MINIMAL_API_INFO",
    "pack",
    "payload_command",
    "failing_command",
    "silent_command",
    "sleeping_command",
    "write_fake_nvim",
    "nested_document",
    "nested_payload",
]
