"""
API Info Converter Core

Runs the editor with ``--api-info``, decodes the MessagePack it prints,
and writes the same document out as YAML. The pipeline is strictly
linear: spawn, capture, decode, encode, write. The first stage that
fails raises and nothing after it runs, so the output file is only
touched once the YAML text is ready.
"""

import os
from typing import Optional, Sequence

from .converters.msgpack_converter import MsgpackConverter
from .converters.yaml_converter import YamlConverter
from .errors import WriteError
from .model import ApiInfo
from .process import run_command

DEFAULT_COMMAND = ("nvim", "--api-info")
DEFAULT_OUTPUT = "api_info.yml"


class ApiInfoConverter:
    """
    Converts an editor's binary API description into YAML.

    Accepts any command that prints a MessagePack document on stdout;
    by default that is ``nvim --api-info``.
    """

    def __init__(
        self,
        command: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
        verbose: bool = True,
    ):
        """
        Args:
            command: Program and arguments to run (default: nvim --api-info).
            timeout: Seconds to wait for the program. None waits forever.
            verbose: If True, print a status line for each stage.
        """
        self.command = list(DEFAULT_COMMAND if command is None else command)
        self.timeout = timeout
        self.verbose = verbose

    def convert(self, output_path: Optional[str] = DEFAULT_OUTPUT) -> str:
        """
        Run the command and write its API description as YAML.

        Args:
            output_path: Destination file, created or truncated. If None,
                nothing is written and the YAML is only returned.

        Returns:
            The YAML text.

        Raises:
            SpawnError, ProcessError, DecodeError, EncodeError, WriteError
        """
        return self.convert_bytes(self.fetch(), output_path)

    def convert_bytes(self, data: bytes, output_path: Optional[str] = None) -> str:
        """Convert an already captured MessagePack payload to YAML."""
        return self.convert_document(self.decode(data), output_path)

    def convert_document(self, document, output_path: Optional[str] = None) -> str:
        """Encode a decoded document as YAML and optionally write it."""
        self._status("ENCODE", "Rendering YAML")
        yaml_text = YamlConverter.encode(document)

        if output_path is not None:
            write_text(output_path, yaml_text)
            self._status("SAVED", output_path)

        return yaml_text

    def fetch(self) -> bytes:
        """Run the command and return everything it printed."""
        self._status("SPAWN", " ".join(self.command))
        return run_command(self.command, timeout=self.timeout)

    def decode(self, data: bytes):
        self._status("DECODE", f"{len(data)} bytes")
        return MsgpackConverter.decode(data)

    def load_model(self) -> ApiInfo:
        """Fetch and decode the API description into its typed view."""
        return ApiInfo.from_document(self.decode(self.fetch()))

    def _status(self, tag: str, message: str) -> None:
        if self.verbose:
            print(f"[{tag}] {message}")


def convert(
    command: Sequence[str],
    output_path: str,
    timeout: Optional[float] = None,
) -> str:
    """Run ``command`` and write its MessagePack output to ``output_path`` as YAML."""
    converter = ApiInfoConverter(command=command, timeout=timeout, verbose=False)
    return converter.convert(output_path)


def write_text(output_path: str, text: str) -> None:
    """
    Write text to a file, replacing any previous content.

    The parent directory must already exist.

    Raises:
        WriteError: If the file cannot be created or written.
    """
    if os.path.isdir(output_path):
        raise WriteError(f"{output_path} is a directory")

    try:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        reason = e.strerror or str(e)
        raise WriteError(f"cannot write {output_path}: {reason}") from e
