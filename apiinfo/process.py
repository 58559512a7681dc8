"""
Collaborator Process Runner

Runs the external program that emits the binary API description
and captures everything it writes to stdout.
"""

import shlex
import subprocess
from typing import Optional, Sequence

from .errors import ProcessError, SpawnError

# Number of trailing stderr bytes quoted in error messages
STDERR_TAIL = 400


def run_command(command: Sequence[str], timeout: Optional[float] = None) -> bytes:
    """
    Run a command to completion and return its stdout.

    Args:
        command: Program path followed by its arguments.
        timeout: Seconds to wait before killing the child. None waits forever.

    Returns:
        The complete stdout byte stream.

    Raises:
        SpawnError: If the program cannot be started.
        ProcessError: If it exits non-zero, times out, or prints nothing.
    """
    command = list(command)
    if not command:
        raise SpawnError("no command given")

    display = shlex.join(command)

    try:
        completed = subprocess.run(
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as e:
        raise SpawnError(f"command not found: {command[0]}") from e
    except PermissionError as e:
        raise SpawnError(f"permission denied: {command[0]}") from e
    except subprocess.TimeoutExpired as e:
        raise ProcessError(
            f"'{display}' did not finish within {timeout} seconds",
            stderr=e.stderr or b"",
        ) from e
    except OSError as e:
        raise SpawnError(f"cannot start '{display}': {e}") from e

    if completed.returncode != 0:
        message = f"'{display}' exited with status {completed.returncode}"
        tail = _stderr_tail(completed.stderr)
        if tail:
            message += f": {tail}"
        raise ProcessError(message, returncode=completed.returncode, stderr=completed.stderr)

    if not completed.stdout:
        raise ProcessError(
            f"'{display}' produced no output",
            returncode=completed.returncode,
            stderr=completed.stderr,
        )

    return completed.stdout


def _stderr_tail(stderr: bytes) -> str:
    """Last part of stderr as text, for error messages."""
    text = stderr.decode("utf-8", errors="replace").strip()
    if len(text) > STDERR_TAIL:
        text = "..." + text[-STDERR_TAIL:]
    return text
