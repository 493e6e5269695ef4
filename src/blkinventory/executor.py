"""
Command execution abstraction.

The inventory layer never calls subprocess directly. It uses the provided
executor so that tests can return fixture output instead of running lsblk.
"""

import subprocess
from dataclasses import dataclass
from typing import List, Optional, Protocol

from .errors import AcquisitionError

DEFAULT_TIMEOUT = 30


@dataclass
class RunResult:
    """Result of running a command (or reading a fixture)."""

    stdout: str
    stderr: str
    returncode: int


class Executor(Protocol):
    """Protocol for command execution. Implementations may run commands or read fixtures."""

    def __call__(self, cmd: List[str], *, timeout: Optional[float] = None) -> RunResult:
        """Execute command (or resolve to fixture). Returns stdout, stderr, returncode."""
        ...


def subprocess_executor(cmd: List[str], *, timeout: Optional[float] = None) -> RunResult:
    """Default implementation: run the command via subprocess.

    Raises AcquisitionError when the command produces no usable output at all.
    A non-zero exit is not an error here; callers decide what it means.
    """
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
        )
    except subprocess.TimeoutExpired as e:
        raise AcquisitionError(cmd, f"timed out after {e.timeout}s") from e
    except FileNotFoundError as e:
        raise AcquisitionError(cmd, "command not found") from e
    except PermissionError as e:
        raise AcquisitionError(cmd, "permission denied") from e
    except OSError as e:
        raise AcquisitionError(cmd, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise AcquisitionError(cmd, "output is not valid UTF-8") from e
    return RunResult(
        stdout=result.stdout or "",
        stderr=result.stderr or "",
        returncode=result.returncode,
    )


def make_executor(default_timeout: float = DEFAULT_TIMEOUT) -> Executor:
    """Create the default executor with a fixed timeout for every command."""
    def run(cmd: List[str], *, timeout: Optional[float] = None) -> RunResult:
        return subprocess_executor(cmd, timeout=timeout if timeout is not None else default_timeout)
    return run
