"""Project-specific exception types."""

from __future__ import annotations

from typing import Sequence


class VagrantClientError(RuntimeError):
    """Base error for domain-level vagrant client failures."""


class ExecutableNotFoundError(VagrantClientError):
    """Raised when the configured vagrant binary is not on $PATH."""

    def __init__(self, binary_name: str):
        self.binary_name = binary_name
        super().__init__(f'`{binary_name}` not found in $PATH')


class CommandFailedError(VagrantClientError):
    """Raised when a vagrant invocation exits abnormally or cannot start.

    Whatever machine-readable lines were captured before the failure are
    still available on ``records``.
    """

    def __init__(
        self,
        message: str,
        *,
        cmd: Sequence[str] = (),
        records: Sequence = (),
        result=None,
    ):
        self.cmd = list(cmd)
        self.records = list(records)
        self.result = result
        super().__init__(message)


class WorkingDirectoryError(VagrantClientError):
    """Raised when reading, entering or restoring the working directory fails."""


class SshConfigDecodeError(VagrantClientError):
    """Raised when ssh-config text cannot be decoded."""


class ConfigError(VagrantClientError):
    """Raised when a config file holds a value of the wrong type."""
