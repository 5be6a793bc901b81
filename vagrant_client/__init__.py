"""Structured client for ``vagrant --machine-readable``."""

from __future__ import annotations

from .box import Box, aggregate_boxes
from .client import VagrantClient
from .commands import DestroyOptions, SshConfigOptions, StatusOptions, UpOptions
from .config import ClientConfig
from .errors import (
    CommandFailedError,
    ConfigError,
    ExecutableNotFoundError,
    SshConfigDecodeError,
    VagrantClientError,
    WorkingDirectoryError,
)
from .output import OutputLine, parse_line, parse_output
from .ssh import SshConfig, assemble_ssh_config, decode_ssh_config
from .status import MachineStatus, aggregate_status

__version__ = '0.1.0'

__all__ = [
    'Box',
    'ClientConfig',
    'CommandFailedError',
    'ConfigError',
    'DestroyOptions',
    'ExecutableNotFoundError',
    'MachineStatus',
    'OutputLine',
    'SshConfig',
    'SshConfigDecodeError',
    'SshConfigOptions',
    'StatusOptions',
    'UpOptions',
    'VagrantClient',
    'VagrantClientError',
    'WorkingDirectoryError',
    'aggregate_boxes',
    'aggregate_status',
    'assemble_ssh_config',
    'decode_ssh_config',
    'parse_line',
    'parse_output',
]
