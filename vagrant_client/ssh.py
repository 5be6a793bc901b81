"""Assemble and decode the output of ``vagrant ssh-config``."""

from __future__ import annotations

from typing import Iterable

import paramiko
from loguru import logger
from paramiko.ssh_exception import ConfigParseError

from .errors import SshConfigDecodeError
from .output import OutputLine

log = logger


class SshConfig:
    """Host keyed view over a decoded OpenSSH config."""

    def __init__(self, config: paramiko.SSHConfig):
        self._config = config

    @property
    def hosts(self) -> list[str]:
        return sorted(h for h in self._config.get_hostnames() if h != '*')

    def lookup(self, host: str) -> dict:
        return dict(self._config.lookup(host))

    def get(self, host: str, key: str) -> str:
        value = self.lookup(host).get(key.lower(), '')
        if isinstance(value, list):
            return value[0] if value else ''
        return str(value)


def assemble_ssh_config(lines: Iterable[OutputLine]) -> str:
    text = ''
    for line in lines:
        if line.kind != 'ssh-config' or not line.data:
            continue
        text += line.data[0].replace('\\n', '\n') + '\n'
    return text


def decode_ssh_config(text: str) -> SshConfig:
    try:
        config = paramiko.SSHConfig.from_text(text)
    except ConfigParseError as ex:
        raise SshConfigDecodeError(f'failed to decode ssh_config: {ex}') from ex
    log.debug('Decoded ssh_config with hosts {}', sorted(config.get_hostnames()))
    return SshConfig(config)
