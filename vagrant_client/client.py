"""The vagrant client: runs the binary and turns its output into objects."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from loguru import logger

from .box import Box, BoxAPI
from .commands import (
    DestroyOptions,
    SshConfigOptions,
    StatusOptions,
    UpOptions,
    destroy_args,
    machine_readable_args,
    ssh_config_args,
    status_args,
    up_args,
)
from .config import DEFAULT_BINARY_NAME, ClientConfig
from .errors import (
    CommandFailedError,
    ExecutableNotFoundError,
    SshConfigDecodeError,
)
from .output import OutputLine, parse_output
from .ssh import SshConfig, assemble_ssh_config, decode_ssh_config
from .status import MachineStatus, aggregate_status
from .util import CmdResult, run_combined, shell_join, which
from .workdir import DirectoryContext, OsDirectoryContext, run_scoped

log = logger

CommandExecutor = Callable[[str, Sequence[str]], CmdResult]
PathResolver = Callable[[str], Optional[str]]
SshConfigDecoder = Callable[[str], SshConfig]


def _error_exit_message(lines: Sequence[OutputLine]) -> str:
    # error-exit data is: error class, message
    for line in lines:
        if line.kind == 'error-exit':
            return line.message.split(',', 1)[-1].strip()
    return ''


class VagrantClient:
    """Client over ``vagrant --machine-readable``.

    Args:
        config: binary name and per-operation defaults.
        executor: runs ``(program, args)`` and returns the combined output.
        resolver: returns the path of an executable or None.
        dirs: working directory accessor used for scoped operations.
        ssh_decoder: turns ssh-config text into an :class:`SshConfig`.

    Raises:
        ExecutableNotFoundError: if ``config.binary_name`` cannot be resolved.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        executor: CommandExecutor | None = None,
        resolver: PathResolver | None = None,
        dirs: DirectoryContext | None = None,
        ssh_decoder: SshConfigDecoder | None = None,
    ):
        self.config = config or ClientConfig()
        self.binary_name = self.config.binary_name or DEFAULT_BINARY_NAME
        resolver = resolver or which
        if resolver(self.binary_name) is None:
            raise ExecutableNotFoundError(self.binary_name)
        self.executor = executor or run_combined
        self.dirs = dirs or OsDirectoryContext()
        self.ssh_decoder = ssh_decoder or decode_ssh_config
        self.box = BoxAPI(self)

    def execute(self, *subcommand: str) -> list[OutputLine]:
        """Run ``vagrant --machine-readable <subcommand...>``."""
        return self.dispatch(machine_readable_args(*subcommand))

    def dispatch(self, args: Sequence[str]) -> list[OutputLine]:
        """Run the binary with ``args`` as built by :mod:`commands`.

        Captured output is parsed whether or not the command succeeded; on
        failure the parsed lines travel on the raised CommandFailedError.
        """
        binary = self.binary_name
        cmd_text = shell_join([binary, *args])
        try:
            result = self.executor(binary, list(args))
        except OSError as ex:
            log.error('Could not run {}: {}', cmd_text, ex)
            raise CommandFailedError(
                f'Could not run {cmd_text}: {ex}', cmd=[binary, *args]
            ) from ex
        lines = parse_output(result.stdout)
        log.debug('{} -> code={} lines={}', cmd_text, result.code, len(lines))
        if result.code != 0:
            detail = _error_exit_message(lines)
            msg = f'Command failed (code={result.code}): {cmd_text}'
            if detail:
                msg = f'{msg}\n{detail}'
            log.error(msg)
            raise CommandFailedError(
                msg, cmd=[binary, *args], records=lines, result=result
            )
        return lines

    def up(self, opts: UpOptions | None = None) -> list[OutputLine]:
        opts = opts or self.config.up
        return run_scoped(
            opts.working_directory,
            lambda: self.dispatch(up_args(opts)),
            dirs=self.dirs,
        )

    def destroy(self, opts: DestroyOptions | None = None) -> list[OutputLine]:
        opts = opts or self.config.destroy
        return run_scoped(
            opts.working_directory,
            lambda: self.dispatch(destroy_args(opts)),
            dirs=self.dirs,
        )

    def ssh_config(self, opts: SshConfigOptions | None = None) -> SshConfig:
        opts = opts or self.config.ssh_config
        lines = run_scoped(
            opts.working_directory,
            lambda: self.dispatch(ssh_config_args(opts)),
            dirs=self.dirs,
        )
        text = assemble_ssh_config(lines)
        try:
            return self.ssh_decoder(text)
        except SshConfigDecodeError:
            raise
        except Exception as ex:
            raise SshConfigDecodeError(
                f'failed to decode ssh_config: {ex}'
            ) from ex

    def status(self, opts: StatusOptions | None = None) -> list[MachineStatus]:
        opts = opts or self.config.status
        lines = run_scoped(
            opts.working_directory,
            lambda: self.dispatch(status_args(opts)),
            dirs=self.dirs,
        )
        return aggregate_status(lines)

    def box_list(self) -> list[Box]:
        return self.box.list()
