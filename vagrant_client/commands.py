"""Option dataclasses and the vagrant argument lists built from them."""

from __future__ import annotations

from dataclasses import dataclass, field

MACHINE_READABLE_FLAG = '--machine-readable'


@dataclass
class UpOptions:
    working_directory: str = ''
    provision: bool = True
    provision_with: list[str] = field(default_factory=list)
    destroy_on_error: bool = True
    parallel: bool = True
    provider: str = ''
    install_provider: bool = True


@dataclass
class DestroyOptions:
    working_directory: str = ''
    force: bool = True
    parallel: bool = True


@dataclass
class SshConfigOptions:
    working_directory: str = ''
    name: str = ''


@dataclass
class StatusOptions:
    working_directory: str = ''
    name: str = ''


def machine_readable_args(*subcommand: str) -> list[str]:
    return [MACHINE_READABLE_FLAG, *subcommand]


def _flag(name: str, enabled: bool) -> str:
    return f'--{name}' if enabled else f'--no-{name}'


def up_args(opts: UpOptions) -> list[str]:
    args = machine_readable_args('up')
    args.append(_flag('provision', opts.provision))
    if opts.provision_with:
        args.extend(['--provision-with', ','.join(opts.provision_with)])
    args.append(_flag('destroy-on-error', opts.destroy_on_error))
    args.append(_flag('parallel', opts.parallel))
    if opts.provider:
        args.extend(['--provider', opts.provider])
    args.append(_flag('install-provider', opts.install_provider))
    return args


def destroy_args(opts: DestroyOptions) -> list[str]:
    args = machine_readable_args('destroy')
    # vagrant has no --no-force
    if opts.force:
        args.append('--force')
    args.append(_flag('parallel', opts.parallel))
    return args


def ssh_config_args(opts: SshConfigOptions) -> list[str]:
    args = machine_readable_args('ssh-config')
    if opts.name:
        args.extend(['--name', opts.name])
    return args


def status_args(opts: StatusOptions) -> list[str]:
    args = machine_readable_args('status')
    if opts.name:
        args.append(opts.name)
    return args


def box_list_args() -> list[str]:
    return machine_readable_args('box', 'list')
