"""Top-level modal CLI wiring, argv normalization, and logging setup."""

from __future__ import annotations

import os
import sys

import scriptconfig as scfg
from loguru import logger

from ..commands import DestroyOptions, SshConfigOptions, StatusOptions, UpOptions
from ..errors import VagrantClientError
from ._common import _BaseCommand, _client_for, _load_cfg, log
from .box import BoxModalCLI


def _pick(value, default):
    return default if value is None else value


def _split_names(value) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(',')
    return [str(p).strip() for p in value if str(p).strip()]


class UpCLI(_BaseCommand):
    """Create and provision the vagrant environment."""

    provision = scfg.Value(None, isflag=True, help='Run provisioners.')
    provision_with = scfg.Value(
        '', help='Comma separated provisioner names to run.'
    )
    destroy_on_error = scfg.Value(
        None, isflag=True, help='Destroy machines if any fatal error happens.'
    )
    parallel = scfg.Value(
        None, isflag=True, help='Bring machines up in parallel if supported.'
    )
    provider = scfg.Value('', help='Back the machine with a specific provider.')
    install_provider = scfg.Value(
        None, isflag=True, help='Install the provider if it is missing.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        cfg = _load_cfg(args.config)
        base = cfg.up
        provision_with = _split_names(args.provision_with)
        opts = UpOptions(
            working_directory=args.cwd or base.working_directory,
            provision=_pick(args.provision, base.provision),
            provision_with=provision_with or list(base.provision_with),
            destroy_on_error=_pick(args.destroy_on_error, base.destroy_on_error),
            parallel=_pick(args.parallel, base.parallel),
            provider=args.provider or base.provider,
            install_provider=_pick(args.install_provider, base.install_provider),
        )
        _client_for(cfg, passthrough=True).up(opts)
        return 0


class DestroyCLI(_BaseCommand):
    """Stop and delete all traces of the vagrant machines."""

    force = scfg.Value(None, isflag=True, help='Destroy without confirmation.')
    parallel = scfg.Value(
        None, isflag=True, help='Destroy machines in parallel if supported.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        cfg = _load_cfg(args.config)
        base = cfg.destroy
        opts = DestroyOptions(
            working_directory=args.cwd or base.working_directory,
            force=_pick(args.force, base.force),
            parallel=_pick(args.parallel, base.parallel),
        )
        _client_for(cfg, passthrough=True).destroy(opts)
        return 0


class SshConfigCLI(_BaseCommand):
    """Print the resolved SSH parameters of each machine."""

    machine = scfg.Value('', help='Machine name to report.')

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        cfg = _load_cfg(args.config)
        base = cfg.ssh_config
        opts = SshConfigOptions(
            working_directory=args.cwd or base.working_directory,
            name=args.machine or base.name,
        )
        ssh_cfg = _client_for(cfg).ssh_config(opts)
        for host in ssh_cfg.hosts:
            print(f'Host {host}')
            for key in ('HostName', 'User', 'Port', 'IdentityFile'):
                value = ssh_cfg.get(host, key)
                if value:
                    print(f'  {key} {value}')
        return 0


class StatusCLI(_BaseCommand):
    """Report the state of each machine."""

    machine = scfg.Value('', help='Machine name to report.')

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        cfg = _load_cfg(args.config)
        base = cfg.status
        opts = StatusOptions(
            working_directory=args.cwd or base.working_directory,
            name=args.machine or base.name,
        )
        machines = _client_for(cfg).status(opts)
        if not machines:
            print('No machines found.')
            return 0
        width = max(len(m.name) for m in machines)
        for m in machines:
            print(f'{m.name:<{width}} {m.state_short or m.state} ({m.provider})')
        return 0


class VagrantClientModalCLI(scfg.ModalCLI):
    """Structured front end for vagrant --machine-readable."""

    up = UpCLI
    destroy = DestroyCLI
    status = StatusCLI
    ssh_config = SshConfigCLI
    box = BoxModalCLI


def main(argv: list[str] | None = None) -> None:
    verbosity = 1
    config_value = None
    if argv is None:
        argv = sys.argv[1:]
    argv = _normalize_argv(argv)
    if '--config' in argv:
        try:
            config_value = argv[argv.index('--config') + 1]
        except IndexError:
            pass
    try:
        verbosity = _load_cfg(config_value).verbosity
    except Exception:
        verbosity = 1

    explicit_verbose = _count_verbose(argv)
    _setup_logging(explicit_verbose, verbosity)

    try:
        rc = VagrantClientModalCLI.main(argv=argv, _noexit=True)
    except (VagrantClientError, OSError) as ex:
        print(f'ERROR: {ex}', file=sys.stderr)
        log.error('Unhandled vagrant-client error: {}', ex)
        sys.exit(2)

    if any(flag in argv for flag in ('-h', '--help')):
        sys.exit(0)
    if isinstance(rc, int):
        sys.exit(rc)
    sys.exit(0)


_LOG_FORMAT = (
    '<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | '
    '<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>'
)
# -vvv reaches the per-line parser trace
_LOG_LEVELS = ('WARNING', 'INFO', 'DEBUG', 'TRACE')


def _log_level(args_verbose: int, cfg_verbosity: int) -> str:
    effective = args_verbose if args_verbose > 0 else cfg_verbosity
    return _LOG_LEVELS[max(0, min(effective, len(_LOG_LEVELS) - 1))]


def _setup_logging(args_verbose: int, cfg_verbosity: int) -> None:
    logger.remove()
    level = _log_level(args_verbose, cfg_verbosity)
    colorize = sys.stderr.isatty() and os.getenv('NO_COLOR') is None
    logger.add(sys.stderr, level=level, colorize=colorize, format=_LOG_FORMAT)
    log.debug('Logging configured at {} (colorize={})', level, colorize)


def _normalize_argv(argv: list[str]) -> list[str]:
    """Accept vagrant's hyphenated spelling for scriptconfig command names."""
    if len(argv) >= 1 and argv[0] == 'ssh-config':
        argv = ['ssh_config', *argv[1:]]
    return ['--machine' if a == '--name' else a for a in argv]


def _count_verbose(argv: list[str]) -> int:
    count = 0
    for item in argv:
        if item == '--verbose':
            count += 1
        elif item.startswith('-') and not item.startswith('--'):
            short = item[1:]
            if short and set(short) <= {'v'}:
                count += len(short)
    return count
