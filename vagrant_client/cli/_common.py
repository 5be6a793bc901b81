from __future__ import annotations

import sys
from functools import partial
from pathlib import Path

import scriptconfig as scfg
from loguru import logger

from ..client import VagrantClient
from ..config import ClientConfig, find_config, load
from ..util import run_combined

log = logger


class _BaseCommand(scfg.DataConfig):
    """Base options shared by all commands."""

    config = scfg.Value(
        None, help='Path to config TOML (default: .vagrant-client.toml).'
    )
    verbose = scfg.Value(
        0,
        short_alias=['v'],
        isflag='counter',
        help='Increase verbosity (-v, -vv).',
    )
    cwd = scfg.Value(
        '',
        help='Directory containing the Vagrantfile (default: current dir).',
    )


def _load_cfg(config_path: str | None) -> ClientConfig:
    path = find_config(config_path)
    if path is None:
        log.debug('No config file found; using defaults')
        return ClientConfig()
    if not path.exists():
        raise FileNotFoundError(f'Config not found: {Path(path).resolve()}')
    log.debug('Loading config from {}', path)
    return load(path).expanded_paths()


def _client_for(
    cfg: ClientConfig, *, passthrough: bool = False
) -> VagrantClient:
    if passthrough:
        # echo vagrant progress while it runs
        executor = partial(run_combined, passthrough=True)
        return VagrantClient(cfg, executor=executor)
    return VagrantClient(cfg)


def _print_err(msg: str) -> None:
    print(msg, file=sys.stderr)


__all__ = [name for name in globals() if not name.startswith('__')]
