"""Client configuration: binary name, verbosity and per-operation defaults."""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path

import ubelt as ub

from .commands import DestroyOptions, SshConfigOptions, StatusOptions, UpOptions
from .errors import ConfigError
from .util import expand

DEFAULT_BINARY_NAME = 'vagrant'
CONFIG_FNAME = '.vagrant-client.toml'

_SECTIONS = ('up', 'destroy', 'ssh_config', 'status')


@dataclass
class ClientConfig:
    binary_name: str = DEFAULT_BINARY_NAME
    verbosity: int = 1
    up: UpOptions = field(default_factory=UpOptions)
    destroy: DestroyOptions = field(default_factory=DestroyOptions)
    ssh_config: SshConfigOptions = field(default_factory=SshConfigOptions)
    status: StatusOptions = field(default_factory=StatusOptions)

    def expanded_paths(self) -> 'ClientConfig':
        for section in _SECTIONS:
            opts = getattr(self, section)
            if opts.working_directory:
                opts.working_directory = expand(opts.working_directory)
        return self


def user_config_path() -> Path:
    p = ub.Path.appdir('vagrant_client', type='config')
    return Path(p) / 'config.toml'


def find_config(path: str | Path | None = None) -> Path | None:
    """Resolve the config file to use, or None to fall back to defaults."""
    if path is not None:
        return Path(path)
    for cand in (Path(CONFIG_FNAME), user_config_path()):
        if cand.exists():
            return cand
    return None


def _toml_escape(s: str) -> str:
    return s.replace('\\', '\\\\').replace('"', '\\"')


def _toml_value(val: bool | int | str | list[str]) -> str:
    # bool is checked before int since True is an int
    if isinstance(val, bool):
        return 'true' if val else 'false'
    if isinstance(val, int):
        return str(val)
    if isinstance(val, list):
        return '[' + ', '.join(f'"{_toml_escape(v)}"' for v in val) + ']'
    return f'"{_toml_escape(val)}"'


def dump_toml(cfg: ClientConfig) -> str:
    lines = [f'binary_name = {_toml_value(cfg.binary_name)}']
    if cfg.verbosity != 1:
        lines.append(f'verbosity = {_toml_value(cfg.verbosity)}')
    lines.append('')
    for section in _SECTIONS:
        lines.append(f'[{section}]')
        for k, v in asdict(getattr(cfg, section)).items():
            lines.append(f'{k} = {_toml_value(v)}')
        lines.append('')
    return '\n'.join(lines).rstrip() + '\n'


def _coerce_option(where: str, default: object, value: object) -> object:
    """Convert a TOML value to the type of the option's default."""
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ConfigError(f'{where} must be true or false, got {value!r}')
        return value
    if isinstance(default, list):
        if isinstance(value, str):
            value = value.split(',')
        if not isinstance(value, list):
            raise ConfigError(f'{where} must be a list or comma separated string')
        return [str(v).strip() for v in value if str(v).strip()]
    if isinstance(value, (dict, list)):
        raise ConfigError(f'{where} must be a string, got {value!r}')
    return str(value).strip()


def loads(text: str) -> ClientConfig:
    raw = tomllib.loads(text)
    cfg = ClientConfig()
    if 'binary_name' in raw:
        cfg.binary_name = str(raw['binary_name']).strip() or DEFAULT_BINARY_NAME
    if 'verbosity' in raw:
        try:
            cfg.verbosity = int(raw['verbosity'])
        except (TypeError, ValueError) as ex:
            raise ConfigError(
                f'verbosity must be an integer, got {raw["verbosity"]!r}'
            ) from ex
    for section in _SECTIONS:
        body = raw.get(section, None)
        if not isinstance(body, dict):
            continue
        obj = getattr(cfg, section)
        for k, v in body.items():
            if not hasattr(obj, k):
                continue
            setattr(obj, k, _coerce_option(f'{section}.{k}', getattr(obj, k), v))
    return cfg


def load(path: Path) -> ClientConfig:
    return loads(path.read_text(encoding='utf-8'))


def save(path: Path, cfg: ClientConfig) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_toml(cfg), encoding='utf-8')
