"""Tests for client config loading and saving."""

from __future__ import annotations

from pathlib import Path

import pytest

from vagrant_client.commands import up_args
from vagrant_client.config import (
    ClientConfig,
    dump_toml,
    find_config,
    load,
    loads,
    save,
)
from vagrant_client.errors import ConfigError


def test_dump_load_roundtrip(tmp_path: Path) -> None:
    cfg = ClientConfig(binary_name='/opt/"vagrant"/bin/vagrant')
    cfg.verbosity = 2
    cfg.up.provision_with = ['shell', 'ansible']
    cfg.up.provider = 'libvirt'
    cfg.destroy.force = False
    cfg.ssh_config.name = 'node1'
    fpath = tmp_path / 'sub' / '.vagrant-client.toml'
    save(fpath, cfg)

    cfg2 = load(fpath)
    assert cfg2 == cfg


def test_dump_toml_verbosity_default_omitted() -> None:
    text = dump_toml(ClientConfig())
    assert 'verbosity =' not in text
    assert 'binary_name = "vagrant"' in text
    assert '[up]' in text


def test_loads_ignores_unknown_keys() -> None:
    cfg = loads('binary_name = ""\n[up]\nbogus = 1\nparallel = false\n')
    assert cfg.binary_name == 'vagrant'
    assert cfg.up.parallel is False
    assert not hasattr(cfg.up, 'bogus')


def test_expanded_paths_expands_env(monkeypatch) -> None:
    monkeypatch.setenv('VAGRANT_CLIENT_TEST_DIR', '/tmp/vc-x')
    cfg = ClientConfig()
    cfg.up.working_directory = '$VAGRANT_CLIENT_TEST_DIR/env'
    assert cfg.expanded_paths().up.working_directory == '/tmp/vc-x/env'


def test_find_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        'vagrant_client.config.user_config_path',
        lambda: tmp_path / 'missing.toml',
    )
    assert find_config() is None
    local = tmp_path / '.vagrant-client.toml'
    save(local, ClientConfig())
    assert find_config() == Path('.vagrant-client.toml')
    assert find_config(str(local)) == local


def test_loads_coerces_option_types() -> None:
    cfg = loads(
        '[up]\nprovision_with = "shell, ansible,"\nprovider = 3\n'
        '[destroy]\nforce = false\n'
    )
    assert cfg.up.provision_with == ['shell', 'ansible']
    assert cfg.up.provider == '3'
    assert '--provision-with' in up_args(cfg.up)
    assert 'shell,ansible' in up_args(cfg.up)
    assert cfg.destroy.force is False


@pytest.mark.parametrize(
    'text',
    [
        '[up]\nparallel = "no"\n',
        '[destroy]\nforce = 1\n',
        '[up]\nprovision_with = 5\n',
        '[ssh_config]\nname = ["a"]\n',
        'verbosity = "loud"\n',
    ],
)
def test_loads_rejects_wrong_types(text: str) -> None:
    with pytest.raises(ConfigError):
        loads(text)
