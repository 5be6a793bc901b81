from __future__ import annotations

import pytest

from vagrant_client.client import VagrantClient
from vagrant_client.util import CmdResult


class FakeDirs:
    """Records getcwd/chdir calls and fails on request."""

    def __init__(self, cwd='/tmp/anotherexample', fail_getcwd=False, fail_chdir=()):
        self.cwd = cwd
        self.fail_getcwd = fail_getcwd
        self.fail_chdir = set(fail_chdir)
        self.calls: list[tuple] = []

    def getcwd(self) -> str:
        self.calls.append(('getcwd',))
        if self.fail_getcwd:
            raise OSError('fake getcwd error')
        return self.cwd

    def chdir(self, path: str) -> None:
        self.calls.append(('chdir', path))
        if path in self.fail_chdir:
            raise OSError(f'fake chdir error: {path}')
        self.cwd = path


class FakeExecutor:
    def __init__(self, output: str = '', code: int = 0):
        self.output = output
        self.code = code
        self.calls: list[tuple[str, list[str]]] = []

    def __call__(self, program, args):
        self.calls.append((program, list(args)))
        return CmdResult(self.code, self.output)


@pytest.fixture
def fake_dirs() -> FakeDirs:
    return FakeDirs()


@pytest.fixture
def make_client(fake_dirs):
    def _make(output: str = '', code: int = 0, **kwargs):
        executor = kwargs.pop('executor', None) or FakeExecutor(output, code)
        client = VagrantClient(
            executor=executor,
            resolver=lambda name: f'/usr/bin/{name}',
            dirs=kwargs.pop('dirs', fake_dirs),
            **kwargs,
        )
        return client, executor

    return _make
