"""Shared utility helpers for subprocess execution and command formatting."""

from __future__ import annotations

import os
import shlex
import subprocess
import sys
from dataclasses import dataclass
from typing import Optional, Sequence

from loguru import logger

log = logger


@dataclass(frozen=True)
class CmdResult:
    code: int
    stdout: str
    stderr: str = ''


def shell_join(cmd: Sequence[str]) -> str:
    return ' '.join(shlex.quote(c) for c in cmd)


def _decode(data: bytes | None) -> str:
    return (data or b'').decode('utf-8', errors='replace')


def _tee(proc: subprocess.Popen) -> str:
    chunks: list[str] = []
    for raw in proc.stdout:
        text = _decode(raw)
        sys.stdout.write(text)
        sys.stdout.flush()
        chunks.append(text)
    return ''.join(chunks)


def run_combined(
    program: str,
    args: Sequence[str],
    *,
    env: Optional[dict[str, str]] = None,
    passthrough: bool = False,
) -> CmdResult:
    """Run ``program`` with ``args`` and capture stdout and stderr together.

    With ``passthrough`` each line is also echoed to ``sys.stdout`` as soon
    as it arrives, so long running commands show progress.

    A non-zero exit code is reported through ``CmdResult.code`` rather than
    raised, so the caller can still parse whatever was printed. ``OSError``
    propagates when the program cannot be started. Output is decoded without
    newline translation so carriage returns inside records survive.
    """
    cmd = [program, *args]
    log.opt(depth=1).debug('RUN: {}', shell_join(cmd))
    if passthrough:
        with subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            env=env,
        ) as proc:
            output = _tee(proc)
            code = proc.wait()
    else:
        p = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            env=env,
        )
        output = _decode(p.stdout)
        code = p.returncode
    res = CmdResult(code, output)
    if code == 0:
        log.opt(depth=1).debug('Command ok code=0 cmd={}', shell_join(cmd))
    else:
        log.opt(depth=1).debug(
            'Command failed code={} cmd={}', code, shell_join(cmd)
        )
    return res


def which(cmd: str) -> Optional[str]:
    from shutil import which as _which

    return _which(cmd)


def expand(path: str) -> str:
    return os.path.expandvars(os.path.expanduser(path))
