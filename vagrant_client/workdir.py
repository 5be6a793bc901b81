"""Run a callable with a temporary working directory.

Vagrant locates its Vagrantfile from the process working directory, so
directory-scoped operations change the cwd for the whole process. Nothing
here locks; callers using several threads must serialize these calls.
"""

from __future__ import annotations

import os
from typing import Callable, Protocol, TypeVar

from loguru import logger

from .errors import WorkingDirectoryError

log = logger

T = TypeVar('T')


class DirectoryContext(Protocol):
    def getcwd(self) -> str: ...

    def chdir(self, path: str) -> None: ...


class OsDirectoryContext:
    def getcwd(self) -> str:
        return os.getcwd()

    def chdir(self, path: str) -> None:
        os.chdir(path)


def run_scoped(
    target_dir: str | None,
    body: Callable[[], T],
    *,
    dirs: DirectoryContext | None = None,
) -> T:
    """Call ``body`` with ``target_dir`` as the working directory.

    An empty ``target_dir`` calls ``body`` directly. If ``body`` raises, its
    exception wins and a failed restore is only logged and noted on it. If
    ``body`` succeeds but the old directory cannot be restored, a
    :class:`WorkingDirectoryError` is raised.
    """
    if not target_dir:
        return body()
    dirs = dirs or OsDirectoryContext()
    try:
        old_dir = dirs.getcwd()
    except OSError as ex:
        raise WorkingDirectoryError(
            f'Failed to read current working directory: {ex}'
        ) from ex
    try:
        dirs.chdir(target_dir)
    except OSError as ex:
        raise WorkingDirectoryError(
            f'Failed to change working directory to {target_dir}: {ex}'
        ) from ex
    log.debug('Changed working directory {} -> {}', old_dir, target_dir)

    try:
        result = body()
    except BaseException as ex:
        try:
            dirs.chdir(old_dir)
        except Exception as restore_ex:
            log.warning(
                'Failed to restore working directory {}: {}',
                old_dir,
                restore_ex,
            )
            ex.add_note(
                f'additionally failed to restore working directory '
                f'{old_dir}: {restore_ex}'
            )
        raise

    try:
        dirs.chdir(old_dir)
    except OSError as ex:
        raise WorkingDirectoryError(
            f'Failed to restore working directory to {old_dir}: {ex}'
        ) from ex
    log.debug('Restored working directory {}', old_dir)
    return result
