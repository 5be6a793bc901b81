"""Box inventory: ``vagrant box list`` and the fold over its output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from loguru import logger

from .commands import box_list_args
from .errors import CommandFailedError
from .output import OutputLine

if TYPE_CHECKING:
    from .client import VagrantClient

log = logger


@dataclass
class Box:
    name: str
    provider: str = ''
    version: str = ''


def aggregate_boxes(lines: Iterable[OutputLine]) -> list[Box]:
    """Fold ``box-name`` / ``box-provider`` / ``box-version`` lines into boxes.

    A ``box-name`` line starts a new box; provider and version lines fill in
    the box currently being built. Lines of any other kind are skipped.
    """
    boxes: list[Box] = []
    current: Box | None = None
    for line in lines:
        if line.kind == 'box-name':
            if current is not None and current.name:
                boxes.append(current)
            current = Box(name=line.first)
        elif line.kind == 'box-provider':
            if current is not None:
                current.provider = line.first
        elif line.kind == 'box-version':
            if current is not None:
                current.version = line.first
    if current is not None and current.name:
        boxes.append(current)
    return boxes


class BoxAPI:
    """Box related subcommands of a :class:`VagrantClient`."""

    def __init__(self, client: VagrantClient):
        self.client = client

    def list(self) -> list[Box]:
        try:
            lines = self.client.dispatch(box_list_args())
        except CommandFailedError as ex:
            raise CommandFailedError(
                f'command execution failed: {ex}',
                cmd=ex.cmd,
                records=ex.records,
                result=ex.result,
            ) from ex
        boxes = aggregate_boxes(lines)
        log.debug('Found {} vagrant boxes', len(boxes))
        return boxes
