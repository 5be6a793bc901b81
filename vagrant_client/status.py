"""Machine state records from ``vagrant status``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .output import OutputLine

_FIELDS = {
    'provider-name': 'provider',
    'state': 'state',
    'state-human-short': 'state_short',
    'state-human-long': 'state_long',
}


@dataclass
class MachineStatus:
    name: str
    provider: str = ''
    state: str = ''
    state_short: str = ''
    state_long: str = ''


def aggregate_status(lines: Iterable[OutputLine]) -> list[MachineStatus]:
    machines: dict[str, MachineStatus] = {}
    for line in lines:
        attr = _FIELDS.get(line.kind)
        if attr is None or not line.target:
            continue
        rec = machines.get(line.target)
        if rec is None:
            rec = machines[line.target] = MachineStatus(name=line.target)
        setattr(rec, attr, line.message)
    return list(machines.values())
