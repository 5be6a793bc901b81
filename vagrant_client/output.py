"""Parsing of vagrant ``--machine-readable`` output.

Each meaningful line has the form ``timestamp,target,kind,data...``. See
https://developer.hashicorp.com/vagrant/docs/cli/machine-readable for the
format. Vagrant escapes commas inside data as ``%!(VAGRANT_COMMA)`` and
newlines as a literal ``\\n``; those escapes are kept in ``OutputLine.data``
and only decoded on request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from loguru import logger

log = logger

IGNORED_KINDS = frozenset({'ui', 'metadata', 'action'})

_ESCAPES = (
    ('%!(VAGRANT_COMMA)', ','),
    ('\\n', '\n'),
    ('\\r', '\r'),
)


@dataclass(frozen=True)
class OutputLine:
    timestamp: str
    target: str
    kind: str
    data: tuple[str, ...] = ('',)

    @property
    def first(self) -> str:
        return self.data[0] if self.data else ''

    @property
    def message(self) -> str:
        """The data fields joined back together with escapes decoded."""
        return unescape(','.join(self.data))


def unescape(text: str) -> str:
    for raw, repl in _ESCAPES:
        text = text.replace(raw, repl)
    return text


def parse_line(
    raw: str, ignored_kinds: Iterable[str] = IGNORED_KINDS
) -> OutputLine | None:
    parts = raw.strip().split(',', 3)
    if len(parts) < 4:
        return None
    timestamp, target, kind, rest = parts
    if kind in ignored_kinds:
        return None
    return OutputLine(
        timestamp=timestamp,
        target=target,
        kind=kind,
        data=tuple(rest.split(',')),
    )


def parse_output(
    raw: str, ignored_kinds: Iterable[str] = IGNORED_KINDS
) -> list[OutputLine]:
    ignored = frozenset(ignored_kinds)
    lines: list[OutputLine] = []
    # only \n separates records; other line breaks belong to the data
    for physical in (raw or '').split('\n'):
        line = parse_line(physical, ignored)
        if line is not None:
            lines.append(line)
    log.trace('Parsed {} machine-readable lines', len(lines))
    return lines
