from __future__ import annotations

from ._common import *  # noqa: F401,F403


class BoxListCLI(_BaseCommand):
    """List locally cached vagrant boxes."""

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        client = _client_for(_load_cfg(args.config))
        boxes = client.box.list()
        if not boxes:
            print('There are no installed boxes!')
            return 0
        width = max(len(b.name) for b in boxes)
        for b in boxes:
            print(f'{b.name:<{width}} ({b.provider}, {b.version})')
        return 0


class BoxModalCLI(scfg.ModalCLI):
    """Box inventory operations."""

    list = BoxListCLI
