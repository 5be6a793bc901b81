"""CLI package exports for top-level command entry points."""

from __future__ import annotations

from .main import VagrantClientModalCLI, main

__all__ = ['VagrantClientModalCLI', 'main']
