"""CLI package for the water level dashboard."""

from importlib import import_module
from types import ModuleType


def __getattr__(name: str) -> ModuleType:
    if name == "app":
        return import_module("cli.app")
    raise AttributeError(name)

# Not re-exported: ``cli.app`` must stay the module so tests can patch it.

__all__ = []
