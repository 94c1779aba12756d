"""Command-line client for the AgroVista API.

The Typer application is ``cli.app.app``. It is not re-exported here so that
``cli.app`` keeps naming the module, which tests patch attributes on.
"""

from importlib import import_module
from types import ModuleType


def __getattr__(name: str) -> ModuleType:
    if name == "app":
        return import_module("cli.app")
    raise AttributeError(name)


__all__ = []
