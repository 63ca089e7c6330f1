"""Automatic intent registry: every module exposing ACTION and handle()."""
from importlib import import_module
from pkgutil import iter_modules
from pathlib import Path

handlers = {}

_package_dir = Path(__file__).parent
for mod in iter_modules([str(_package_dir)]):
    if mod.ispkg or mod.name == "__init__":
        continue
    module = import_module(f"{__name__}.{mod.name}")
    action = getattr(module, "ACTION", None)
    if action and callable(getattr(module, "handle", None)):
        handlers[action] = module.handle
