"""Extension loading from the `[palette]` configuration.

`extensions = ["palette_examples.teams", "mypkg.tools:ToolsExtension"]` lists
modules to import. Without an explicit `:ClassName`, the module must define
exactly one Extension subclass. The extension is named after the last module
component, which is also the name of its configuration section.
"""

from __future__ import annotations

import importlib
import inspect
import sys
from collections.abc import Iterable

from ..errors import InvalidDefinition
from .interface import Extension

__all__ = ["extend_path", "instantiate_extension"]


def extend_path(paths: Iterable[str]) -> None:
    """Make the `extensions_paths` directories importable."""
    for path in paths:
        if path not in sys.path:
            sys.path.append(path)


def instantiate_extension(reference: str) -> Extension:
    """Import `reference` ("module" or "module:ClassName") and build its extension.

    Raises:
        ModuleNotFoundError: if the module cannot be imported
        InvalidDefinition: if the reference is empty or the module holds no
            usable Extension subclass
    """
    modname, _, class_name = reference.partition(":")
    if not modname.strip():
        raise InvalidDefinition(reference, "empty module name")
    module = importlib.import_module(modname)
    name = modname.rsplit(".", 1)[-1]

    if class_name:
        candidate = getattr(module, class_name, None)
        if not (inspect.isclass(candidate) and issubclass(candidate, Extension)):
            raise InvalidDefinition(reference, f"{class_name} is not an Extension subclass")
        return candidate(name)

    candidates = [
        obj
        for obj in vars(module).values()
        if inspect.isclass(obj) and issubclass(obj, Extension) and obj is not Extension and obj.__module__ == module.__name__
    ]
    if len(candidates) != 1:
        raise InvalidDefinition(reference, f"expected one Extension subclass, found {len(candidates)}")
    return candidates[0](name)
