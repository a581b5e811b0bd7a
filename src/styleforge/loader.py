"""Definition-file loading: each file runs once per build under its own scope.

Definition files may import each other by module name (``from theme_css
import vars``).  While a build is active, :class:`DefinitionModules` sits
first on ``sys.meta_path`` and resolves those names to the build's files, so
an imported file registers under its own identifiers no matter which file
imported it first.  The modules are dropped from ``sys.modules`` when the
build starts and again when it ends.
"""

from __future__ import annotations

import importlib
import importlib.abc
import importlib.util
import keyword
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from types import ModuleType
from typing import Any

from styleforge.registry import Registry
from styleforge.scope import StyleScope, file_scope

__all__ = ["DefinitionModules", "module_name_for"]

logger = logging.getLogger(__name__)


def module_name_for(path: Path) -> str | None:
    """Return the name other definition files import *path* by, if any.

    ``theme_css.py`` is importable as ``theme_css``; ``button.css.py`` is not
    importable by name and gets ``None``.
    """
    name = path.name[:-3] if path.name.endswith(".py") else path.name
    if name.isidentifier() and not keyword.iskeyword(name):
        return name
    return None


class _DefinitionLoader(importlib.abc.Loader):
    def __init__(self, modules: DefinitionModules, path: Path, origin: str) -> None:
        self.modules = modules
        self.path = path
        self.origin = origin

    def create_module(self, spec: Any) -> None:
        return None

    def exec_module(self, module: ModuleType) -> None:
        source = importlib.util.decode_source(self.path.read_bytes())
        code = compile(source, str(self.path), "exec")
        logger.debug("Executing %s as %s", self.origin, module.__name__)
        with file_scope(self.origin, self.modules.registry) as scope:
            exec(code, module.__dict__)
        self.modules.scopes[self.origin] = scope


def _is_definition(module: ModuleType, path: Path) -> bool:
    spec = getattr(module, "__spec__", None)
    if isinstance(getattr(spec, "loader", None), _DefinitionLoader):
        return True
    file = getattr(module, "__file__", None)
    return file is not None and Path(file).resolve() == path.resolve()


class DefinitionModules(importlib.abc.MetaPathFinder):
    """The definition files of one build, importable by module name.

    Use as a context manager around the build; :meth:`load` runs a file (or
    returns it if another file already imported it) and yields its globals.
    """

    def __init__(self, files: Sequence[Path], origins: Sequence[str], registry: Registry) -> None:
        self.registry = registry
        self.scopes: dict[str, StyleScope] = {}
        self._names: dict[Path, str] = {}
        self._files: dict[str, tuple[Path, str]] = {}
        for index, (path, origin) in enumerate(zip(files, origins)):
            name = module_name_for(path)
            if name is not None and name in self._files:
                logger.warning("%s shadows another definition module named %s", origin, name)
                name = None
            elif name is not None and name in sys.modules and not _is_definition(sys.modules[name], path):
                logger.warning("%s is not importable as %s; that module is already loaded", origin, name)
                name = None
            if name is None:
                name = f"_styleforge_definition_{index}"
            self._names[path] = name
            self._files[name] = (path, origin)

    def find_spec(self, fullname: str, path: Any = None, target: Any = None) -> Any:
        entry = self._files.get(fullname)
        if entry is None:
            return None
        file, origin = entry
        return importlib.util.spec_from_file_location(
            fullname, file, loader=_DefinitionLoader(self, file, origin)
        )

    def load(self, path: Path) -> dict[str, Any]:
        return vars(importlib.import_module(self._names[path]))

    def _purge(self) -> None:
        for name, (path, _) in self._files.items():
            module = sys.modules.get(name)
            if module is not None and _is_definition(module, path):
                del sys.modules[name]

    def __enter__(self) -> DefinitionModules:
        self._purge()
        sys.meta_path.insert(0, self)
        return self

    def __exit__(self, *exc_info: object) -> None:
        sys.meta_path.remove(self)
        self._purge()
