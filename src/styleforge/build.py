"""Build pass: execute definition files in parallel and emit one stylesheet."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from styleforge.config import BuildConfig
from styleforge.loader import DefinitionModules
from styleforge.model.contract import ThemeContract
from styleforge.registry import Registry
from styleforge.scope import StyleScope

__all__ = ["BuildResult", "build", "collect_exports"]

logger = logging.getLogger(__name__)

# Definition modules are resolved through sys.modules, so one build at a time.
_build_lock = threading.Lock()


@dataclass(frozen=True)
class BuildResult:
    """Output of one build pass."""

    css: str
    exports: dict[str, dict[str, Any]] = field(default_factory=dict)
    rule_count: int = 0
    class_map: dict[str, str] = field(default_factory=dict)


def _origin(path: Path, root: Path) -> str:
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return path.resolve().as_posix()


def collect_exports(namespace: Mapping[str, Any], scope: StyleScope) -> dict[str, Any]:
    """Pick the module globals that carry generated names.

    Class names and keyframe names map to strings, contracts to nested
    dicts of ``var(...)`` strings, and ``map_to_styles`` results to dicts.
    """
    exports: dict[str, Any] = {}
    for name, value in namespace.items():
        if name.startswith("_"):
            continue
        if isinstance(value, ThemeContract):
            exports[name] = value.to_dict()
        elif scope.owns(value):
            exports[name] = value
        elif isinstance(value, tuple) and value and all(
            scope.owns(v) or isinstance(v, ThemeContract) for v in value
        ):
            exports[name] = [
                v.to_dict() if isinstance(v, ThemeContract) else v for v in value
            ]
        elif isinstance(value, dict) and value and all(scope.owns(v) for v in value.values()):
            exports[name] = {str(k): v for k, v in value.items()}
    return exports


def build(
    paths: Iterable[str | Path],
    config: BuildConfig | None = None,
    *,
    root: str | Path | None = None,
    max_workers: int | None = None,
) -> BuildResult:
    """Run every definition file and finalize the registry.

    Files execute concurrently, each exactly once, including files another
    definition file imports.  Output order follows the sorted file list, so
    repeated builds of unchanged sources are byte-identical.  If any file
    fails, the registry is discarded and the error propagates.
    """
    config = config or BuildConfig()
    root_path = Path(root) if root is not None else Path.cwd()
    files = sorted({Path(p) for p in paths}, key=lambda p: _origin(p, root_path))
    origins = [_origin(path, root_path) for path in files]
    registry = Registry(config)
    for origin in origins:
        registry.file_index(origin)

    logger.info("Building %d definition file(s)", len(files))

    with _build_lock, DefinitionModules(files, origins, registry) as modules:
        try:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                namespaces = list(pool.map(modules.load, files))
        except BaseException:
            logger.info("Build aborted; discarding registered styles")
            registry.reset()
            raise
        exports = {
            origin: collect_exports(namespace, modules.scopes[origin])
            for origin, namespace in zip(origins, namespaces)
        }

    rule_count = registry.rule_count()
    class_map = registry.class_map()
    css = registry.finalize()
    logger.info("Built %d rule(s) from %d file(s)", rule_count, len(files))
    return BuildResult(css=css, exports=exports, rule_count=rule_count, class_map=class_map)
