"""Identifier engine: deterministic, file-scoped name generation."""

from __future__ import annotations

import hashlib
import logging
import re
from pathlib import PurePath

from styleforge.config import BuildConfig

__all__ = ["FileScope", "file_hash", "sanitize_debug_id"]

logger = logging.getLogger(__name__)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_-]")


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def file_hash(file_path: str, package_name: str | None = None, length: int = 6) -> str:
    """Return a short stable hash of a definition file's origin.

    The result never starts with a digit, so it can begin a class name.
    """
    key = PurePath(file_path).as_posix()
    if package_name:
        key = f"{package_name}:{key}"
    digest = int(hashlib.sha256(key.encode("utf-8")).hexdigest(), 16)
    short = _to_base36(digest)[:length]
    if short[0].isdigit():
        short = f"_{short}"
    return short


def sanitize_debug_id(debug_id: str) -> str:
    """Make *debug_id* safe to start a class or custom-property name."""
    safe = _UNSAFE_RE.sub("_", debug_id)
    if safe[:1].isdigit():
        safe = f"_{safe}"
    return safe


class FileScope:
    """Allocates identifiers for one definition file.

    The Nth allocation in a file always yields the same identifier, so an
    unchanged file rebuilds to byte-identical names.
    """

    def __init__(
        self,
        file_path: str,
        package_name: str | None = None,
        config: BuildConfig | None = None,
    ) -> None:
        self.file_path = PurePath(file_path).as_posix()
        self.package_name = package_name
        self.config = config or BuildConfig()
        self.hash = file_hash(
            self.file_path, package_name, self.config.identifier_hash_length
        )
        self._counter = 0
        self.allocated: dict[str, str | None] = {}

    def allocate(self, debug_id: str | None = None) -> str:
        """Return the next identifier for this file."""
        seq = _to_base36(self._counter)
        self._counter += 1
        if debug_id and self.config.debug_ids:
            identifier = f"{sanitize_debug_id(debug_id)}__{self.hash}{seq}"
        else:
            identifier = f"{self.hash}{seq}"
        self.allocated[identifier] = debug_id
        logger.debug("Allocated %s in %s", identifier, self.file_path)
        return identifier
