"""Access to the files of the application being analysed."""

from __future__ import annotations

import fnmatch
import os
from dataclasses import dataclass, field
from pathlib import Path

_MAGIC = frozenset("*?[\\")


@dataclass
class Context:
    """The application root and the environment that may influence detection."""

    path: Path
    env: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def has_file(self, name: str) -> bool:
        """Return whether a file or directory exists under the application root."""
        try:
            os.stat(self.path / name)
        except OSError:
            return False
        return True

    def read_file(self, name: str) -> bytes:
        """Return the contents of a file under the application root."""
        return (self.path / name).read_bytes()

    def list_files(self, pattern: str) -> list[str]:
        """Return paths, relative to the root, that match a glob pattern."""
        full = Path(os.path.normpath(os.path.join(self.path, pattern)))
        parts = full.parts[1:] if full.anchor else full.parts
        candidates = [full.anchor]
        for part in parts:
            candidates = list(_expand(candidates, part))
        return [
            os.path.relpath(match, self.path)
            for match in candidates
            if os.path.lexists(match)
        ]


def _expand(bases: list[str], part: str):
    for base in bases:
        if not _MAGIC.intersection(part):
            yield os.path.join(base, part)
            continue
        try:
            names = sorted(os.listdir(base or "."))
        except OSError:
            continue
        for name in names:
            if fnmatch.fnmatchcase(name, part):
                yield os.path.join(base, name)