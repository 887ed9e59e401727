"""
File system collaborator used to persist sitemap files and patch robots.txt.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    def write(self, path: str, data: bytes) -> None: ...

    def read(self, path: str) -> bytes: ...

    def exists(self, path: str) -> bool: ...

    def file_size(self, path: str) -> int: ...


class LocalFileSystem:
    """Reads and writes files relative to ``base_dir``."""

    def __init__(self, base_dir: str | Path = "") -> None:
        self.base_dir = Path(base_dir or ".").resolve()

    def resolve(self, path: str) -> Path:
        return self.base_dir / path

    def write(self, path: str, data: bytes) -> None:
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    def read(self, path: str) -> bytes:
        return self.resolve(path).read_bytes()

    def exists(self, path: str) -> bool:
        return self.resolve(path).is_file()

    def file_size(self, path: str) -> int:
        return self.resolve(path).stat().st_size
