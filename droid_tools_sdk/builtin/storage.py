"""File storage rooted at a working directory, shared by the file tools."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, "os.PathLike[str]"]


class FileStorage:
    """Relative-path file access under *root*."""

    def __init__(self, root: PathLike) -> None:
        self.root = Path(root).resolve()

    def relative(self, path: str) -> str:
        """Strip the root prefix from paths that point inside the root."""
        prefix = str(self.root) + os.sep
        if prefix in path:
            path = path.replace(prefix, "")
        return path

    def path(self, path: str) -> Path:
        return self.root / self.relative(path)

    def exists(self, path: str) -> bool:
        return self.path(path).is_file()

    def get(self, path: str) -> str:
        return self.path(path).read_text(encoding="utf-8")

    def put(self, path: str, content: str) -> None:
        target = self.path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")


# Handlers are built without arguments for every call, so the storage they
# work on is process-wide.
_storage: Optional[FileStorage] = None


def configure_storage(root: PathLike) -> FileStorage:
    """Set the storage root used by the built-in file tools."""
    global _storage
    _storage = FileStorage(root)
    return _storage


def get_storage() -> FileStorage:
    """Return the configured storage (current directory if unset)."""
    global _storage
    if _storage is None:
        _storage = FileStorage(os.getcwd())
    return _storage
