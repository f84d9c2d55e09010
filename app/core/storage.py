# app\core\storage.py
"""
Document store access for client configuration files.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """General error type for problems reading configuration documents."""

    pass


class LocalConfigStore:
    """
    Read configuration documents from a directory tree.

    Paths are relative to the store root, e.g.
    "Umbrella Report Config/Acme/ot_rules.xlsx".
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def resolve(self, path: str) -> Path | None:
        """Return the absolute file path, or None if it points outside the root."""
        root = self.root.resolve()
        candidate = (root / path).resolve()
        if not candidate.is_relative_to(root):
            logger.warning("Rejected config path outside store root: %s", path)
            return None
        return candidate

    async def read_file(self, path: str) -> bytes | None:
        """
        Read a document by store-relative path.

        Args:
            path: Path relative to the store root
        Returns:
            File contents, or None if the document does not exist
        Raises:
            StorageError: If the file exists but cannot be read
        """
        file_path = self.resolve(path)
        if file_path is None or not file_path.is_file():
            logger.debug("Config document not found: %s", path)
            return None

        try:
            return file_path.read_bytes()
        except OSError as e:
            logger.exception("Failed to read config document %s", file_path)
            raise StorageError(f"Could not read config document {path}: {e}") from e
