"""
File system operations for the JSON document store.

Handles data directory creation, locked file I/O and atomic replacement.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from triviabot.core.exceptions import PersistenceReadError, PersistenceWriteError

from .serialization import from_json_string, to_json_string

logger = logging.getLogger("JSONFileManager")


class FileManager:
    """Manages file operations for JSON documents under one data directory."""

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)
        self._file_locks: dict[str, asyncio.Lock] = {}

    def _get_file_lock(self, file_path: str) -> asyncio.Lock:
        """Get or create a lock for a specific file path."""
        if file_path not in self._file_locks:
            self._file_locks[file_path] = asyncio.Lock()
        return self._file_locks[file_path]

    def ensure_data_directory(self) -> None:
        """Create the data directory if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Data directory ensured at: {self.data_dir}")

    def get_file_path(self, key: str) -> Path:
        """
        Get the file path for a document key.

        Args:
            key: Document name, e.g. "current_question"

        Returns:
            Path to the document file
        """
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid document key: {key!r}")
        return self.data_dir / f"{key}.json"

    async def read_file(self, file_path: Path) -> Any | None:
        """
        Read and parse a JSON file with file locking.

        Returns:
            Parsed content, or None if the file does not exist

        Raises:
            PersistenceReadError: If the file exists but cannot be read or parsed
        """
        async with self._get_file_lock(str(file_path)):
            if not file_path.exists():
                return None

            try:
                content = await asyncio.to_thread(file_path.read_text, encoding="utf-8")
                return from_json_string(content)
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                raise PersistenceReadError(str(file_path), str(e)) from e

    async def write_file(self, file_path: Path, data: Any) -> None:
        """
        Write data to a JSON file with file locking.

        Raises:
            PersistenceWriteError: If the file could not be written
        """
        async with self._get_file_lock(str(file_path)):
            try:
                file_path.parent.mkdir(parents=True, exist_ok=True)

                # Write to temporary file first, then rename (atomic operation)
                temp_file = file_path.with_suffix(file_path.suffix + ".tmp")
                content = to_json_string(data)

                await asyncio.to_thread(temp_file.write_text, content, encoding="utf-8")
                await asyncio.to_thread(temp_file.replace, file_path)
            except (OSError, TypeError, ValueError) as e:
                logger.error(f"Failed to write file {file_path}: {e}")
                raise PersistenceWriteError(str(file_path), str(e)) from e

    async def delete_file(self, file_path: Path) -> None:
        """
        Delete file with file locking.

        Raises:
            PersistenceWriteError: If an existing file could not be removed
        """
        async with self._get_file_lock(str(file_path)):
            try:
                if file_path.exists():
                    await asyncio.to_thread(file_path.unlink)
            except OSError as e:
                logger.error(f"Failed to delete file {file_path}: {e}")
                raise PersistenceWriteError(str(file_path), str(e)) from e
