# jsonshop/database.py
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, List, Union

logger = logging.getLogger(__name__)

# This file holds the JSON-file persistence shared by both managers.


class FileStore:
    """Reads and writes one JSON array at a fixed path."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    async def load(self) -> Any:
        """Return the parsed file, or [] if it is missing or unreadable."""
        try:
            data = await asyncio.to_thread(self._read)
        except (OSError, ValueError) as e:
            logger.error("Could not load %s: %s", self.path, e)
            return []
        logger.debug("Loaded %d items from %s", len(data) if isinstance(data, list) else 0, self.path)
        return data

    async def save(self, items: List[Any]) -> None:
        """Overwrite the file with the full collection. I/O errors propagate."""
        await asyncio.to_thread(self._write, items)
        logger.debug("Saved %d items to %s", len(items), self.path)

    def _read(self) -> Any:
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, items: List[Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(items, f, indent=2, ensure_ascii=False)
