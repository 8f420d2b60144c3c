"""
JSON file key-value store.

One <key>.json file per key under a root directory. Writes go to a
temp file first and are renamed into place, so a crash never leaves
a half-written file behind.
"""

import logging
import os
from pathlib import Path
from typing import Any

from hearthstone.storage import codec

logger = logging.getLogger(__name__)


class JsonFileStore:
    """Directory-backed KeyValueStore."""

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        safe = "".join(c if c.isalnum() or c in "-_." else "_" for c in key)
        return self.root / f"{safe}.json"

    async def get(self, key: str) -> Any | None:
        path = self._path(key)
        if not path.exists():
            return None
        text = path.read_text(encoding="utf-8")
        try:
            return codec.loads(text)
        except ValueError as e:
            logger.error(f"Corrupt store file {path}: {e}")
            return None

    async def set(self, key: str, value: Any) -> None:
        await self.set_many({key: value})

    async def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    async def set_many(self, entries: dict[str, Any]) -> None:
        """
        Stage every entry as a temp file, then rename them all into place.

        Encoding or disk errors during staging leave existing files intact.
        """
        staged: list[tuple[Path, Path]] = []
        try:
            for key, value in entries.items():
                target = self._path(key)
                tmp = target.with_suffix(".json.tmp")
                tmp.write_text(codec.dumps(value), encoding="utf-8")
                staged.append((tmp, target))
        except Exception:
            for tmp, _ in staged:
                tmp.unlink(missing_ok=True)
            raise

        for tmp, target in staged:
            os.replace(tmp, target)
