import json
import logging
from pathlib import Path
from typing import AbstractSet, Set, Union

import aiofiles
import aiofiles.os

from .base import ReviewedStore

logger = logging.getLogger(__name__)


class LocalReviewedStore(ReviewedStore):
    """Reviewed ids kept as a JSON array on the local filesystem."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug(f"LocalReviewedStore initialized with path {self.path}")

    async def load(self) -> Set[str]:
        if not self.path.exists():
            logger.info(f"No reviewed id file at {self.path}, starting empty.")
            return set()

        async with aiofiles.open(self.path, "r", encoding="utf-8") as in_file:
            content = await in_file.read()

        try:
            data = json.loads(content) if content.strip() else []
        except json.JSONDecodeError as e:
            logger.error(f"Reviewed id file {self.path} is corrupt: {e}")
            return set()

        ids = {str(item) for item in data if isinstance(item, (str, int))}
        logger.info(f"Loaded {len(ids)} reviewed ids from {self.path}")
        return ids

    async def save(self, ids: AbstractSet[str]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        payload = json.dumps(sorted(ids))

        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as out_file:
            await out_file.write(payload)
        await aiofiles.os.replace(tmp_path, self.path)

        logger.debug(f"Saved {len(ids)} reviewed ids to {self.path}")
