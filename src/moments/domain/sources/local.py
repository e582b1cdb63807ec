import asyncio
import json
import logging
from pathlib import Path
from typing import Any, List, Union

import aiofiles
import aiofiles.os
from pydantic import ValidationError

from moments.domain.models import Event
from moments.schemas.event import EventRecord

from .base import EventSource, sort_chronologically

logger = logging.getLogger(__name__)


class LocalEventSource(EventSource):
    """Events kept as a JSON array of records on the local filesystem."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._write_lock = asyncio.Lock()
        logger.debug(f"LocalEventSource initialized with path {self.path}")

    async def _read_raw(self) -> List[Any]:
        if not self.path.exists():
            logger.warning(f"Event file does not exist: {self.path}")
            return []

        async with aiofiles.open(self.path, "r", encoding="utf-8") as in_file:
            content = await in_file.read()

        try:
            data = json.loads(content) if content.strip() else []
        except json.JSONDecodeError as e:
            logger.error(f"Event file {self.path} is corrupt: {e}")
            return []

        if not isinstance(data, list):
            logger.error(f"Event file {self.path} does not contain a list of records.")
            return []
        return data

    async def _write_raw(self, records: List[Any]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as out_file:
            await out_file.write(json.dumps(records, indent=2))
        await aiofiles.os.replace(tmp_path, self.path)

    async def fetch_all_events(self) -> List[Event]:
        records = await self._read_raw()

        events: List[Event] = []
        skipped = 0
        for raw in records:
            try:
                events.append(EventRecord.model_validate(raw).to_domain())
            except ValidationError as e:
                skipped += 1
                logger.warning(f"Skipping malformed event record: {e.error_count()} error(s)")

        logger.info(f"Fetched {len(events)} events from {self.path} ({skipped} skipped).")
        return sort_chronologically(events)

    async def set_curated(self, event_id: str, value: bool) -> bool:
        async with self._write_lock:
            records = await self._read_raw()
            for raw in records:
                if isinstance(raw, dict) and str(raw.get("id")) == event_id:
                    raw["is_curated"] = value
                    break
            else:
                logger.warning(f"Cannot set curated flag, event not found: {event_id}")
                return False

            await self._write_raw(records)

        logger.info(f"Event {event_id} curated flag set to {value}.", extra={"event_id": event_id})
        return True
