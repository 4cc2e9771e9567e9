"""
JSON-array file holding every token creation outcome, oldest first.

Each append is a full read-modify-write of the file. There is no locking:
two appends racing each other can lose the earlier one (last writer wins).
This is a low-volume debug history, not a ledger.
"""
import asyncio
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog

from .exceptions import TokenLogReadError
from .schemas import TokenCreationOutcome

logger = structlog.get_logger(__name__)


class TokenLogRepository:

    def __init__(self, path: Path | str):
        self.path = Path(path)

    # --- sync helpers (run in a worker thread) ---

    def _read(self) -> list[dict[str, Any]] | None:
        """Returns the stored records, [] when the file is absent, None when it is corrupt."""
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return []
        try:
            data = json.loads(raw.decode("utf-8"))
        except ValueError:  # includes UnicodeDecodeError
            return None
        return data if isinstance(data, list) else None

    def _quarantine(self) -> Path:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        target = self.path.with_name(f"{self.path.name}.corrupt-{stamp}")
        self.path.rename(target)
        return target

    def _append(self, record: dict[str, Any]) -> None:
        records = self._read()
        if records is None:
            moved_to = self._quarantine()
            logger.warning("token_log_corrupt", path=str(self.path), quarantined_to=str(moved_to))
            records = []

        records.append(record)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(records, indent=2), encoding="utf-8")

    # --- async API ---

    async def append(self, outcome: TokenCreationOutcome) -> None:
        await asyncio.to_thread(self._append, outcome.model_dump(mode="json"))
        logger.info("token_log_saved", path=str(self.path), payment_token_id=outcome.payment_token_id)

    async def read_all(self) -> list[dict[str, Any]]:
        try:
            records = await asyncio.to_thread(self._read)
        except (OSError, ValueError) as e:
            logger.error("token_log_unreadable", path=str(self.path), error=str(e))
            raise TokenLogReadError() from e
        if records is None:
            logger.error("token_log_unreadable", path=str(self.path), error="not a JSON array")
            raise TokenLogReadError()
        return records
