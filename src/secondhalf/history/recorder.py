"""
Prediction history kept in local storage, most recent first.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Tuple

import pandas as pd
from pydantic import BaseModel, ConfigDict, ValidationError

from secondhalf.config import HISTORY_SLOT
from secondhalf.history.storage import LocalStorage
from secondhalf.llm.errors import PersistenceError
from secondhalf.utils.logging_utils import get_logger

logger = get_logger(__name__)

MAX_WRITE_ATTEMPTS: int = 20


class HistoryEntry(BaseModel):
    """One past successful prediction."""

    model_config = ConfigDict(frozen=True)

    id: int
    date: str
    teams: str
    prediction: str
    timestamp: str


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso_millis(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def _decode(raw: Optional[str]) -> List[HistoryEntry]:
    if raw is None:
        return []
    try:
        items = json.loads(raw)
        if not isinstance(items, list):
            raise ValueError("history slot does not hold a list")
        return [HistoryEntry.model_validate(item) for item in items]
    except (ValueError, ValidationError) as exc:
        raise PersistenceError(f"stored history is unreadable: {exc}") from exc


def _encode(entries: Sequence[HistoryEntry]) -> str:
    return json.dumps([e.model_dump() for e in entries], ensure_ascii=False)


class HistoryRecorder:
    """
    Prepends successful predictions to the persisted history.

    Every ``record`` call is an atomic read-modify-write on the storage slot,
    so overlapping submissions against the same storage never drop an entry.
    """

    def __init__(
        self,
        storage: LocalStorage,
        clock: Callable[[], datetime] | None = None,
        slot: str = HISTORY_SLOT,
    ):
        self.storage = storage
        self.slot = slot
        self._clock = clock or _utc_now
        self._entries: Tuple[HistoryEntry, ...] = ()

    @property
    def entries(self) -> Tuple[HistoryEntry, ...]:
        """Snapshot of the history as of the last load or record."""
        return self._entries

    def load(self) -> Tuple[HistoryEntry, ...]:
        """Read the persisted history into memory and return it."""
        self._entries = tuple(_decode(self.storage.get_item(self.slot)))
        return self._entries

    def record(
        self,
        prediction: str,
        match_date: str,
        home_team: str,
        away_team: str,
    ) -> HistoryEntry:
        """
        Persist a new entry at the front of the history.

        Parameters
        ----------
        prediction : str
            Extracted prediction text.
        match_date : str
            Date entered in the form.
        home_team, away_team : str
            Team names entered in the form.

        Returns
        -------
        HistoryEntry
            The entry that was stored.

        Raises
        ------
        PersistenceError
            If storage cannot be read or written.
        """
        for _ in range(MAX_WRITE_ATTEMPTS):
            raw = self.storage.get_item(self.slot)
            current = _decode(raw)

            now = self._clock()
            entry_id = int(now.timestamp() * 1000)
            if current and entry_id <= current[0].id:
                entry_id = current[0].id + 1

            entry = HistoryEntry(
                id=entry_id,
                date=str(match_date),
                teams=f"{home_team} vs {away_team}",
                prediction=prediction,
                timestamp=_iso_millis(now),
            )
            updated = [entry] + current
            if self.storage.compare_and_set(self.slot, raw, _encode(updated)):
                self._entries = tuple(updated)
                logger.info(
                    "Recorded prediction %d for %s (%d in history)",
                    entry.id,
                    entry.teams,
                    len(updated),
                )
                return entry

        raise PersistenceError(
            f"history slot kept changing; gave up after {MAX_WRITE_ATTEMPTS} attempts"
        )


def history_to_frame(entries: Sequence[HistoryEntry]) -> pd.DataFrame:
    """
    Return the history as a DataFrame for tabular display.

    Columns: id, date, teams, timestamp, prediction. Row order follows
    ``entries`` (most recent first).
    """
    columns = ["id", "date", "teams", "timestamp", "prediction"]
    if not entries:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame([e.model_dump() for e in entries], columns=columns)
