"""Pydantic models for the session event log.

The event log is the single piece of shared state in a crawl session: every
capability service and traffic listener holds a reference to the same
EventLog and appends tagged records to it. Records are immutable once
appended and the log is never reordered.
"""

from enum import Enum
from typing import Any, Dict, Iterator, List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class SessionState(str, Enum):
    """Lifecycle states of a browser session."""
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    CLOSED = "closed"


class EventRecord(BaseModel):
    """A single tagged entry in the event log."""

    model_config = ConfigDict(frozen=True)

    source: str = Field(description="Tag of the component that produced the record")
    payload: Tuple[Any, ...] = Field(
        default=(),
        description="Heterogeneous values describing the observed activity"
    )

    def to_export(self) -> Dict[str, List[Any]]:
        """Convert to the exported ``{source: payload}`` form."""
        return {self.source: list(self.payload)}


class EventLog:
    """Append-only ordered sequence of EventRecords for one session."""

    def __init__(self):
        self._records: List[EventRecord] = []

    def append(self, source: str, *payload: Any) -> EventRecord:
        """Append a record and return it.

        Args:
            source: Tag of the producing component
            *payload: Values to store with the record

        Returns:
            The appended record
        """
        record = EventRecord(source=source, payload=payload)
        self._records.append(record)
        return record

    @property
    def records(self) -> Tuple[EventRecord, ...]:
        """Immutable view of all records in append order."""
        return tuple(self._records)

    def by_source(self, source: str) -> List[EventRecord]:
        """Get records produced by a given component, in append order."""
        return [record for record in self._records if record.source == source]

    def snapshot(self) -> List[Dict[str, List[Any]]]:
        """Export the full log as a list of ``{source: payload}`` dicts."""
        return [record.to_export() for record in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[EventRecord]:
        return iter(tuple(self._records))

    def __repr__(self) -> str:
        return f"EventLog(records={len(self._records)})"
