"""Append-only JSONL stream of engine run events."""

from __future__ import annotations

import json
import os
import threading
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any

from ..utils import now_utc_iso

EVENTS_ENV = "IMAGEALTER_EVENTS"


@dataclass
class EventWriter:
    path: Path
    run_id: str
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, init=False)
    _seq: int = field(default=0, repr=False, init=False)

    def emit(self, event_type: str, **payload: Any) -> dict[str, Any]:
        with self._lock:
            self._seq += 1
            event = {
                "type": event_type,
                "run_id": self.run_id,
                "seq": self._seq,
                "ts": now_utc_iso(),
            }
            event.update(payload)
            # Paths and other non-JSON values are written as strings.
            line = f"{json.dumps(event, default=str)}\n"
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(line)
        return event


def events_path(explicit: Path | str | None = None) -> Path | None:
    """Explicit path first, then ``IMAGEALTER_EVENTS``; ``None`` disables events."""
    raw = explicit or os.getenv(EVENTS_ENV)
    if not raw:
        return None
    return Path(raw).expanduser()


def open_events(path: Path | str | None, run_id: str) -> EventWriter | None:
    if path is None:
        return None
    return EventWriter(Path(path), run_id)


def emit(events: EventWriter | None, event_type: str, **payload: Any) -> None:
    if events is not None:
        events.emit(event_type, **payload)
