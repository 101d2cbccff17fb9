"""In-memory implementation of RouteNoteRepository.

Single-process only. Notes live for the lifetime of the process and are
shared by every caller.
"""
from __future__ import annotations

from typing import Dict, List
import asyncio

from domain.route_guide import Point, RouteNote, RouteNoteRepository


class _LocationLog:
    __slots__ = ("lock", "notes")

    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.notes: List[RouteNote] = []


class InMemoryRouteNoteRepository(RouteNoteRepository):
    def __init__(self) -> None:
        self._logs: Dict[Point, _LocationLog] = {}
        self._lock = asyncio.Lock()

    async def _log_for(self, point: Point) -> _LocationLog:
        async with self._lock:
            log = self._logs.get(point)
            if log is None:
                log = self._logs[point] = _LocationLog()
            return log

    async def replay_and_append(self, note: RouteNote) -> List[RouteNote]:  # type: ignore[override]
        """Return the notes already logged at the note's location, then record it.

        The note is appended before the snapshot is handed back, so a caller
        cancelled while its replay is still being streamed keeps its note in
        the log. Later callers at the same location will see it.
        """
        log = await self._log_for(note.location)
        # Snapshot and append form one unit per location
        async with log.lock:
            prior = list(log.notes)
            log.notes.append(note)
        return prior

    async def notes_at(self, point: Point) -> List[RouteNote]:  # type: ignore[override]
        async with self._lock:
            log = self._logs.get(point)
        if log is None:
            return []
        async with log.lock:
            return list(log.notes)

    async def count(self) -> int:  # type: ignore[override]
        async with self._lock:
            logs = list(self._logs.values())
        return sum(len(log.notes) for log in logs)
