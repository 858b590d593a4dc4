"""
Collection of completed notes shared by concurrent detail tasks.

Tasks finish in arbitrary order; each note is stored together with the
listing position of its row so the result can be returned in listing
order once every task is done.
"""

import asyncio

import structlog

from .models import Note, NoteTarget

logger = structlog.get_logger(__name__)


class NoteCollection:
    """
    Lock-guarded note aggregate.

    Usage:
        collection = NoteCollection()
        await asyncio.gather(*(worker(t, collection) for t in targets))
        notes = collection.ordered()
    """

    def __init__(self):
        self._entries: list[tuple[tuple[int, int], Note]] = []
        self._lock = asyncio.Lock()

    async def add(self, note: Note, target: NoteTarget) -> None:
        """Store a completed note."""
        async with self._lock:
            self._entries.append((target.sort_key, note))

    def ordered(self) -> list[Note]:
        """Return notes sorted by listing page, then row."""
        return [note for _, note in sorted(self._entries, key=lambda e: e[0])]

    def __len__(self) -> int:
        return len(self._entries)
