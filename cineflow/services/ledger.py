"""
Watched Movie Ledger

On-device log of watched movies and the user's reaction to each.

Rules:
- One entry per movie identity (TMDB id, else title + year).
- Rating an already-watched movie updates that entry in place: new rating,
  fresh timestamp, same position. New entries go to the front.
- Every mutation persists the full snapshot before returning.
"""

import threading
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from pydantic import TypeAdapter, ValidationError

from ..core.logging import get_logger
from ..models.movie import Movie
from ..models.watched import MovieRating, WatchedEntry
from .local_store import LocalStore, get_local_store

logger = get_logger(__name__)

STORAGE_KEY = "cineflow_watched_movies"
NO_DATA = "—"

_entries_adapter = TypeAdapter(List[WatchedEntry])


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WatchedLedger:
    """
    Persisted list of WatchedEntry, newest first.
    
    Mutations are serialized with a lock so the one-entry-per-identity rule
    holds even if callers use background threads.
    """
    
    def __init__(
        self,
        store: LocalStore,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.store = store
        self.clock = clock
        self._lock = threading.RLock()
        self._observers: List[Callable[["WatchedLedger"], None]] = []
        self._entries: List[WatchedEntry] = self._load()
    
    # =========================================================================
    # PERSISTENCE
    # =========================================================================
    
    def _load(self) -> List[WatchedEntry]:
        raw = self.store.get(STORAGE_KEY)
        if raw is None:
            return []
        try:
            entries = _entries_adapter.validate_python(raw)
        except ValidationError as e:
            logger.warning("ledger_load_failed", error=str(e))
            return []
        logger.debug("ledger_loaded", count=len(entries))
        return entries
    
    def _save(self):
        snapshot = _entries_adapter.dump_python(self._entries, mode="json")
        try:
            self.store.set(STORAGE_KEY, snapshot)
        except OSError as e:
            # In-memory state stays authoritative for this session
            logger.error("ledger_save_failed", error=str(e))
            return
        logger.debug("ledger_saved", count=len(self._entries))
    
    # =========================================================================
    # OBSERVATION
    # =========================================================================
    
    def subscribe(self, callback: Callable[["WatchedLedger"], None]) -> Callable[[], None]:
        """Register a change callback; returns an unsubscribe function."""
        self._observers.append(callback)
        return lambda: self._observers.remove(callback)
    
    def _notify(self):
        for callback in list(self._observers):
            callback(self)
    
    # =========================================================================
    # MUTATIONS
    # =========================================================================
    
    def upsert(self, movie: Movie, rating: MovieRating) -> WatchedEntry:
        """Record (or re-record) that `movie` was watched with `rating`."""
        with self._lock:
            index = self._index_of(movie)
            if index is not None:
                entry = self._entries[index].model_copy(
                    update={"rating": rating, "watched_at": self.clock()}
                )
                self._entries[index] = entry
                logger.info("ledger_entry_updated", title=entry.title, rating=rating.value)
            else:
                entry = WatchedEntry.from_movie(movie, rating, self.clock())
                self._entries.insert(0, entry)
                logger.info("ledger_entry_added", title=entry.title, rating=rating.value)
            self._save()
        self._notify()
        return entry
    
    def remove(self, entry_id: str) -> bool:
        """Delete by entry id. Unknown ids are a no-op; returns whether anything was removed."""
        with self._lock:
            remaining = [e for e in self._entries if e.id != entry_id]
            if len(remaining) == len(self._entries):
                return False
            self._entries = remaining
            self._save()
        logger.info("ledger_entry_removed", entry_id=entry_id)
        self._notify()
        return True
    
    # =========================================================================
    # LOOKUPS
    # =========================================================================
    
    @property
    def entries(self) -> Tuple[WatchedEntry, ...]:
        with self._lock:
            return tuple(self._entries)
    
    def _index_of(self, movie: Movie) -> Optional[int]:
        for i, entry in enumerate(self._entries):
            if entry.matches(movie):
                return i
        return None
    
    def is_watched(self, movie: Movie) -> bool:
        return self.rating_for(movie) is not None
    
    def rating_for(self, movie: Movie) -> Optional[MovieRating]:
        with self._lock:
            index = self._index_of(movie)
            return self._entries[index].rating if index is not None else None
    
    def filter(self, rating: Optional[MovieRating] = None) -> List[WatchedEntry]:
        """Entries with the given rating, or all of them."""
        with self._lock:
            if rating is None:
                return list(self._entries)
            return [e for e in self._entries if e.rating is rating]
    
    # =========================================================================
    # STATS
    # =========================================================================
    
    @property
    def total_count(self) -> int:
        return len(self._entries)
    
    def count_for(self, rating: MovieRating) -> int:
        return len(self.filter(rating))
    
    def average_rating(self) -> Optional[float]:
        """Mean catalog rating of watched movies; None when nothing is logged."""
        with self._lock:
            if not self._entries:
                return None
            return sum(e.source_rating for e in self._entries) / len(self._entries)
    
    def average_rating_display(self) -> str:
        average = self.average_rating()
        return NO_DATA if average is None else f"{average:.1f}"


# Singleton
_watched_ledger: Optional[WatchedLedger] = None


def get_watched_ledger() -> WatchedLedger:
    """Get singleton WatchedLedger instance."""
    global _watched_ledger
    if _watched_ledger is None:
        _watched_ledger = WatchedLedger(get_local_store())
    return _watched_ledger
