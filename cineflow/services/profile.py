"""
User Profile

Onboarding answers kept in the local key/value store as plain scalars.
"""

from typing import Callable, List, Optional, Sequence

from ..core.exceptions import ProfileValidationError
from ..core.logging import get_logger
from ..models.genre import Genre
from .local_store import LocalStore, get_local_store

logger = get_logger(__name__)

KEY_NAME = "userName"
KEY_AGE = "userAge"
KEY_ONBOARDED = "hasCompletedOnboarding"
KEY_FAVORITE_GENRES = "favoriteGenresRaw"

MIN_FAVORITE_GENRES = 2


class UserProfile:
    """
    Name, age, favorite genres and the onboarding flag.
    
    Favorite genres are stored as comma-joined labels; unknown labels are
    dropped on read.
    """
    
    def __init__(self, store: LocalStore):
        self.store = store
        self._observers: List[Callable[["UserProfile"], None]] = []
    
    def subscribe(self, callback: Callable[["UserProfile"], None]) -> Callable[[], None]:
        """Register a change callback; returns an unsubscribe function."""
        self._observers.append(callback)
        return lambda: self._observers.remove(callback)
    
    def _notify(self):
        for callback in list(self._observers):
            callback(self)
    
    @property
    def name(self) -> str:
        value = self.store.get(KEY_NAME, "")
        return value if isinstance(value, str) else ""
    
    @property
    def age(self) -> int:
        value = self.store.get(KEY_AGE, 0)
        return value if isinstance(value, int) else 0
    
    @property
    def has_completed_onboarding(self) -> bool:
        return self.store.get(KEY_ONBOARDED, False) is True
    
    @property
    def favorite_genres(self) -> List[Genre]:
        raw = self.store.get(KEY_FAVORITE_GENRES, "")
        if not isinstance(raw, str) or not raw:
            return []
        genres = (Genre.from_label(label) for label in raw.split(","))
        return [g for g in genres if g is not None]
    
    def complete_onboarding(self, name: str, age: int, genres: Sequence[Genre]):
        name = name.strip()
        if not name:
            raise ProfileValidationError("name", "Name is required")
        if age <= 0:
            raise ProfileValidationError("age", "Age must be a positive number")
        if len(set(genres)) < MIN_FAVORITE_GENRES:
            raise ProfileValidationError("genres", f"Pick at least {MIN_FAVORITE_GENRES} genres")
        
        unique_genres = list(dict.fromkeys(genres))
        self.store.set(KEY_NAME, name)
        self.store.set(KEY_AGE, age)
        self.store.set(KEY_FAVORITE_GENRES, ",".join(g.label for g in unique_genres))
        self.store.set(KEY_ONBOARDED, True)
        logger.info("onboarding_completed", genres=[g.label for g in unique_genres])
        self._notify()
    
    def reset(self):
        self.store.set(KEY_NAME, "")
        self.store.set(KEY_AGE, 0)
        self.store.set(KEY_FAVORITE_GENRES, "")
        self.store.set(KEY_ONBOARDED, False)
        logger.info("profile_reset")
        self._notify()


# Singleton
_user_profile: Optional[UserProfile] = None


def get_user_profile() -> UserProfile:
    """Get singleton UserProfile instance."""
    global _user_profile
    if _user_profile is None:
        _user_profile = UserProfile(get_local_store())
    return _user_profile
