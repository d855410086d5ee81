"""Services: catalog access, recommendation flow, local state and chat."""

from .catalog import CatalogClient
from .tmdb_client import TMDBClient
from .query_builder import build_query
from .questionnaire import Questionnaire, Step, fetch_recommendations
from .similarity import SimilarityService
from .local_store import LocalStore, get_local_store
from .ledger import WatchedLedger, get_watched_ledger
from .profile import UserProfile, get_user_profile
from .ollama_client import OllamaClient
from .chat_session import ChatSession
from .home_feed import HomeFeedService

__all__ = [
    "CatalogClient",
    "TMDBClient",
    "build_query",
    "Questionnaire",
    "Step",
    "fetch_recommendations",
    "SimilarityService",
    "LocalStore",
    "get_local_store",
    "WatchedLedger",
    "get_watched_ledger",
    "UserProfile",
    "get_user_profile",
    "OllamaClient",
    "ChatSession",
    "HomeFeedService",
]
