"""Command-line interface for CineFlow."""

import argparse
import asyncio
import sys
from typing import Any, List, Optional, Sequence

from .config import get_settings
from .core.exceptions import CatalogError, ProfileValidationError
from .core.logging import get_logger, setup_logging
from .models.genre import Genre
from .models.movie import Movie
from .models.watched import MovieRating
from .services.chat_session import SUGGESTED_PROMPTS, ChatSession
from .services.home_feed import HomeFeedService
from .services.ledger import get_watched_ledger
from .services.ollama_client import OllamaClient
from .services.profile import get_user_profile
from .services.questionnaire import Questionnaire, option_info
from .services.similarity import SimilarityService
from .services.tmdb_client import TMDBClient

logger = get_logger(__name__)


def movie_line(index: int, movie: Movie) -> str:
    year = f" ({movie.year})" if movie.year else ""
    genres = f"  {movie.genre_text}" if movie.genres else ""
    return f"{index:>3}. {movie.title}{year}  ★ {movie.rating_formatted}{genres}"


def print_movies(movies: Sequence[Movie], limit: Optional[int] = None):
    for i, movie in enumerate(movies[:limit] if limit else movies, start=1):
        print(movie_line(i, movie))


def prompt(text: str) -> Optional[str]:
    """Read a line; None on EOF / Ctrl-C."""
    try:
        return input(text)
    except (EOFError, KeyboardInterrupt):
        print()
        return None


# =============================================================================
# COMMANDS
# =============================================================================

async def home_command(args) -> int:
    catalog = TMDBClient()
    profile = get_user_profile()
    feed = await HomeFeedService(catalog, is_configured=catalog.is_configured).load(profile.favorite_genres)
    
    if feed.needs_configuration:
        print("TMDB API key required. Set TMDB_API_KEY in your environment or .env file.")
        return 1
    if feed.is_error:
        print(f"Couldn't load movies: {feed.error}")
        print("Run the command again to retry.")
        return 1
    
    if profile.name:
        print(f"Hey, {profile.name}. What are we watching today?\n")
    for section in feed.visible_sections:
        print(section.title)
        print_movies(section.movies, limit=args.limit)
        print()
    return 0


def _choose(options: List[Any]) -> Optional[str]:
    for i, option in enumerate(options, start=1):
        info = option_info(option)
        subtitle = f" - {info.subtitle}" if info.subtitle else ""
        print(f"{i:>3}. {info.title}{subtitle}")
    print("  s. I'm not sure (skip)    b. back    r. start over    q. quit")
    return prompt("> ")


async def ask_command(args) -> int:
    questionnaire = Questionnaire(TMDBClient())
    
    while True:
        if questionnaire.is_finished:
            print(f"\n{questionnaire.prompt}")
            picks = ", ".join(info.title for info in questionnaire.summary())
            if picks:
                print(f"[{picks}]")
            print("Finding the perfect movies...")
            movies = await questionnaire.wait_for_results()
            if questionnaire.shows_empty_state:
                print("No movies found for this combination.")
                print("Try being less specific or go back to change some answers.")
            else:
                print_movies(movies)
            answer = prompt("\nb. back    r. start over    q. quit\n> ")
        else:
            print(f"\n{questionnaire.progress_label}: {questionnaire.prompt}")
            answer = _choose(questionnaire.options())
        
        if answer is None or answer.strip().lower() == "q":
            return 0
        answer = answer.strip().lower()
        if answer == "b":
            questionnaire.back()
        elif answer == "r":
            questionnaire.restart()
        elif not questionnaire.is_finished and answer == "s":
            questionnaire.skip()
        elif not questionnaire.is_finished and answer.isdigit():
            options = questionnaire.options()
            index = int(answer) - 1
            if 0 <= index < len(options):
                questionnaire.select(options[index])
            else:
                print("No such option.")
        else:
            print("Didn't get that.")


async def like_command(args) -> int:
    service = SimilarityService(TMDBClient())
    results = await service.search(args.title)
    if not results:
        print("No matches. Try at least two characters of a title.")
        return 1
    
    print("Select a movie to find similar ones")
    print_movies(results, limit=10)
    answer = prompt("> ")
    if not answer or not answer.strip().isdigit():
        return 0
    index = int(answer) - 1
    if not 0 <= index < min(len(results), 10):
        print("No such option.")
        return 1
    
    source = results[index]
    print(f"\nMovies similar to {source.title}  ★ {source.rating_formatted}")
    similar = await service.similar_for(source)
    if not similar:
        print("No similar movies found.")
    print_movies(similar)
    return 0


async def chat_command(args) -> int:
    session = ChatSession(OllamaClient())
    print("CineBot - your movie assistant. Ask me anything about movies (empty line or Ctrl-D to quit).")
    for suggestion in SUGGESTED_PROMPTS:
        print(f"  • {suggestion}")
    
    while True:
        text = prompt("\nyou> ")
        if text is None or not text.strip():
            return 0
        reply = await session.send(text)
        if reply is not None:
            print(f"cinebot> {reply.content}")


async def watched_command(args) -> int:
    ledger = get_watched_ledger()
    
    if args.watched_action == "rate":
        try:
            movie = await TMDBClient().fetch_movie_details(args.tmdb_id)
        except CatalogError as e:
            print(f"Couldn't load movie {args.tmdb_id}: {e.message}")
            return 1
        entry = ledger.upsert(movie, MovieRating(args.rating))
        print(f"{entry.title}: {entry.rating.label}")
        return 0
    
    if args.watched_action == "remove":
        if not ledger.remove(args.entry_id):
            print("Nothing to remove.")
        return 0
    
    if args.watched_action == "stats":
        print(f"Watched:    {ledger.total_count}")
        print(f"Loved:      {ledger.count_for(MovieRating.LOVED)}")
        print(f"Avg Rating: {ledger.average_rating_display()}")
        return 0
    
    rating = MovieRating(args.rating) if args.rating else None
    entries = ledger.filter(rating)
    if not entries:
        print("No movies logged yet." if rating is None else f"Nothing rated '{rating.label}'.")
    for entry in entries:
        year = f" ({entry.year})" if entry.year else ""
        print(f"{entry.id}  {entry.title}{year}  ★ {entry.rating_formatted}  {entry.rating.label}")
    return 0


async def profile_command(args) -> int:
    profile = get_user_profile()
    
    if args.profile_action == "reset":
        profile.reset()
        print("Profile reset.")
        return 0
    
    if args.profile_action == "setup":
        genres = [Genre.from_label(label.strip()) for label in args.genres.split(",")]
        unknown = [label for label, g in zip(args.genres.split(","), genres) if g is None]
        if unknown:
            print(f"Unknown genres: {', '.join(unknown)}")
            print(f"Choose from: {', '.join(g.label for g in Genre)}")
            return 1
        try:
            profile.complete_onboarding(args.name, args.age, genres)
        except ProfileValidationError as e:
            print(e.message)
            return 1
        print(f"Welcome, {profile.name}!")
        return 0
    
    if not profile.has_completed_onboarding:
        print("No profile yet. Run: cineflow profile setup NAME AGE GENRE,GENRE")
        return 0
    print(f"Name:   {profile.name}")
    print(f"Age:    {profile.age}")
    print(f"Genres: {', '.join(g.label for g in profile.favorite_genres)}")
    return 0


# =============================================================================
# ENTRY POINT
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cineflow", description="Discover what to watch next.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logs")
    subparsers = parser.add_subparsers(dest="command", required=True)
    
    home = subparsers.add_parser("home", help="Show the home feed")
    home.add_argument("--limit", type=int, default=10, help="Movies per row")
    home.set_defaults(handler=home_command)
    
    ask = subparsers.add_parser("ask", help="Answer a few questions, get picks")
    ask.set_defaults(handler=ask_command)
    
    like = subparsers.add_parser("like", help="Find movies like a title")
    like.add_argument("title")
    like.set_defaults(handler=like_command)
    
    chat = subparsers.add_parser("chat", help="Talk to CineBot")
    chat.set_defaults(handler=chat_command)
    
    ratings = [r.value for r in MovieRating]
    watched = subparsers.add_parser("watched", help="Your watched movies")
    watched_actions = watched.add_subparsers(dest="watched_action")
    watched.set_defaults(handler=watched_command, watched_action="list", rating=None)
    watched_list = watched_actions.add_parser("list")
    watched_list.add_argument("--rating", choices=ratings)
    watched_rate = watched_actions.add_parser("rate")
    watched_rate.add_argument("tmdb_id", type=int)
    watched_rate.add_argument("rating", choices=ratings)
    watched_remove = watched_actions.add_parser("remove")
    watched_remove.add_argument("entry_id")
    watched_actions.add_parser("stats")
    
    profile = subparsers.add_parser("profile", help="Your profile")
    profile_actions = profile.add_subparsers(dest="profile_action")
    profile.set_defaults(handler=profile_command, profile_action="show")
    profile_actions.add_parser("show")
    setup = profile_actions.add_parser("setup")
    setup.add_argument("name")
    setup.add_argument("age", type=int)
    setup.add_argument("genres", help="Comma-separated, at least two (e.g. Action,Sci-Fi)")
    profile_actions.add_parser("reset")
    
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "WARNING")
    logger.debug("cli_command", command=args.command, environment=get_settings().environment)
    return asyncio.run(args.handler(args))


if __name__ == "__main__":
    sys.exit(main())
