"""
Tests for the Command-Line Interface
"""

import pytest
from structlog.testing import capture_logs

from cineflow import cli
from cineflow.cli import (
    build_parser,
    home_command,
    movie_line,
    profile_command,
    main,
    watched_command,
)
from cineflow.core.exceptions import CatalogHTTPError
from cineflow.services.ledger import WatchedLedger
from cineflow.services.local_store import LocalStore
from cineflow.services.profile import UserProfile


@pytest.fixture
def parser():
    return build_parser()


class TestParser:
    
    def test_watched_defaults_to_list(self, parser):
        args = parser.parse_args(["watched"])
        assert args.handler is watched_command
        assert args.watched_action == "list"
        assert args.rating is None
    
    def test_watched_rate(self, parser):
        args = parser.parse_args(["watched", "rate", "550", "loved"])
        assert args.watched_action == "rate"
        assert args.tmdb_id == 550
        assert args.rating == "loved"
    
    def test_rejects_unknown_rating(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args(["watched", "rate", "550", "meh"])
    
    def test_profile_defaults_to_show(self, parser):
        args = parser.parse_args(["profile"])
        assert args.handler is profile_command
        assert args.profile_action == "show"
    
    def test_profile_setup(self, parser):
        args = parser.parse_args(["profile", "setup", "Robin", "29", "Action,Sci-Fi"])
        assert (args.name, args.age, args.genres) == ("Robin", 29, "Action,Sci-Fi")
    
    def test_home_limit(self, parser):
        args = parser.parse_args(["-v", "home", "--limit", "5"])
        assert args.verbose
        assert args.handler is home_command
        assert args.limit == 5
    
    def test_command_required(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args([])


def test_movie_line(make_movie):
    movie = make_movie("Alien", year=1979, rating=8.1, genres=[])
    assert movie_line(1, movie) == "  1. Alien (1979)  ★ 8.1"


# =============================================================================
# COMMANDS (through main)
# =============================================================================

@pytest.fixture
def log_levels(monkeypatch):
    """Levels main() asked for; global logging config is left alone."""
    levels = []
    monkeypatch.setattr(cli, "setup_logging", levels.append)
    return levels


@pytest.fixture
def cli_logs():
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def cli_env(monkeypatch, store, mock_catalog, log_levels, cli_logs):
    """Point the CLI at a temp store and a mocked catalog."""
    mock_catalog.is_configured = True
    monkeypatch.setattr(cli, "TMDBClient", lambda: mock_catalog)
    monkeypatch.setattr(cli, "get_watched_ledger", lambda: WatchedLedger(store))
    monkeypatch.setattr(cli, "get_user_profile", lambda: UserProfile(store))
    return mock_catalog


def script_prompts(monkeypatch, *answers):
    replies = iter(answers)
    monkeypatch.setattr(cli, "prompt", lambda text: next(replies))


class TestWatchedCommand:
    
    def test_rate_then_stats(self, cli_env, store, make_movie, capsys):
        cli_env.fetch_movie_details.return_value = make_movie("Alien", tmdb_id=348, year=1979, rating=8.1)
        
        assert main(["watched", "rate", "348", "loved"]) == 0
        assert "Alien: Loved It" in capsys.readouterr().out
        cli_env.fetch_movie_details.assert_awaited_once_with(348)
        
        assert main(["watched", "stats"]) == 0
        out = capsys.readouterr().out
        assert "Watched:    1" in out
        assert "Loved:      1" in out
        assert "Avg Rating: 8.1" in out
        
        assert WatchedLedger(LocalStore(store.path)).total_count == 1
    
    def test_rating_twice_keeps_one_entry(self, cli_env, make_movie, capsys):
        cli_env.fetch_movie_details.return_value = make_movie("Alien", tmdb_id=348, year=1979)
        main(["watched", "rate", "348", "liked"])
        main(["watched", "rate", "348", "disliked"])
        capsys.readouterr()
        
        assert main(["watched"]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 1
        assert "Alien (1979)" in lines[0]
        assert "Didn't Like It" in lines[0]
    
    def test_rate_catalog_failure(self, cli_env, store, capsys):
        cli_env.fetch_movie_details.side_effect = CatalogHTTPError(404)
        
        assert main(["watched", "rate", "1", "liked"]) == 1
        assert "HTTP error: 404" in capsys.readouterr().out
        assert WatchedLedger(store).total_count == 0
    
    def test_empty_stats_show_placeholder(self, cli_env, capsys):
        assert main(["watched", "stats"]) == 0
        assert "Avg Rating: —" in capsys.readouterr().out
    
    def test_remove_unknown_entry(self, cli_env, capsys):
        assert main(["watched", "remove", "nope"]) == 0
        assert "Nothing to remove." in capsys.readouterr().out


class TestProfileCommand:
    
    def test_setup_then_show(self, cli_env, capsys):
        assert main(["profile", "setup", "Robin", "29", "Action, Sci-Fi"]) == 0
        assert "Welcome, Robin!" in capsys.readouterr().out
        
        assert main(["profile"]) == 0
        out = capsys.readouterr().out
        assert "Name:   Robin" in out
        assert "Genres: Action, Sci-Fi" in out
    
    def test_unknown_genre_rejected(self, cli_env, store, capsys):
        assert main(["profile", "setup", "Robin", "29", "Action,Western"]) == 1
        assert "Unknown genres: Western" in capsys.readouterr().out
        assert not UserProfile(store).has_completed_onboarding
    
    def test_validation_error_reported(self, cli_env, capsys):
        assert main(["profile", "setup", "Robin", "29", "Action"]) == 1
        assert "Pick at least 2 genres" in capsys.readouterr().out


class TestInteractiveCommands:
    
    def test_ask_skips_to_trending_results(self, cli_env, make_movie, monkeypatch, capsys):
        cli_env.fetch_trending.return_value = [make_movie("Dune", year=2021)]
        script_prompts(monkeypatch, "s", "s", "s", "s", "s", "s", "q")
        
        assert main(["ask"]) == 0
        
        out = capsys.readouterr().out
        assert "Step 1 of 6: What genre are you feeling?" in out
        assert "Dune (2021)" in out
        cli_env.fetch_trending.assert_awaited_once()
    
    def test_ask_empty_results(self, cli_env, monkeypatch, capsys):
        script_prompts(monkeypatch, "1", "s", "s", "s", "s", "s", None)
        
        assert main(["ask"]) == 0
        
        assert "No movies found for this combination." in capsys.readouterr().out
        cli_env.discover_by_genres.assert_awaited_once()
    
    def test_home_without_api_key(self, cli_env, capsys):
        cli_env.is_configured = False
        
        assert main(["home"]) == 1
        assert "TMDB API key required" in capsys.readouterr().out
        cli_env.fetch_trending.assert_not_awaited()


class TestLogging:
    
    def test_quiet_by_default_debug_with_verbose(self, cli_env, log_levels, capsys):
        main(["watched", "stats"])
        main(["-v", "watched", "stats"])
        
        assert log_levels == ["WARNING", "DEBUG"]
    
    def test_rating_is_logged(self, cli_env, cli_logs, make_movie, capsys):
        cli_env.fetch_movie_details.return_value = make_movie("Alien", tmdb_id=348)
        
        main(["watched", "rate", "348", "liked"])
        
        added = [e for e in cli_logs if e["event"] == "ledger_entry_added"]
        assert added == [{"event": "ledger_entry_added", "log_level": "info", "title": "Alien", "rating": "liked"}]
