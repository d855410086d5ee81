"""
"What to Watch" Questionnaire

Six optional questions narrow down a single catalog query:

    GENRE -> SUBGENRE -> COMPANY -> ERA -> RATING -> VIBE -> RESULTS

Each answer (or skip) advances one step. Going back clears the step you
land on and every later step, so an answer never outlives the context it
was given in. Entering RESULTS builds the query and starts the fetch in
the background; the state moves immediately and the results fill in when
the fetch resolves.
"""

import asyncio
from enum import IntEnum
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..core.exceptions import CatalogError
from ..core.logging import get_logger
from ..models.genre import Genre
from ..models.movie import Movie
from ..models.options import (
    COMPANY_OPTIONS,
    ERA_OPTIONS,
    RATING_OPTIONS,
    VIBE_OPTIONS,
    Company,
    Era,
    OptionInfo,
    RatingOption,
    SubgenreOption,
    Vibe,
    subgenre_options,
)
from ..models.query import FilterSelection, QueryDescriptor
from .catalog import CatalogClient
from .query_builder import build_query

logger = get_logger(__name__)

RESULTS_LIMIT = 10


class Step(IntEnum):
    GENRE = 0
    SUBGENRE = 1
    COMPANY = 2
    ERA = 3
    RATING = 4
    VIBE = 5
    RESULTS = 6


QUESTION_STEPS = tuple(s for s in Step if s is not Step.RESULTS)

# FilterSelection field owned by each question step
STEP_FIELDS: Dict[Step, str] = {
    Step.GENRE: "genre",
    Step.SUBGENRE: "subgenre",
    Step.COMPANY: "company",
    Step.ERA: "era",
    Step.RATING: "rating",
    Step.VIBE: "vibe",
}


def option_info(option: Any) -> OptionInfo:
    """Display metadata (title/subtitle/icon) for any questionnaire option."""
    if isinstance(option, SubgenreOption):
        return option
    if isinstance(option, Genre):
        return OptionInfo(title=option.label, subtitle="", icon=option.icon)
    return option.info


async def fetch_recommendations(
    catalog: CatalogClient,
    descriptor: QueryDescriptor,
    limit: int = RESULTS_LIMIT,
) -> List[Movie]:
    """
    Execute a descriptor: trending when it has no genres, else discover.
    
    Raises CatalogError; callers decide how to present it.
    """
    if descriptor.is_trending_fallback:
        movies = await catalog.fetch_trending()
    else:
        movies = await catalog.discover_by_genres(
            list(descriptor.genre_ids),
            sort_by=descriptor.sort_by,
            extra_params=descriptor.extra_params(),
            page=1,
        )
    return movies[:limit]


class Questionnaire:
    """
    State machine for the guided recommendation flow.
    
    Not thread-safe: drive it from the event loop that owns the UI state.
    Transitions into RESULTS must happen inside that running loop.
    """
    
    def __init__(self, catalog: CatalogClient):
        self.catalog = catalog
        self.step = Step.GENRE
        self.selection = FilterSelection()
        self.results: List[Movie] = []
        self.is_loading = False
        self.last_query: Optional[QueryDescriptor] = None
        self._fetch_task: Optional["asyncio.Task[None]"] = None
        self._generation = 0
        self._observers: List[Callable[["Questionnaire"], None]] = []
    
    # =========================================================================
    # OBSERVATION
    # =========================================================================
    
    def subscribe(self, callback: Callable[["Questionnaire"], None]) -> Callable[[], None]:
        """Register a change callback; returns an unsubscribe function."""
        self._observers.append(callback)
        return lambda: self._observers.remove(callback)
    
    def _notify(self):
        for callback in list(self._observers):
            callback(self)
    
    # =========================================================================
    # QUERIES
    # =========================================================================
    
    @property
    def is_finished(self) -> bool:
        return self.step is Step.RESULTS
    
    @property
    def shows_empty_state(self) -> bool:
        """Results step reached, fetch done, nothing to show."""
        return self.is_finished and not self.is_loading and not self.results
    
    def options(self) -> List[Any]:
        """Options offered at the current step (empty on RESULTS)."""
        if self.step is Step.GENRE:
            return list(Genre)
        if self.step is Step.SUBGENRE:
            return subgenre_options(self.selection.genre)
        if self.step is Step.COMPANY:
            return list(COMPANY_OPTIONS)
        if self.step is Step.ERA:
            return list(ERA_OPTIONS)
        if self.step is Step.RATING:
            return list(RATING_OPTIONS)
        if self.step is Step.VIBE:
            return list(VIBE_OPTIONS)
        return []
    
    @property
    def prompt(self) -> str:
        if self.step is Step.SUBGENRE:
            if self.selection.genre is not None:
                return f"What style of {self.selection.genre.label}?"
            return "What's the mood tonight?"
        return _PROMPTS[self.step]
    
    @property
    def progress_label(self) -> str:
        total = len(QUESTION_STEPS)
        return f"Step {min(self.step + 1, total)} of {total}"
    
    def summary(self) -> List[OptionInfo]:
        """Display info for every answered step, in step order."""
        answers = (getattr(self.selection, STEP_FIELDS[s]) for s in QUESTION_STEPS)
        return [option_info(a) for a in answers if a is not None]
    
    # =========================================================================
    # TRANSITIONS
    # =========================================================================
    
    def select(self, option: Any):
        """Record an answer for the current step and advance."""
        if self.is_finished:
            raise ValueError("questionnaire already finished; restart or go back")
        if option not in self.options():
            raise ValueError(f"{option!r} is not an option for step {self.step.name}")
        self._answer(option)
    
    def skip(self):
        """Answer "I'm not sure": leave the current step empty and advance."""
        if self.is_finished:
            raise ValueError("questionnaire already finished; restart or go back")
        self._answer(None)
    
    def back(self):
        """
        Step back one question.
        
        Clears the answer of the step we land on and of every step after it,
        and drops any results or in-flight fetch.
        """
        if self.step is Step.GENRE:
            return
        self.step = Step(self.step - 1)
        self._clear_from(self.step)
        self._discard_results()
        self._notify()
    
    def restart(self):
        """Back to the first question with nothing selected."""
        self.step = Step.GENRE
        self._clear_from(Step.GENRE)
        self._discard_results()
        self._notify()
    
    async def wait_for_results(self) -> List[Movie]:
        """Await the in-flight fetch, if any, and return the current results."""
        task = self._fetch_task
        if task is not None:
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
        return list(self.results)
    
    # =========================================================================
    # INTERNALS
    # =========================================================================
    
    def _answer(self, value: Any):
        next_step = Step(self.step + 1)
        # Raises RuntimeError outside a running loop, before any state changes
        loop = asyncio.get_running_loop() if next_step is Step.RESULTS else None
        setattr(self.selection, STEP_FIELDS[self.step], value)
        self.step = next_step
        if loop is not None:
            self._start_fetch(loop)
        self._notify()
    
    def _clear_from(self, step: Step):
        for later in QUESTION_STEPS[step:]:
            setattr(self.selection, STEP_FIELDS[later], None)
    
    def _discard_results(self):
        self._generation += 1
        if self._fetch_task is not None and not self._fetch_task.done():
            self._fetch_task.cancel()
        self._fetch_task = None
        self.results = []
        self.is_loading = False
        self.last_query = None
    
    def _start_fetch(self, loop: asyncio.AbstractEventLoop):
        descriptor = build_query(self.selection)
        self.last_query = descriptor
        self.results = []
        self.is_loading = True
        self._generation += 1
        self._fetch_task = loop.create_task(self._load_results(descriptor, self._generation))
        logger.info(
            "questionnaire_fetch_started",
            genre_ids=list(descriptor.genre_ids),
            trending=descriptor.is_trending_fallback,
        )
    
    async def _load_results(self, descriptor: QueryDescriptor, generation: int):
        try:
            movies = await fetch_recommendations(self.catalog, descriptor)
        except CatalogError as e:
            logger.warning("questionnaire_fetch_failed", error=e.message)
            movies = []
        except Exception as e:
            logger.error("questionnaire_fetch_crashed", error=str(e), kind=type(e).__name__)
            movies = []
        
        # A back/restart since the fetch started makes these results stale
        if generation != self._generation:
            return
        self.results = movies
        self.is_loading = False
        logger.info("questionnaire_fetch_complete", count=len(movies))
        self._notify()


_PROMPTS: Dict[Step, str] = {
    Step.GENRE: "What genre are you feeling?",
    Step.COMPANY: "Who are you watching with?",
    Step.ERA: "Classic or modern?",
    Step.RATING: "How picky are you about ratings?",
    Step.VIBE: "One last thing...",
    Step.RESULTS: "Here's what we picked for you",
}
