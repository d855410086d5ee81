"""
Questionnaire Option Tables

Every answer the "what to watch" flow can record, with the metadata and
query contributions attached to it. Options are data, not branching logic:
look up the table instead of switching on the enum.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict

from .genre import Genre


class OptionInfo(BaseModel):
    """Display metadata shared by every option."""
    title: str
    subtitle: str
    icon: str
    
    model_config = ConfigDict(frozen=True)


class SubgenreOption(OptionInfo):
    """
    A genre-specific subgenre or a fallback mood.
    
    `keywords` is a comma-separated list of TMDB keyword ids, empty when the
    option filters by genre only.
    """
    id: str
    extra_genre_ids: Tuple[int, ...] = ()
    keywords: str = ""


class CompanyInfo(OptionInfo):
    extra_genre_ids: Tuple[int, ...] = ()


class EraInfo(OptionInfo):
    min_date: Optional[str] = None
    max_date: Optional[str] = None


class RatingInfo(OptionInfo):
    min_rating: float
    min_votes: int


class VibeInfo(OptionInfo):
    sort_by: str


def _sub(id: str, title: str, subtitle: str, icon: str,
         extra_genre_ids: Tuple[int, ...] = (), keywords: str = "") -> SubgenreOption:
    return SubgenreOption(
        id=id, title=title, subtitle=subtitle, icon=icon,
        extra_genre_ids=extra_genre_ids, keywords=keywords,
    )


# =============================================================================
# Subgenres (step 2), keyed by the genre picked in step 1
# =============================================================================

SUBGENRE_OPTIONS: Dict[Genre, List[SubgenreOption]] = {
    Genre.ROMANCE: [
        _sub("rom_light", "Light & Sweet", "Warm, feel-good love stories", "sun.max.fill"),
        _sub("rom_comedy", "Romantic Comedy", "Funny, charming, and heartwarming", "face.smiling.fill", (35,)),
        _sub("rom_drama", "Dramatic Romance", "Deep, intense love stories", "theatermasks.fill", (18,)),
        _sub("rom_period", "Period Romance", "Historical love stories, costume dramas", "clock.arrow.circlepath", (36,)),
    ],
    Genre.HORROR: [
        _sub("hor_slasher", "Slasher", "Masked killers, survival horror", "scissors", keywords="186427"),
        _sub("hor_psych", "Psychological Horror", "Mind games, creeping dread", "brain.head.profile", (53,)),
        _sub("hor_found", "Found Footage", "Handheld cameras, raw terror", "video.fill", keywords="224636"),
        _sub("hor_body", "Body Horror", "Grotesque transformations", "figure.arms.open", keywords="190065"),
        _sub("hor_super", "Supernatural", "Ghosts, demons, the unknown", "moon.stars.fill", keywords="162846"),
    ],
    Genre.CRIME: [
        _sub("cri_police", "Police Procedural", "Detectives cracking cases", "shield.checkered"),
        _sub("cri_heist", "Heist", "Elaborate plans, big scores", "lock.open.fill", keywords="10068"),
        _sub("cri_gang", "Gangster / Mafia", "Organized crime, power plays", "person.3.fill", keywords="1696"),
        _sub("cri_true", "True Crime", "Based on real events", "doc.text.magnifyingglass", keywords="9672"),
    ],
    Genre.ACTION: [
        _sub("act_martial", "Martial Arts", "Hand-to-hand combat, choreographed fights", "figure.martial.arts", keywords="779"),
        _sub("act_military", "Military / War", "Battlefields, soldiers, strategy", "shield.fill", (10752,)),
        _sub("act_spy", "Spy / Espionage", "Secret agents, covert ops", "eye.trianglebadge.exclamationmark.fill", keywords="470"),
        _sub("act_super", "Superhero", "Powers, capes, saving the world", "bolt.shield.fill", keywords="9715"),
    ],
    Genre.COMEDY: [
        _sub("com_slap", "Slapstick", "Physical humor, over-the-top laughs", "hands.clap.fill"),
        _sub("com_dark", "Dark Comedy", "Twisted, edgy, morbid humor", "moon.fill", keywords="11800"),
        _sub("com_rom", "Romantic Comedy", "Love with laughs", "heart.fill", (10749,)),
        _sub("com_parody", "Parody / Satire", "Mocking genres, pop culture", "theatermask.and.paintbrush.fill", keywords="189098"),
    ],
    Genre.DRAMA: [
        _sub("dra_court", "Courtroom Drama", "Trials, lawyers, justice", "building.columns.fill", keywords="10087"),
        _sub("dra_bio", "Biographical", "Real people, true stories", "person.text.rectangle.fill", keywords="818"),
        _sub("dra_family", "Family Drama", "Relationships, dysfunction, bonds", "figure.2.and.child.holdinghands", keywords="155906"),
        _sub("dra_war", "War Drama", "Human cost of conflict", "flag.fill", (10752,)),
    ],
    Genre.SCI_FI: [
        _sub("sci_space", "Space Opera", "Epic adventures among the stars", "sparkles", keywords="3801"),
        _sub("sci_dys", "Dystopian", "Dark futures, broken societies", "building.2.fill", keywords="4458"),
        _sub("sci_time", "Time Travel", "Past and future collide", "clock.arrow.circlepath", keywords="4379"),
        _sub("sci_cyber", "Cyberpunk", "Neon cities, tech noir, hackers", "cpu.fill", keywords="12190"),
    ],
    Genre.THRILLER: [
        _sub("thr_psych", "Psychological Thriller", "Mind games, unreliable narrators", "brain.head.profile"),
        _sub("thr_polit", "Political Thriller", "Conspiracies, power struggles", "building.columns.fill", keywords="11162"),
        _sub("thr_crime", "Crime Thriller", "Cat-and-mouse, investigations", "magnifyingglass", (80,)),
        _sub("thr_surv", "Survival Thriller", "Against all odds, staying alive", "flame.fill", keywords="10349"),
    ],
    Genre.ANIMATION: [
        _sub("ani_family", "Family Animated", "Fun for kids and adults alike", "figure.2.and.child.holdinghands", (10751,)),
        _sub("ani_anime", "Anime-Style", "Japanese animation & storytelling", "sparkles", keywords="210024"),
        _sub("ani_adult", "Adult Animation", "Mature themes, not for kids", "person.fill"),
        _sub("ani_musical", "Animated Musical", "Songs, spectacle, heartfelt stories", "music.note", (10402,)),
    ],
    Genre.MYSTERY: [
        _sub("mys_who", "Whodunit", "Who did it? Classic detective puzzle", "magnifyingglass", keywords="187056"),
        _sub("mys_noir", "Noir", "Dark, moody, cynical atmosphere", "moon.fill", keywords="1937"),
        _sub("mys_consp", "Conspiracy", "Nothing is what it seems", "eye.slash.fill", (53,)),
        _sub("mys_detect", "Detective Story", "Following clues, solving crimes", "person.badge.shield.checkmark.fill", (80,)),
    ],
    Genre.ADVENTURE: [
        _sub("adv_treasure", "Treasure Hunt", "Ancient maps, lost artifacts", "map.fill", keywords="2428"),
        _sub("adv_explore", "Exploration", "Uncharted lands, discovery", "globe.americas.fill"),
        _sub("adv_surv", "Survival Adventure", "Stranded, fighting nature", "leaf.fill", keywords="10349"),
        _sub("adv_epic", "Epic Quest", "Grand journeys, destiny awaits", "mountain.2.fill", (14,)),
    ],
    Genre.FANTASY: [
        _sub("fan_high", "High Fantasy", "Vast worlds, magical systems, lore", "wand.and.stars"),
        _sub("fan_dark", "Dark Fantasy", "Grim, gothic, morally gray", "moon.stars.fill", keywords="235019"),
        _sub("fan_urban", "Urban Fantasy", "Magic in the modern world", "building.2.fill"),
        _sub("fan_fairy", "Fairy Tale / Myth", "Retellings, legends, folklore", "book.fill", keywords="2038"),
    ],
}

# Shown instead of subgenres when the genre step was skipped
FALLBACK_MOODS: List[SubgenreOption] = [
    _sub("mood_happy", "Feel-Good", "Uplifting, fun, leaves you smiling", "sun.max.fill", (35,)),
    _sub("mood_dark", "Dark & Intense", "Gritty, raw, emotionally heavy", "moon.fill", (80,)),
    _sub("mood_thrill", "Heart-Pounding", "Tense, suspenseful, on the edge", "bolt.fill", (28, 53)),
    _sub("mood_think", "Thought-Provoking", "Makes you think, layered story", "brain.head.profile", (18,)),
    _sub("mood_chill", "Chill & Easy", "Low-key, casual, easy watch", "cup.and.saucer.fill", (35, 10751)),
    _sub("mood_emo", "Emotional & Moving", "Touching, might make you cry", "heart.fill", (18, 10749)),
]


def subgenre_options(genre: Optional[Genre]) -> List[SubgenreOption]:
    """Options for step 2: the genre's subgenres, or the fallback moods."""
    if genre is None:
        return list(FALLBACK_MOODS)
    return list(SUBGENRE_OPTIONS[genre])


# =============================================================================
# Company (step 3)
# =============================================================================

class Company(str, Enum):
    SOLO = "solo"
    DATE = "date"
    FRIENDS = "friends"
    FAMILY = "family"
    
    @property
    def info(self) -> CompanyInfo:
        return COMPANY_OPTIONS[self]
    
    @property
    def extra_genre_ids(self) -> Tuple[int, ...]:
        return self.info.extra_genre_ids


COMPANY_OPTIONS: Dict[Company, CompanyInfo] = {
    Company.SOLO: CompanyInfo(title="Just Me", subtitle="Something personal and immersive", icon="person.fill"),
    Company.DATE: CompanyInfo(title="Date Night", subtitle="Romantic, engaging, not too heavy", icon="heart.circle.fill", extra_genre_ids=(10749,)),
    Company.FRIENDS: CompanyInfo(title="With Friends", subtitle="Fun, quotable, crowd-pleaser", icon="person.3.fill", extra_genre_ids=(35,)),
    Company.FAMILY: CompanyInfo(title="Family Movie Night", subtitle="Appropriate and enjoyable for all ages", icon="house.fill", extra_genre_ids=(10751, 16)),
}


# =============================================================================
# Era (step 4)
# =============================================================================

class Era(str, Enum):
    CLASSICS = "classics"
    NINETIES = "nineties"
    MODERN = "modern"
    RECENT = "recent"
    
    @property
    def info(self) -> EraInfo:
        return ERA_OPTIONS[self]
    
    @property
    def min_date(self) -> Optional[str]:
        return self.info.min_date
    
    @property
    def max_date(self) -> Optional[str]:
        return self.info.max_date


ERA_OPTIONS: Dict[Era, EraInfo] = {
    Era.CLASSICS: EraInfo(title="Classics", subtitle="Timeless films before 1990", icon="clock.arrow.circlepath", max_date="1989-12-31"),
    Era.NINETIES: EraInfo(title="90s & 2000s", subtitle="Nostalgic hits from 1990-2009", icon="play.rectangle.fill", min_date="1990-01-01", max_date="2009-12-31"),
    Era.MODERN: EraInfo(title="2010s", subtitle="Modern cinema 2010-2019", icon="film.stack.fill", min_date="2010-01-01", max_date="2019-12-31"),
    Era.RECENT: EraInfo(title="Recent", subtitle="Latest releases 2020+", icon="sparkles", min_date="2020-01-01"),
}


# =============================================================================
# Rating pickiness (step 5)
# =============================================================================

class RatingOption(str, Enum):
    MASTERPIECE = "masterpiece"
    GOOD = "good"
    ANYTHING = "anything"
    UNDERRATED = "underrated"
    
    @property
    def info(self) -> RatingInfo:
        return RATING_OPTIONS[self]
    
    @property
    def min_rating(self) -> float:
        return self.info.min_rating
    
    @property
    def min_votes(self) -> int:
        return self.info.min_votes


RATING_OPTIONS: Dict[RatingOption, RatingInfo] = {
    RatingOption.MASTERPIECE: RatingInfo(title="Only the Best", subtitle="8.0+ rating, critically acclaimed", icon="crown.fill", min_rating=8.0, min_votes=500),
    RatingOption.GOOD: RatingInfo(title="Well-Rated", subtitle="6.5+ rating, solid movies", icon="hand.thumbsup.fill", min_rating=6.5, min_votes=200),
    RatingOption.ANYTHING: RatingInfo(title="I'll Try Anything", subtitle="Any rating, just entertain me", icon="dice.fill", min_rating=0.0, min_votes=20),
    RatingOption.UNDERRATED: RatingInfo(title="Underrated Picks", subtitle="Low vote count, hidden potential", icon="eye.slash.fill", min_rating=6.0, min_votes=10),
}


# =============================================================================
# Vibe / sort order (step 6)
# =============================================================================

class Vibe(str, Enum):
    POPULAR = "popular"
    RATED = "rated"
    HIDDEN = "hidden"
    BLOCKBUSTER = "blockbuster"
    
    @property
    def info(self) -> VibeInfo:
        return VIBE_OPTIONS[self]
    
    @property
    def sort_by(self) -> str:
        return self.info.sort_by


VIBE_OPTIONS: Dict[Vibe, VibeInfo] = {
    Vibe.POPULAR: VibeInfo(title="Crowd Favorites", subtitle="Most popular with audiences", icon="person.3.fill", sort_by="popularity.desc"),
    Vibe.RATED: VibeInfo(title="Critically Acclaimed", subtitle="Highest ratings from critics", icon="star.fill", sort_by="vote_average.desc"),
    Vibe.HIDDEN: VibeInfo(title="Hidden Gems", subtitle="Under-the-radar picks", icon="eye.slash.fill", sort_by="vote_average.desc"),
    Vibe.BLOCKBUSTER: VibeInfo(title="Box Office Hits", subtitle="Big budget spectacles", icon="ticket.fill", sort_by="revenue.desc"),
}
