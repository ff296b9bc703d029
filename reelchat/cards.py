"""
ReelChat — Card presenter

Turns MovieRecords into display cards: fallback labels, a stable
"match" score and poster gradient derived from the title, the first three
genres and a web-search link.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple
from urllib.parse import quote

from reelchat.models import MovieCard, MovieRecord

UNKNOWN_TITLE = "Unknown Title"
NOT_AVAILABLE = "N/A"
MAX_GENRES = 3

SEARCH_URL = "https://www.google.com/search?q="

# (from, to) colour stops for the poster placeholder
GRADIENTS: Tuple[Tuple[str, str], ...] = (
    ("#a855f7", "#312e81"),  # purple → indigo
    ("#3b82f6", "#0f172a"),  # blue → slate
    ("#10b981", "#134e4a"),  # emerald → teal
    ("#f43f5e", "#831843"),  # rose → pink
    ("#f59e0b", "#7c2d12"),  # amber → orange
    ("#06b6d4", "#1e3a8a"),  # cyan → blue
)

# characters encodeURIComponent leaves alone
_URI_SAFE = "-_.!~*'()"


def display_title(movie: MovieRecord) -> str:
    return movie.title or UNKNOWN_TITLE


def display_year(movie: MovieRecord) -> str:
    year = movie.release_year
    if year is None or year == "" or year == 0:
        return NOT_AVAILABLE
    return str(year)


def match_score(title: str) -> int:
    """Cosmetic score in [80, 94], stable for a given title."""
    return 80 + len(title) % 15


def pick_gradient(title: str) -> Tuple[str, str]:
    return GRADIENTS[sum(ord(ch) for ch in title) % len(GRADIENTS)]


def search_url(movie: MovieRecord) -> str:
    """Google search link for '<title> <year> movie'."""
    terms = f"{display_title(movie)} {display_year(movie)} movie"
    return SEARCH_URL + quote(terms, safe=_URI_SAFE)


def build_card(movie: MovieRecord) -> MovieCard:
    title = display_title(movie)
    return MovieCard(
        title=title,
        year=display_year(movie),
        country=movie.country or NOT_AVAILABLE,
        description=movie.description or None,
        genres=movie.genres[:MAX_GENRES],
        source=movie.source or None,
        match_score=match_score(title),
        gradient=pick_gradient(title),
        search_url=search_url(movie),
    )


def build_cards(movies: Sequence[MovieRecord]) -> List[MovieCard]:
    return [build_card(m) for m in movies]
