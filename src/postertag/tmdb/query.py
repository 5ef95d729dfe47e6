"""Search query guessing from movie file names."""

from __future__ import annotations

import re
from pathlib import Path

# Title followed by a separator and a four digit year, e.g.
# "The.Matrix.1999.1080p.mkv" or "Alien (1979).mp4"
_MOVIE_NAME_RE = re.compile(r"([ .\w']+?)(\W\d{4}\W?.*)")


def guess_search_query(path: str | Path) -> str:
    """Guess a TMDB search query from a movie file name.

    The part of the name before the year has its dots replaced by spaces and
    each word capitalized. Names without a year yield the file stem.

    >>> guess_search_query("/movies/the.matrix.1999.1080p.mkv")
    'The Matrix'
    >>> guess_search_query("home video.mp4")
    'home video'
    """
    p = Path(path)
    match = _MOVIE_NAME_RE.search(p.name)
    if match is None:
        return p.stem

    words = match.group(1).replace(".", " ").split()
    return " ".join(word[0].upper() + word[1:] for word in words) or p.stem
