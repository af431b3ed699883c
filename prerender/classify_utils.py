"""
Request classification for Poetry Prerender.

Decides whether a request deserves a server-rendered page:
- the caller must look like a known crawler (user-agent match)
- the path must live under /poetry/
Anything else goes straight to the origin.
"""

import re
from typing import Optional, Tuple

from .slug_utils import clean_path

# Search engines first, then social link-preview fetchers
BOT_PATTERNS = [
    'Googlebot',
    'Google-InspectionTool',
    'Bingbot',
    'Slurp',
    'DuckDuckBot',
    'Baiduspider',
    'YandexBot',
    'facebookexternalhit',
    'Twitterbot',
    'LinkedInBot',
    'Applebot',
    'Slackbot',
    'Discordbot',
    'WhatsApp',
    'Pinterestbot',
    'TelegramBot',
]

BOT_RE = re.compile('|'.join(re.escape(p) for p in BOT_PATTERNS), re.I)
POETRY_PATH_RE = re.compile(r'^/poetry/(.+)$')


def is_bot(user_agent: str) -> bool:
    """Check if the user agent belongs to a known crawler."""
    if not user_agent:
        return False
    return BOT_RE.search(user_agent) is not None


def parse_poetry_path(path: str) -> Optional[Tuple[str, Optional[str]]]:
    """
    Split a /poetry/ path into (book_segment, poem_segment).

    Only the first two segments are consulted; deeper segments are dropped.

    Returns:
        None when the path is not a poetry route, otherwise a tuple whose
        poem segment is None for book index requests.

    Examples:
        >>> parse_poetry_path("/poetry/Selected-Works/Karmas-Sequel")
        ('selected-works', 'karmas-sequel')

        >>> parse_poetry_path("/about") is None
        True
    """
    match = POETRY_PATH_RE.match(clean_path(path))
    if not match:
        return None

    parts = match.group(1).split('/')
    book_segment = parts[0].lower()
    if not book_segment:
        return None

    poem_segment = parts[1].lower() if len(parts) > 1 and parts[1] else None
    return (book_segment, poem_segment)
