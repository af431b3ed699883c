"""
Slug utilities for Poetry Prerender.

Two normalizers live here and they must never be swapped:
1. canonical_slug() - hyphen-joined, used for every URL we emit and as the
   matching target for book segments
2. match_key() - space-joined, used only for exact poem title lookup
"""

import re
import unicodedata

# Apostrophe variants dropped outright so "Karma's" becomes "karmas"
QUOTE_CHARS = "'‘’`"

_QUOTE_RE = re.compile(f"[{re.escape(QUOTE_CHARS)}]")
_NON_ALNUM_RE = re.compile(r'[^a-z0-9\s]')
_WHITESPACE_RE = re.compile(r'\s+')
_HYPHENS_RE = re.compile(r'-+')


def _fold(text: str) -> str:
    """Lowercase, strip diacritics and quotes, blank out other punctuation."""
    text = unicodedata.normalize('NFD', (text or '').lower())
    text = ''.join(ch for ch in text if not unicodedata.combining(ch))
    text = _QUOTE_RE.sub('', text)
    return _NON_ALNUM_RE.sub(' ', text)


def canonical_slug(text: str) -> str:
    """
    Convert a title into its canonical URL slug.

    Examples:
        >>> canonical_slug("Frith Hilton: Selected Works")
        'frith-hilton-selected-works'

        >>> canonical_slug("Karma’s Sequel")
        'karmas-sequel'
    """
    slug = _WHITESPACE_RE.sub('-', _fold(text))
    slug = _HYPHENS_RE.sub('-', slug)
    return slug.strip('-')


def match_key(text: str) -> str:
    """
    Convert a title into the space-joined phrase used for poem lookup.

    Examples:
        >>> match_key("Karma's Sequel")
        'karmas sequel'
    """
    return _WHITESPACE_RE.sub(' ', _fold(text)).strip()


def segment_to_match_key(segment: str) -> str:
    """Turn a poem URL segment back into a match key."""
    return match_key((segment or '').replace('-', ' '))


def clean_path(path: str) -> str:
    """Ensure a single leading slash and no repeated slashes."""
    if not path:
        return '/'
    return '/' + re.sub(r'/+', '/', path.lstrip('/'))
