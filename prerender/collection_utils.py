"""
Collection and poem lookup for Poetry Prerender.

Every request re-fetches the collection JSON; nothing is cached between
invocations. Lookup failures never raise to the caller: a collection that
cannot be fetched is skipped, and a book or poem that cannot be found comes
back as None so the handler can fall through to the origin.
"""

from typing import Optional, Tuple

import requests

from .config_utils import PrerenderConfig
from .slug_utils import canonical_slug, match_key, segment_to_match_key

POEM_PLACEHOLDER = 'Full poem available in the book.'


def fetch_collection(url: str, timeout: float = 10) -> tuple:
    """Fetch a collection's book list. Returns (books, error)."""
    try:
        response = requests.get(
            url,
            headers={'Accept': 'application/json'},
            timeout=timeout
        )
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout:
        return None, 'Request timed out'
    except requests.exceptions.HTTPError as e:
        return None, f'HTTP error: {e.response.status_code}'
    except requests.exceptions.JSONDecodeError as e:
        return None, f'Invalid JSON: {str(e)}'
    except requests.exceptions.RequestException as e:
        return None, f'Request failed: {str(e)}'

    if not isinstance(data, list):
        return None, f'Expected a JSON array, got {type(data).__name__}'

    return data, None


def find_book(books: list, book_segment: str) -> Optional[dict]:
    """
    Find the first book whose title slug and the segment contain one another.

    The match is deliberately loose so partial URLs still resolve
    ("hilton" finds "frith-hilton-selected-works"). A short title slug can
    therefore swallow longer segments; list order decides.
    """
    for book in books:
        if not isinstance(book, dict) or not isinstance(book.get('bookTitle'), str):
            continue
        title_slug = canonical_slug(book['bookTitle'])
        if not title_slug:
            continue
        if book_segment in title_slug or title_slug in book_segment:
            return book
    return None


def resolve_book(book_segment: str, config: PrerenderConfig) -> Tuple[Optional[dict], Optional[str]]:
    """
    Search the configured collections, in order, for a matching book.

    Returns:
        Tuple of (book, collection_key), or (None, None) if nothing matched
    """
    book_segment = (book_segment or '').lower()
    if not book_segment:
        return None, None

    for collection in config.collections:
        if not collection.enabled:
            continue

        books, error = fetch_collection(collection.url, timeout=config.fetch_timeout)
        if error:
            print(f"Collection {collection.key} unavailable: {error}")
            continue

        book = find_book(books, book_segment)
        if book:
            return book, collection.key

    return None, None


def find_poem(book: dict, poem_segment: str) -> Optional[dict]:
    """Find the poem whose title match key equals the segment's exactly."""
    search_key = segment_to_match_key(poem_segment)
    if not search_key:
        return None

    for poem in book.get('poems') or []:
        if match_key(poem.get('title', '')) == search_key:
            return poem
    return None


def get_poem_text(book: dict, number: int) -> str:
    """
    Look up a poem's full text by its number in the book's content mapping.

    The JSON source keys the mapping by string ("1"), hand-built records may
    use ints; both are accepted. Anything missing yields POEM_PLACEHOLDER.
    """
    content = book.get('content') or []
    if not content or not isinstance(content[0], dict):
        return POEM_PLACEHOLDER

    mapping = content[0]
    text = mapping.get(str(number))
    if text is None:
        text = mapping.get(number)
    return text or POEM_PLACEHOLDER
