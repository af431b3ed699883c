"""Shared utilities for Poetry Prerender."""

from .slug_utils import (
    canonical_slug,
    match_key,
    segment_to_match_key,
    clean_path,
)

from .classify_utils import (
    BOT_PATTERNS,
    is_bot,
    parse_poetry_path,
)

from .config_utils import (
    COLLECTION_ENV_VARS,
    CollectionSource,
    PrerenderConfig,
    load_config,
)

from .collection_utils import (
    POEM_PLACEHOLDER,
    fetch_collection,
    find_book,
    resolve_book,
    find_poem,
    get_poem_text,
)

from .page_utils import (
    CARD_IMAGE_PAGES,
    strip_html,
    poem_image_url,
    card_image_urls,
    render_book_page,
    render_poem_page,
)

__all__ = [
    # Slug utilities
    'canonical_slug',
    'match_key',
    'segment_to_match_key',
    'clean_path',
    # Classification
    'BOT_PATTERNS',
    'is_bot',
    'parse_poetry_path',
    # Configuration
    'COLLECTION_ENV_VARS',
    'CollectionSource',
    'PrerenderConfig',
    'load_config',
    # Lookup
    'POEM_PLACEHOLDER',
    'fetch_collection',
    'find_book',
    'resolve_book',
    'find_poem',
    'get_poem_text',
    # Rendering
    'CARD_IMAGE_PAGES',
    'strip_html',
    'poem_image_url',
    'card_image_urls',
    'render_book_page',
    'render_poem_page',
]
