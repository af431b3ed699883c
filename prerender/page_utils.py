"""
HTML rendering for Poetry Prerender.

Produces the crawler-facing pages:
- Book index: meta/OG/Twitter tags, Book JSON-LD with one Chapter per poem,
  and a table of contents
- Poem detail: meta/OG/Twitter tags, CreativeWork JSON-LD, breadcrumb,
  speculative card images, and the poem body

All functions are pure: (records, urls) in, HTML string out.
"""

import json
from html import escape
from typing import List

from bs4 import BeautifulSoup

from .collection_utils import POEM_PLACEHOLDER, get_poem_text
from .slug_utils import canonical_slug

AUTHOR_NAME = 'Frith Hilton'
AUTHOR_FULL_NAME = 'Howard Frith Hilton'
PUBLISHER_NAME = 'Forest Crib Books Imprint under Frith Nightswan Publishers'
FOOTER_TEXT = '© Frith Hilton · Forest Crib Books under Frith Nightswan Publishers'

# Card images are probed client-side; missing pages hide themselves
CARD_IMAGE_PAGES = 5
CARD_IMAGE_TEMPLATE = '{site_url}/images/cards/{collection_key}/{book_slug}/{number}-{page}.jpg'


def strip_html(text: str) -> str:
    """Reduce an HTML fragment to trimmed plain text."""
    if not text:
        return ''
    return BeautifulSoup(text, 'html.parser').get_text().strip()


def poem_image_url(image: str, number: int) -> str:
    """Derive a poem's image from the book cover (cover.jpg -> 3.jpg)."""
    return (image or '').replace('cover.jpg', f'{number}.jpg')


def card_image_urls(site_url: str, collection_key: str, book_slug: str, number: int) -> List[str]:
    """Build the speculative card image URLs for a poem (pages 1..N)."""
    return [
        CARD_IMAGE_TEMPLATE.format(
            site_url=site_url,
            collection_key=collection_key,
            book_slug=book_slug,
            number=number,
            page=page,
        )
        for page in range(1, CARD_IMAGE_PAGES + 1)
    ]


def _json_ld(data: dict) -> str:
    """Serialize a JSON-LD object so it cannot close its <script> early."""
    return json.dumps(data, ensure_ascii=False, indent=2).replace('</', '<\\/')


def _attr(value) -> str:
    return escape(str(value if value is not None else ''), quote=True)


def _book_description(book: dict) -> str:
    poems = book.get('poems') or []
    sample = ', '.join(p.get('title', '') for p in poems[:3])
    if len(poems) > 3:
        sample += '…'
    return (
        f"{book.get('bookTitle', '')} by {AUTHOR_NAME}, featuring poems like {sample}, "
        f"with dedication to {book.get('dedicatee', '')}."
    )


def render_book_page(book: dict, book_url: str, collection_key: str) -> str:
    """
    Render the book index page.

    Args:
        book: Book record from the collection JSON
        book_url: Canonical URL of the book page
        collection_key: Key of the collection the book came from

    Returns:
        Complete HTML document
    """
    title = book.get('bookTitle', '')
    dedicatee = book.get('dedicatee', '')
    cover_url = book.get('image', '')
    poems = book.get('poems') or []
    description = _book_description(book)
    keywords = (
        f"{title}, {AUTHOR_FULL_NAME}, {AUTHOR_NAME}, Frith Nightswan Publishers, "
        f"Forest Crib Books, Poetry dedicated to {dedicatee}"
    )

    has_part = []
    toc_items = []
    for poem in poems:
        number = poem.get('number')
        poem_url = f"{book_url}/{canonical_slug(poem.get('title', ''))}"
        text = get_poem_text(book, number)
        has_part.append({
            '@type': 'Chapter',
            'position': number,
            'name': poem.get('title', ''),
            'url': poem_url,
            'image': poem_image_url(cover_url, number),
            'text': '' if text == POEM_PLACEHOLDER else strip_html(text),
        })
        toc_items.append(
            f'<li><a href="{_attr(poem_url)}">{_attr(number)}. {escape(poem.get("title", ""))}</a></li>'
        )

    json_ld = {
        '@context': 'https://schema.org',
        '@type': 'Book',
        'name': title,
        'author': {'@type': 'Person', 'name': AUTHOR_FULL_NAME},
        'publisher': {'@type': 'Organization', 'name': PUBLISHER_NAME},
        'datePublished': book.get('releaseDate', ''),
        'inLanguage': 'en',
        'genre': 'Poetry',
        'keywords': f"{title}, {AUTHOR_FULL_NAME}, {AUTHOR_NAME}, Poetry dedicated to {dedicatee}",
        'image': cover_url,
        'url': book_url,
        'hasPart': has_part,
    }

    page_title = f"{title} by {AUTHOR_NAME}"
    poem_count = book.get('poemCount', len(poems))

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8"/>
  <meta http-equiv="X-UA-Compatible" content="IE=edge"/>
  <meta name="author" content="{_attr(AUTHOR_NAME)}"/>
  <meta name="description" content="{_attr(description)}"/>
  <meta name="keywords" content="{_attr(keywords)}"/>
  <meta name="viewport" content="width=device-width,initial-scale=1"/>
  <meta property="og:url" content="{_attr(book_url)}"/>
  <meta property="og:type" content="book"/>
  <meta property="og:title" content="{_attr(page_title)}"/>
  <meta property="og:description" content="{_attr(description)}"/>
  <meta property="og:image" content="{_attr(cover_url)}"/>
  <meta name="twitter:card" content="summary_large_image"/>
  <meta name="twitter:title" content="{_attr(page_title)}"/>
  <meta name="twitter:description" content="{_attr(description)}"/>
  <meta name="twitter:image" content="{_attr(cover_url)}"/>
  <link rel="canonical" href="{_attr(book_url)}"/>
  <title>{escape(page_title)}</title>
  <script type="application/ld+json">
{_json_ld(json_ld)}
  </script>
</head>
<body data-collection="{_attr(collection_key)}">
  <h1>{escape(title)}</h1>
  <p><strong>Dedicated to:</strong> {escape(dedicatee)}</p>
  <p><strong>Released:</strong> {escape(str(book.get('releaseDate', '')))} · {escape(str(poem_count))} poems</p>
  <h2>Table of Contents</h2>
  <ol>{''.join(toc_items)}</ol>
  <footer>{escape(FOOTER_TEXT)}</footer>
</body>
</html>"""


def render_poem_page(book: dict, poem: dict, poem_text: str, book_url: str,
                     poem_url: str, collection_key: str, site_url: str = '') -> str:
    """
    Render a single poem page.

    The poem body is inserted verbatim (it is authored HTML); every other
    value is escaped. Card images are emitted for pages 1..CARD_IMAGE_PAGES
    without checking they exist: the browser hides any that fail to load.
    """
    book_title = book.get('bookTitle', '')
    dedicatee = book.get('dedicatee', '')
    title = poem.get('title', '')
    number = poem.get('number')
    image_url = poem_image_url(book.get('image', ''), number)
    description = f"{title} by {AUTHOR_NAME}, from {book_title}, dedicated to {dedicatee}."
    og_title = f"{title} · {book_title} by {AUTHOR_NAME}"
    og_description = f"Full poem from {book_title}, dedicated to {dedicatee}."

    json_ld = {
        '@context': 'https://schema.org',
        '@type': 'CreativeWork',
        'name': title,
        'author': {'@type': 'Person', 'name': AUTHOR_FULL_NAME},
        'datePublished': book.get('releaseDate', ''),
        'url': poem_url,
        'text': strip_html(poem_text),
        'image': image_url,
        'isPartOf': {
            '@type': 'Book',
            'name': book_title,
            'url': book_url,
        },
        'position': number,
    }

    cards = card_image_urls(site_url, collection_key, canonical_slug(book_title), number)
    card_tags = '\n    '.join(
        f'<img src="{_attr(src)}" alt="{_attr(title)}, card {page}" loading="lazy" '
        f'onerror="this.style.display=\'none\'"/>'
        for page, src in enumerate(cards, start=1)
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8"/>
  <meta name="author" content="{_attr(AUTHOR_NAME)}"/>
  <meta name="description" content="{_attr(description)}"/>
  <meta name="viewport" content="width=device-width,initial-scale=1"/>
  <meta property="og:title" content="{_attr(og_title)}"/>
  <meta property="og:description" content="{_attr(og_description)}"/>
  <meta property="og:type" content="article"/>
  <meta property="og:url" content="{_attr(poem_url)}"/>
  <meta property="og:image" content="{_attr(image_url)}"/>
  <meta name="twitter:card" content="summary_large_image"/>
  <meta name="twitter:title" content="{_attr(og_title)}"/>
  <meta name="twitter:description" content="{_attr(og_description)}"/>
  <meta name="twitter:image" content="{_attr(image_url)}"/>
  <link rel="canonical" href="{_attr(poem_url)}"/>
  <title>{escape(title)} by {escape(AUTHOR_NAME)} · {escape(book_title)}</title>
  <script type="application/ld+json">
{_json_ld(json_ld)}
  </script>
</head>
<body data-collection="{_attr(collection_key)}">
  <nav><a href="{_attr(book_url)}">{escape(book_title)}</a> » {escape(title)}</nav>
  <h1>{escape(title)}</h1>
  <p><em>From <strong>{escape(book_title)}</strong> · Dedicated to {escape(dedicatee)}</em></p>
  <div class="cards">
    {card_tags}
  </div>
  <div class="poem">{poem_text}</div>
  <footer>{escape(FOOTER_TEXT)}</footer>
</body>
</html>"""
