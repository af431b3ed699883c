"""
Poetry Prerender Cloud Function

Serves server-rendered /poetry pages to search and social crawlers.

Responsibilities:
- Detect crawler user agents on /poetry/<book>[/<poem>] routes
- Look up the book across the configured collections
- Render the book index or poem page with SEO metadata and JSON-LD

Does NOT:
- Cache collection JSON (re-fetched per request)
- Return its own error pages (anything unresolved goes to the origin)
- Serve human visitors (they are forwarded untouched)
"""

import functions_framework
import requests
import os
import sys

# Add shared module to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from prerender.slug_utils import canonical_slug
from prerender.classify_utils import is_bot, parse_poetry_path
from prerender.config_utils import PrerenderConfig, load_config
from prerender.collection_utils import resolve_book, find_poem, get_poem_text
from prerender.page_utils import render_book_page, render_poem_page

HTML_HEADERS = {'Content-Type': 'text/html; charset=utf-8'}

# Never copied between client, function and origin
HOP_BY_HOP_HEADERS = {
    'connection',
    'keep-alive',
    'proxy-authenticate',
    'proxy-authorization',
    'te',
    'trailers',
    'transfer-encoding',
    'upgrade',
}
# requests decodes the body, so the origin's length/encoding no longer apply
STRIPPED_RESPONSE_HEADERS = HOP_BY_HOP_HEADERS | {'content-encoding', 'content-length'}
STRIPPED_REQUEST_HEADERS = HOP_BY_HOP_HEADERS | {'host', 'content-length'}


def raw_request_uri(request) -> str:
    """
    Path and query exactly as the client sent them.

    request.path is percent-decoded by Werkzeug (%2F becomes /), so prefer
    the undecoded URI the WSGI server records, falling back to path + query.
    """
    environ = getattr(request, 'environ', None) or {}
    for key in ('RAW_URI', 'REQUEST_URI'):
        uri = environ.get(key)
        if uri and uri.startswith('/'):
            return uri

    query_string = request.query_string.decode('utf-8') if request.query_string else ''
    if query_string:
        return f"{request.path}?{query_string}"
    return request.path


def forward_to_origin(request, config: PrerenderConfig) -> tuple:
    """
    Pass the request through to the origin and relay its response verbatim.

    Returns:
        Tuple of (body, status_code, headers)
    """
    if not config.origin_url:
        print(f"ORIGIN_URL not configured, cannot forward {request.path}")
        return ('', 502, [])

    url = config.origin_url + raw_request_uri(request)

    headers = {
        name: value for name, value in request.headers.items()
        if name.lower() not in STRIPPED_REQUEST_HEADERS
    }

    try:
        response = requests.request(
            request.method,
            url,
            headers=headers,
            data=request.get_data(),
            allow_redirects=False,
            timeout=30
        )
    except requests.exceptions.RequestException as e:
        print(f"Origin request failed for {url}: {e}")
        return ('', 502, [])

    # raw.headers keeps repeated headers (Set-Cookie) as separate entries
    response_headers = [
        (name, value) for name, value in response.raw.headers.items()
        if name.lower() not in STRIPPED_RESPONSE_HEADERS
    ]
    return (response.content, response.status_code, response_headers)


def render_for_crawler(request, config: PrerenderConfig):
    """
    Render a crawler page for the request, or return None to pass through.

    Returns:
        (html, 200, headers) tuple, or None when any lookup step misses
    """
    if not is_bot(request.headers.get('User-Agent', '')):
        return None

    route = parse_poetry_path(request.path)
    if not route:
        return None
    book_segment, poem_segment = route

    book, collection_key = resolve_book(book_segment, config)
    if not book:
        return None

    book_url = f"{config.site_url}/poetry/{canonical_slug(book.get('bookTitle', ''))}"

    if not poem_segment:
        return (render_book_page(book, book_url, collection_key), 200, HTML_HEADERS)

    poem = find_poem(book, poem_segment)
    if not poem:
        return None

    poem_url = f"{book_url}/{canonical_slug(poem.get('title', ''))}"
    poem_text = get_poem_text(book, poem.get('number'))

    html = render_poem_page(
        book, poem, poem_text, book_url, poem_url, collection_key,
        site_url=config.site_url
    )
    return (html, 200, HTML_HEADERS)


@functions_framework.http
def prerender_poetry(request):
    """
    Main Cloud Function entry point.

    Crawlers requesting /poetry/<book> or /poetry/<book>/<poem> get a
    server-rendered page. Everything else, including every lookup miss,
    is forwarded to the origin unchanged.
    """
    config = load_config()

    try:
        rendered = render_for_crawler(request, config)
    except Exception as e:
        print(f"Prerender failed for {request.path}, passing through: {e}")
        rendered = None

    if rendered is not None:
        return rendered

    return forward_to_origin(request, config)
