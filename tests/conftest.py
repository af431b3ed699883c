"""
Shared pytest fixtures for Poetry Prerender tests.
"""

import copy

import pytest
import sys
import importlib.util
from pathlib import Path

# Project root for finding the Cloud Function module
PROJECT_ROOT = Path(__file__).parent.parent


def _load_module_from_path(module_name: str, file_path: Path):
    """Load a module from a specific file path."""
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


# Load the Cloud Function module under an importable name at module load time
_prerender_module = _load_module_from_path(
    'poetry_prerender_main',
    PROJECT_ROOT / 'poetry-prerender' / 'main.py'
)

FRITH_HILTON_URL = 'https://data.example.com/frith-hilton.json'
DR_CARL_HILL_URL = 'https://data.example.com/dr-carl-hill.json'
WEST_TO_WEST_URL = 'https://data.example.com/west-to-west.json'
ORIGIN_URL = 'https://origin.example.com'
SITE_URL = 'https://www.frithhilton.com.ng'

GOOGLEBOT_UA = 'Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)'
BROWSER_UA = 'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'

SELECTED_WORKS = {
    "bookTitle": "Frith Hilton: Selected Works",
    "dedicatee": "Ada Obi",
    "releaseDate": "2021-05-01",
    "image": "https://cdn.example.com/books/selected-works/cover.jpg",
    "poemCount": 4,
    "poems": [
        {"number": 1, "title": "Karma’s Sequel"},
        {"number": 2, "title": "Café at Dawn"},
        {"number": 3, "title": "The River & The Stone"},
        {"number": 4, "title": "Hill"},
    ],
    "content": [
        {
            "1": "<p>The debt returns<br/>with interest</p>",
            "2": "<p>Steam rises from the cup</p>",
        }
    ],
}

CARL_HILL_BOOKS = [
    {
        "bookTitle": "Hill",
        "dedicatee": "The Valley",
        "releaseDate": "2019-02-11",
        "image": "https://cdn.example.com/books/hill/cover.jpg",
        "poemCount": 1,
        "poems": [{"number": 1, "title": "Summit"}],
        "content": [{"1": "<p>Above the clouds</p>"}],
    },
    {
        "bookTitle": "Dr Carl Hill",
        "dedicatee": "Carl Hill",
        "releaseDate": "2020-09-30",
        "image": "https://cdn.example.com/books/dr-carl-hill/cover.jpg",
        "poemCount": 1,
        "poems": [{"number": 1, "title": "Rounds"}],
        "content": [{"1": "<p>Morning rounds</p>"}],
    },
]

WEST_TO_WEST_BOOKS = [
    {
        "bookTitle": "West to West",
        "dedicatee": "Lagos",
        "releaseDate": "2023-01-15",
        "image": "https://cdn.example.com/books/west-to-west/cover.jpg",
        "poemCount": 1,
        "poems": [{"number": 1, "title": "Harmattan"}],
        "content": [{"1": "<p>Dust on the window</p>"}],
    },
]


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def selected_works():
    """Returns a fresh copy of the Selected Works book record."""
    return copy.deepcopy(SELECTED_WORKS)


@pytest.fixture
def frith_hilton_books():
    """Returns the frith-hilton collection payload."""
    return [copy.deepcopy(SELECTED_WORKS)]


@pytest.fixture
def carl_hill_books():
    """Returns the dr-carl-hill collection payload ("Hill" listed first)."""
    return copy.deepcopy(CARL_HILL_BOOKS)


@pytest.fixture
def west_to_west_books():
    """Returns the west-to-west collection payload."""
    return copy.deepcopy(WEST_TO_WEST_BOOKS)


@pytest.fixture
def prerender_env():
    """Environment bindings with all three collections and an origin."""
    return {
        'FRITH_HILTON_JSON': FRITH_HILTON_URL,
        'DR_CARL_HILL_JSON': DR_CARL_HILL_URL,
        'WEST_TO_WEST_JSON': WEST_TO_WEST_URL,
        'SITE_URL': SITE_URL,
        'ORIGIN_URL': ORIGIN_URL,
        'FETCH_TIMEOUT': '5',
    }


@pytest.fixture
def prerender_config(prerender_env):
    """PrerenderConfig built from prerender_env."""
    from prerender.config_utils import load_config
    return load_config(prerender_env)


@pytest.fixture
def mock_flask_request():
    """Factory for creating mock Flask request objects."""
    class MockRequest:
        def __init__(self, path='/', user_agent=None, method='GET',
                     headers=None, query_string=b'', data=b'', environ=None):
            self.path = path
            self.environ = dict(environ or {})
            self.method = method
            self.headers = dict(headers or {})
            if user_agent is not None:
                self.headers['User-Agent'] = user_agent
            self.query_string = query_string
            self.data = data

        def get_data(self):
            return self.data

    return MockRequest


# ============================================================================
# Cloud Function Fixtures
# ============================================================================

@pytest.fixture
def prerender_poetry():
    """Returns main entry point from poetry-prerender."""
    return _prerender_module.prerender_poetry


@pytest.fixture
def forward_to_origin():
    """Returns forward_to_origin function from poetry-prerender."""
    return _prerender_module.forward_to_origin
