"""
Configuration for Poetry Prerender.

Collection sources are bound as environment variables on the Cloud Function.
They are read into an explicit PrerenderConfig so resolvers never reach into
os.environ themselves.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

DEFAULT_SITE_URL = 'https://www.frithhilton.com.ng'
DEFAULT_FETCH_TIMEOUT = 10

# Declaration order is resolution order (first match wins)
COLLECTION_ENV_VARS = (
    ('frith-hilton', 'FRITH_HILTON_JSON'),
    ('dr-carl-hill', 'DR_CARL_HILL_JSON'),
    ('west-to-west', 'WEST_TO_WEST_JSON'),
)


@dataclass(frozen=True)
class CollectionSource:
    """A named collection and the URL serving its JSON book list."""
    key: str
    url: Optional[str] = None

    @property
    def enabled(self) -> bool:
        return bool(self.url)


@dataclass(frozen=True)
class PrerenderConfig:
    collections: Tuple[CollectionSource, ...] = field(default_factory=tuple)
    site_url: str = DEFAULT_SITE_URL
    origin_url: Optional[str] = None
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT


def _parse_timeout(value: Optional[str]) -> float:
    if not value:
        return DEFAULT_FETCH_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        print(f"Invalid FETCH_TIMEOUT {value!r}, using {DEFAULT_FETCH_TIMEOUT}s")
        return DEFAULT_FETCH_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_FETCH_TIMEOUT


def load_config(environ: Mapping[str, str] = None) -> PrerenderConfig:
    """
    Build the config from environment variables.

    Args:
        environ: Mapping to read from (default os.environ)

    Returns:
        PrerenderConfig with collections in their fixed declaration order.
        Unset or blank collection variables produce disabled entries.
    """
    if environ is None:
        environ = os.environ

    collections = tuple(
        CollectionSource(key=key, url=(environ.get(env_var) or '').strip() or None)
        for key, env_var in COLLECTION_ENV_VARS
    )

    site_url = (environ.get('SITE_URL') or DEFAULT_SITE_URL).rstrip('/')
    origin_url = (environ.get('ORIGIN_URL') or '').rstrip('/') or None

    return PrerenderConfig(
        collections=collections,
        site_url=site_url,
        origin_url=origin_url,
        fetch_timeout=_parse_timeout(environ.get('FETCH_TIMEOUT')),
    )
