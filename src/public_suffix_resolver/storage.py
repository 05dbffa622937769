"""Cache interface for loaded lists, and the loaders built on it."""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import lru_cache

import structlog

from .config import settings
from .exceptions import InvalidListSource
from .rules import Rules

log = structlog.get_logger()


class PublicSuffixListCache(ABC):
    """Backend-agnostic store of loaded lists, keyed by source URI.

    Eviction and freshness are entirely up to the implementation; a
    snapshot returned by :meth:`fetch_by_uri` is used exactly as if it had
    just been loaded.
    """

    @abstractmethod
    def fetch_by_uri(self, uri: str) -> Rules | None:
        """Return the cached list for ``uri``, or None."""

    @abstractmethod
    def store_by_uri(self, uri: str, rules: Rules) -> bool:
        """Cache ``rules`` under ``uri``, replacing any previous entry. Returns True on success."""


class InMemoryCache(PublicSuffixListCache):
    """Process-local cache; entries live as long as the instance."""

    def __init__(self) -> None:
        self._entries: dict[str, Rules] = {}

    def fetch_by_uri(self, uri: str) -> Rules | None:
        return self._entries.get(uri)

    def store_by_uri(self, uri: str, rules: Rules) -> bool:
        self._entries[uri] = rules
        return True

    def __len__(self) -> int:
        return len(self._entries)


def load_rules(
    uri: str,
    cache: PublicSuffixListCache | None = None,
    ascii_idna_option: int = 0,
    unicode_idna_option: int = 0,
) -> Rules:
    """Return the list at ``uri``, going through ``cache`` when one is given."""
    if cache is not None:
        cached = cache.fetch_by_uri(uri)
        if cached is not None:
            log.debug("public_suffix_list_cache_hit", uri=uri)
            return cached.with_ascii_idna_option(ascii_idna_option).with_unicode_idna_option(unicode_idna_option)
        log.debug("public_suffix_list_cache_miss", uri=uri)

    rules = Rules.from_path(uri, ascii_idna_option, unicode_idna_option)

    if cache is not None and not cache.store_by_uri(uri, rules):
        log.warning("public_suffix_list_cache_store_failed", uri=uri)
    return rules


@lru_cache(maxsize=1)
def default_rules() -> Rules:
    """Load the configured list once per process.

    Uses ``settings.psl_path`` and the configured IDNA options.
    """
    if not settings.psl_path:
        raise InvalidListSource("No public suffix list configured, set PSL_RESOLVER_PSL_PATH")
    return load_rules(
        settings.psl_path,
        ascii_idna_option=settings.ascii_idna_option,
        unicode_idna_option=settings.unicode_idna_option,
    )
