"""
Search aggregation across catalog providers.

Providers are queried concurrently; each call settles on its own into a
ProviderOutcome, and results are merged only after every call has settled.
A failing provider contributes nothing instead of failing the search.
"""

import concurrent.futures
import logging
import threading
from collections import namedtuple

import catalog_adapters
from watchlist_utils import MIN_QUERY_LENGTH, SEARCH_RESULT_LIMIT

logger = logging.getLogger(__name__)

# Either results (error is None) or an error (results is empty)
ProviderOutcome = namedtuple("ProviderOutcome", ["source", "results", "error"])


def _run_provider(source, fetch, query):
    try:
        return ProviderOutcome(source, fetch(query), None)
    except Exception as e:
        logger.warning("Provider %s failed for %r: %s", source, query, e)
        return ProviderOutcome(source, [], e)


def query_providers(query, providers):
    """
    Run every provider concurrently and wait for all of them to settle.

    Args:
        query: Trimmed search text
        providers: Sequence of (source, fetch_function) pairs

    Returns:
        List of ProviderOutcome in provider order
    """
    if not providers:
        return []
    with concurrent.futures.ThreadPoolExecutor(max_workers=len(providers)) as executor:
        futures = [
            executor.submit(_run_provider, source, fetch, query)
            for source, fetch in providers
        ]
        concurrent.futures.wait(futures)
    return [future.result() for future in futures]


def dedupe_results(results):
    """Drop results whose (title, type) pair was already seen; first one wins."""
    seen = set()
    unique = []
    for result in results:
        key = (result.get("title"), result.get("type"))
        if key in seen:
            continue
        seen.add(key)
        unique.append(result)
    return unique


def merge_outcomes(outcomes, limit=SEARCH_RESULT_LIMIT):
    """
    Combine provider outcomes into the final ranked list.

    Args:
        outcomes: ProviderOutcome list in rank order
        limit: Maximum number of results kept

    Returns:
        Deduplicated list of SearchResult dicts
    """
    merged = []
    for outcome in outcomes:
        merged.extend(outcome.results)
    return dedupe_results(merged)[:limit]


def search_catalogs(query, providers=None):
    """
    Search all catalogs for a free-text query.

    Queries shorter than two characters after trimming return no results
    without touching the network. Provider failures are absorbed; if every
    provider fails the result is simply empty.

    Args:
        query: Raw search text
        providers: Optional (source, fetch_function) pairs, defaults to
            catalog_adapters.PROVIDERS

    Returns:
        List of at most 12 SearchResult dicts
    """
    trimmed = (query or "").strip()
    if len(trimmed) < MIN_QUERY_LENGTH:
        return []

    if providers is None:
        providers = catalog_adapters.PROVIDERS
    outcomes = query_providers(trimmed, providers)
    failed = [outcome.source for outcome in outcomes if outcome.error is not None]
    if failed and len(failed) == len(outcomes):
        logger.warning("All providers failed for %r", trimmed)
    return merge_outcomes(outcomes)


class SearchSession:
    """
    Holds the visible search results and enforces last-query-wins.

    Every query gets a ticket when it starts. Results are only applied if
    their ticket is still the newest one when they arrive.
    """

    def __init__(self, search=search_catalogs):
        self._search = search
        self._lock = threading.Lock()
        self._latest_ticket = 0
        self.query = ""
        self.results = []

    def begin(self, query):
        with self._lock:
            self._latest_ticket += 1
            self.query = query
            return self._latest_ticket

    def is_current(self, ticket):
        with self._lock:
            return ticket == self._latest_ticket

    def publish(self, ticket, results):
        """Apply results for a ticket; returns False if a newer query superseded it."""
        with self._lock:
            if ticket != self._latest_ticket:
                logger.debug("Discarding stale results for ticket %s", ticket)
                return False
            self.results = list(results)
            return True

    def run(self, query):
        """Search and publish in one step, returning the visible results afterwards."""
        ticket = self.begin(query)
        results = self._search(query)
        self.publish(ticket, results)
        with self._lock:
            return list(self.results)

    def clear(self):
        self.begin("")
        with self._lock:
            self.results = []
