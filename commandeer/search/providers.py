"""
Search Providers

A provider receives the full list of canonical paths, a query and a scope
directory, and returns the matching subset. Providers may raise; the
search service falls back to ``substring_filter`` when they do.

Author: Commandeer Developers
Version: 1.0.0
"""

from abc import ABC, abstractmethod
from typing import Optional, List

from commandeer.exceptions import SearchError
from commandeer.filesystem.path_resolver import PathResolver


class SearchProvider(ABC):
    """Interface for ranking functions used by ``FileSearch``."""

    name = 'provider'

    @abstractmethod
    def search(self, paths: List[str], query: str, scope: str) -> List[str]:
        """
        Return the paths matching ``query`` within ``scope``.

        Args:
            paths: Candidate canonical paths
            query: User search text
            scope: Directory whose subtree limits the results

        Returns:
            Matching paths, best first
        """


def substring_filter(paths: List[str], query: str, scope: str) -> List[str]:
    """
    Case-insensitive substring match restricted to ``scope``.

    Keeps the input order.
    """
    needle = query.casefold()
    return [
        p for p in paths
        if needle in p.casefold() and PathResolver.is_within(p, scope)
    ]


def fuzzy_score(query: str, candidate: str) -> Optional[int]:
    """
    Score ``query`` as an ordered subsequence of ``candidate``.

    Consecutive runs and matches at segment starts score higher, gaps and
    long candidates score lower. None means the query does not match.
    """
    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_folded[idx - 1] in "/_- .":
            score += 35
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score


class FuzzySearchProvider(SearchProvider):
    """
    Default ranking.

    Substring hits win and are ordered by match position then length;
    without any substring hit, subsequence matches are ranked by
    ``fuzzy_score``. A blank query raises ``SearchError``.
    """

    name = 'fuzzy'

    def __init__(self, limit: int = 200):
        self.limit = max(1, limit)

    def search(self, paths: List[str], query: str, scope: str) -> List[str]:
        needle = query.strip().casefold()
        if not needle:
            raise SearchError("Empty query", query=query, provider=self.name)

        candidates = [p for p in paths if PathResolver.is_within(p, scope)]

        substring_scored: List[tuple[int, int, str]] = []
        for path in candidates:
            idx = path.casefold().find(needle)
            if idx < 0:
                continue
            substring_scored.append((idx, len(path), path))
        if substring_scored:
            substring_scored.sort()
            return [path for _, _, path in substring_scored[:self.limit]]

        scored: List[tuple[int, int, str]] = []
        for path in candidates:
            score = fuzzy_score(query, path)
            if score is None:
                continue
            scored.append((-score, len(path), path))
        scored.sort()
        return [path for _, _, path in scored[:self.limit]]
