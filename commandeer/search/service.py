"""
File Search Service

Feeds the filesystem's full path list to a search provider and sanitises
what comes back. A failing provider never fails the search: the service
logs the failure and answers with a substring filter instead.

Author: Commandeer Developers
Version: 1.0.0
"""

from typing import Optional, List

from .providers import SearchProvider, FuzzySearchProvider, substring_filter
from commandeer.core.config_loader import get_config
from commandeer.filesystem.path_resolver import PathResolver
from commandeer.filesystem.vfs import VirtualFileSystem
from commandeer.logger import get_logger


class FileSearch:
    """
    Search over every path in a filesystem.

    Example:
        >>> search = FileSearch(VirtualFileSystem.with_sample_layout())
        >>> search.search('note', scope='/Documents')
        ['/Documents/notes.txt']
    """

    def __init__(
        self,
        vfs: VirtualFileSystem,
        provider: Optional[SearchProvider] = None
    ):
        self._vfs = vfs
        self._provider = provider or FuzzySearchProvider(limit=get_config().search.limit)
        self._logger = get_logger('search')
        self.last_fallback: Optional[Exception] = None

    @property
    def provider(self) -> SearchProvider:
        return self._provider

    def search(self, query: str, scope: str = '/') -> List[str]:
        """
        Find paths matching ``query`` inside ``scope``.

        Provider results that are not real paths, or that lie outside the
        scope, are dropped. Duplicates are removed, order is kept.

        Args:
            query: Search text
            scope: Directory limiting the results (resolved from '/')

        Returns:
            Matching canonical paths
        """
        scope = PathResolver.resolve(scope)
        paths = self._vfs.enumerate_all_paths('/')
        self.last_fallback = None

        try:
            results = self._provider.search(paths, query, scope)
        except Exception as e:
            self.last_fallback = e
            self._logger.warning(
                f"Search provider '{self._provider.name}' failed, using substring filter",
                context={'query': query, 'scope': scope, 'error': repr(e)}
            )
            return substring_filter(paths, query, scope)

        known = set(paths)
        seen: set[str] = set()
        filtered: List[str] = []
        for path in results:
            if path in known and path not in seen and PathResolver.is_within(path, scope):
                seen.add(path)
                filtered.append(path)

        self._logger.debug(
            "Search completed",
            context={'query': query, 'scope': scope, 'matches': len(filtered)}
        )
        return filtered
