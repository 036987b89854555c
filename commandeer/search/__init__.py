"""
Commandeer File Search Module

Ranks the filesystem's path list against a query:
- Pluggable search providers
- Fuzzy ranking as the default provider
- Substring filter fallback when a provider fails
"""

from .providers import SearchProvider, FuzzySearchProvider, substring_filter, fuzzy_score
from .service import FileSearch

__all__ = [
    'SearchProvider',
    'FuzzySearchProvider',
    'substring_filter',
    'fuzzy_score',
    'FileSearch',
]
