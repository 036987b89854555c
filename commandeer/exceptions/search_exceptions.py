"""
Search Exceptions

Author: Commandeer Developers
Version: 1.0.0
"""

from typing import Optional


class SearchError(Exception):
    """
    A search provider failed to produce results.

    ``FileSearch`` catches this (and any other provider failure) and falls
    back to a plain substring filter.
    """

    def __init__(
        self,
        message: str,
        query: Optional[str] = None,
        provider: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.query = query
        self.provider = provider
