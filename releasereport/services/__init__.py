"""
Service layer for releasereport.
"""

from .release_service import ReleaseService, rank_tags, next_version

__all__ = [
    'ReleaseService',
    'rank_tags',
    'next_version',
]
