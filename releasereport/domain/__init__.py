"""
Domain objects for releasereport.
"""

from .release import (
    COMMIT_KEYWORDS,
    TagInfo,
    CommitCounts,
    Version,
    ReleaseReport,
)

__all__ = [
    'COMMIT_KEYWORDS',
    'TagInfo',
    'CommitCounts',
    'Version',
    'ReleaseReport',
]
